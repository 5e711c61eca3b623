"""
Database storage module for extracted recipes.
SQLite by default; any SQLAlchemy connection string works.
"""

import logging
import threading
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session, selectinload

from extractor.db_models import RecipeRecord, RecipeIngredient, create_database
from extractor.errors import StoreClosed, StoreReadFailed, StoreWriteFailed
from extractor.models import ParsedRecipe, Recipe
from extractor.utils import escape_like

logger = logging.getLogger(__name__)


class RecipeStore:
    """
    Persistent, queryable table of extracted recipes.

    One handle is opened per process and passed to whoever needs it; close()
    it on shutdown. Writes are serialized and each batch is a single
    transaction, so readers never see part of a batch.
    """

    def __init__(self, database_path: str = "database/recipes.db", connection_string: str = None):
        """
        Initialize recipe storage.

        Args:
            database_path: Path for SQLite database file (ignored if connection_string provided)
            connection_string: SQLAlchemy connection string, overrides database_path
        """
        self.database_path = database_path
        self.connection_string = connection_string
        self._write_lock = threading.Lock()
        try:
            self._engine = create_database(connection_string, database_path)
        except SQLAlchemyError as e:
            raise StoreWriteFailed(f"cannot open database: {e}") from e
        self._Session = sessionmaker(bind=self._engine, expire_on_commit=False)

    def __enter__(self) -> "RecipeStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _get_session(self) -> Session:
        """Get a new database session."""
        if self._Session is None:
            raise StoreClosed()
        return self._Session()

    def close(self):
        """Close database connection."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._Session = None

    # ============================================
    # Writes
    # ============================================

    def insert_batch(self, rows: Iterable[ParsedRecipe]) -> List[int]:
        """
        Append recipes in one transaction.

        Args:
            rows: Parsed recipes to store

        Returns:
            Ids assigned to the rows, in input order

        Raises:
            StoreWriteFailed: Nothing from the batch was committed
            StoreClosed: close() was already called
        """
        rows = list(rows)
        if not rows:
            return []

        with self._write_lock:
            if self._Session is None:
                raise StoreClosed()
            session = self._get_session()
            try:
                records = []
                for row in rows:
                    record = RecipeRecord(
                        mod_name=row.mod_name,
                        source_path=row.source_path,
                        recipe_type=row.recipe_type,
                        result_item=row.result_item,
                        result_count=row.result_count,
                        raw_json=row.raw_json,
                    )
                    record.shape = row.shape
                    record.ingredients = [
                        RecipeIngredient(position=position, item=item)
                        for position, item in enumerate(row.ingredients)
                    ]
                    records.append(record)

                session.add_all(records)
                session.commit()
                ids = [record.id for record in records]
                logger.debug(f"Committed batch of {len(ids)} recipes")
                return ids
            except SQLAlchemyError as e:
                session.rollback()
                raise StoreWriteFailed(str(e)) from e
            finally:
                session.close()

    def clear(self) -> int:
        """
        Delete every stored recipe.

        Returns:
            Number of recipes removed
        """
        with self._write_lock:
            if self._Session is None:
                raise StoreClosed()
            session = self._get_session()
            try:
                removed = session.scalar(select(func.count(RecipeRecord.id))) or 0
                session.execute(delete(RecipeIngredient))
                session.execute(delete(RecipeRecord))
                session.commit()
                return removed
            except SQLAlchemyError as e:
                session.rollback()
                raise StoreWriteFailed(f"clear failed: {e}") from e
            finally:
                session.close()

    # ============================================
    # Reads
    # ============================================

    def _fetch(self, query) -> List[Recipe]:
        """Run a recipe query and detach the results."""
        session = self._get_session()
        try:
            query = query.options(selectinload(RecipeRecord.ingredients))
            records = session.scalars(query).all()
            return [record.to_recipe() for record in records]
        except SQLAlchemyError as e:
            raise StoreReadFailed(str(e)) from e
        finally:
            session.close()

    def count(self) -> int:
        """Get total number of stored recipes."""
        session = self._get_session()
        try:
            return session.scalar(select(func.count(RecipeRecord.id))) or 0
        except SQLAlchemyError as e:
            raise StoreReadFailed(str(e)) from e
        finally:
            session.close()

    def list(self, offset: int = 0, limit: int = 50) -> List[Recipe]:
        """
        Get a page of recipes ordered by ascending id.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            List of recipes
        """
        if offset < 0 or limit < 0:
            raise ValueError(f"offset and limit must be non-negative, got {offset}, {limit}")
        query = select(RecipeRecord).order_by(RecipeRecord.id).offset(offset).limit(limit)
        return self._fetch(query)

    def get(self, recipe_id: int) -> Optional[Recipe]:
        """Get single recipe by id."""
        recipes = self._fetch(select(RecipeRecord).where(RecipeRecord.id == recipe_id))
        return recipes[0] if recipes else None

    def search_by_output(self, substring: str) -> List[Recipe]:
        """
        Find recipes whose result item contains a substring (case-insensitive).
        Recipes without a result never match.
        """
        term = f"%{escape_like(substring)}%"
        query = (
            select(RecipeRecord)
            .where(RecipeRecord.result_item.isnot(None))
            .where(RecipeRecord.result_item.ilike(term, escape='\\'))
            .order_by(RecipeRecord.id)
        )
        return self._fetch(query)

    def search_by_ingredient(self, substring: str) -> List[Recipe]:
        """Find recipes with any ingredient containing a substring (case-insensitive)."""
        term = f"%{escape_like(substring)}%"
        matching = (
            select(RecipeIngredient.recipe_id)
            .where(RecipeIngredient.item.ilike(term, escape='\\'))
        )
        query = (
            select(RecipeRecord)
            .where(RecipeRecord.id.in_(matching))
            .order_by(RecipeRecord.id)
        )
        return self._fetch(query)

    def count_by_mod(self) -> List[Tuple[str, int]]:
        """Get recipe counts per mod, largest first."""
        session = self._get_session()
        try:
            rows = session.execute(
                select(RecipeRecord.mod_name, func.count(RecipeRecord.id).label('count'))
                .group_by(RecipeRecord.mod_name)
                .order_by(func.count(RecipeRecord.id).desc(), RecipeRecord.mod_name)
            ).all()
            return [(row.mod_name, row.count) for row in rows]
        except SQLAlchemyError as e:
            raise StoreReadFailed(str(e)) from e
        finally:
            session.close()
