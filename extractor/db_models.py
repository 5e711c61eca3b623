"""
SQLAlchemy database models for recipe storage.
Supports SQLite (default) and any other SQLAlchemy backend.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional
import json

from sqlalchemy import (
    Column, String, Text, DateTime, Integer, ForeignKey, Index,
    create_engine, event
)
from sqlalchemy.orm import relationship, declarative_base

from extractor.models import Recipe

Base = declarative_base()


class RecipeRecord(Base):
    """One extracted recipe."""
    __tablename__ = 'recipes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    mod_name = Column(String(255), nullable=False)
    source_path = Column(String(1024), nullable=False)
    recipe_type = Column(String(255), nullable=False)
    result_item = Column(String(255))
    result_count = Column(Integer)
    raw_json = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Normalized grid rows for shaped recipes (stored as JSON string)
    _shape = Column('shape', Text)

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        order_by="RecipeIngredient.position",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        Index('idx_recipe_result', 'result_item'),
        Index('idx_recipe_mod', 'mod_name'),
    )

    @property
    def shape(self) -> Optional[List[str]]:
        """Get shape rows as list."""
        if not self._shape:
            return None
        try:
            return json.loads(self._shape)
        except json.JSONDecodeError:
            return None

    @shape.setter
    def shape(self, value: Optional[List[str]]):
        """Set shape rows from list."""
        self._shape = json.dumps(value) if value is not None else None

    def to_recipe(self) -> Recipe:
        """Convert record to a detached Recipe."""
        return Recipe(
            id=self.id,
            mod_name=self.mod_name,
            source_path=self.source_path,
            recipe_type=self.recipe_type,
            raw_json=self.raw_json,
            result_item=self.result_item,
            result_count=self.result_count,
            ingredients=[i.item for i in self.ingredients],
            shape=self.shape,
            created_at=self.created_at.isoformat() if self.created_at else ''
        )


class RecipeIngredient(Base):
    """One ingredient slot of a recipe, in declaration order."""
    __tablename__ = 'recipe_ingredients'

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(Integer, ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False)
    item = Column(String(1024), nullable=False)

    recipe = relationship("RecipeRecord", back_populates="ingredients")

    __table_args__ = (
        Index('idx_ingredient_item', 'item'),
        Index('idx_ingredient_recipe', 'recipe_id', 'position'),
    )


def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    """Enable foreign key support for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database(connection_string: str = None, database_path: str = "database/recipes.db"):
    """
    Create database engine and tables.

    Args:
        connection_string: SQLAlchemy connection string
        database_path: Path for SQLite database (used if connection_string is None)

    Returns:
        SQLAlchemy engine
    """
    if connection_string:
        engine = create_engine(connection_string, echo=False)
    else:
        # Use SQLite, shared with the API's worker threads
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{database_path}",
            echo=False,
            connect_args={"check_same_thread": False}
        )

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", enable_sqlite_foreign_keys)

    # Create all tables
    Base.metadata.create_all(engine)

    return engine
