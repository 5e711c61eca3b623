"""Check what is in the recipe database"""
import argparse
import sys

from extractor.database_storage import RecipeStore
from extractor.errors import ExtractorError


def check_data(database_path: str) -> int:
    print("=" * 60)
    print("DATABASE CHECK")
    print("=" * 60)

    with RecipeStore(database_path=database_path) as store:
        try:
            total = store.count()
            per_mod = store.count_by_mod()
            sample = store.list(0, 1)
        except ExtractorError as e:
            print(f"✗ {e}")
            return 1

        print(f"\n✓ Recipes in database: {total}")
        if sample:
            recipe = sample[0]
            print(f"  Sample: {recipe.result_item or '(no result)'} [{recipe.recipe_type}] from {recipe.mod_name}")

        print(f"\n✓ Mods in database: {len(per_mod)}")
        for name, count in per_mod[:10]:
            print(f"  {name}: {count}")
        if len(per_mod) > 10:
            print(f"  ... and {len(per_mod) - 10} more")

    print("\n" + "=" * 60)

    if total == 0:
        print("⚠ WARNING: No recipes found in database!")
        print("   You need to run the extractor to populate data.")
    else:
        print("✓ Database has data")

    print("=" * 60)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Recipe database summary')
    parser.add_argument('--db', type=str, default='database/recipes.db',
                        help='SQLite database file (default: database/recipes.db)')
    args = parser.parse_args()
    sys.exit(check_data(args.db))
