"""
Simple runner - extract every recipe from a mods folder into the recipe database.

Usage:
    python run_extractor.py ~/.minecraft/mods              # Append recipes from every archive
    python run_extractor.py ~/.minecraft/mods --clear      # Replace what is stored
    python run_extractor.py ~/.minecraft/mods --list       # Only list archives found
    python run_extractor.py ~/.minecraft/mods --db out.db  # Use another database file
"""
import argparse
import logging
import signal
import sys

from extractor.config import ExtractorConfig
from extractor.database_storage import RecipeStore
from extractor.errors import ExtractorError
from extractor.extraction_controller import ExtractionController
from extractor.folder_scanner import FolderScanner
from extractor.models import ExtractionProgress


def print_progress(progress: ExtractionProgress):
    """Print one progress line."""
    print(f"[{progress.current}/{progress.total}] {progress.current_archive}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Mod recipe extractor')
    parser.add_argument('folder', type=str,
                        help='Folder containing mod archives (.jar/.zip)')
    parser.add_argument('--db', type=str, default='database/recipes.db',
                        help='SQLite database file (default: database/recipes.db)')
    parser.add_argument('--clear', action='store_true',
                        help='Delete stored recipes before extracting')
    parser.add_argument('--list', action='store_true',
                        help='Only list the archives found')
    parser.add_argument('--batch-size', type=int, default=100,
                        help='Recipes per database transaction (default: 100)')
    parser.add_argument('--progress-every', type=int, default=50,
                        help='Report progress every N recipes (default: 50)')
    parser.add_argument('--verbose', action='store_true',
                        help='Show per-archive log messages')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ExtractorConfig(
        batch_size=args.batch_size,
        progress_every=args.progress_every,
        clear_before_extract=args.clear
    )

    try:
        archives = FolderScanner(config.archive_extensions).scan(args.folder)
    except ExtractorError as e:
        print(f"✗ {e}")
        return 1

    print(f"Found {len(archives)} archives in {args.folder}")
    if args.list:
        for archive in archives:
            print(f"  {archive.name} ({archive.size} bytes)")
        return 0

    with RecipeStore(database_path=args.db) as store:
        controller = ExtractionController(store, config=config)
        controller.progress.subscribe(print_progress)

        # First Ctrl+C finishes the current archive, the second one aborts
        def handle_interrupt(signum, frame):
            signal.signal(signal.SIGINT, signal.default_int_handler)
            print("\nStopping after current archive (Ctrl+C again to abort)...")
            controller.stop()

        signal.signal(signal.SIGINT, handle_interrupt)

        try:
            result = controller.extract_all([a.path for a in archives])
        except KeyboardInterrupt:
            print("\nAborted. Recipes committed so far are kept.")
            return 1
        except ExtractorError as e:
            print(f"✗ {e}")
            return 1

        print(f"\nDone! Extracted {result.recipes_extracted} recipes "
              f"from {result.archives_processed}/{len(archives)} archives")
        if result.cancelled:
            print("Stopped early; run again to extract the rest.")
        if result.errors:
            print(f"Errors: {len(result.errors)}")
            for error in result.errors:
                print(f"  ✗ {error}")
        print(f"Database now holds {store.count()} recipes")

    return 0 if not result.errors else 2


if __name__ == '__main__':
    sys.exit(main())
