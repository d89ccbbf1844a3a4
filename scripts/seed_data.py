#!/usr/bin/env python3
"""
Database Seed Script

Loads the 73-book Catholic canon (46 Old Testament, 27 New Testament) with
one row per chapter, and optionally verse text from a JSON file.

USAGE:
    # From the project root with the venv activated
    python scripts/seed_data.py
    python scripts/seed_data.py --verses data/verses.json
    python scripts/seed_data.py --create-tables --flush-cache

Verse file format:
    [{"book": 1, "chapter": 1, "verse": 1, "text": "In the beginning..."}, ...]

Re-running is safe: existing rows are updated in place.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bible_api.config import get_settings
from bible_api.database import Database
from bible_api.seeding import SeedReport, load_verses, seed_canon
from bible_api.services.cache import CacheClient


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the Bible API database.")
    parser.add_argument(
        "--verses",
        type=Path,
        help="JSON file with verse records to load after the canon",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (development only; use alembic otherwise)",
    )
    parser.add_argument(
        "--flush-cache",
        action="store_true",
        help="Drop cached public responses after seeding",
    )
    return parser.parse_args(argv)


def seed_database(args: argparse.Namespace) -> SeedReport:
    """Seed inside a single transaction; nothing is committed on failure."""
    settings = get_settings()
    database = Database.from_settings(settings)

    if args.create_tables:
        database.create_tables()

    db = database.session()
    try:
        report = seed_canon(db)
        if args.verses:
            with args.verses.open(encoding="utf-8") as f:
                load_verses(db, json.load(f), report)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()

    if args.flush_cache:
        cache = CacheClient.from_settings(settings)
        removed = cache.flush_public()
        cache.close()
        print(f"Flushed {removed} cached responses.")

    return report


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    report = seed_database(args)

    print("=" * 60)
    print("Database seeding completed successfully!")
    print("=" * 60)
    print("\nSummary:")
    print(f"  - Books created/updated: {report.books_created}/{report.books_updated}")
    print(f"  - Chapters created/deleted: {report.chapters_created}/{report.chapters_deleted}")
    print(f"  - Verses created/updated/skipped: "
          f"{report.verses_created}/{report.verses_updated}/{report.verses_skipped}")


if __name__ == "__main__":
    main()
