#!/usr/bin/env python3
"""
Initialize the manual store database.

Creates all necessary tables for storing documents, classified pages,
table-of-contents entries and sections.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from data.database import DatabaseManager
from data.db_models import Base


def main():
    parser = argparse.ArgumentParser(
        description='Initialize manual store database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL setting)'
    )
    parser.add_argument(
        '--drop-existing',
        action='store_true',
        help='Drop existing tables before creating new ones (WARNING: destroys data!)'
    )

    args = parser.parse_args()

    db_manager = DatabaseManager(args.database_url)

    print("=" * 60)
    print("Manual Store Database Initialization")
    print("=" * 60)
    print(f"Database URL: {db_manager.database_url}")
    print()

    if args.drop_existing:
        confirm = input("⚠️  Drop existing tables? This will DELETE ALL DATA! (yes/no): ")
        if confirm.lower() == 'yes':
            db_manager.drop_tables()
            print()
        else:
            print("Aborted.")
            return

    db_manager.create_tables()

    print("✓ Database initialized successfully!")
    print()
    print("Tables created:")
    for table_name in Base.metadata.tables:
        print(f"  - {table_name}")
    print()
    print("You can now ingest manuals:")
    print("  python cli_workflow.py ingest manual.pdf --category electrical")
    print()


if __name__ == '__main__':
    main()
