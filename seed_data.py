#!/usr/bin/env python3
"""
Sample Data Seeder for the Course API
Creates demo users, courses and enrollments, and resets or inspects tables

Usage:
    python seed_data.py --users 10 --courses 5 --enrollments 2
    python seed_data.py --reset all
    python seed_data.py --check
"""

import argparse
import logging
import sys
from typing import List, Optional

from courses_api.config import settings
from courses_api.core.database import Database
from courses_api.core.logging_config import configure_logging
from courses_api.services.maintenance import TABLES, check_database, reset_tables
from courses_api.services.seeding import seed_all

logger = logging.getLogger("seed_data")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed, reset or inspect the course database")
    parser.add_argument("--users", type=positive_int, default=5, help="Users to create (default: 5)")
    parser.add_argument("--courses", type=positive_int, default=None, help="Catalog courses to insert (default: all)")
    parser.add_argument("--enrollments", type=positive_int, default=3, help="Enrollments per user (default: 3)")
    parser.add_argument(
        "--reset",
        nargs="?",
        const="all",
        choices=["all", *TABLES],
        help="Delete all rows of a table (or all tables) instead of seeding",
    )
    parser.add_argument("--check", action="store_true", help="Print database status instead of seeding")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    return parser


def print_status(status: dict) -> None:
    print(f"🔌 {status['dialect']} {status['server_version']}")
    print("📋 Tables in database:")
    if not status["tables"]:
        print("  ℹ️  No tables found")
    for table in status["tables"]:
        count = status["row_counts"].get(table)
        suffix = f" ({count} rows)" if count is not None else ""
        print(f"  - {table}{suffix}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings)

    database = Database(args.database_url or settings.database_url)
    try:
        database.create_all()

        if args.check:
            print_status(check_database(database))
            return 0

        if args.reset:
            tables = None if args.reset == "all" else [args.reset]
            deleted = reset_tables(database, tables)
            for table, count in deleted.items():
                print(f"🗑️  {table}: {count} rows deleted")
            return 0

        summary = seed_all(
            database,
            users=args.users,
            courses_limit=args.courses,
            enrollments_per_user=args.enrollments,
        )
        print(
            f"🎉 Seed finished: {summary['users']} users | "
            f"{summary['courses']} courses | {summary['enrollments']} enrollments"
        )
        return 0
    except Exception:
        logger.exception("Seeding failed")
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
