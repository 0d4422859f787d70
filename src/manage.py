"""ZeeVerify database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from franchise.domain import franchise
from franchise.utils.db import drop_db, setup_db


def setup_database():
    print("Initializing franchise domain...")
    franchise.init()
    print("Creating database schema...")
    setup_db(franchise)
    print("Done.")


def drop_database():
    print("Initializing franchise domain...")
    franchise.init()
    print("Dropping database schema...")
    drop_db(franchise)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="ZeeVerify database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
