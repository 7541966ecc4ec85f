#!/usr/bin/env python3
"""
Create (or recreate) the mechanic shop tables.

Usage:
    python scripts/init_db.py <dbname> <port> <user> [--drop]
"""

import argparse

from mechanic_shop.config import settings
from mechanic_shop.models.base import Base
from mechanic_shop.services.database import close_db, init_db


def main():
    parser = argparse.ArgumentParser(description="Create the mechanic shop tables")
    parser.add_argument("dbname")
    parser.add_argument("port", type=int)
    parser.add_argument("user")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    url = settings.database_url(args.dbname, args.port, args.user)
    print("Initializing database...")
    engine = init_db(url, echo=True, create_tables=False)

    try:
        if args.drop:
            print("Dropping tables...")
            Base.metadata.drop_all(engine)

        print("Creating tables...")
        Base.metadata.create_all(engine)
        print(f"Tables: {', '.join(sorted(Base.metadata.tables))}")
    finally:
        close_db(engine)


if __name__ == "__main__":
    main()
