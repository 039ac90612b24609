"""
Initialize database — creates all tables, optionally loads demo data.
Only useful with a file or server DATABASE_URL (the default sqlite:// store
lives in memory and is gone when this script exits).
Usage: python scripts/setup/init_db.py [--seed]
"""

import argparse
import asyncio
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from lockerhub.database import store
from lockerhub.config import settings
from lockerhub.services.seed_service import seed_demo_data


def main():
    parser = argparse.ArgumentParser(description="Create LockerHub tables")
    parser.add_argument("--seed", action="store_true", help="Load demo users, lockers and packages")
    parser.add_argument("--reset", action="store_true", help="Drop every table first")
    args = parser.parse_args()

    print("LockerHub DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    try:
        with store.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except Exception as e:
        print(f"Cannot connect to database: {e}")
        sys.exit(1)

    if args.reset:
        store.reset()
        print("All tables dropped and recreated")
    else:
        store.create_tables()
        print("All tables created")

    tables = sorted(inspect(store.engine).get_table_names())
    print(f"\nTables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    if args.seed:
        counts = asyncio.run(seed_demo_data(store))
        print(f"\nDemo data loaded: {counts}")

    print("\nDatabase ready! Start the backend with:")
    print("   uvicorn lockerhub.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
