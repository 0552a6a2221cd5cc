#!/usr/bin/env python3
"""
Database Seeding Script - loads the BAS demo dataset for local testing.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def main():
    """Main function."""
    print("=" * 60)
    print("Database Seeding - Financial Reports demo data")
    print("=" * 60)

    from sqlalchemy import select

    from finreports.infrastructure.database import SessionLocal, init_db
    from finreports.infrastructure.database.models import Account
    from finreports.infrastructure.database.seed import seed_sample_data

    init_db()

    db = SessionLocal()
    try:
        if db.execute(select(Account)).first() is not None:
            print("Database already contains accounts, skipping.")
            return
        seed_sample_data(db)
        print("Demo data loaded.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
