#!/usr/bin/env python3
"""
Seed the financial tips library.

Safe to run more than once; tips whose title already exists are skipped.

Usage:
    python scripts/seed_financial_tips.py

Uses DATABASE_URL from .env.development or .env.production.
"""

import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fintrack.db.database import get_db_context, init_db
from fintrack.db.seed import seed_financial_tips


def main():
    """Create tables if needed and insert the tips."""
    init_db()

    try:
        with get_db_context() as db:
            inserted = seed_financial_tips(db)
    except Exception as e:
        print(f"Error seeding database: {e}")
        sys.exit(1)

    print(f"Successfully seeded {inserted} financial tips")


if __name__ == "__main__":
    main()
