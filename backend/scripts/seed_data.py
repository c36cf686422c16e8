#!/usr/bin/env python3
"""
Load demo HR data: login users, employees, payrolls and vacations.

Usage:
    python scripts/seed_data.py [--purge] [--seed 42] [--employees 30]
"""

import argparse
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.database import Base, SessionLocal, engine
import modules.models_registry  # noqa: F401
from modules.fixtures.fixture_loader import DEFAULT_PASSWORD, FixtureLoader

logger = logging.getLogger("seed_data")


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the HR database with demo data")
    parser.add_argument("--purge", action="store_true", help="Delete existing data first")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    parser.add_argument("--employees", type=int, default=None, help="Number of employees (default 25-50)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        summary = FixtureLoader(db, seed=args.seed).load(
            employee_count=args.employees, purge=args.purge
        )
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()

    print("Seed data loaded:")
    for key, value in summary.as_dict().items():
        print(f"  {key}: {value}")
    print(f"\nLogin with admin@hr-system.com / {DEFAULT_PASSWORD}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
