"""
Seed script for the externally managed collections (Places, Products).

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Different seed file: python scripts/seed_db.py --seed path/to/seed.json --apply

Behavior:
  - Loads `db_seed.json` from the working directory unless --seed is given.
  - Initializes Firebase from the same settings as the server.
  - Writes each collection/document pair to the store.

NOTE: With USE_MOCK_DB=true the writes land in a throwaway in-process store.
To seed the mock store for the server, point MOCK_DB_SEED_PATH at the file instead.
"""

import argparse
import logging
import os

from ally.config.firebase import initialize_firebase
from ally.config.seed import load_seed, write_seed
from ally.core.settings import get_settings


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--seed", default=os.path.join(os.getcwd(), "db_seed.json"), help="Seed JSON file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not os.path.exists(args.seed):
        print(f"Seed file not found: {args.seed}")
        return

    seed = load_seed(args.seed)
    db = initialize_firebase(get_settings()).db

    written = write_seed(db, seed, apply=args.apply)

    if args.apply:
        print(f"Seeding completed: {len(written)} document(s) written.")
    else:
        print(f"Dry run complete ({len(written)} document(s)). Re-run with --apply to write to DB.")


if __name__ == "__main__":
    main()
