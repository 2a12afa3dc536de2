"""Create a demo profile so the API can be tried without the sign-up service.

Usage: python scripts/seed_db.py <user_id> <name>
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.database.bootstrap import ensure_profile


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id")
    parser.add_argument("name")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    ensure_profile(db_config, user_id=args.user_id, name=args.name)

    print(f"OK: Profile {args.user_id} ({args.name}) -> {db_config.get('database')}")


if __name__ == "__main__":
    main()
