from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from barber_school.database.bootstrap import apply_schema, ensure_admin_user


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    parser = argparse.ArgumentParser(description="Create or reset the admin account.")
    parser.add_argument("--username", default=settings.ADMIN_USERNAME)
    parser.add_argument("--password", default=settings.ADMIN_PASSWORD)
    parser.add_argument("--full-name", default="Administrator")
    args = parser.parse_args()

    db_config = dict(settings.DB_CONFIG)
    apply_schema(db_config)
    ensure_admin_user(db_config, username=args.username, password=args.password, full_name=args.full_name)

    print(f"OK: Admin '{args.username}' ready -> {db_config.get('path')}")


if __name__ == "__main__":
    main()
