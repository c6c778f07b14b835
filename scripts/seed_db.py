from __future__ import annotations

import argparse
import importlib

from face_attendance.config import get_settings_module
from face_attendance.database.bootstrap import ensure_admin_user


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    parser = argparse.ArgumentParser(description="Create or reset the admin account.")
    parser.add_argument("--email", default=getattr(settings, "ADMIN_EMAIL", "admin@example.com"))
    parser.add_argument("--password", default=getattr(settings, "ADMIN_PASSWORD", ""))
    args = parser.parse_args()

    if not args.password:
        raise SystemExit("ADMIN_PASSWORD is empty. Pass --password or set it in .env")

    ensure_admin_user(db_config, email=args.email, password=args.password)
    print(f"OK: Admin account ready -> {args.email} on {db_config.get('database')}")


if __name__ == "__main__":
    main()
