"""Create a user, or change the role of an existing one.

Usage:
  python scripts/create_user.py --email alice@example.com --name Alice --role admin

The API only lets an admin change roles, so this is how the first admin is
made on an existing database (see also BOOTSTRAP_ADMIN_EMAIL).
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from innovatehub.config import load_config
from innovatehub.db import init_db, connect
from innovatehub.auth.crud import create_user_if_absent, get_user_by_email, set_user_role


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--email", required=True)
    ap.add_argument("--name", default="")
    ap.add_argument("--role", default=None, help="admin, creator, or omit for the default role")
    args = ap.parse_args()

    cfg = load_config()
    init_db(cfg.DB_DSN)

    doc = {"email": args.email.strip(), "name": args.name}
    if args.role:
        doc["role"] = args.role

    with connect(cfg.DB_DSN) as conn:
        if create_user_if_absent(conn, doc) is None and args.role:
            existing = get_user_by_email(conn, doc["email"])
            set_user_role(conn, existing["_id"], args.role)
        u = get_user_by_email(conn, doc["email"])

    print("User:")
    print(u)


if __name__ == "__main__":
    main()
