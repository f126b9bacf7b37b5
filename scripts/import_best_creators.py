"""Load the best-creator listing served by GET /bestCreator.

The API has no write endpoint for this collection; it is curated out of band.

Usage:
  python scripts/import_best_creators.py --file best_creators.json [--replace]

Notes:
  - The file must hold a JSON array of objects; each becomes one document.
  - --replace clears the collection first.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from innovatehub.config import Config
from innovatehub.db import connect, init_db
from innovatehub.contests.crud import import_best_creators


def _read_creators_file(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise SystemExit(f"{path}: expected a JSON array")
    return [d for d in data if isinstance(d, dict)]


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", default="best_creators.json", help="Path to JSON array of creators")
    parser.add_argument("--replace", action="store_true", help="Delete existing entries first")
    args = parser.parse_args()

    cfg = Config()  # reads env
    init_db(cfg.DB_DSN)

    creators = _read_creators_file(Path(args.file))
    if not creators:
        print(f"No creators found in {args.file}")
        return

    with connect(cfg.DB_DSN) as conn:
        n = import_best_creators(conn, creators, replace=args.replace)

    print(f"Done. inserted={n} replace={args.replace}")


if __name__ == "__main__":
    main()
