from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from influencerflow.db import models  # noqa: E402,F401
from influencerflow.db.base import Base, engine, session_scope  # noqa: E402
from influencerflow.services.seed import seed_demo_data  # noqa: E402


def main(create_tables: bool) -> None:
    if create_tables:
        Base.metadata.create_all(bind=engine)
    with session_scope() as session:
        created = seed_demo_data(session)
    print(f"Seed complete: {created}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load demo creators and a demo brand.")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (local SQLite only; use alembic elsewhere).",
    )
    args = parser.parse_args()
    main(create_tables=args.create_tables)
