#!/usr/bin/env python3
"""
Create the planner tables (trips, participants, activities) from the SA models.

Usage:
    python3 scripts/create_tables.py            # uses DATABASE_URL / .env
    python3 scripts/create_tables.py --drop     # drop first (local dev only)

Exits 0 on success, 1 on failure.
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from services.planner.config import get_settings  # noqa: E402
from services.planner.db.engine import create_engine  # noqa: E402
from services.planner.db.models import Base  # noqa: E402


async def _create(drop: bool) -> None:
    settings = get_settings()
    engine = create_engine(settings)
    try:
        async with engine.begin() as conn:
            if drop:
                if settings.environment == "production":
                    raise SystemExit("Refusing to drop tables in production.")
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    try:
        asyncio.run(_create(args.drop))
    except (SQLAlchemyError, OSError) as exc:
        print(f"FAIL  {exc}")
        return 1

    print("PASS  tables created: " + ", ".join(sorted(Base.metadata.tables)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
