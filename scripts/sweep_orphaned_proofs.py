#!/usr/bin/env python3
"""Find (and optionally delete) proof objects that no entry references.

An upload whose attach step never happened leaves an object under ``proofs/``
with nothing pointing at it. Objects newer than the grace period are skipped.

Usage:
    python scripts/sweep_orphaned_proofs.py            # report only
    python scripts/sweep_orphaned_proofs.py --delete   # remove them
    python scripts/sweep_orphaned_proofs.py --grace-minutes 1440
"""

import argparse
import os
import sys
from datetime import timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from prooflog.config import get_settings
from prooflog.database import Database
from prooflog.services.proofs import ProofService
from prooflog.services.storage import ProofStorage


def sweep(delete: bool, grace_minutes: int) -> list[str]:
    settings = get_settings()
    database = Database(settings.database_url)
    session = database.session()
    try:
        service = ProofService(session, ProofStorage.from_settings(settings), settings)
        orphans = service.find_orphaned_keys(timedelta(minutes=grace_minutes))
        for key in orphans:
            print(f"{'deleting' if delete else 'orphan'}: {key}")
            if delete:
                service.storage.delete_object(key)
        print(f"{len(orphans)} orphaned object(s)")
        return orphans
    finally:
        session.close()
        database.dispose()


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--delete", action="store_true", help="delete orphaned objects")
    parser.add_argument(
        "--grace-minutes",
        type=int,
        default=settings.orphan_grace_period_minutes,
        help="ignore objects newer than this",
    )
    args = parser.parse_args()
    sweep(args.delete, args.grace_minutes)


if __name__ == "__main__":
    main()
