# src/exposure_store/scripts/cleanup.py
"""
Cron job applying the retention policy to the exposure store.

This script should be run at least once per interval to:
1. Delete diagnosis keys older than the key retention window
2. Delete verification records older than the verification retention window
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from exposure_store.core.settings import settings
from exposure_store.services.key_store import get_key_store
from exposure_store.services.retention import RetentionService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Delete expired diagnosis keys and verifications")
    sweep = parser.add_mutually_exclusive_group()
    sweep.add_argument(
        "--keys-only",
        action="store_true",
        help="Only delete keys older than the key retention window.",
    )
    sweep.add_argument(
        "--verifications-only",
        action="store_true",
        help="Only delete verification records older than their retention window.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the cutoffs without deleting anything.",
    )
    return parser


def main(argv: Sequence[str] | None = None, service: RetentionService | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = service or RetentionService(get_key_store())
    try:
        result = service.run(
            keys=not args.verifications_only,
            verifications=not args.keys_only,
            dry_run=args.dry_run,
        )
    except SQLAlchemyError as exc:
        logger.error("Retention sweep failed: %s", exc, exc_info=True)
        print(f"[cleanup] ERROR: {exc}", file=sys.stderr)
        return 1

    print(
        f"[cleanup] key cutoff interval={result.key_cutoff} "
        f"verification cutoff={result.verification_cutoff.isoformat()} "
        f"keys deleted={result.keys_deleted} "
        f"verifications deleted={result.verifications_deleted}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
