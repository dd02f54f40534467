"""Backfill property memberships for owner profiles that now have user accounts.

Matches owner profiles to users by email, links them, upserts the memberships
their ownerships and invites imply, and claims pending invites.

Runs as a dry-run unless --apply is given. Review the dry-run output (and any
conflicts) before applying. Exits 1 when conflicts are found or on error.

Usage:
    python backfill_memberships.py                # Dry-run, human-readable
    python backfill_memberships.py --json         # Dry-run, JSON report
    python backfill_memberships.py --apply        # Apply in one transaction
"""

import argparse
import logging
import os
import sys
from typing import Callable, ContextManager, Optional, Sequence

from sqlalchemy.orm import Session

from schemas.backfill import BackfillReport, BackfillSummary
from services.backfill_service import (
    apply_backfill_operations,
    describe_backfill_operation,
    load_backfill_snapshot,
    plan_membership_backfill,
)

logger = logging.getLogger("backfill_memberships")

SessionFactory = Callable[[], ContextManager[Session]]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Backfill property memberships from owner profiles"
    )
    parser.add_argument("--apply", action="store_true", help="Write changes (default is dry-run)")
    parser.add_argument("--dry-run", action="store_true", help="Only print the plan (default)")
    parser.add_argument("--json", action="store_true", help="Print a machine-readable report")
    return parser.parse_args(argv)


def configure_logging() -> None:
    # stdout carries the plan; logs go to stderr
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(args: argparse.Namespace, session_factory: SessionFactory) -> int:
    dry_run = args.dry_run or not args.apply
    mode = "dry-run" if dry_run else "apply"

    def header(message: str) -> None:
        if not args.json:
            print(f"\n=== {message} ===")

    header(f"Backfill property memberships ({mode})")

    with session_factory() as db:
        profiles, users = load_backfill_snapshot(db)
        plan = plan_membership_backfill(profiles, users)
        logger.info(
            "Planned %d operations for %d owner profiles (%d conflicts)",
            len(plan.operations), len(profiles), len(plan.conflicts),
        )

        if not plan.operations:
            if not args.json:
                print("No operations required.")
        elif not args.json:
            header("Planned operations")
            for operation in plan.operations:
                print(f"- {describe_backfill_operation(operation)}")

        if plan.conflicts and not args.json:
            header("Conflicts detected")
            for conflict in plan.conflicts:
                print(
                    f"ownerProfile#{conflict.owner_profile_id} ({conflict.email}): {conflict.reason}",
                    file=sys.stderr,
                )

        summary = BackfillSummary(
            mode=mode,
            owner_profiles=len(profiles),
            linked_profiles=plan.linked_profiles,
            memberships_created=plan.memberships_created,
            invites_claimed=plan.invites_claimed,
            conflicts=len(plan.conflicts),
        )

        if args.json:
            report = BackfillReport(
                summary=summary,
                operations=plan.operations,
                conflicts=plan.conflicts,
            )
            print(report.model_dump_json(indent=2))
        else:
            header("Summary")
            print(summary.model_dump_json(indent=2))

        if plan.conflicts:
            if not dry_run:
                print("\nConflicts detected. Aborting without applying changes.", file=sys.stderr)
            return 1

        if dry_run or not plan.operations:
            return 0

        apply_backfill_operations(db, plan.operations)

    if not args.json:
        print("\nBackfill completed successfully.")
    return 0


def main(
    argv: Optional[Sequence[str]] = None,
    session_factory: Optional[SessionFactory] = None,
) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        if session_factory is None:
            from database import get_session_context
            session_factory = get_session_context
        return run(args, session_factory)
    except Exception:
        logger.exception("Backfill failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
