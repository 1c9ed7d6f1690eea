"""
Command line entry point for portal maintenance tasks.
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from recruitportal.application.services.submission_aggregator import SubmissionAggregator
from recruitportal.domain.errors import RecruitmentError
from recruitportal.infrastructure.security import hash_password
from recruitportal.infrastructure.stores.applicant_store import ApplicantStore
from recruitportal.infrastructure.stores.submission_store import SubmissionStore

load_dotenv(find_dotenv(usecwd=True), override=False)

DEFAULT_ADMIN_EMAIL = "admin@mfc.com"
DEFAULT_ADMIN_USERNAME = "MFC Admin"
DEFAULT_ADMIN_REGNO = "ADMIN001"
DEFAULT_MEET_LINK = "https://meet.google.com/abc-defg-hij"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recruitportal",
        description="Recruitment admin portal maintenance commands",
    )
    parser.add_argument("--db-url", help="database URL (default: RECRUITPORTAL_DB_URL)")

    subparsers = parser.add_subparsers(dest="command", help="available commands")

    admin_parser = subparsers.add_parser("init-admin", help="create or reset the admin account")
    admin_parser.add_argument("--email", default=DEFAULT_ADMIN_EMAIL)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--username", default=DEFAULT_ADMIN_USERNAME)
    admin_parser.add_argument("--regno", default=DEFAULT_ADMIN_REGNO)

    seed_parser = subparsers.add_parser(
        "seed-meets", help="schedule one meeting for the first N applicants"
    )
    seed_parser.add_argument("--count", type=int, default=5, help="number of applicants")
    seed_parser.add_argument("--days", type=int, default=5, help="spread over the next N days")
    seed_parser.add_argument("--link", default=DEFAULT_MEET_LINK)
    seed_parser.add_argument("--seed", type=int, default=None, help="random seed")

    status_parser = subparsers.add_parser(
        "subdomain-status", help="print submitted/not-submitted cohorts per subdomain"
    )
    status_parser.add_argument("--indent", type=int, default=2)

    return parser


def _init_admin(args: argparse.Namespace) -> int:
    store = ApplicantStore(db_url=args.db_url)
    user = store.upsert_admin(
        email=args.email,
        username=args.username,
        password_hash=hash_password(args.password),
        regno=args.regno,
    )
    logger.info("Admin account ready: {} ({})", user["email"], user["id"])
    print(json.dumps({"id": user["id"], "email": user["email"], "admin": user["admin"]}))
    return 0


def _seed_meets(args: argparse.Namespace) -> int:
    if args.count < 1 or args.days < 1:
        logger.error("--count and --days must be positive")
        return 2
    applicants = ApplicantStore(db_url=args.db_url)
    submissions = SubmissionStore(db_url=args.db_url)

    users = applicants.list_users(admin=False, limit=args.count, oldest_first=True)
    if not users:
        logger.warning("No applicants found to seed meetings for")
        return 0

    removed = submissions.delete_meetings_for_users([u["id"] for u in users])
    logger.info("Seeding meetings for {} users ({} existing removed)", len(users), removed)

    rng = random.Random(args.seed)
    today = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    for user in users:
        start = (today + timedelta(days=rng.randrange(args.days))).replace(hour=rng.randrange(24))
        meeting = submissions.add_meeting(
            user_id=user["id"],
            scheduled_time=start,
            end_time=start + timedelta(hours=1),
            status="scheduled",
            gmeet_link=args.link,
        )
        logger.info("Meeting for {} at {}", user["username"], meeting["scheduled_time"])
    return 0


def _subdomain_status(args: argparse.Namespace) -> int:
    aggregator = SubmissionAggregator(
        ApplicantStore(db_url=args.db_url), SubmissionStore(db_url=args.db_url)
    )
    print(json.dumps(aggregator.subdomain_submission_status(), indent=args.indent))
    return 0


_COMMANDS = {
    "init-admin": _init_admin,
    "seed-meets": _seed_meets,
    "subdomain-status": _subdomain_status,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    handler = _COMMANDS.get(args.command or "")
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except RecruitmentError as exc:
        logger.error("{} failed: {}", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
