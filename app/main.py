"""Command-line entry point, run by cron (or by hand) to execute one check cycle.

Usage:
    python -m app.main check            # respects the notification time window
    python -m app.main check --force    # bypass the time window
    python -m app.main init-db          # create tables on a fresh database
"""

import argparse
import asyncio
import json
import sys

import structlog

from app.config import get_settings
from app.core.logging import configure_logging

settings = get_settings()
logger = structlog.get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="medicine-notifier",
        description="Medicine expiry reminder check cycle",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Run one notification check cycle")
    check_parser.add_argument("--force", action="store_true", help="Ignore the notification time window")

    subparsers.add_parser("init-db", help="Create database tables")
    return parser


def cmd_check(args) -> int:
    from app.application.services.notification_service import check_and_send_notifications
    from app.infrastructure.database import SessionLocal

    db = SessionLocal()
    try:
        result = asyncio.run(check_and_send_notifications(db, force_check=args.force))
    finally:
        db.close()

    print(json.dumps(result, indent=2, default=str))
    return 1 if result.get("errors") else 0


def cmd_init_db(args) -> int:
    from app.infrastructure.database import init_db

    init_db()
    logger.info("Database tables created/verified")
    return 0


COMMANDS = {
    "check": cmd_check,
    "init-db": cmd_init_db,
}


def main(argv=None) -> int:
    configure_logging()
    args = create_parser().parse_args(argv)
    logger.info("Starting medicine notifier", command=args.command, env=settings.ENVIRONMENT)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
