"""
Delete login session rows so locked-out users can sign in again. Run from project root:

  python -m quizdeck.scripts.clear_sessions
  python -m quizdeck.scripts.clear_sessions --expired-only

Expired rows never block a login; --expired-only just tidies the table (e.g. from cron).
"""

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from quizdeck.core.database import SessionLocal
from quizdeck.core.logging import configure_logging
from quizdeck.services.auth import clear_sessions

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Clear Quizdeck login sessions.")
    parser.add_argument(
        "--expired-only",
        action="store_true",
        help="Only delete sessions whose expiry has passed",
    )
    args = parser.parse_args(argv)
    configure_logging()

    db = SessionLocal()
    try:
        deleted = clear_sessions(db, expired_only=args.expired_only)
        logger.info("Cleared %s sessions", deleted)
        return 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Clearing sessions failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
