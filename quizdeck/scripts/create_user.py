"""
Create a user (e.g. the first admin). Run from project root:
  python -m quizdeck.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m quizdeck.scripts.create_user admin@example.com admin your-secure-password ADMIN
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from quizdeck.core.database import SessionLocal
from quizdeck.core.logging import configure_logging
from quizdeck.models import UserRole
from quizdeck.schemas.user import UserCreate
from quizdeck.services.users import DuplicateUser, create_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Quizdeck user.")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("username", help="Username (unique, 1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.COMMON.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)
    configure_logging()

    try:
        body = UserCreate(
            email=args.email,
            username=args.username,
            password=args.password,
            role=UserRole(args.role),
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, body)
    except DuplicateUser as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' <{user.email}> with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
