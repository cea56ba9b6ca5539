"""Utility script to create an initial administrator in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import create_user
from app.domain.entities import ROLE_ADMIN
from app.domain.errors import ValidationError
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for administrator creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial administrator for the storefront API.",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Administrator email address (default: admin@example.com)",
    )
    parser.add_argument("--first-name", default="Store", help="First name (default: Store)")
    parser.add_argument("--last-name", default="Admin", help="Last name (default: Admin)")
    parser.add_argument(
        "--password",
        default=None,
        help="Administrator password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an administrator using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Administrator password: ")
    if not password:
        raise SystemExit("No valid password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            email=args.email,
            password=password,
            first_name=args.first_name,
            last_name=args.last_name,
            role=ROLE_ADMIN,
        )
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the administrator: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Failed to store the administrator: {exc}") from exc
    else:
        print(
            "Administrator created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.full_name}\n"
            f"  Email: {user.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
