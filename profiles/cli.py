"""Command line interface for managing user profiles.

Usage:
    profiles init-db
    profiles add "Ada Lovelace" ada@example.com 36
    profiles list
    profiles get 1
    profiles update 1 "Ada King" ada@example.com 37
    profiles delete 1
"""

import argparse
import logging
import sys
from typing import List, Optional

from profiles.config import get_config
from profiles.database import create_db_engine, create_session_factory, init_db
from profiles.domain.entities import UserProfile
from profiles.domain.errors import PersistenceFailure, ProfileError
from profiles.logging_config import configure_logging
from profiles.notifications import build_notifier
from profiles.repositories import SQLAlchemyUserRepository
from profiles.services import UserService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_STORE_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="profiles", description="Manage user profiles")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    parser.add_argument("--echo-sql", action="store_true", help="Log every SQL statement")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the user_profiles table")

    add = sub.add_parser("add", help="Create a user profile")
    add.add_argument("name")
    add.add_argument("email")
    add.add_argument("age", type=int)

    sub.add_parser("list", help="List all user profiles")

    get = sub.add_parser("get", help="Show one user profile")
    get.add_argument("id", type=int)

    update = sub.add_parser("update", help="Replace a user profile's fields")
    update.add_argument("id", type=int)
    update.add_argument("name")
    update.add_argument("email")
    update.add_argument("age", type=int)

    delete = sub.add_parser("delete", help="Delete a user profile")
    delete.add_argument("id", type=int)
    return parser


def format_profile(profile: UserProfile) -> str:
    created = profile.created_at.isoformat(sep=" ", timespec="seconds") if profile.created_at else "-"
    return f"{profile.id}\t{profile.name}\t{profile.email}\t{profile.age}\t{created}"


def run_command(args: argparse.Namespace, service: UserService) -> int:
    if args.command == "add":
        profile_id = service.create(args.name, args.email, args.age)
        print(f"created {profile_id}")
    elif args.command == "list":
        for profile in service.list_all():
            print(format_profile(profile))
    elif args.command == "get":
        profile = service.get_by_id(args.id)
        if profile is None:
            print(f"error: user profile with id {args.id} not found", file=sys.stderr)
            return EXIT_REJECTED
        print(format_profile(profile))
    elif args.command == "update":
        service.update(args.id, args.name, args.email, args.age)
        print(f"updated {args.id}")
    elif args.command == "delete":
        if not service.delete(args.id):
            print(f"no user profile with id {args.id}")
        else:
            print(f"deleted {args.id}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_config()
    configure_logging(args.log_level or settings.LOG_LEVEL, settings.LOG_FILE)

    engine = create_db_engine(args.database_url or settings.DATABASE_URL, debug=args.echo_sql)
    try:
        if args.command == "init-db":
            init_db(engine)
            print("database initialized")
            return EXIT_OK

        repository = SQLAlchemyUserRepository(create_session_factory(engine))
        notifier = build_notifier(settings.EVENT_WEBHOOK_URL, timeout=settings.EVENT_WEBHOOK_TIMEOUT)
        service = UserService(repository, notifier, timeout=settings.DB_TIMEOUT_SECONDS)
        try:
            return run_command(args, service)
        except PersistenceFailure as e:
            logger.error(f"Store failure running '{args.command}': {e}")
            print(f"error: {e.message}", file=sys.stderr)
            return EXIT_STORE_FAILURE
        except ProfileError as e:
            print(f"error: {e.message}", file=sys.stderr)
            return EXIT_REJECTED
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
