"""Register an API user allowed to manage translations."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys

from linguastore.core.config import get_settings
from linguastore.core.database import session_scope
from linguastore.schemas.auth import UserItem
from linguastore.services.auth import AuthService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a linguastore API user.")
    parser.add_argument("email", help="Login email for the new user.")
    parser.add_argument("--name", default="", help="Display name (defaults to the email local part).")
    parser.add_argument(
        "--password",
        help="Password for the user; prompted interactively when omitted.",
    )
    parser.add_argument(
        "--output",
        choices=["json", "pretty"],
        default="pretty",
        help="Output format for the created user.",
    )
    return parser.parse_args(argv)


async def main() -> int:
    args = parse_args()
    password = args.password or getpass.getpass("Password: ")
    if not password.strip():
        print("Password must not be blank.", file=sys.stderr)
        return 2

    try:
        async with session_scope() as session:
            service = AuthService(session, get_settings())
            user = await service.create_user(name=args.name, email=args.email, password=password)
            payload = UserItem.model_validate(user).model_dump()
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 3

    if args.output == "json":
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for key, value in payload.items():
            print(f"{key}: {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
