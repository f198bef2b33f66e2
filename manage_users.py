#!/usr/bin/env python3
"""
Manage users of a running User CRUD API from the command line.

This is the terminal counterpart of the management frontend: it
lists users as a table and creates, edits and deletes them through
the HTTP API (it never touches the database directly).

Usage:
    python manage_users.py list
    python manage_users.py show 3
    python manage_users.py create --email ada@lovelace.io --first-name Ada --last-name Lovelace
    python manage_users.py update 3 --last-name Byron
    python manage_users.py delete 3

The API location is taken from ``--base-url`` or the
``USER_CRUD_BASE_URL`` environment variable (default
``http://localhost:8000``).
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from user_crud_client import UserCrudAPI

DEFAULT_BASE_URL = "http://localhost:8000"

COLUMNS = [("id", "ID"), ("email", "Email"), ("firstName", "First Name"), ("lastName", "Last Name")]


def format_table(users: List[Dict[str, Any]]) -> str:
    """Render users as a plain-text table."""
    if not users:
        return "No users found."
    rows = [[str(user.get(key, "")) for key, _ in COLUMNS] for user in users]
    headers = [title for _, title in COLUMNS]
    widths = [max(len(cell) for cell in column) for column in zip(headers, *rows)]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip()
             for line in [headers, ["-" * w for w in widths], *rows]]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage users through the User CRUD API.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("USER_CRUD_BASE_URL", DEFAULT_BASE_URL),
        help="Base URL of the API (default: $USER_CRUD_BASE_URL or %(default)s)",
    )
    ap.add_argument("--prefix", default=os.getenv("API_PREFIX", ""), help="Route prefix, e.g. /api/v1")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all users")

    show = sub.add_parser("show", help="Show one user")
    show.add_argument("id", type=int)

    create = sub.add_parser("create", help="Create a user")
    create.add_argument("--email", required=True)
    create.add_argument("--first-name", required=True)
    create.add_argument("--last-name", required=True)

    update = sub.add_parser("update", help="Change fields of a user")
    update.add_argument("id", type=int)
    update.add_argument("--email")
    update.add_argument("--first-name")
    update.add_argument("--last-name")

    delete = sub.add_parser("delete", help="Delete a user")
    delete.add_argument("id", type=int)
    return ap


def _payload(args: argparse.Namespace) -> Dict[str, str]:
    fields = {"email": args.email, "firstName": args.first_name, "lastName": args.last_name}
    return {key: value for key, value in fields.items() if value is not None}


def _fail(error: Dict[str, Any]) -> int:
    status = error.get("status_code")
    prefix = f"[!] {status}: " if status else "[!] "
    print(f"{prefix}{error.get('message')}", file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None, client: Optional[UserCrudAPI] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.CRITICAL)
    api = client or UserCrudAPI(base_url=args.base_url, prefix=args.prefix)

    if args.command == "list":
        users, error = api.list_users()
        if error:
            return _fail(error)
        print(format_table(users))
        return 0

    if args.command == "update":
        payload = _payload(args)
        if not payload:
            print("[!] Nothing to update: pass --email, --first-name or --last-name.", file=sys.stderr)
            return 1
        user, error = api.update_user(args.id, payload)
    elif args.command == "create":
        user, error = api.create_user(_payload(args))
    elif args.command == "show":
        user, error = api.get_user(args.id)
    else:
        _, error = api.delete_user(args.id)
        if error:
            return _fail(error)
        print(f"Deleted user {args.id}")
        return 0

    if error:
        return _fail(error)
    print(format_table([user]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
