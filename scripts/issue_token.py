#!/usr/bin/env python3
"""
Print a bearer token for a caller, for exercising the admin endpoints locally.

Usage:
    python scripts/issue_token.py --user-id warden-1 --role ADMIN
    curl -H "Authorization: Bearer $(python scripts/issue_token.py --user-id warden-1)" \
        http://localhost:8000/meals
"""

import argparse
import os
import sys
from datetime import timedelta

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from api.security import create_access_token
from domain.enums import UserRole


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue a MessPlanner bearer token")
    parser.add_argument("--user-id", required=True, help="Caller identifier (token subject)")
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[r.value for r in UserRole],
        help="Role claim (default: ADMIN)",
    )
    parser.add_argument("--email", default=None, help="Optional email claim")
    parser.add_argument(
        "--ttl-minutes",
        type=int,
        default=None,
        help="Token lifetime; defaults to TOKEN_TTL_MINUTES from settings",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    ttl = timedelta(minutes=args.ttl_minutes) if args.ttl_minutes else None
    token = create_access_token(
        user_id=args.user_id, role=UserRole(args.role), email=args.email, ttl=ttl
    )
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
