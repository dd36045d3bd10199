#!/usr/bin/env python3
"""
Mint an access token for local testing of the authenticated routes.

The token is signed with ``JWT_SECRET`` (or ``--secret``) exactly like
the ones issued by ``POST /api/auth/token``.  Send it as the ``token``
cookie, e.g. ``curl --cookie "token=<value>" ...``.

Usage:
    python create_token.py --email organizer@example.com --name "Org" --expires 86400
"""

import argparse
import sys
from typing import List, Optional

from help_hive_api.app.core.config import settings
from help_hive_api.app.core.security import create_access_token
from help_hive_api.app.schemas.auth import TokenClaims


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Create a signed access token for the Help Hive API.")
    ap.add_argument("--email", required=True, help="Email to embed in the token")
    ap.add_argument("--name", help="Optional display name")
    ap.add_argument(
        "--expires",
        type=int,
        default=settings.access_token_expire_seconds,
        help="Lifetime in seconds (default: ACCESS_TOKEN_EXPIRE_SECONDS)",
    )
    ap.add_argument("--secret", default=settings.secret_key, help="Signing secret (default: JWT_SECRET)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.expires <= 0:
        print("[!] --expires must be positive.", file=sys.stderr)
        return 1
    claims = TokenClaims(email=args.email, name=args.name)
    print(create_access_token(claims, args.secret, expires_in=args.expires))
    return 0


if __name__ == "__main__":
    sys.exit(main())
