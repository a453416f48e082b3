# src/news_vote/scripts/admin.py
"""Operator commands: promote an account to admin and mint access tokens.

Usage::

    python -m news_vote.scripts.admin promote alice@example.com
    python -m news_vote.scripts.admin token alice@example.com
"""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.orm import Session

from news_vote.core.errors import NewsVoteError
from news_vote.core.security import create_access_token
from news_vote.db.session import SessionLocal
from news_vote.services import users as user_service


def promote(db: Session, email: str) -> str:
    user = user_service.promote_by_email(db, email)
    return f"{user.email} is now an admin ({user.id})"


def mint_token(db: Session, email: str) -> str:
    user = user_service.get_user_by_email(db, email)
    if user is None:
        raise NewsVoteError(f"No user registered with {email}")
    return create_access_token(user.id, extra_claims={"role": user.role})


COMMANDS = {"promote": promote, "token": mint_token}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="News Vote operator commands")
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument("email", help="Email address of the target account")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        print(COMMANDS[args.command](db, args.email))
    except NewsVoteError as exc:
        print(f"[admin] ERROR: {exc.detail}", file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
