"""Create the configured database and its tables, optionally starting from scratch."""
from __future__ import annotations

import argparse
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql
from sqlalchemy import create_engine

from news_vote.core.settings import settings
from news_vote.db.session import Base, enable_sqlite_foreign_keys


def to_libpq_url(url: str) -> str:
    """Turn a SQLAlchemy Postgres URL (``postgresql+driver://``) into a libpq one."""
    url = url.strip().strip("'\"")
    if not url:
        raise ValueError("DATABASE_URL is empty")
    parts = urlsplit(url)
    scheme = "postgresql" if parts.scheme.startswith("postgresql") else parts.scheme
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def ensure_postgres_database(url: str) -> None:
    """Create the target Postgres database through the maintenance database if missing."""
    parts = urlsplit(to_libpq_url(url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, ""))

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
            print(f"[ensure_db] created database {target_db}")
        else:
            print(f"[ensure_db] database {target_db} already exists")


def ensure_tables(url: str, *, drop_first: bool = False) -> None:
    """Create every table, constraint and index known to the ORM metadata."""
    engine = create_engine(url)
    enable_sqlite_foreign_keys(engine)
    try:
        if drop_first:
            Base.metadata.drop_all(bind=engine)
            print("[ensure_db] dropped all tables")
        Base.metadata.create_all(bind=engine)
        print(f"[ensure_db] ensured {len(Base.metadata.sorted_tables)} tables")
    finally:
        engine.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Ensure or reset the configured database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all tables before recreating them.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)

    url = args.url or settings.database_url_sync
    try:
        if url.startswith("postgresql"):
            ensure_postgres_database(url)
        ensure_tables(url, drop_first=args.drop_tables)
    except Exception as exc:
        print(f"[ensure_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
