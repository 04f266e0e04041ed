"""
Quick helper to run a query against the tracker database (DATABASE_URL required).

Usage:
  DATABASE_URL=... python scripts/db_shell.py                              # list tables
  DATABASE_URL=... python scripts/db_shell.py "SELECT * FROM reminders"    # run a custom query
"""
from __future__ import annotations

import sys

import psycopg
from dotenv import load_dotenv

from core.db.base import get_conn


def main() -> None:
    load_dotenv(override=True)
    query = " ".join(sys.argv[1:]).strip()
    if not query:
        query = (
            "SELECT tablename AS name "
            "FROM pg_tables WHERE schemaname='public' "
            "ORDER BY tablename"
        )

    try:
        conn = get_conn()
    except RuntimeError as exc:
        raise SystemExit(str(exc)) from exc

    try:
        cur = conn.cursor()
        cur.execute(query)
        if cur.description is not None:
            for row in cur.fetchall():
                print(dict(row))
        else:
            conn.commit()
            print(f"OK ({cur.rowcount} row(s) affected)")
    except psycopg.Error as exc:
        raise SystemExit(f"Error running query: {exc}") from exc
    finally:
        conn.close()


if __name__ == "__main__":
    main()
