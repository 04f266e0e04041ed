"""
Postgres storage layer.
"""
from core.db.base import get_conn, configure_database
from core.db.schema import init_db

__all__ = ["get_conn", "configure_database", "init_db"]
