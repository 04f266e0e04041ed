"""
Resume version storage helpers (data-level only; the in-use guard lives in the service).
"""
from __future__ import annotations

from typing import Dict, List, Optional

from core.db.base import get_conn

_COLUMNS = "id, user_id, name, url, created_at, updated_at"


def list_resumes(user_id: int) -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"SELECT {_COLUMNS} FROM resume_versions WHERE user_id = ? ORDER BY created_at DESC, id DESC",
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def get_resume(user_id: int, resume_id: int) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"SELECT {_COLUMNS} FROM resume_versions WHERE id = ? AND user_id = ?",
        (resume_id, user_id),
    )
    row = cur.fetchone()
    conn.close()
    return dict(row) if row else None


def create_resume(user_id: int, name: str, url: str) -> Dict:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"INSERT INTO resume_versions (user_id, name, url) VALUES (?, ?, ?) RETURNING {_COLUMNS}",
        (user_id, name, url),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row)


def update_resume(user_id: int, resume_id: int, name: str, url: str) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        UPDATE resume_versions
        SET name = ?, url = ?, updated_at = now()
        WHERE id = ? AND user_id = ?
        RETURNING {_COLUMNS}
        """,
        (name, url, resume_id, user_id),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row) if row else None


def delete_resume(user_id: int, resume_id: int) -> bool:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("DELETE FROM resume_versions WHERE id = ? AND user_id = ?", (resume_id, user_id))
    deleted = cur.rowcount
    conn.commit()
    conn.close()
    return deleted > 0


__all__ = [
    "list_resumes",
    "get_resume",
    "create_resume",
    "update_resume",
    "delete_resume",
]
