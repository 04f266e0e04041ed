import importlib
import itertools
import os
import secrets
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

import core.database
from app.security import reset_rate_limits
from core.config import Config
from core.constants import (
    DEFAULT_APPLIED_FOLLOWUP_DAYS,
    DEFAULT_INTERVIEW_FOLLOWUP_DAYS,
    FOLLOWUP_STAGES,
    PLAN_FREE,
    PLAN_PAID_LIFETIME,
    PLANS,
    REMINDER_FOLLOW_UP,
)

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

# Modules that import storage helpers by name; the fake is patched into each.
PATCHED_MODULES = [
    "core.database",
    "core.reminders.generator",
    "core.reminders.dispatcher",
    "app.auth_utils",
    "app.routes.auth",
    "app.routes.account",
    "app.routes.jobs",
    "app.routes.resumes",
    "app.routes.reminders",
    "app.routes.billing",
    "app.routes.dev",
    "app.routes.admin",
]


def _utcnow():
    return datetime.now(timezone.utc)


class FakeStore:
    """
    In-memory stand-in for the Postgres stores with the same function names and
    the same ownership filtering.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self.users = {}
        self.sessions = {}
        self.entitlements = {}
        self.settings = {}
        self.jobs = {}
        self.resumes = {}
        self.reminders = {}

    # ---- seeding helpers ----
    def add_user(self, email="user@example.com", *, plan=PLAN_FREE, reminders_enabled=True,
                 applied_days=DEFAULT_APPLIED_FOLLOWUP_DAYS, interview_days=DEFAULT_INTERVIEW_FOLLOWUP_DAYS,
                 role="user", password="Passw0rd1"):
        user_id = self.create_user(email, password, role=role)
        self.entitlements[user_id] = plan
        self.settings[user_id].update(
            applied_followup_days=applied_days,
            interview_followup_days=interview_days,
            reminders_enabled=1 if reminders_enabled else 0,
        )
        return user_id

    def add_job(self, user_id, *, status="APPLIED", last_touched_at=None, company="Acme", role="Engineer",
                resume_version_id=None):
        touched = last_touched_at or NOW
        job = self.create_job(
            user_id,
            {
                "company": company,
                "role": role,
                "location": None,
                "url": None,
                "status": status,
                "applied_date": None,
                "salary": None,
                "notes": None,
                "resume_version_id": resume_version_id,
            },
            now=touched,
        )
        return job["id"]

    def login(self, client, user_id):
        token = self.create_session(user_id)
        client.cookies.set("session_id", token)
        return token

    def reminders_for_job(self, job_id):
        return [r for r in self.reminders.values() if r["job_application_id"] == job_id]

    # ---- users / sessions ----
    def create_user(self, email, raw_password, role="user"):
        user_id = next(self._ids)
        self.users[user_id] = {
            "id": user_id,
            "email": email.strip().lower(),
            "password_hash": f"plain:{raw_password}",
            "role": role,
            "created_at": _utcnow(),
        }
        self.entitlements[user_id] = PLAN_FREE
        self.settings[user_id] = {
            "user_id": user_id,
            "applied_followup_days": DEFAULT_APPLIED_FOLLOWUP_DAYS,
            "interview_followup_days": DEFAULT_INTERVIEW_FOLLOWUP_DAYS,
            "reminders_enabled": 1,
        }
        return user_id

    def verify_password(self, raw_password, password_hash):
        return password_hash == f"plain:{raw_password}"

    def get_user_by_email(self, email):
        email = email.strip().lower()
        return next((dict(u) for u in self.users.values() if u["email"] == email), None)

    def get_user_by_id(self, user_id):
        user = self.users.get(user_id)
        return dict(user) if user else None

    def list_users(self):
        return [dict(u, plan=self.entitlements.get(u["id"], PLAN_FREE)) for u in self.users.values()]

    def delete_user_data(self, user_id):
        if user_id not in self.users:
            return False
        del self.users[user_id]
        self.entitlements.pop(user_id, None)
        self.settings.pop(user_id, None)
        for table in (self.jobs, self.resumes, self.reminders):
            for key in [k for k, row in table.items() if row["user_id"] == user_id]:
                del table[key]
        for key in [k for k, s in self.sessions.items() if s["user_id"] == user_id]:
            del self.sessions[key]
        return True

    def create_session(self, user_id):
        token = secrets.token_urlsafe(16)
        self.sessions[token] = {"id": token, "user_id": user_id}
        return token

    def get_session(self, session_id):
        session = self.sessions.get(session_id)
        return dict(session) if session else None

    def touch_session(self, session_id):
        return None

    def delete_session(self, session_id):
        self.sessions.pop(session_id, None)

    # ---- entitlements ----
    def get_user_entitlement(self, user_id):
        plan = self.entitlements.get(user_id, PLAN_FREE)
        return {"plan": plan, "is_paid": plan == PLAN_PAID_LIFETIME}

    def is_paid_user(self, user_id):
        return self.get_user_entitlement(user_id)["is_paid"]

    def upgrade_user_to_paid_lifetime(self, user_id):
        self.entitlements[user_id] = PLAN_PAID_LIFETIME

    def set_user_plan(self, user_id, plan):
        if plan not in PLANS:
            raise ValueError(plan)
        if user_id not in self.entitlements:
            return False
        self.entitlements[user_id] = plan
        return True

    # ---- settings ----
    def get_user_settings(self, user_id):
        row = self.settings.get(user_id)
        return dict(row) if row else None

    def ensure_user_settings(self, user_id):
        self.settings.setdefault(
            user_id,
            {
                "user_id": user_id,
                "applied_followup_days": DEFAULT_APPLIED_FOLLOWUP_DAYS,
                "interview_followup_days": DEFAULT_INTERVIEW_FOLLOWUP_DAYS,
                "reminders_enabled": 1,
            },
        )
        return dict(self.settings[user_id])

    def update_user_settings(self, user_id, *, applied_followup_days, interview_followup_days, reminders_enabled):
        self.settings[user_id] = {
            "user_id": user_id,
            "applied_followup_days": applied_followup_days,
            "interview_followup_days": interview_followup_days,
            "reminders_enabled": 1 if reminders_enabled else 0,
        }
        return dict(self.settings[user_id])

    def get_reminder_eligible_users(self):
        return [
            {
                "user_id": s["user_id"],
                "applied_followup_days": s["applied_followup_days"],
                "interview_followup_days": s["interview_followup_days"],
            }
            for s in self.settings.values()
            if s["reminders_enabled"] == 1 and self.entitlements.get(s["user_id"]) == PLAN_PAID_LIFETIME
        ]

    # ---- jobs ----
    def _owned_job(self, user_id, job_id):
        job = self.jobs.get(job_id)
        return job if job and job["user_id"] == user_id else None

    def list_jobs(self, user_id):
        rows = []
        for job in self.jobs.values():
            if job["user_id"] != user_id:
                continue
            resume = self.resumes.get(job["resume_version_id"])
            rows.append(dict(job, resume_name=resume["name"] if resume else None))
        return sorted(rows, key=lambda j: (j["last_touched_at"], j["id"]), reverse=True)

    def get_job(self, user_id, job_id):
        job = self._owned_job(user_id, job_id)
        return dict(job) if job else None

    def count_jobs(self, user_id):
        return sum(1 for j in self.jobs.values() if j["user_id"] == user_id)

    def count_jobs_using_resume(self, user_id, resume_id):
        return sum(
            1 for j in self.jobs.values() if j["user_id"] == user_id and j["resume_version_id"] == resume_id
        )

    def create_job(self, user_id, data, now=None):
        now = now or _utcnow()
        job_id = next(self._ids)
        self.jobs[job_id] = dict(
            data, id=job_id, user_id=user_id, last_touched_at=now, created_at=now, updated_at=now
        )
        return dict(self.jobs[job_id])

    def update_job(self, user_id, job_id, data, now=None):
        job = self._owned_job(user_id, job_id)
        if not job:
            return None
        now = now or _utcnow()
        job.update(data, last_touched_at=now, updated_at=now)
        if job["status"] not in FOLLOWUP_STAGES:
            self._cancel_pending(user_id, job_id, now)
        return dict(job)

    def delete_job(self, user_id, job_id):
        if not self._owned_job(user_id, job_id):
            return False
        del self.jobs[job_id]
        for key in [k for k, r in self.reminders.items() if r["job_application_id"] == job_id]:
            del self.reminders[key]
        return True

    def touch_job(self, user_id, job_id, now=None):
        job = self._owned_job(user_id, job_id)
        if not job:
            return None
        now = now or _utcnow()
        job.update(last_touched_at=now, updated_at=now)
        self._cancel_pending(user_id, job_id, now)
        return dict(job)

    def _cancel_pending(self, user_id, job_id, now):
        for reminder in self.reminders.values():
            if (
                reminder["job_application_id"] == job_id
                and reminder["user_id"] == user_id
                and reminder["sent_at"] is None
                and reminder["cancelled_at"] is None
            ):
                reminder["cancelled_at"] = now

    def set_job_last_touched(self, user_id, job_id, when):
        job = self._owned_job(user_id, job_id)
        if not job:
            return None
        job["last_touched_at"] = when
        return dict(job)

    def get_jobs_in_stages(self, user_id, stages):
        stages = set(stages)
        return [
            dict(j) for j in sorted(self.jobs.values(), key=lambda j: j["id"])
            if j["user_id"] == user_id and j["status"] in stages
        ]

    # ---- resumes ----
    def list_resumes(self, user_id):
        return [dict(r) for r in self.resumes.values() if r["user_id"] == user_id]

    def get_resume(self, user_id, resume_id):
        resume = self.resumes.get(resume_id)
        return dict(resume) if resume and resume["user_id"] == user_id else None

    def create_resume(self, user_id, name, url):
        resume_id = next(self._ids)
        self.resumes[resume_id] = {
            "id": resume_id, "user_id": user_id, "name": name, "url": url,
            "created_at": _utcnow(), "updated_at": _utcnow(),
        }
        return dict(self.resumes[resume_id])

    def update_resume(self, user_id, resume_id, name, url):
        if not self.get_resume(user_id, resume_id):
            return None
        self.resumes[resume_id].update(name=name, url=url, updated_at=_utcnow())
        return dict(self.resumes[resume_id])

    def delete_resume(self, user_id, resume_id):
        if not self.get_resume(user_id, resume_id):
            return False
        del self.resumes[resume_id]
        return True

    # ---- reminders ----
    def has_open_reminder(self, *, user_id, job_id, last_touched_at, reminder_type=REMINDER_FOLLOW_UP):
        return any(
            r["job_application_id"] == job_id
            and r["user_id"] == user_id
            and r["type"] == reminder_type
            and r["cancelled_at"] is None
            and (r["sent_at"] is None or r["sent_at"] >= last_touched_at)
            for r in self.reminders.values()
        )

    def create_reminder(self, *, user_id, job_id, trigger_at, created_at, reminder_type=REMINDER_FOLLOW_UP):
        pending = any(
            r["job_application_id"] == job_id and r["type"] == reminder_type
            and r["sent_at"] is None and r["cancelled_at"] is None
            for r in self.reminders.values()
        )
        if pending:
            return None
        reminder_id = next(self._ids)
        self.reminders[reminder_id] = {
            "id": reminder_id,
            "user_id": user_id,
            "job_application_id": job_id,
            "type": reminder_type,
            "trigger_at": trigger_at,
            "sent_at": None,
            "cancelled_at": None,
            "created_at": created_at,
        }
        return reminder_id

    def get_due_reminders(self, *, now, limit=100):
        due = []
        for r in sorted(self.reminders.values(), key=lambda r: (r["trigger_at"], r["id"])):
            if r["trigger_at"] > now or r["sent_at"] is not None or r["cancelled_at"] is not None:
                continue
            job = self.jobs[r["job_application_id"]]
            if self.entitlements.get(r["user_id"]) != PLAN_PAID_LIFETIME or job["status"] not in FOLLOWUP_STAGES:
                continue
            due.append(
                {
                    "reminder_id": r["id"],
                    "user_id": r["user_id"],
                    "job_id": job["id"],
                    "trigger_at": r["trigger_at"],
                    "email": self.users[r["user_id"]]["email"],
                    "company": job["company"],
                    "role": job["role"],
                    "status": job["status"],
                    "last_touched_at": job["last_touched_at"],
                }
            )
        return due[:limit]

    def mark_reminder_sent(self, *, reminder_id, sent_at):
        reminder = self.reminders.get(reminder_id)
        if not reminder or reminder["sent_at"] is not None:
            return False
        reminder["sent_at"] = sent_at
        return True

    def get_reminders_for_user(self, *, user_id, limit=200):
        rows = [dict(r) for r in self.reminders.values() if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)[:limit]

    def delete_reminders_for_user(self, user_id):
        keys = [k for k, r in self.reminders.items() if r["user_id"] == user_id]
        for key in keys:
            del self.reminders[key]
        return len(keys)


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    names = [n for n in core.database.__all__ if hasattr(fake, n)]
    for module_name in PATCHED_MODULES:
        module = importlib.import_module(module_name)
        for name in names:
            if hasattr(module, name):
                monkeypatch.setattr(module, name, getattr(fake, name))
    return fake


@pytest.fixture
def config():
    return Config(
        environment="test",
        app_url="https://tracker.example.com",
        cron_secret="cron-secret",
        reminder_batch_size=100,
        free_job_limit=10,
    )


@pytest.fixture
def client(store, config):
    from app.api import create_app

    reset_rate_limits()
    return TestClient(create_app(config))


@pytest.fixture
def now():
    return NOW


# ---- Postgres-backed tests ----

@pytest.fixture
def pg():
    if not os.getenv("DATABASE_URL"):
        pytest.skip("DATABASE_URL must be set for Postgres-backed tests.")

    from core.db.base import configure_database, get_conn
    from core.db.schema import TABLES, init_db

    configure_database(os.environ["DATABASE_URL"])
    init_db()

    def _truncate():
        conn = get_conn()
        cur = conn.cursor()
        cur.execute("TRUNCATE " + ", ".join(TABLES) + " RESTART IDENTITY CASCADE")
        conn.commit()
        conn.close()

    _truncate()
    yield
    _truncate()
