import csv
import io
import json

import pytest

from core.constants import PLAN_PAID_LIFETIME
from core.errors import UpgradeRequired
from core.services.exports import CSV_HEADERS, export_jobs_csv, export_jobs_json


def test_free_users_cannot_export(store):
    user_id = store.add_user()
    with pytest.raises(UpgradeRequired):
        export_jobs_csv(user_id)
    with pytest.raises(UpgradeRequired):
        export_jobs_json(user_id)


def test_csv_export_quotes_and_includes_resume(store, now):
    user_id = store.add_user(plan=PLAN_PAID_LIFETIME)
    resume = store.create_resume(user_id, "Backend CV", "https://cdn.example.com/cv.pdf")
    store.add_job(user_id, company='Acme, "Inc"', role="Engineer", resume_version_id=resume["id"], last_touched_at=now)

    rows = list(csv.reader(io.StringIO(export_jobs_csv(user_id))))

    assert rows[0] == CSV_HEADERS
    assert len(rows) == 2
    assert rows[1][0] == 'Acme, "Inc"'
    assert rows[1][6] == "Backend CV"
    assert rows[1][9] == now.isoformat()


def test_json_export_shape(store, now):
    user_id = store.add_user(plan=PLAN_PAID_LIFETIME)
    other = store.add_user("other@example.com", plan=PLAN_PAID_LIFETIME)
    job_id = store.add_job(user_id, last_touched_at=now)
    store.add_job(other)

    data = json.loads(export_jobs_json(user_id, now=now))

    assert data["export_date"] == now.isoformat()
    assert data["total_jobs"] == 1
    (job,) = data["jobs"]
    assert job["id"] == job_id
    assert job["resume"] == {"id": None, "name": None}
