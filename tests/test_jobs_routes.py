from datetime import datetime, timedelta, timezone

from core.constants import PLAN_PAID_LIFETIME


def _login(client, store, email="u@example.com", **kw):
    user_id = store.add_user(email, **kw)
    store.login(client, user_id)
    return user_id


def test_create_list_and_update_job(client, store):
    _login(client, store)

    resp = client.post("/jobs", json={"company": "Acme", "role": "Engineer", "status": "APPLIED"})
    assert resp.status_code == 201
    job_id = resp.json()["id"]

    jobs = client.get("/jobs").json()["jobs"]
    assert [j["id"] for j in jobs] == [job_id]

    resp = client.put(f"/jobs/{job_id}", json={"company": "Acme", "role": "Engineer", "status": "ONSITE"})
    assert resp.json()["status"] == "ONSITE"


def test_invalid_job_payload(client, store):
    _login(client, store)
    resp = client.post("/jobs", json={"company": "Acme", "role": "Eng", "status": "HIRED"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("status:")


def test_free_limit_returns_402(client, store, config):
    user_id = _login(client, store)
    for _ in range(config.free_job_limit):
        store.add_job(user_id)

    resp = client.post("/jobs", json={"company": "Acme", "role": "Engineer"})
    assert resp.status_code == 402


def test_cannot_see_other_users_job(client, store):
    other = store.add_user("other@example.com")
    job_id = store.add_job(other)
    _login(client, store)

    assert client.get(f"/jobs/{job_id}").status_code == 404
    assert client.delete(f"/jobs/{job_id}").status_code == 404
    assert client.post(f"/jobs/{job_id}/contacted").status_code == 404
    assert client.get("/jobs").json() == {"jobs": []}


def test_contacted_resets_last_touched(client, store):
    user_id = _login(client, store, plan=PLAN_PAID_LIFETIME)
    old = datetime.now(timezone.utc) - timedelta(days=30)
    job_id = store.add_job(user_id, last_touched_at=old)
    store.create_reminder(user_id=user_id, job_id=job_id, trigger_at=old + timedelta(days=7), created_at=old)

    resp = client.post(f"/jobs/{job_id}/contacted")

    assert resp.status_code == 200
    assert store.get_job(user_id, job_id)["last_touched_at"] > old
    assert store.reminders_for_job(job_id)[0]["cancelled_at"] is not None


def test_needs_followup_view(client, store):
    user_id = _login(client, store)
    stale = store.add_job(user_id, last_touched_at=datetime.now(timezone.utc) - timedelta(days=8))
    store.add_job(user_id, last_touched_at=datetime.now(timezone.utc))

    jobs = client.get("/jobs/needs-followup").json()["jobs"]
    assert [j["id"] for j in jobs] == [stale]


def test_resume_in_use_returns_409(client, store):
    user_id = _login(client, store)
    resume = client.post("/resumes", json={"name": "v1", "url": "https://cdn.example.com/v1.pdf"}).json()
    store.add_job(user_id, resume_version_id=resume["id"])

    resp = client.delete(f"/resumes/{resume['id']}")
    assert resp.status_code == 409


def test_settings_routes(client, store):
    _login(client, store)
    resp = client.put(
        "/settings", json={"applied_followup_days": 14, "interview_followup_days": 4, "reminders_enabled": True}
    )
    assert resp.status_code == 200
    assert client.get("/settings").json()["applied_followup_days"] == 14

    bad = client.put("/settings", json={"applied_followup_days": 0, "interview_followup_days": 4})
    assert bad.status_code == 400
    assert bad.json()["error"].startswith("applied_followup_days:")
    assert client.get("/settings").json()["applied_followup_days"] == 14


def test_exports_gated_by_plan(client, store):
    user_id = _login(client, store)
    store.add_job(user_id)
    assert client.get("/export/jobs.csv").status_code == 402

    store.upgrade_user_to_paid_lifetime(user_id)
    resp = client.get("/export/jobs.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.text.splitlines()[0].startswith("Company,Role")

    resp = client.get("/export/jobs.json")
    assert resp.json()["total_jobs"] == 1


def test_billing_webhook_upgrades(client, store):
    user_id = store.add_user()
    event = {
        "type": "checkout.session.completed",
        "data": {"object": {"metadata": {"user_id": str(user_id)}, "payment_status": "paid"}},
    }
    resp = client.post("/billing/webhook", json=event, headers={"stripe-signature": "t=1,v1=x"})

    assert resp.status_code == 200
    assert resp.json() == {"received": True}
    assert store.is_paid_user(user_id)


def test_billing_webhook_without_signature(client, store):
    resp = client.post("/billing/webhook", json={"type": "x"})
    assert resp.status_code == 400


def test_reminder_history_is_per_user(client, store):
    user_id = _login(client, store, plan=PLAN_PAID_LIFETIME)
    other = store.add_user("other@example.com", plan=PLAN_PAID_LIFETIME)
    now = datetime.now(timezone.utc)
    mine = store.add_job(user_id)
    theirs = store.add_job(other)
    store.create_reminder(user_id=user_id, job_id=mine, trigger_at=now, created_at=now)
    store.create_reminder(user_id=other, job_id=theirs, trigger_at=now, created_at=now)

    reminders = client.get("/reminders").json()["reminders"]

    assert [r["job_application_id"] for r in reminders] == [mine]


def test_body_validation_errors_use_error_shape(client, store):
    _login(client, store)

    resp = client.post("/resumes", json={"name": "v1", "url": "cv.pdf"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("url:")

    resp = client.post("/jobs", json={"role": "Engineer"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("company:")

    resp = client.post("/jobs", json=["not", "an", "object"])
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_moving_job_to_terminal_stage_cancels_reminder(client, store):
    user_id = _login(client, store, plan=PLAN_PAID_LIFETIME)
    old = datetime.now(timezone.utc) - timedelta(days=30)
    job_id = store.add_job(user_id, last_touched_at=old)
    store.create_reminder(user_id=user_id, job_id=job_id, trigger_at=old + timedelta(days=7), created_at=old)

    resp = client.put(f"/jobs/{job_id}", json={"company": "Acme", "role": "Engineer", "status": "GHOSTED"})

    assert resp.status_code == 200
    assert store.reminders_for_job(job_id)[0]["cancelled_at"] is not None
