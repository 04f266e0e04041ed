# Quick reference commands (run from repo root). These are comments only; copy/paste as needed.

# Install the app with test dependencies (httpx is needed for TestClient)
# python -m pip install -e ".[test]"

# Run the full test suite (Postgres-backed tests skip without DATABASE_URL)
# python -m pytest

# Run focused test files
# python -m pytest tests/test_followup_policy.py
# python -m pytest tests/test_reminder_generator.py tests/test_reminder_dispatcher.py
# python -m pytest tests/test_jobs_service.py tests/test_jobs_routes.py
# python -m pytest tests/test_auth_flow.py tests/test_security_headers.py
# python -m pytest -m integration

# Start the API locally (with env vars loaded)
# python -m dotenv run -- python -m uvicorn app.api:app --reload

# Run one reminder batch (what the scheduler calls)
# python -m dotenv run -- python -m worker.main generate
# python -m dotenv run -- python -m worker.main send
# python -m dotenv run -- python main.py

# Trigger the batch over HTTP
# curl -H "Authorization: Bearer $CRON_SECRET" http://localhost:8000/cron/generate-reminders
# curl -H "Authorization: Bearer $CRON_SECRET" http://localhost:8000/cron/send-reminders

# Inspect the database (example queries)
# python scripts/db_shell.py "SELECT id,email,role,created_at FROM users"
# python scripts/db_shell.py "SELECT id,job_application_id,trigger_at,sent_at,cancelled_at FROM reminders ORDER BY id DESC LIMIT 10"
