from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.routes import account, admin, auth, billing, cron, dev, exports, jobs, reminders, resumes, settings
from core.config import Config, load_config
from core.database import configure_database, init_db
from core.errors import TrackerError


_LOCATIONS = ("body", "query", "path", "header", "cookie")


def validation_message(exc: RequestValidationError) -> str:
    """First failing field as "<field>: <message>", the shape InvalidInput uses."""
    errors = exc.errors()
    if not errors:
        return "body: invalid request"
    first = errors[0]
    parts = [str(p) for p in first.get("loc", ()) if p not in _LOCATIONS]
    field = parts[0] if parts else "body"
    return f"{field}: {first.get('msg', 'invalid value')}"


def create_app(config: Config | None = None) -> FastAPI:
    config = config or load_config()
    configure_database(config.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.config = config

    for module in (auth, account, jobs, resumes, settings, reminders, billing, exports, cron, dev, admin):
        app.include_router(module.router)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": validation_message(exc)}, status_code=400)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "same-origin")
        return response

    return app


app = create_app()
