from fastapi import APIRouter, Request
from fastapi.responses import Response

from app.auth_utils import require_user
from core.services.exports import export_jobs_csv, export_jobs_json

router = APIRouter()


@router.get("/export/jobs.csv")
def export_csv(request: Request):
    user = require_user(request)
    return Response(
        export_jobs_csv(user["id"]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="jobs.csv"'},
    )


@router.get("/export/jobs.json")
def export_json(request: Request):
    user = require_user(request)
    return Response(
        export_jobs_json(user["id"]),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="jobs.json"'},
    )
