from fastapi import APIRouter, Request

from app.auth_utils import get_config, require_user
from core.database import list_jobs
from core.reminders.generator import jobs_needing_followup
from core.schemas import JobIn
from core.services import jobs as job_service

router = APIRouter()


@router.get("/jobs")
def jobs_index(request: Request):
    user = require_user(request)
    return {"jobs": list_jobs(user["id"])}


@router.post("/jobs", status_code=201)
def jobs_create(request: Request, job: JobIn):
    user = require_user(request)
    return job_service.create_job(get_config(request), user["id"], job)


@router.get("/jobs/needs-followup")
def jobs_needing_followup_view(request: Request):
    user = require_user(request)
    return {"jobs": jobs_needing_followup(user["id"])}


@router.get("/jobs/{job_id}")
def jobs_show(request: Request, job_id: int):
    user = require_user(request)
    return job_service.get_job(user["id"], job_id)


@router.put("/jobs/{job_id}")
def jobs_update(request: Request, job_id: int, job: JobIn):
    user = require_user(request)
    return job_service.update_job(user["id"], job_id, job)


@router.delete("/jobs/{job_id}")
def jobs_delete(request: Request, job_id: int):
    user = require_user(request)
    job_service.delete_job(user["id"], job_id)
    return {"success": True}


@router.post("/jobs/{job_id}/contacted")
def jobs_mark_contacted(request: Request, job_id: int):
    user = require_user(request)
    return job_service.mark_job_contacted(user["id"], job_id)
