from fastapi import APIRouter, Request

from app.auth_utils import require_user
from core.database import list_resumes
from core.schemas import ResumeIn
from core.services import resumes as resume_service

router = APIRouter()


@router.get("/resumes")
def resumes_index(request: Request):
    user = require_user(request)
    return {"resumes": list_resumes(user["id"])}


@router.post("/resumes", status_code=201)
def resumes_create(request: Request, resume: ResumeIn):
    user = require_user(request)
    return resume_service.create_resume(user["id"], resume)


@router.put("/resumes/{resume_id}")
def resumes_update(request: Request, resume_id: int, resume: ResumeIn):
    user = require_user(request)
    return resume_service.update_resume(user["id"], resume_id, resume)


@router.delete("/resumes/{resume_id}")
def resumes_delete(request: Request, resume_id: int):
    user = require_user(request)
    resume_service.delete_resume(user["id"], resume_id)
    return {"success": True}
