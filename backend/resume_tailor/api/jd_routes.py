from fastapi import APIRouter, Depends

from resume_tailor.models.jd_models import JobPosting, JobTextInput
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.jd_service import extract_job, get_job
from resume_tailor.services.store import Store
from resume_tailor.utils.dependencies import backend_dependency, get_user_id, store_dependency

router = APIRouter()


@router.post("/from-text", response_model=JobPosting)
async def job_from_text(
    req: JobTextInput,
    user_id: str = Depends(get_user_id),
    backend: TextBackend = Depends(backend_dependency),
    store: Store = Depends(store_dependency),
):
    """Extract requirements from pasted job-posting text and save the job."""
    return await extract_job(user_id=user_id, payload=req, backend=backend, store=store)


@router.get("/{job_id}", response_model=JobPosting)
async def get_job_endpoint(
    job_id: str,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Get a saved job with its extracted requirements."""
    return get_job(user_id, job_id, store)
