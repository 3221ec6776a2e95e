from fastapi import APIRouter, Depends

from resume_tailor.models.resume_models import BaseResume, ResumeTextInput
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.resume_service import get_base_resume, parse_base_resume
from resume_tailor.services.store import Store
from resume_tailor.utils.dependencies import backend_dependency, get_user_id, store_dependency

router = APIRouter()


@router.post("/base/parse-text", response_model=BaseResume)
async def parse_base_resume_text(
    req: ResumeTextInput,
    user_id: str = Depends(get_user_id),
    backend: TextBackend = Depends(backend_dependency),
    store: Store = Depends(store_dependency),
):
    """Parse pasted resume text into a base resume."""
    return await parse_base_resume(user_id=user_id, text=req.text, backend=backend, store=store)


@router.get("/base/{resume_id}", response_model=BaseResume)
async def get_base_resume_endpoint(
    resume_id: str,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Get a parsed base resume by ID."""
    return get_base_resume(user_id, resume_id, store)
