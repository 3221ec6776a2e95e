from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from resume_tailor.models.diff_models import ResumeDiff
from resume_tailor.models.tailor_models import TailorFromProfileRequest, TailorRequest, TailorResponse, TailoredResume
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.diff_service import diff_resumes
from resume_tailor.services.export_service import render_txt, txt_filename
from resume_tailor.services.store import Store
from resume_tailor.services.tailor_service import get_tailored, tailor_for_job, tailor_from_profile
from resume_tailor.utils.dependencies import backend_dependency, get_user_id, store_dependency

router = APIRouter()


@router.post("/", response_model=TailorResponse)
async def tailor_base_resume(
    req: TailorRequest,
    user_id: str = Depends(get_user_id),
    backend: TextBackend = Depends(backend_dependency),
    store: Store = Depends(store_dependency),
):
    """Tailor a stored base resume for a job. Reuses the last result unless forceRegenerate is set."""
    record, cached = await tailor_for_job(
        user_id=user_id,
        base_resume_id=req.base_resume_id,
        job_id=req.job_id,
        store=store,
        backend=backend,
        force_regenerate=req.force_regenerate,
    )
    return TailorResponse.from_record(record, cached=cached)


@router.post("/from-profile", response_model=TailorResponse)
async def tailor_profile(
    req: TailorFromProfileRequest,
    user_id: str = Depends(get_user_id),
    backend: TextBackend = Depends(backend_dependency),
    store: Store = Depends(store_dependency),
):
    """Tailor the user's profile for a job."""
    record, cached = await tailor_from_profile(
        user_id=user_id,
        job_id=req.job_id,
        store=store,
        backend=backend,
        force_regenerate=req.force_regenerate,
    )
    return TailorResponse.from_record(record, cached=cached)


@router.get("/{tailored_id}", response_model=TailoredResume)
async def get_tailored_resume(
    tailored_id: str,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Get a tailored resume with its original snapshot and analysis."""
    return get_tailored(user_id, tailored_id, store)


@router.get("/{tailored_id}/diff", response_model=ResumeDiff)
async def get_tailored_diff(
    tailored_id: str,
    only_changes: bool = Query(False, alias="onlyChanges"),
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Section-by-section diff between the original and tailored resume."""
    record = get_tailored(user_id, tailored_id, store)
    return diff_resumes(record.original_resume_json, record.tailored_resume_json, only_changes=only_changes)


@router.get("/{tailored_id}/export/txt", response_class=PlainTextResponse)
async def export_tailored_txt(
    tailored_id: str,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Download the tailored resume as plain text."""
    record = get_tailored(user_id, tailored_id, store)
    job = store.get_job(user_id, record.job_id)
    filename = txt_filename(record.tailored_resume_json, job.company if job else None)
    return PlainTextResponse(
        render_txt(record.tailored_resume_json),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
