from fastapi import APIRouter, Depends

from resume_tailor.models.profile_models import ProfileResponse, ProfileSaveRequest, ProfileTextInput
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.services import profile_service
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.store import Store
from resume_tailor.utils.dependencies import backend_dependency, get_user_id, store_dependency

router = APIRouter()


@router.get("/", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Get the user's profile. A missing profile is not an error."""
    profile = profile_service.find_profile(user_id, store)
    return ProfileResponse(profile=profile, exists=profile is not None)


@router.post("/", response_model=ProfileResponse)
async def create_profile(
    req: ProfileSaveRequest,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Create the user's profile."""
    profile = profile_service.create_profile(user_id, req.profile, store)
    return ProfileResponse(profile=profile, message="Profile created successfully")


@router.put("/", response_model=ProfileResponse)
async def replace_profile(
    req: ProfileSaveRequest,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """Replace the user's profile (creates it if missing)."""
    profile = profile_service.replace_profile(user_id, req.profile, store)
    return ProfileResponse(profile=profile, message="Profile updated successfully")


@router.post("/parse-text", response_model=ProfileResponse)
async def parse_profile_text(
    req: ProfileTextInput,
    user_id: str = Depends(get_user_id),
    backend: TextBackend = Depends(backend_dependency),
    store: Store = Depends(store_dependency),
):
    """Parse freeform resume text into the user's profile."""
    profile = await profile_service.parse_profile_text(user_id=user_id, payload=req, backend=backend, store=store)
    return ProfileResponse(profile=profile, message="Resume parsed successfully")


@router.get("/resume", response_model=ResumeJSON)
async def get_profile_resume(
    user_id: str = Depends(get_user_id),
    store: Store = Depends(store_dependency),
):
    """The profile projected onto the resume format used for tailoring."""
    return profile_service.profile_resume(user_id, store)
