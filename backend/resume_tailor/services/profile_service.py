"""
Profile Service — the user's long-lived career profile.

One profile per user: created on first save or parse, replaced by explicit edits
or a re-parse, never deleted automatically.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from resume_tailor.exceptions import NotFoundError, ValidationError
from resume_tailor.models.profile_models import ProfileTextInput, UserProfile
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.profile_projection import profile_to_resume_json
from resume_tailor.services.schema_validation import validate_resume_json
from resume_tailor.services.store import Store
from resume_tailor.utils.text_cleanup import normalize_text

logger = logging.getLogger(__name__)


def find_profile(user_id: str, store: Store) -> UserProfile | None:
    return store.get_profile(user_id)


def get_profile(user_id: str, store: Store) -> UserProfile:
    """Raises NotFoundError if the user has no profile yet."""
    profile = store.get_profile(user_id)
    if profile is None:
        raise NotFoundError("profile")
    return profile


def create_profile(user_id: str, profile: UserProfile, store: Store) -> UserProfile:
    """Create the user's profile. Refuses to overwrite an existing one."""
    if store.get_profile(user_id) is not None:
        raise ValidationError("Profile already exists. Use PUT to update.")
    saved = store.save_profile(profile.model_copy(update={"user_id": user_id, "id": None}))
    logger.info(f"Created profile for user {user_id}")
    return saved


def replace_profile(user_id: str, profile: UserProfile, store: Store) -> UserProfile:
    """Replace the user's profile wholesale, creating it if missing."""
    saved = store.save_profile(profile.model_copy(update={"user_id": user_id}))
    logger.info(f"Replaced profile for user {user_id}")
    return saved


async def parse_profile_text(
    *,
    user_id: str,
    payload: ProfileTextInput,
    backend: TextBackend,
    store: Store,
) -> UserProfile:
    """Parse freeform resume text into the user's profile, recording where it came from."""
    if not payload.text or not payload.text.strip():
        raise ValidationError("Resume text is required.")

    text = normalize_text(payload.text)
    logger.info(f"Parsing profile text ({len(text)} chars) for user {user_id}")
    parsed = await backend.parse_freeform_profile_text(text)

    profile = parsed.model_copy(update={
        "user_id": user_id,
        "uploaded_file_name": payload.file_name,
        "uploaded_file_type": payload.file_type,
        "uploaded_at": datetime.now(timezone.utc),
    })
    saved = store.save_profile(profile)
    logger.info(
        f"Parsed profile for user {user_id}: experience={len(saved.experience)} "
        f"education={len(saved.education)} projects={len(saved.projects)}"
    )
    return saved


def profile_resume(user_id: str, store: Store) -> ResumeJSON:
    """The user's profile as a ResumeJSON, validated like any other resume."""
    return validate_resume_json(profile_to_resume_json(get_profile(user_id, store)), source="profile_projection")
