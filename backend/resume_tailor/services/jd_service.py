"""
JD Service — turn pasted job-posting text into a stored JobPosting.

Responsibilities:
  • Enforce the minimum posting length
  • Clean up pasted text, extract requirements once via the text backend
  • Assign an id and persist the job for the user
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from resume_tailor.config import settings
from resume_tailor.exceptions import NotFoundError, ValidationError
from resume_tailor.models.jd_models import JobPosting, JobTextInput
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.store import Store
from resume_tailor.utils.text_cleanup import normalize_text

logger = logging.getLogger(__name__)

DEFAULT_JOB_TITLE = "Software Engineer"
DEFAULT_COMPANY = "Unknown Company"


# ── Public API ───────────────────────────────────────────────────────────────


def ensure_job_text(text: str | None) -> str:
    """Return cleaned posting text, or raise ValidationError if it is too short to analyze."""
    min_length = settings.min_job_text_length
    if not text or len(text.strip()) < min_length:
        raise ValidationError(f"Job description text is required (minimum {min_length} characters).")
    return normalize_text(text)


async def extract_job(
    *,
    user_id: str,
    payload: JobTextInput,
    backend: TextBackend,
    store: Store,
) -> JobPosting:
    """
    Extract requirements from pasted posting text and save the job.
    A requirements record that fails validation is surfaced, never retried.
    """
    jd_text = ensure_job_text(payload.jd_text)

    logger.info(f"Extracting requirements from job text ({len(jd_text)} chars)")
    requirements = await backend.extract_requirements(jd_text)

    job = JobPosting(
        id=str(uuid.uuid4()),
        user_id=user_id,
        job_url=(payload.job_url or "").strip() or "manual-entry",
        job_title=(payload.job_title or "").strip() or requirements.role_category or DEFAULT_JOB_TITLE,
        company=(payload.company or "").strip() or DEFAULT_COMPANY,
        jd_text=jd_text,
        requirements=requirements,
        created_at=datetime.now(timezone.utc),
    )
    store.save_job(job)

    logger.info(
        f"Saved job: id={job.id} title={job.job_title} company={job.company} "
        f"must_have={len(requirements.must_have_skills)} keywords={len(requirements.keywords)}"
    )
    return job


def get_job(user_id: str, job_id: str, store: Store) -> JobPosting:
    """Fetch a job owned by `user_id`. Raises NotFoundError."""
    job = store.get_job(user_id, job_id)
    if job is None:
        raise NotFoundError("job", job_id)
    return job
