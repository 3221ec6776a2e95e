"""
Tailor Service — constrained rewrite of a resume for one job, plus the per-job workflow.

Engine (tailor_resume):
  1. Validate the base resume and requirements
  2. Ask the text backend for a rewritten resume
  3. Validate its shape and check it against the base (parity + non-fabrication)
  4. Derive keyword diff and gap report from the two resumes

Workflow (tailor_for_job / tailor_from_profile):
  cached result for (user, job) → reuse unless force_regenerate
  load source resume + job → engine, retried on invalid output → replace prior → persist

Nothing is written until a complete result exists.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from resume_tailor.config import settings
from resume_tailor.exceptions import NotFoundError, SchemaValidationError, TailoringOutputInvalidError
from resume_tailor.models.jd_models import JobPosting, JobRequirements
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.models.tailor_models import TailoredResume, TailoringResult
from resume_tailor.services.ats_analysis import compute_gap_report, compute_keyword_diff
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.fabrication_guard import ensure_faithful
from resume_tailor.services.profile_projection import profile_to_resume_json
from resume_tailor.services.schema_validation import validate_job_requirements, validate_resume_json
from resume_tailor.services.store import Store

logger = logging.getLogger(__name__)


# ── Engine ───────────────────────────────────────────────────────────────────


async def tailor_resume(
    base_resume: ResumeJSON,
    requirements: JobRequirements,
    backend: TextBackend,
) -> TailoringResult:
    """
    Tailor `base_resume` to `requirements`.

    Raises:
        SchemaValidationError: the inputs themselves are malformed.
        TailoringOutputInvalidError: the backend output is malformed, breaks parity, or changes a fact.
        UpstreamUnavailableError: the backend could not be reached.
    """
    base = validate_resume_json(base_resume, source="base_resume")
    reqs = validate_job_requirements(requirements, source="job_requirements")

    result = await backend.tailor(base, reqs)

    try:
        tailored = validate_resume_json(result.tailored_resume, source="tailor_output")
    except SchemaValidationError as e:
        violations = [f"schema: {'.'.join(map(str, err['loc']))} {err['msg']}" for err in e.errors]
        raise TailoringOutputInvalidError(violations, cause=e) from e

    ensure_faithful(base, tailored)

    keyword_diff = compute_keyword_diff(base, tailored, reqs)
    gap_report = compute_gap_report(tailored, reqs)

    logger.info(
        f"Tailoring complete: coverage={gap_report.coverage_score} "
        f"added={len(keyword_diff.added)} emphasized={len(keyword_diff.emphasized)} "
        f"missing_skills={len(gap_report.missing_skills)}"
    )
    return TailoringResult(tailored_resume=tailored, keyword_diff=keyword_diff, gap_report=gap_report)


async def tailor_with_retries(
    base_resume: ResumeJSON,
    requirements: JobRequirements,
    backend: TextBackend,
    retries: int | None = None,
) -> TailoringResult:
    """Run the engine, retrying only when the output was invalid. Inputs are identical on every attempt."""
    retries = settings.tailor_output_retries if retries is None else max(0, retries)

    attempt = 0
    while True:
        try:
            return await tailor_resume(base_resume, requirements, backend)
        except TailoringOutputInvalidError as e:
            attempt += 1
            if attempt > retries:
                raise
            logger.warning(f"Tailoring attempt {attempt} rejected ({len(e.violations)} violation(s)), retrying")


# ── Workflow ─────────────────────────────────────────────────────────────────


async def tailor_for_job(
    *,
    user_id: str,
    base_resume_id: str,
    job_id: str,
    store: Store,
    backend: TextBackend,
    force_regenerate: bool = False,
) -> tuple[TailoredResume, bool]:
    """Tailor a stored base resume for a stored job. Returns (record, was_cached)."""

    def load_base() -> ResumeJSON:
        record = store.get_base_resume(user_id, base_resume_id)
        if record is None:
            raise NotFoundError("base_resume", base_resume_id)
        return record.parsed_resume_json

    return await _run(
        user_id=user_id,
        job_id=job_id,
        base_resume_id=base_resume_id,
        load_base=load_base,
        store=store,
        backend=backend,
        force_regenerate=force_regenerate,
    )


async def tailor_from_profile(
    *,
    user_id: str,
    job_id: str,
    store: Store,
    backend: TextBackend,
    force_regenerate: bool = False,
) -> tuple[TailoredResume, bool]:
    """Tailor the user's profile, projected to a resume, for a stored job. Returns (record, was_cached)."""

    def load_base() -> ResumeJSON:
        profile = store.get_profile(user_id)
        if profile is None:
            raise NotFoundError("profile")
        return validate_resume_json(profile_to_resume_json(profile), source="profile_projection")

    return await _run(
        user_id=user_id,
        job_id=job_id,
        base_resume_id=None,
        load_base=load_base,
        store=store,
        backend=backend,
        force_regenerate=force_regenerate,
    )


def get_tailored(user_id: str, tailored_id: str, store: Store) -> TailoredResume:
    """Fetch a tailored resume owned by `user_id`. Raises NotFoundError."""
    record = store.get_tailored(user_id, tailored_id)
    if record is None:
        raise NotFoundError("tailored_resume", tailored_id)
    return record


def _load_job(user_id: str, job_id: str, store: Store) -> JobPosting:
    job = store.get_job(user_id, job_id)
    if job is None:
        raise NotFoundError("job", job_id)
    return job


async def _run(
    *,
    user_id: str,
    job_id: str,
    base_resume_id: str | None,
    load_base: Callable[[], ResumeJSON],
    store: Store,
    backend: TextBackend,
    force_regenerate: bool,
) -> tuple[TailoredResume, bool]:
    existing = store.get_latest_tailored(user_id, job_id)

    # A cached result only counts if it was made from the same source
    if existing and existing.base_resume_id == base_resume_id and not force_regenerate:
        logger.info(f"Cache hit: tailored resume {existing.id} for job {job_id}")
        return existing, True

    base = load_base()
    job = _load_job(user_id, job_id, store)

    result = await tailor_with_retries(base, job.requirements, backend)

    if existing:
        store.delete_tailored(user_id, existing.id)
        logger.info(f"Regenerating: replaced tailored resume {existing.id} for job {job_id}")

    record = TailoredResume(
        id=str(uuid.uuid4()),
        user_id=user_id,
        job_id=job_id,
        base_resume_id=base_resume_id,
        original_resume_json=base,
        tailored_resume_json=result.tailored_resume,
        keyword_diff=result.keyword_diff,
        gap_report=result.gap_report,
        created_at=datetime.now(timezone.utc),
    )
    store.save_tailored(record)
    logger.info(f"Saved tailored resume {record.id} for job {job_id} (coverage={record.gap_report.coverage_score})")
    return record, False
