"""
Store — persistence collaborator for profiles, base resumes, jobs and tailored resumes.

Records are kept as JSON-shaped blobs and re-validated on every read, so a
corrupted blob surfaces as SchemaValidationError instead of leaking into the
pipeline. InMemoryStore is process-local (lost on restart, fine for MVP and tests).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from resume_tailor.models.jd_models import JobPosting
from resume_tailor.models.profile_models import UserProfile
from resume_tailor.models.resume_models import BaseResume
from resume_tailor.models.tailor_models import TailoredResume
from resume_tailor.services.profile_projection import profile_to_row, row_to_profile
from resume_tailor.services.schema_validation import validate_model

logger = logging.getLogger(__name__)


class Store(Protocol):
    """Key-value persistence keyed by (user, entity id)."""

    def get_profile(self, user_id: str) -> UserProfile | None: ...

    def save_profile(self, profile: UserProfile) -> UserProfile: ...

    def get_base_resume(self, user_id: str, resume_id: str) -> BaseResume | None: ...

    def save_base_resume(self, record: BaseResume) -> BaseResume: ...

    def get_job(self, user_id: str, job_id: str) -> JobPosting | None: ...

    def save_job(self, record: JobPosting) -> JobPosting: ...

    def get_tailored(self, user_id: str, tailored_id: str) -> TailoredResume | None: ...

    def get_latest_tailored(self, user_id: str, job_id: str) -> TailoredResume | None: ...

    def save_tailored(self, record: TailoredResume) -> TailoredResume: ...

    def delete_tailored(self, user_id: str, tailored_id: str) -> bool: ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _blob(record: Any) -> dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True)


class InMemoryStore:
    """Dict-backed Store."""

    def __init__(self) -> None:
        self._profiles: dict[str, dict[str, Any]] = {}
        self._base_resumes: dict[tuple[str, str], dict[str, Any]] = {}
        self._jobs: dict[tuple[str, str], dict[str, Any]] = {}
        self._tailored: dict[tuple[str, str], dict[str, Any]] = {}
        # (user, job) → ids in creation order; the last one wins
        self._tailored_by_job: dict[tuple[str, str], list[str]] = {}

    # ── Profiles ──

    def get_profile(self, user_id: str) -> UserProfile | None:
        row = self._profiles.get(user_id)
        return row_to_profile(row) if row is not None else None

    def save_profile(self, profile: UserProfile) -> UserProfile:
        if not profile.user_id:
            raise ValueError("Profile must belong to a user")

        existing = self._profiles.get(profile.user_id)
        row = profile_to_row(profile)
        row["id"] = (existing or {}).get("id") or profile.id or f"profile-{profile.user_id}"
        now = _now().isoformat()
        row["created_at"] = (existing or {}).get("created_at") or now
        row["updated_at"] = now

        self._profiles[profile.user_id] = row
        return row_to_profile(row)

    # ── Base Resumes ──

    def get_base_resume(self, user_id: str, resume_id: str) -> BaseResume | None:
        blob = self._base_resumes.get((user_id, resume_id))
        return validate_model(BaseResume, blob, "base_resume_store") if blob is not None else None

    def save_base_resume(self, record: BaseResume) -> BaseResume:
        self._base_resumes[(record.user_id, record.id)] = _blob(record)
        return record

    # ── Jobs ──

    def get_job(self, user_id: str, job_id: str) -> JobPosting | None:
        blob = self._jobs.get((user_id, job_id))
        return validate_model(JobPosting, blob, "job_store") if blob is not None else None

    def save_job(self, record: JobPosting) -> JobPosting:
        self._jobs[(record.user_id, record.id)] = _blob(record)
        return record

    # ── Tailored Resumes ──

    def get_tailored(self, user_id: str, tailored_id: str) -> TailoredResume | None:
        blob = self._tailored.get((user_id, tailored_id))
        return validate_model(TailoredResume, blob, "tailored_store") if blob is not None else None

    def get_latest_tailored(self, user_id: str, job_id: str) -> TailoredResume | None:
        ids = self._tailored_by_job.get((user_id, job_id))
        if not ids:
            return None
        return self.get_tailored(user_id, ids[-1])

    def save_tailored(self, record: TailoredResume) -> TailoredResume:
        self._tailored[(record.user_id, record.id)] = _blob(record)
        self._tailored_by_job.setdefault((record.user_id, record.job_id), []).append(record.id)
        return record

    def delete_tailored(self, user_id: str, tailored_id: str) -> bool:
        blob = self._tailored.pop((user_id, tailored_id), None)
        if blob is None:
            return False
        ids = self._tailored_by_job.get((user_id, blob["jobId"]), [])
        if tailored_id in ids:
            ids.remove(tailored_id)
        logger.info(f"Deleted tailored resume {tailored_id} for job {blob['jobId']}")
        return True


# ── Process-wide Handle ──────────────────────────────────────────────────────

_store: Store | None = None


def get_store() -> Store:
    """Return the shared store, creating an InMemoryStore on first use."""
    global _store
    if _store is None:
        _store = InMemoryStore()
    return _store


def reset_store() -> None:
    global _store
    _store = None
