from datetime import datetime
from typing import Optional

from pydantic import Field

from resume_tailor.models.base import CamelModel, TextList
from resume_tailor.models.resume_models import ResumeJSON


# ── Analysis Artifacts ──────────────────────────────────────────────────────


class ATSKeywordDiff(CamelModel):
    """Requirement keywords added / removed / emphasized by tailoring."""

    added: TextList = []
    removed: TextList = []
    emphasized: TextList = []


class ATSGapReport(CamelModel):
    """Which job requirements the resume does and doesn't demonstrably satisfy."""

    missing_keywords: TextList = []
    matched_skills: TextList = []
    missing_skills: TextList = []
    coverage_score: int = Field(default=0, ge=0, le=100)
    suggestions: TextList = []


class TailoringResult(CamelModel):
    """Output triple of one tailoring run. Produced and persisted as a unit."""

    tailored_resume: ResumeJSON
    keyword_diff: ATSKeywordDiff = Field(default_factory=ATSKeywordDiff)
    gap_report: ATSGapReport = Field(default_factory=ATSGapReport)


# ── Persisted Tailored Resume ───────────────────────────────────────────────


class TailoredResume(CamelModel):
    """Tailored resume record keyed by (user, job). Never updated in place."""

    id: str
    user_id: str
    job_id: str
    base_resume_id: Optional[str] = None
    original_resume_json: ResumeJSON
    tailored_resume_json: ResumeJSON
    keyword_diff: ATSKeywordDiff
    gap_report: ATSGapReport
    created_at: datetime


# ── Request Models ──────────────────────────────────────────────────────────


class TailorRequest(CamelModel):
    """Tailor a stored base resume for a job."""

    base_resume_id: str
    job_id: str
    force_regenerate: bool = False


class TailorFromProfileRequest(CamelModel):
    """Tailor the user's profile (projected to a resume) for a job."""

    job_id: str
    force_regenerate: bool = False


# ── Response Models ─────────────────────────────────────────────────────────


class TailorResponse(CamelModel):
    """Tailoring result as returned to the client."""

    id: str
    job_id: str
    base_resume_id: Optional[str] = None
    tailored_resume: ResumeJSON
    keyword_diff: ATSKeywordDiff
    gap_report: ATSGapReport
    cached: bool = False

    @classmethod
    def from_record(cls, record: TailoredResume, *, cached: bool = False) -> "TailorResponse":
        return cls(
            id=record.id,
            job_id=record.job_id,
            base_resume_id=record.base_resume_id,
            tailored_resume=record.tailored_resume_json,
            keyword_diff=record.keyword_diff,
            gap_report=record.gap_report,
            cached=cached,
        )
