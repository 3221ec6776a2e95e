from datetime import datetime
from typing import Optional

from resume_tailor.models.base import CamelModel, Text, TextList


# ── Request Models ──────────────────────────────────────────────────────────


class JobTextInput(CamelModel):
    """Input for extracting requirements from pasted job-posting text."""

    jd_text: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    job_url: Optional[str] = None


# ── Extraction Output ───────────────────────────────────────────────────────


class JobRequirements(CamelModel):
    """Structured requirements extracted from a job posting. Read-only once created."""

    must_have_skills: TextList = []
    preferred_skills: TextList = []
    responsibilities: TextList = []
    keywords: TextList = []
    role_category: Text = ""  # "backend" | "frontend" | "fullstack" | "ml" | "devops" | "mobile" | "other"
    seniority_level: Optional[str] = None  # "junior" | "mid" | "senior" | "lead"
    hard_requirements: TextList = []
    soft_requirements: TextList = []


# ── Persisted Job ───────────────────────────────────────────────────────────


class JobPosting(CamelModel):
    """A job the user is applying to, with its extracted requirements."""

    id: str
    user_id: str
    job_url: str = "manual-entry"
    job_title: str
    company: str
    jd_text: str
    requirements: JobRequirements
    created_at: datetime
