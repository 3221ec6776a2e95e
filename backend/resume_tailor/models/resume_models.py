from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from resume_tailor.models.base import CamelModel, Text, TextList, _none_to_dict, _none_to_list


# ── Sub-Models ──────────────────────────────────────────────────────────────


class ResumeLink(CamelModel):
    """A labeled header link (LinkedIn, GitHub, Portfolio, ...)."""

    type: Text = ""
    url: Text = ""


class ResumeHeader(CamelModel):
    """Candidate identity and contact block."""

    name: Text = ""
    email: Text = ""
    phone: Text = ""
    location: Text = ""
    links: Annotated[list[ResumeLink], BeforeValidator(_none_to_list)] = []


class StudyAbroad(CamelModel):
    institution: Text = ""
    location: Text = ""
    program: Text = ""
    start: Text = ""
    end: Text = ""


class EducationEntry(CamelModel):
    """A single education entry. Array order is display order."""

    institution: Text = ""
    degree: Text = ""
    field: Optional[str] = None
    location: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    gpa: Optional[str] = None
    honors: Optional[str] = None
    coursework: Optional[list[str]] = None
    study_abroad: Optional[StudyAbroad] = None


class ExperienceEntry(CamelModel):
    """A single work experience entry. `end` may be the "Present" sentinel."""

    company: Text = ""
    title: Text = ""
    location: Text = ""
    start: Text = ""
    end: Text = ""
    bullets: TextList = []
    technologies: TextList = []


class ProjectEntry(CamelModel):
    name: Text = ""
    description: Text = ""
    technologies: TextList = []
    url: Optional[str] = None
    date: Optional[str] = None
    achievement: Optional[str] = None


class ActivityEntry(CamelModel):
    """Extracurricular / volunteering entry."""

    organization: Text = ""
    role: Text = ""
    start: Optional[str] = None
    end: Optional[str] = None
    bullets: TextList = []


class SkillGroup(CamelModel):
    """Named skill group; first items are the most prominent."""

    name: Text = ""
    items: TextList = []


class SkillsSection(CamelModel):
    groups: Annotated[list[SkillGroup], BeforeValidator(_none_to_list)] = []


class LanguageEntry(CamelModel):
    name: Text = ""
    proficiency: Text = ""  # Native / Fluent / Conversational / Basic — display only


class CertificationEntry(CamelModel):
    name: Text = ""
    issuer: Text = ""
    date: Optional[str] = None
    expiry: Optional[str] = None
    url: Optional[str] = None


# ── Main Resume Model ──────────────────────────────────────────────────────


class ResumeJSON(CamelModel):
    """Canonical point-in-time resume snapshot. Every other component reads and writes this shape."""

    header: ResumeHeader
    summary: Optional[str] = None
    education: Annotated[list[EducationEntry], BeforeValidator(_none_to_list)] = []
    experience: Annotated[list[ExperienceEntry], BeforeValidator(_none_to_list)] = []
    projects: Annotated[list[ProjectEntry], BeforeValidator(_none_to_list)] = []
    activities: Annotated[list[ActivityEntry], BeforeValidator(_none_to_list)] = []
    skills: Annotated[SkillsSection, BeforeValidator(_none_to_dict)] = Field(default_factory=SkillsSection)
    languages: Annotated[list[LanguageEntry], BeforeValidator(_none_to_list)] = []
    certifications: Annotated[list[CertificationEntry], BeforeValidator(_none_to_list)] = []


# ── Persisted Base Resume ───────────────────────────────────────────────────


class BaseResume(CamelModel):
    """A parsed base resume stored for a user."""

    id: str
    user_id: str
    raw_text: str = ""
    parsed_resume_json: ResumeJSON
    created_at: datetime


class ResumeTextInput(CamelModel):
    """Input for parsing a pasted resume into a base resume."""

    text: str
