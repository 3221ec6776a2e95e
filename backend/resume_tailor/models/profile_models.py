from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator

from resume_tailor.models.base import CamelModel, Text, TextList, _none_to_list
from resume_tailor.models.resume_models import LanguageEntry, ResumeLink, SkillGroup, StudyAbroad


# ── Profile Sub-Models ──────────────────────────────────────────────────────


class ProfileExperience(CamelModel):
    """Experience entry as edited in the profile. `current` roles render as "Present"."""

    id: Optional[str] = None
    company: Text = ""
    title: Text = ""
    location: Text = ""
    start: Text = ""
    end: Text = ""
    current: bool = False
    bullets: TextList = []
    technologies: TextList = []


class ProfileEducation(CamelModel):
    id: Optional[str] = None
    institution: Text = ""
    degree: Text = ""
    field: Text = ""
    location: Text = ""
    start: Text = ""
    end: Text = ""
    gpa: Optional[str] = None
    honors: Optional[str] = None
    coursework: Optional[list[str]] = None
    achievements: TextList = []
    study_abroad: Optional[StudyAbroad] = None


class ProfileProject(CamelModel):
    id: Optional[str] = None
    name: Text = ""
    description: Text = ""
    technologies: TextList = []
    url: Optional[str] = None
    date: Optional[str] = None
    achievement: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None


class ProfileActivity(CamelModel):
    id: Optional[str] = None
    organization: Text = ""
    role: Text = ""
    start: Optional[str] = None
    end: Optional[str] = None
    bullets: TextList = []


class ProfileCertification(CamelModel):
    id: Optional[str] = None
    name: Text = ""
    issuer: Text = ""
    date: Optional[str] = None
    expiry: Optional[str] = None
    url: Optional[str] = None
    credential_id: Optional[str] = None


# ── Main Profile Model ──────────────────────────────────────────────────────


class UserProfile(CamelModel):
    """Long-lived career profile, one per user. Superset of the ResumeJSON fields."""

    id: Optional[str] = None
    user_id: Optional[str] = None

    # Personal information
    full_name: Text = ""
    email: Text = ""
    phone: Text = ""
    location: Text = ""
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    other_links: Annotated[list[ResumeLink], BeforeValidator(_none_to_list)] = []

    summary: Text = ""

    skills: Annotated[list[SkillGroup], BeforeValidator(_none_to_list)] = []
    experience: Annotated[list[ProfileExperience], BeforeValidator(_none_to_list)] = []
    education: Annotated[list[ProfileEducation], BeforeValidator(_none_to_list)] = []
    projects: Annotated[list[ProfileProject], BeforeValidator(_none_to_list)] = []
    activities: Annotated[list[ProfileActivity], BeforeValidator(_none_to_list)] = []
    languages: Annotated[list[LanguageEntry], BeforeValidator(_none_to_list)] = []
    certifications: Annotated[list[ProfileCertification], BeforeValidator(_none_to_list)] = []

    # Upload provenance
    uploaded_file_name: Optional[str] = None
    uploaded_file_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ── Request Models ──────────────────────────────────────────────────────────


class ProfileTextInput(CamelModel):
    """Freeform resume text to parse into the profile, with optional upload provenance."""

    text: str
    file_name: Optional[str] = None
    file_type: Optional[str] = None


class ProfileSaveRequest(CamelModel):
    """Body of create / replace profile requests."""

    profile: UserProfile


class ProfileResponse(CamelModel):
    profile: Optional[UserProfile] = None
    exists: bool = True
    message: Optional[str] = None
