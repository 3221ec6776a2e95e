"""Shared fixtures: sample resume / requirements / profile, a scripted text backend, a fresh store."""

from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from resume_tailor.models.jd_models import JobRequirements
from resume_tailor.models.profile_models import UserProfile
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.models.tailor_models import TailoringResult
from resume_tailor.services.store import InMemoryStore

USER_ID = "user-1"


SAMPLE_RESUME: dict[str, Any] = {
    "header": {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "location": "Austin, TX",
        "links": [{"type": "LinkedIn", "url": "https://linkedin.com/in/janedoe"}],
    },
    "summary": "Backend engineer building web services.",
    "education": [
        {
            "institution": "University of Texas",
            "degree": "B.S.",
            "field": "Computer Science",
            "location": "Austin, TX",
            "start": "2014",
            "end": "2018",
        }
    ],
    "experience": [
        {
            "company": "Acme Corp",
            "title": "Software Engineer",
            "location": "Austin, TX",
            "start": "Jun 2018",
            "end": "Present",
            "bullets": [
                "Developed web applications using React",
                "Built REST APIs in Python",
            ],
            "technologies": ["React", "TypeScript", "Python"],
        }
    ],
    "projects": [
        {
            "name": "Trip Planner",
            "description": "Itinerary app with shared maps",
            "technologies": ["Flask", "PostgreSQL"],
        }
    ],
    "activities": [
        {
            "organization": "Code Club",
            "role": "Mentor",
            "start": "2019",
            "end": "2021",
            "bullets": ["Taught intro Python to high school students"],
        }
    ],
    "skills": {
        "groups": [
            {"name": "Languages", "items": ["Python", "TypeScript", "SQL"]},
            {"name": "Frameworks", "items": ["React", "Flask"]},
        ]
    },
    "languages": [{"name": "English", "proficiency": "Native"}],
    "certifications": [{"name": "AWS Certified Developer", "issuer": "Amazon"}],
}

SAMPLE_REQUIREMENTS: dict[str, Any] = {
    "mustHaveSkills": ["Python", "React", "Kubernetes"],
    "preferredSkills": ["TypeScript", "GraphQL"],
    "responsibilities": ["Build scalable web services"],
    "keywords": ["scalable", "TypeScript", "REST APIs", "Kubernetes"],
    "roleCategory": "backend",
    "seniorityLevel": "mid",
    "hardRequirements": ["3+ years of experience"],
    "softRequirements": ["Clear communication"],
}

SAMPLE_PROFILE: dict[str, Any] = {
    "fullName": "Jane Doe",
    "email": "jane@example.com",
    "phone": "555-0100",
    "location": "Austin, TX",
    "linkedinUrl": "https://linkedin.com/in/janedoe",
    "githubUrl": "https://github.com/janedoe",
    "portfolioUrl": "",
    "otherLinks": [{"type": "Blog", "url": "https://jane.dev"}],
    "summary": "Backend engineer building web services.",
    "skills": [{"name": "Languages", "items": ["Python", "TypeScript"]}],
    "experience": [
        {
            "company": "Acme Corp",
            "title": "Software Engineer",
            "location": "Austin, TX",
            "start": "Jun 2018",
            "end": "",
            "current": True,
            "bullets": ["Developed web applications using React"],
            "technologies": ["React", "TypeScript"],
        },
        {
            "company": "Initech",
            "title": "Intern",
            "location": "Dallas, TX",
            "start": "May 2017",
            "end": "Aug 2017",
            "current": False,
            "bullets": ["Wrote test automation in Python"],
            "technologies": ["Python"],
        },
    ],
    "education": [
        {
            "institution": "University of Texas",
            "degree": "B.S.",
            "field": "Computer Science",
            "start": "2014",
            "end": "2018",
            "achievements": ["Dean's List"],
        }
    ],
    "projects": [{"name": "Trip Planner", "description": "Itinerary app", "technologies": ["Flask"]}],
    "activities": [],
    "languages": [{"name": "English", "proficiency": "Native"}],
    "certifications": [{"name": "AWS Certified Developer", "issuer": "Amazon", "credentialId": "ABC-123"}],
}


def faithful_rewrite(base: ResumeJSON, requirements: JobRequirements) -> ResumeJSON:
    """A rewrite that only touches free text: first bullet surfaces listed technologies."""
    data = base.model_dump(by_alias=True)
    if data["experience"] and data["experience"][0]["bullets"]:
        data["experience"][0]["bullets"][0] = "Developed scalable web applications using React and TypeScript"
    return ResumeJSON.model_validate(data)


class FakeBackend:
    """Scripted TextBackend. `tailor_fn` may return a ResumeJSON / dict or raise."""

    def __init__(
        self,
        *,
        requirements: dict[str, Any] | None = None,
        tailor_fn: Callable[[ResumeJSON, JobRequirements], Any] | None = None,
        parsed_resume: dict[str, Any] | None = None,
        parsed_profile: dict[str, Any] | None = None,
    ):
        self.requirements = requirements if requirements is not None else copy.deepcopy(SAMPLE_REQUIREMENTS)
        self.tailor_fn = tailor_fn or faithful_rewrite
        self.parsed_resume = parsed_resume if parsed_resume is not None else copy.deepcopy(SAMPLE_RESUME)
        self.parsed_profile = parsed_profile if parsed_profile is not None else copy.deepcopy(SAMPLE_PROFILE)
        self.calls: dict[str, int] = {"extract": 0, "tailor": 0, "resume": 0, "profile": 0}

    async def extract_requirements(self, jd_text: str) -> JobRequirements:
        self.calls["extract"] += 1
        return JobRequirements.model_validate(self.requirements)

    async def tailor(self, base_resume: ResumeJSON, requirements: JobRequirements) -> TailoringResult:
        self.calls["tailor"] += 1
        tailored = self.tailor_fn(base_resume, requirements)
        if isinstance(tailored, dict):
            tailored = ResumeJSON.model_validate(tailored)
        return TailoringResult(tailored_resume=tailored)

    async def parse_freeform_resume_text(self, text: str) -> ResumeJSON:
        self.calls["resume"] += 1
        return ResumeJSON.model_validate(self.parsed_resume)

    async def parse_freeform_profile_text(self, text: str) -> UserProfile:
        self.calls["profile"] += 1
        return UserProfile.model_validate(self.parsed_profile)


@pytest.fixture
def resume_data() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_RESUME)


@pytest.fixture
def base_resume(resume_data) -> ResumeJSON:
    return ResumeJSON.model_validate(resume_data)


@pytest.fixture
def requirements() -> JobRequirements:
    return JobRequirements.model_validate(copy.deepcopy(SAMPLE_REQUIREMENTS))


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile.model_validate(copy.deepcopy(SAMPLE_PROFILE))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()
