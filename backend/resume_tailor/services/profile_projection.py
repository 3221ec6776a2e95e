"""
Profile ↔ Resume projection.

profile_to_resume_json() is a lossless field remapping used before tailoring a
profile; it never raises for a structurally valid UserProfile. The row helpers
map a profile to / from the flat snake_case record kept by the store, with
nested entries stored as camelCase JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic.alias_generators import to_camel

from resume_tailor.models.profile_models import UserProfile
from resume_tailor.models.resume_models import (
    ActivityEntry,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeHeader,
    ResumeJSON,
    ResumeLink,
    SkillsSection,
)
from resume_tailor.services.schema_validation import validate_user_profile

PRESENT = "Present"


def profile_to_resume_json(profile: UserProfile) -> ResumeJSON:
    """Project a profile onto the canonical resume shape. Entry order is kept everywhere."""
    links: list[ResumeLink] = []
    if profile.linkedin_url:
        links.append(ResumeLink(type="LinkedIn", url=profile.linkedin_url))
    if profile.github_url:
        links.append(ResumeLink(type="GitHub", url=profile.github_url))
    if profile.portfolio_url:
        links.append(ResumeLink(type="Portfolio", url=profile.portfolio_url))
    links.extend(link.model_copy() for link in profile.other_links)

    return ResumeJSON(
        header=ResumeHeader(
            name=profile.full_name,
            email=profile.email,
            phone=profile.phone,
            location=profile.location,
            links=links,
        ),
        summary=profile.summary,
        education=[
            EducationEntry(
                institution=edu.institution,
                degree=edu.degree,
                field=edu.field,
                location=edu.location,
                start=edu.start,
                end=edu.end,
                gpa=edu.gpa,
                honors=edu.honors,
                coursework=list(edu.coursework) if edu.coursework is not None else None,
                study_abroad=edu.study_abroad.model_copy() if edu.study_abroad else None,
            )
            for edu in profile.education
        ],
        experience=[
            ExperienceEntry(
                company=exp.company,
                title=exp.title,
                location=exp.location,
                start=exp.start,
                end=PRESENT if exp.current else exp.end,
                bullets=list(exp.bullets),
                technologies=list(exp.technologies),
            )
            for exp in profile.experience
        ],
        projects=[
            ProjectEntry(
                name=proj.name,
                description=proj.description,
                technologies=list(proj.technologies),
                url=proj.url,
                date=proj.date,
                achievement=proj.achievement,
            )
            for proj in profile.projects
        ],
        activities=[
            ActivityEntry(
                organization=act.organization,
                role=act.role,
                start=act.start,
                end=act.end,
                bullets=list(act.bullets),
            )
            for act in profile.activities
        ],
        skills=SkillsSection(groups=[group.model_copy(deep=True) for group in profile.skills]),
        languages=[lang.model_copy() for lang in profile.languages],
        certifications=[
            CertificationEntry(
                name=cert.name,
                issuer=cert.issuer,
                date=cert.date,
                expiry=cert.expiry,
                url=cert.url,
            )
            for cert in profile.certifications
        ],
    )


# ── Storage Rows ─────────────────────────────────────────────────────────────

_ROW_FIELDS = (
    "full_name", "email", "phone", "location",
    "linkedin_url", "github_url", "portfolio_url", "other_links",
    "summary", "skills", "experience", "education", "projects",
    "activities", "languages", "certifications",
    "uploaded_file_name", "uploaded_file_type", "uploaded_at",
)


def profile_to_row(profile: UserProfile) -> dict[str, Any]:
    """Flatten a profile into a storage row (snake_case columns, JSON-safe values)."""
    data = profile.model_dump(mode="json", by_alias=True)
    row = {field: data[to_camel(field)] for field in _ROW_FIELDS}
    row["id"] = profile.id
    row["user_id"] = profile.user_id
    return row


def row_to_profile(row: dict[str, Any]) -> UserProfile:
    """
    Rebuild a profile from a storage row.
    Missing or null text columns become "", missing list columns become [].
    Raises SchemaValidationError if a column holds the wrong type.
    """
    data = {field: row.get(field) for field in _ROW_FIELDS}
    data.update(
        id=row.get("id"),
        user_id=row.get("user_id"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )
    return validate_user_profile(data, source="profile_row")
