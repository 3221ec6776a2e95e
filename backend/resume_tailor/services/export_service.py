"""
Export Service — plain-text rendering of a ResumeJSON.

Layout:
  NAME
  location | P: phone | email
  Type: url | Type: url

  EDUCATION / WORK EXPERIENCE / PROJECTS / ACTIVITIES / ADDITIONAL
  (each under a 60-dash rule; empty sections are skipped)
"""

from __future__ import annotations

import logging
import re

from resume_tailor.exceptions import ValidationError
from resume_tailor.models.resume_models import ResumeJSON

logger = logging.getLogger(__name__)

RULE = "-" * 60
TXT_BULLET = "  • "


def render_txt(resume: ResumeJSON) -> str:
    """Render the resume as plain text. Raises ValidationError if the header has no name."""
    header = resume.header
    if not header.name.strip():
        raise ValidationError("Resume must have a name before it can be exported.")

    lines: list[str] = [header.name.upper()]

    contact = [part for part in (header.location, f"P: {header.phone}" if header.phone else "", header.email) if part]
    if contact:
        lines.append(" | ".join(contact))
    if header.links:
        lines.append(" | ".join(f"{link.type}: {link.url}" for link in header.links))
    lines.append("")

    # ── Education ──
    if resume.education:
        lines += ["EDUCATION", RULE]
        for edu in resume.education:
            degree = f"{edu.degree}, {edu.field}" if edu.field else edu.degree
            dates = (f"{edu.start} - {edu.end}" if edu.start else edu.end) if edu.end else ""

            lines.append(f"{edu.institution}, {edu.location}" if edu.location else edu.institution)
            lines.append(f"{degree}, {dates}" if dates else degree)

            gpa_honors = "; ".join(p for p in (f"GPA: {edu.gpa}" if edu.gpa else "", edu.honors or "") if p)
            if gpa_honors:
                lines.append(gpa_honors)
            if edu.coursework:
                lines.append(f"Relevant Coursework: {', '.join(edu.coursework)}")
            if edu.study_abroad:
                abroad = edu.study_abroad
                lines += [
                    "",
                    f"{abroad.institution}, {abroad.location}",
                    f"{abroad.program} ({abroad.start} - {abroad.end})",
                ]
            lines.append("")

    # ── Work Experience ──
    if resume.experience:
        lines += ["WORK EXPERIENCE", RULE]
        for exp in resume.experience:
            lines.append(f"{exp.company}, {exp.location}" if exp.location else exp.company)
            lines.append(f"{exp.title} ({exp.start} - {exp.end})")
            lines.append("")
            lines += [f"{TXT_BULLET}{bullet}" for bullet in exp.bullets]
            lines.append("")

    # ── Projects ──
    if resume.projects:
        lines += ["PROJECTS", RULE]
        for project in resume.projects:
            lines.append(f"{project.name} ({project.date})" if project.date else project.name)
            description = "; ".join(p for p in (project.description, project.achievement or "") if p)
            lines.append(f"{TXT_BULLET}{description}")
            if project.technologies:
                lines.append(f"{TXT_BULLET}Technologies: {', '.join(project.technologies)}")
            if project.url:
                lines.append(f"{TXT_BULLET}URL: {project.url}")
            lines.append("")

    # ── Activities ──
    if resume.activities:
        lines += ["ACTIVITIES", RULE]
        for activity in resume.activities:
            lines.append(f"{activity.organization} | {activity.role}")
            lines += [f"{TXT_BULLET}{bullet}" for bullet in activity.bullets]
            lines.append("")

    # ── Additional ──
    groups = resume.skills.groups
    if groups or resume.languages or resume.certifications:
        lines += ["ADDITIONAL", RULE]
        lines += [f"{group.name}: {', '.join(group.items)}" for group in groups]
        if resume.languages:
            lines.append("Languages: " + ", ".join(f"{lang.name} ({lang.proficiency})" for lang in resume.languages))
        if resume.certifications:
            certs = ", ".join(f"{c.name} ({c.issuer})" if c.issuer else c.name for c in resume.certifications)
            lines.append(f"Certifications: {certs}")
        lines.append("")

    return "\n".join(lines)


def txt_filename(resume: ResumeJSON, company: str | None = None) -> str:
    """Download filename like 'Jane_Doe_Resume_Acme.txt'."""
    parts = [resume.header.name or "Resume", "Resume"]
    if company:
        parts.append(company)
    slug = "_".join(re.sub(r"[^A-Za-z0-9]+", "_", p).strip("_") for p in parts if p)
    return f"{slug}.txt"
