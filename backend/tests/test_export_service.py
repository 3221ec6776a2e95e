"""Tests for plain-text export."""

import pytest

from resume_tailor.exceptions import ValidationError
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.services.export_service import RULE, render_txt, txt_filename


def test_render_txt_sections_in_order(base_resume):
    text = render_txt(base_resume)
    lines = text.splitlines()

    assert lines[0] == "JANE DOE"
    assert lines[1] == "Austin, TX | P: 555-0100 | jane@example.com"
    assert lines[2] == "LinkedIn: https://linkedin.com/in/janedoe"

    headings = [lines[i - 1] for i, line in enumerate(lines) if line == RULE]
    assert headings == ["EDUCATION", "WORK EXPERIENCE", "PROJECTS", "ACTIVITIES", "ADDITIONAL"]


def test_render_txt_content(base_resume):
    text = render_txt(base_resume)

    assert "University of Texas, Austin, TX" in text
    assert "B.S., Computer Science, 2014 - 2018" in text
    assert "Software Engineer (Jun 2018 - Present)" in text
    assert "  • Built REST APIs in Python" in text
    assert "  • Technologies: Flask, PostgreSQL" in text
    assert "Code Club | Mentor" in text
    assert "Languages: Python, TypeScript, SQL" in text
    assert "Languages: English (Native)" in text
    assert "Certifications: AWS Certified Developer (Amazon)" in text


def test_empty_sections_are_skipped():
    text = render_txt(ResumeJSON.model_validate({"header": {"name": "Jane Doe", "email": "jane@example.com"}}))

    assert text.splitlines()[:2] == ["JANE DOE", "jane@example.com"]
    assert RULE not in text


def test_render_txt_requires_name():
    with pytest.raises(ValidationError):
        render_txt(ResumeJSON.model_validate({"header": {"name": "  "}}))


def test_txt_filename(base_resume):
    assert txt_filename(base_resume, "Acme, Inc.") == "Jane_Doe_Resume_Acme_Inc.txt"
    assert txt_filename(base_resume) == "Jane_Doe_Resume.txt"
