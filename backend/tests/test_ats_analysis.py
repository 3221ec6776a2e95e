"""Tests for keyword diff and gap report derivation."""

import logging

from resume_tailor.models.jd_models import JobRequirements
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.services.ats_analysis import (
    compute_gap_report,
    compute_keyword_diff,
    coverage_score,
)

from conftest import faithful_rewrite


def _requirements(**fields) -> JobRequirements:
    return JobRequirements.model_validate(fields)


def test_missing_must_have_skill_reported():
    resume = ResumeJSON.model_validate({
        "header": {"name": "Jane"},
        "experience": [{"company": "Acme", "title": "Engineer", "bullets": ["Built APIs in Python"]}],
        "skills": {"groups": [{"name": "Languages", "items": ["Python"]}]},
    })

    report = compute_gap_report(resume, _requirements(mustHaveSkills=["Kubernetes"]))

    assert report.missing_skills == ["Kubernetes"]
    assert report.matched_skills == []
    assert report.coverage_score == 0
    assert report.suggestions
    assert any("Kubernetes" in s for s in report.suggestions)


def test_gap_report_on_sample(base_resume, requirements):
    report = compute_gap_report(base_resume, requirements)

    assert report.missing_skills == ["Kubernetes"]
    assert report.matched_skills == ["Python", "React", "TypeScript"]
    assert "Kubernetes" in report.missing_keywords
    assert "REST APIs" not in report.missing_keywords
    assert report.coverage_score == coverage_score(2, 3, 1, 2)
    assert 0 <= report.coverage_score <= 100


def test_no_requirement_skills_scores_full(base_resume):
    report = compute_gap_report(base_resume, _requirements(keywords=["Python"]))
    assert report.coverage_score == 100
    assert report.missing_skills == []


def test_coverage_bounds_and_monotonic_in_must_have_matches():
    for must_total in range(0, 5):
        for pref_total in range(0, 4):
            for pref_matched in range(0, pref_total + 1):
                scores = [
                    coverage_score(m, must_total, pref_matched, pref_total)
                    for m in range(0, must_total + 1)
                ]
                assert all(0 <= s <= 100 for s in scores)
                assert scores == sorted(scores)


def test_must_have_weighs_more_than_preferred():
    assert coverage_score(1, 1, 0, 1) > coverage_score(0, 1, 1, 1)


def test_skill_matching_uses_synonyms_and_technologies():
    resume = ResumeJSON.model_validate({
        "header": {"name": "Jane"},
        "experience": [{"company": "Acme", "title": "SRE", "technologies": ["K8s", "Postgres"]}],
    })

    report = compute_gap_report(resume, _requirements(mustHaveSkills=["Kubernetes", "PostgreSQL"]))

    assert report.matched_skills == ["Kubernetes", "PostgreSQL"]
    assert report.coverage_score == 100


def test_short_skill_needs_whole_token():
    resume = ResumeJSON.model_validate({
        "header": {"name": "Jane"},
        "experience": [{"company": "Google", "title": "Engineer", "bullets": ["Ran Google Cloud workloads"]}],
    })

    report = compute_gap_report(resume, _requirements(mustHaveSkills=["Go"]))

    assert report.missing_skills == ["Go"]


def test_skill_listed_twice_counts_once(base_resume):
    report = compute_gap_report(
        base_resume,
        _requirements(mustHaveSkills=["Python", "python"], preferredSkills=["Python", "Kubernetes"]),
    )
    assert report.matched_skills == ["Python"]
    assert report.coverage_score == coverage_score(1, 1, 0, 1)


def test_structural_suggestions():
    resume = ResumeJSON.model_validate({"header": {"name": "Jane"}})

    report = compute_gap_report(resume, _requirements(keywords=["GraphQL"]))

    # no summary, no projects, no skills, missing keywords
    assert len(report.suggestions) == 4


def test_keyword_diff_added_and_emphasized(base_resume, requirements):
    tailored = faithful_rewrite(base_resume, requirements)

    diff = compute_keyword_diff(base_resume, tailored, requirements)

    assert diff.added == ["scalable"]
    assert diff.emphasized == ["TypeScript"]
    assert diff.removed == []
    assert "REST APIs" not in diff.added + diff.emphasized
    assert "Kubernetes" not in diff.added + diff.emphasized + diff.removed


def test_keyword_diff_removed_is_logged(base_resume, caplog):
    data = base_resume.model_dump(by_alias=True)
    data["experience"][0]["bullets"][1] = "Built HTTP services in Python"
    tailored = ResumeJSON.model_validate(data)
    reqs = _requirements(keywords=["REST APIs"])

    with caplog.at_level(logging.WARNING, logger="resume_tailor.services.ats_analysis"):
        diff = compute_keyword_diff(base_resume, tailored, reqs)

    assert diff.removed == ["REST APIs"]
    assert any("REST APIs" in record.getMessage() for record in caplog.records)


def test_keyword_moved_into_summary_is_emphasized(base_resume):
    data = base_resume.model_dump(by_alias=True)
    data["summary"] = "Backend engineer building Python web services."
    data["experience"][0]["bullets"][1] = "Built REST APIs"
    tailored = ResumeJSON.model_validate(data)

    diff = compute_keyword_diff(base_resume, tailored, _requirements(keywords=["Python"]))

    assert diff.emphasized == ["Python"]


def test_keyword_promoted_in_skill_group_is_emphasized(base_resume):
    data = base_resume.model_dump(by_alias=True)
    data["skills"]["groups"][0]["items"] = ["SQL", "Python", "TypeScript"]
    base = ResumeJSON.model_validate(data)

    diff = compute_keyword_diff(base, base_resume, _requirements(keywords=["Python", "SQL"]))

    assert diff.emphasized == ["Python"]
    assert diff.added == diff.removed == []


def test_keyword_diff_is_case_insensitive(base_resume):
    diff = compute_keyword_diff(base_resume, base_resume, _requirements(keywords=["PYTHON", "react"]))
    assert diff.added == diff.removed == diff.emphasized == []
