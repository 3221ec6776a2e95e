"""
ATS Analysis — keyword diff and gap report for a tailored resume.

Both artifacts are derived here from the resumes themselves; whatever the text
backend claims about its own changes is ignored.

Coverage score weights:
  - Must-have skill match:  2
  - Preferred skill match:  1
  score = round(100 × (2·must_matched + pref_matched) / (2·must_total + pref_total))
  100 when the job lists no skills at all.

Keyword matching is case-insensitive, whole-token, on normalized text.
Skill matching also goes through the synonym map ("K8s" matches "Kubernetes").
"""

from __future__ import annotations

import logging

from resume_tailor.models.jd_models import JobRequirements
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.models.tailor_models import ATSGapReport, ATSKeywordDiff
from resume_tailor.utils.synonym_map import find_matching_skill, get_all_forms, normalize_skill
from resume_tailor.utils.text_cleanup import count_keyword, normalize_for_comparison

logger = logging.getLogger(__name__)

# ── Weights ──────────────────────────────────────────────────────────────────

WEIGHTS = {
    "must_have": 2,
    "preferred": 1,
}


# ── Text Collection ──────────────────────────────────────────────────────────


def _comparable(text: str | None) -> str:
    return normalize_for_comparison(text).lower()


def resume_text(resume: ResumeJSON) -> str:
    """All searchable resume content as one normalized, lowercased blob."""
    parts: list[str] = []
    if resume.summary:
        parts.append(resume.summary)

    for exp in resume.experience:
        parts.append(exp.title)
        parts.extend(exp.bullets)
        parts.extend(exp.technologies)

    for proj in resume.projects:
        parts.append(proj.name)
        parts.append(proj.description)
        parts.extend(proj.technologies)
        if proj.achievement:
            parts.append(proj.achievement)

    for act in resume.activities:
        parts.append(act.role)
        parts.extend(act.bullets)

    for edu in resume.education:
        parts.append(edu.degree)
        if edu.field:
            parts.append(edu.field)
        parts.extend(edu.coursework or [])

    for group in resume.skills.groups:
        parts.extend(group.items)

    parts.extend(cert.name for cert in resume.certifications)

    # Newline keeps tokens from different fields from fusing
    return "\n".join(_comparable(p) for p in parts if p)


def _skill_terms(resume: ResumeJSON) -> list[str]:
    """Every listed skill item and technology, in resume order."""
    terms: list[str] = []
    for group in resume.skills.groups:
        terms.extend(group.items)
    for exp in resume.experience:
        terms.extend(exp.technologies)
    for proj in resume.projects:
        terms.extend(proj.technologies)
    return terms


def _unique(items: list[str], seen: set[str] | None = None) -> list[str]:
    """De-duplicate by normalized skill key, keeping first occurrence and order."""
    seen = set() if seen is None else seen
    out: list[str] = []
    for item in items:
        key = normalize_skill(item)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def _skill_present(skill: str, terms: list[str], text: str) -> bool:
    if find_matching_skill(skill, terms):
        return True
    return any(count_keyword(form, text) for form in get_all_forms(skill))


# ── Keyword Diff ─────────────────────────────────────────────────────────────


def _best_skill_rank(keyword: str, resume: ResumeJSON) -> int | None:
    """Lowest item index at which `keyword` appears in any skill group, or None."""
    best: int | None = None
    target = normalize_skill(keyword)
    for group in resume.skills.groups:
        for index, item in enumerate(group.items):
            if normalize_skill(item) == target or count_keyword(keyword, _comparable(item)):
                if best is None or index < best:
                    best = index
                break
    return best


def compute_keyword_diff(
    original: ResumeJSON,
    tailored: ResumeJSON,
    requirements: JobRequirements,
) -> ATSKeywordDiff:
    """
    Classify requirement keywords by how tailoring changed their presence.

    added      → absent from the original, present in the tailored resume
    removed    → present in the original, absent from the tailored resume
    emphasized → present in both, and the tailored resume mentions it more often,
                 newly mentions it in the summary, or lists it earlier in a skill group
    """
    original_text = resume_text(original)
    tailored_text = resume_text(tailored)
    original_summary = _comparable(original.summary)
    tailored_summary = _comparable(tailored.summary)

    added: list[str] = []
    removed: list[str] = []
    emphasized: list[str] = []

    for keyword in _unique(requirements.keywords):
        before = count_keyword(keyword, original_text)
        after = count_keyword(keyword, tailored_text)

        if after and not before:
            added.append(keyword)
        elif before and not after:
            removed.append(keyword)
        elif before and after:
            moved_to_summary = (
                count_keyword(keyword, tailored_summary) > 0
                and count_keyword(keyword, original_summary) == 0
            )
            rank_before = _best_skill_rank(keyword, original)
            rank_after = _best_skill_rank(keyword, tailored)
            rank_improved = rank_after is not None and (rank_before is None or rank_after < rank_before)

            if after > before or moved_to_summary or rank_improved:
                emphasized.append(keyword)

    if removed:
        logger.warning(f"Tailoring dropped {len(removed)} job keyword(s) present in the base resume: {removed}")

    return ATSKeywordDiff(added=added, removed=removed, emphasized=emphasized)


# ── Gap Report ───────────────────────────────────────────────────────────────


def coverage_score(must_matched: int, must_total: int, pref_matched: int, pref_total: int) -> int:
    """Weighted skill coverage, clamped to [0, 100]."""
    total = WEIGHTS["must_have"] * must_total + WEIGHTS["preferred"] * pref_total
    if total <= 0:
        return 100
    matched = WEIGHTS["must_have"] * must_matched + WEIGHTS["preferred"] * pref_matched
    return max(0, min(100, round(100 * matched / total)))


def compute_gap_report(resume: ResumeJSON, requirements: JobRequirements) -> ATSGapReport:
    """Which job requirements the resume does and doesn't demonstrably satisfy."""
    text = resume_text(resume)
    terms = _skill_terms(resume)

    seen: set[str] = set()
    must_have = _unique(requirements.must_have_skills, seen)
    # A skill listed as both must-have and preferred only counts as must-have
    preferred = _unique(requirements.preferred_skills, seen)

    matched_skills: list[str] = []
    missing_skills: list[str] = []
    for skill in must_have:
        if _skill_present(skill, terms, text):
            matched_skills.append(skill)
        else:
            missing_skills.append(skill)
    must_matched = len(matched_skills)

    pref_matched = 0
    for skill in preferred:
        if _skill_present(skill, terms, text):
            matched_skills.append(skill)
            pref_matched += 1

    missing_keywords = [kw for kw in _unique(requirements.keywords) if not count_keyword(kw, text)]

    score = coverage_score(must_matched, len(must_have), pref_matched, len(preferred))

    return ATSGapReport(
        missing_keywords=missing_keywords,
        matched_skills=matched_skills,
        missing_skills=missing_skills,
        coverage_score=score,
        suggestions=_build_suggestions(resume, missing_skills, missing_keywords),
    )


def _build_suggestions(resume: ResumeJSON, missing_skills: list[str], missing_keywords: list[str]) -> list[str]:
    """One line per missing must-have skill, then structural hints."""
    suggestions = [
        f"The job requires {skill}. If you have used it, add it to a relevant bullet, project, or your skills."
        for skill in missing_skills
    ]

    if not (resume.summary or "").strip():
        suggestions.append("Consider adding a short summary that names the role and your strongest matching skills.")
    if not resume.projects:
        suggestions.append("Consider a project section to show hands-on work with the job's technologies.")
    if not any(group.items for group in resume.skills.groups):
        suggestions.append("Add a skills section so applicant tracking systems can find your core technologies.")
    if missing_keywords:
        preview = ", ".join(missing_keywords[:5])
        suggestions.append(f"Where accurate, use the job's own wording for: {preview}.")

    return suggestions
