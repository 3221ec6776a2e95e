"""
Diff Service — section-aware comparison of two resumes for review.

Works on any pair of ResumeJSON values (tailored or hand-edited). Entries are
paired by position; strings are compared after normalize_for_comparison(), so
smart quotes, dashes and spacing never count as changes.

Section order: Summary, Education, Work Experience, Projects, Activities, Skills.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from resume_tailor.models.diff_models import (
    DiffLine,
    DiffType,
    Emphasis,
    ResumeDiff,
    SectionDiff,
    WordDiff,
    WordToken,
)
from resume_tailor.models.resume_models import (
    ActivityEntry,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeJSON,
    SkillGroup,
)
from resume_tailor.utils.text_cleanup import strings_equivalent

logger = logging.getLogger(__name__)

BULLET = "• "

_WHITESPACE_SPLIT = re.compile(r"(\s+)")


# ── Word Highlight ───────────────────────────────────────────────────────────


def _tokens(text: str) -> list[str]:
    return [t for t in _WHITESPACE_SPLIT.split(text) if t]


def word_diff(original: str, tailored: str) -> WordDiff:
    """
    Token highlight for a modified line.

    Set membership, not alignment: a word is marked only if it does not occur
    anywhere on the other side. Whitespace tokens are kept unmarked so each side
    joins back to its exact input.
    """
    original_tokens = _tokens(original)
    tailored_tokens = _tokens(tailored)
    original_words = {t for t in original_tokens if t.strip()}
    tailored_words = {t for t in tailored_tokens if t.strip()}

    def mark(tokens: list[str], other: set[str], emphasis: Emphasis) -> list[WordToken]:
        return [
            WordToken(text=t, emphasis=emphasis if t.strip() and t not in other else None)
            for t in tokens
        ]

    return WordDiff(
        original=mark(original_tokens, tailored_words, Emphasis.REMOVED),
        tailored=mark(tailored_tokens, original_words, Emphasis.ADDED),
    )


# ── Line Builders ────────────────────────────────────────────────────────────


def _compare(original: str, tailored: str, prefix: str = "") -> DiffLine:
    """Classify a line present on both sides."""
    if strings_equivalent(original, tailored):
        return DiffLine(type=DiffType.UNCHANGED, content=f"{prefix}{tailored}")
    return DiffLine(
        type=DiffType.MODIFIED,
        content=f"{prefix}{tailored}",
        original=original,
        tailored=tailored,
        highlight=word_diff(original, tailored),
    )


def _spacer() -> DiffLine:
    return DiffLine(type=DiffType.UNCHANGED, content="", is_spacer=True)


def _compare_lists(original: list[str], tailored: list[str], prefix: str = "") -> list[DiffLine]:
    """Positional pairing; extra positions on either side are removed / added."""
    lines: list[DiffLine] = []
    for i in range(max(len(original), len(tailored))):
        if i < len(original) and i < len(tailored):
            lines.append(_compare(original[i], tailored[i], prefix))
        elif i < len(original):
            lines.append(DiffLine(type=DiffType.REMOVED, content=f"{prefix}{original[i]}"))
        else:
            lines.append(DiffLine(type=DiffType.ADDED, content=f"{prefix}{tailored[i]}"))
    return lines


def _section(name: str, lines: list[DiffLine]) -> SectionDiff:
    return SectionDiff(
        name=name,
        lines=lines,
        has_changes=any(line.type != DiffType.UNCHANGED for line in lines),
    )


def _education_line(edu: EducationEntry) -> str:
    field = f", {edu.field}" if edu.field else ""
    return f"{edu.institution}, {edu.location or ''} | {edu.degree}{field} ({edu.end or ''})"


def _experience_header(exp: ExperienceEntry) -> str:
    return f"{exp.company}, {exp.location} | {exp.title} ({exp.start} – {exp.end})"


def _activity_header(act: ActivityEntry) -> str:
    return f"{act.organization} | {act.role} ({act.start or ''} – {act.end or ''})"


def _skill_line(group: SkillGroup) -> str:
    return f"{group.name}: {', '.join(group.items)}"


# ── Sections ─────────────────────────────────────────────────────────────────


def diff_summary(original: Optional[str], tailored: Optional[str]) -> SectionDiff:
    lines: list[DiffLine] = []
    if strings_equivalent(original, tailored):
        if tailored:
            lines.append(DiffLine(type=DiffType.UNCHANGED, content=tailored))
    elif original and tailored:
        lines.append(_compare(original, tailored))
    elif original:
        lines.append(DiffLine(type=DiffType.REMOVED, content=original))
    elif tailored:
        lines.append(DiffLine(type=DiffType.ADDED, content=tailored))
    return _section("Summary", lines)


def diff_education(original: list[EducationEntry], tailored: list[EducationEntry]) -> SectionDiff:
    return _section(
        "Education",
        _compare_lists([_education_line(e) for e in original], [_education_line(e) for e in tailored]),
    )


def diff_experience(original: list[ExperienceEntry], tailored: list[ExperienceEntry]) -> SectionDiff:
    lines: list[DiffLine] = []
    for i in range(max(len(original), len(tailored))):
        orig = original[i] if i < len(original) else None
        tail = tailored[i] if i < len(tailored) else None

        if orig is not None and tail is not None:
            lines.append(_compare(_experience_header(orig), _experience_header(tail)))
            lines.extend(_compare_lists(orig.bullets, tail.bullets, BULLET))
            lines.append(_spacer())
        elif orig is not None:
            lines.append(DiffLine(type=DiffType.REMOVED, content=f"{orig.company} - {orig.title}"))
        elif tail is not None:
            lines.append(DiffLine(type=DiffType.ADDED, content=f"{tail.company} - {tail.title}"))
    return _section("Work Experience", lines)


def diff_projects(original: list[ProjectEntry], tailored: list[ProjectEntry]) -> SectionDiff:
    lines: list[DiffLine] = []
    for i in range(max(len(original), len(tailored))):
        orig = original[i] if i < len(original) else None
        tail = tailored[i] if i < len(tailored) else None

        if orig is not None and tail is not None:
            lines.append(_compare(orig.name, tail.name))
            lines.append(_compare(f"{BULLET}{orig.description}", f"{BULLET}{tail.description}"))
            lines.append(_spacer())
        elif orig is not None:
            lines.append(DiffLine(type=DiffType.REMOVED, content=orig.name))
            lines.append(DiffLine(type=DiffType.REMOVED, content=f"{BULLET}{orig.description}"))
        elif tail is not None:
            lines.append(DiffLine(type=DiffType.ADDED, content=tail.name))
            lines.append(DiffLine(type=DiffType.ADDED, content=f"{BULLET}{tail.description}"))
    return _section("Projects", lines)


def diff_activities(original: list[ActivityEntry], tailored: list[ActivityEntry]) -> SectionDiff:
    lines: list[DiffLine] = []
    for i in range(max(len(original), len(tailored))):
        orig = original[i] if i < len(original) else None
        tail = tailored[i] if i < len(tailored) else None

        if orig is not None and tail is not None:
            lines.append(_compare(_activity_header(orig), _activity_header(tail)))
            lines.extend(_compare_lists(orig.bullets, tail.bullets, BULLET))
            lines.append(_spacer())
        elif orig is not None:
            lines.append(DiffLine(type=DiffType.REMOVED, content=f"{orig.organization} - {orig.role}"))
        elif tail is not None:
            lines.append(DiffLine(type=DiffType.ADDED, content=f"{tail.organization} - {tail.role}"))
    return _section("Activities", lines)


def diff_skills(original: list[SkillGroup], tailored: list[SkillGroup]) -> SectionDiff:
    return _section(
        "Skills",
        _compare_lists([_skill_line(g) for g in original], [_skill_line(g) for g in tailored]),
    )


# ── Public API ───────────────────────────────────────────────────────────────


def diff_resumes(original: ResumeJSON, tailored: ResumeJSON, only_changes: bool = False) -> ResumeDiff:
    """Per-section diff of two resumes plus the total number of changed lines."""
    sections = [
        diff_summary(original.summary, tailored.summary),
        diff_education(original.education, tailored.education),
        diff_experience(original.experience, tailored.experience),
        diff_projects(original.projects, tailored.projects),
        diff_activities(original.activities, tailored.activities),
        diff_skills(original.skills.groups, tailored.skills.groups),
    ]
    if only_changes:
        sections = [s for s in sections if s.has_changes]

    total = sum(1 for s in sections for line in s.lines if line.type != DiffType.UNCHANGED)
    logger.debug(f"Resume diff: {total} change(s) across {sum(s.has_changes for s in sections)} section(s)")
    return ResumeDiff(sections=sections, total_changes=total)
