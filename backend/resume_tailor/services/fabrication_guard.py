"""
Fabrication Guard — checks a tailored resume against its base.

Two rule sets:
  • Structural parity — same number of entries per section, same skill groups,
    bullet / skill-item / technology counts never grow, a summary exists iff the base has one.
  • Non-fabrication — every identity field (names, organizations, titles, degrees,
    locations, dates, links, certifications, languages) is unchanged after
    normalization, in original order.

Free text that may change: summary wording, bullets, project descriptions, the order of
technologies, and the phrasing of skill items.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from pydantic import BaseModel

from resume_tailor.exceptions import TailoringOutputInvalidError
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.utils.synonym_map import skills_match
from resume_tailor.utils.text_cleanup import normalize_for_comparison, strings_equivalent

logger = logging.getLogger(__name__)

# Fields that must survive tailoring verbatim, per entry type
IDENTITY_FIELDS: dict[str, tuple[str, ...]] = {
    "education": ("institution", "degree", "field", "location", "start", "end", "gpa", "honors"),
    "experience": ("company", "title", "location", "start", "end"),
    "projects": ("name", "url", "date", "achievement"),
    "activities": ("organization", "role", "start", "end"),
    "certifications": ("name", "issuer", "date", "expiry", "url"),
    "languages": ("name", "proficiency"),
}

HEADER_FIELDS = ("name", "email", "phone", "location")
STUDY_ABROAD_FIELDS = ("institution", "location", "program", "start", "end")

# Skill tokens keep "c++" and "c#" whole
_TOKEN = re.compile(r"[a-z0-9+#]+")


def _key(value: Any) -> str:
    return normalize_for_comparison(value).lower()


def _compare_fields(
    path: str,
    base: BaseModel,
    tailored: BaseModel,
    fields: Sequence[str],
    violations: list[str],
) -> None:
    for field in fields:
        if not strings_equivalent(getattr(base, field), getattr(tailored, field)):
            violations.append(f"{path}.{field} changed")


def _check_count(path: str, base_len: int, tailored_len: int, violations: list[str], *, may_shrink: bool = False) -> bool:
    if tailored_len == base_len or (may_shrink and tailored_len < base_len):
        return True
    expected = f"at most {base_len}" if may_shrink else str(base_len)
    violations.append(f"{path}: expected {expected} entries, got {tailored_len}")
    return False


def _check_technologies(path: str, base: list[str], tailored: list[str], violations: list[str]) -> None:
    if not _check_count(path, len(base), len(tailored), violations, may_shrink=True):
        return
    allowed = {_key(t) for t in base}
    for tech in tailored:
        if _key(tech) not in allowed:
            violations.append(f"{path}: '{tech}' is not in the original list")


def _tokens(key: str) -> set[str]:
    return set(_TOKEN.findall(key))


def _is_rephrasing(item: str, base_items: list[str]) -> bool:
    """
    Same skill as some original item: equal after normalization, a known synonym,
    or a shortened form whose tokens all come from the original ("Python 3" → "Python").
    """
    key = _key(item)
    tokens = _tokens(key)
    for original in base_items:
        if key == _key(original) or skills_match(item, original):
            return True
        if tokens and tokens <= _tokens(_key(original)):
            return True
    return False


def find_violations(base: ResumeJSON, tailored: ResumeJSON) -> list[str]:
    """Every parity / non-fabrication violation in `tailored`, as short readable paths."""
    violations: list[str] = []

    # Header
    _compare_fields("header", base.header, tailored.header, HEADER_FIELDS, violations)
    if _check_count("header.links", len(base.header.links), len(tailored.header.links), violations):
        for i, (b, t) in enumerate(zip(base.header.links, tailored.header.links)):
            _compare_fields(f"header.links[{i}]", b, t, ("type", "url"), violations)

    # Summary may be rewritten, never invented or dropped
    had_summary = bool((base.summary or "").strip())
    has_summary = bool((tailored.summary or "").strip())
    if has_summary and not had_summary:
        violations.append("summary: added where the original had none")
    elif had_summary and not has_summary:
        violations.append("summary: removed")

    # Entry sections
    for section, fields in IDENTITY_FIELDS.items():
        base_entries = getattr(base, section)
        tailored_entries = getattr(tailored, section)
        if not _check_count(section, len(base_entries), len(tailored_entries), violations):
            continue
        for i, (b, t) in enumerate(zip(base_entries, tailored_entries)):
            _compare_fields(f"{section}[{i}]", b, t, fields, violations)

    # Per-entry details that aren't plain identity strings
    if len(base.education) == len(tailored.education):
        for i, (b, t) in enumerate(zip(base.education, tailored.education)):
            if [_key(c) for c in b.coursework or []] != [_key(c) for c in t.coursework or []]:
                violations.append(f"education[{i}].coursework changed")
            if (b.study_abroad is None) != (t.study_abroad is None):
                violations.append(f"education[{i}].studyAbroad added or removed")
            elif b.study_abroad and t.study_abroad:
                _compare_fields(f"education[{i}].studyAbroad", b.study_abroad, t.study_abroad, STUDY_ABROAD_FIELDS, violations)

    if len(base.experience) == len(tailored.experience):
        for i, (b, t) in enumerate(zip(base.experience, tailored.experience)):
            _check_count(f"experience[{i}].bullets", len(b.bullets), len(t.bullets), violations, may_shrink=True)
            _check_technologies(f"experience[{i}].technologies", b.technologies, t.technologies, violations)

    if len(base.projects) == len(tailored.projects):
        for i, (b, t) in enumerate(zip(base.projects, tailored.projects)):
            _check_technologies(f"projects[{i}].technologies", b.technologies, t.technologies, violations)

    if len(base.activities) == len(tailored.activities):
        for i, (b, t) in enumerate(zip(base.activities, tailored.activities)):
            _check_count(f"activities[{i}].bullets", len(b.bullets), len(t.bullets), violations, may_shrink=True)

    # Skills: same groups in the same order, items may be re-phrased but not added
    base_groups = base.skills.groups
    tailored_groups = tailored.skills.groups
    if _check_count("skills.groups", len(base_groups), len(tailored_groups), violations):
        for i, (b, t) in enumerate(zip(base_groups, tailored_groups)):
            _compare_fields(f"skills.groups[{i}]", b, t, ("name",), violations)
            if _check_count(f"skills.groups[{i}].items", len(b.items), len(t.items), violations, may_shrink=True):
                for item in t.items:
                    if not _is_rephrasing(item, b.items):
                        violations.append(f"skills.groups[{i}].items: '{item}' is not in the original group")

    return violations


def ensure_faithful(base: ResumeJSON, tailored: ResumeJSON) -> None:
    """Raise TailoringOutputInvalidError if `tailored` breaks parity or invents facts."""
    violations = find_violations(base, tailored)
    if violations:
        logger.warning(f"Tailored resume rejected with {len(violations)} violation(s): {violations[:5]}")
        raise TailoringOutputInvalidError(violations)
