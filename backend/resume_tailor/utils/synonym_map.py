"""
Skill synonyms — decide whether two skill names mean the same thing.

data/skill_synonyms.json maps a canonical name to its aliases ("kubernetes": ["k8s", "kube"]).
Every name is reduced to a format key first (NFKC, ASCII quotes, single spaces,
lowercase), then aliases collapse onto their canonical key.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, NamedTuple

from resume_tailor.utils.text_cleanup import normalize_for_comparison

logger = logging.getLogger(__name__)

SYNONYM_FILE = Path(__file__).resolve().parents[3] / "data" / "skill_synonyms.json"


class SynonymTable(NamedTuple):
    aliases: dict[str, frozenset[str]]  # canonical key → alias keys
    canonical: dict[str, str]  # alias key → canonical key


def format_key(skill: str) -> str:
    """'  Node.JS, ' → 'node.js'. Synonyms are not applied here."""
    return normalize_for_comparison(skill).lower().strip(" ,;:")


@lru_cache(maxsize=1)
def load_synonyms(path: Path = SYNONYM_FILE) -> SynonymTable:
    """Read the synonym file once. A missing or broken file leaves matching format-only."""
    try:
        raw: dict[str, list[str]] = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Skill synonyms unavailable ({path}): {e}")
        return SynonymTable({}, {})

    aliases: dict[str, frozenset[str]] = {}
    canonical: dict[str, str] = {}
    for name, names in raw.items():
        if name.startswith("_"):
            continue
        key = format_key(name)
        aliases[key] = frozenset(format_key(a) for a in names)
        canonical.update((alias, key) for alias in aliases[key])

    logger.debug(f"Loaded {len(aliases)} canonical skills from {path.name}")
    return SynonymTable(aliases, canonical)


def normalize_skill(skill: str) -> str:
    """Canonical key for a skill name ('K8s' → 'kubernetes', 'Rust' → 'rust')."""
    key = format_key(skill)
    return load_synonyms().canonical.get(key, key)


def skills_match(skill_a: str, skill_b: str) -> bool:
    return normalize_skill(skill_a) == normalize_skill(skill_b)


def find_matching_skill(target: str, candidates: Iterable[str]) -> str | None:
    """First candidate naming the same skill as `target`, as written in the candidate list."""
    wanted = normalize_skill(target)
    return next((c for c in candidates if normalize_skill(c) == wanted), None)


def get_all_forms(skill: str) -> set[str]:
    """Every key the skill may appear under in text: as written, canonical, and all aliases."""
    canonical = normalize_skill(skill)
    forms = {canonical, format_key(skill)} | load_synonyms().aliases.get(canonical, frozenset())
    forms.discard("")
    return forms
