from enum import Enum
from typing import Optional

from resume_tailor.models.base import CamelModel


class DiffType(str, Enum):
    """Classification of a single diff line."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


class Emphasis(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


class WordToken(CamelModel):
    """One token of a split line; whitespace tokens are kept for exact reconstruction."""

    text: str
    emphasis: Optional[Emphasis] = None


class WordDiff(CamelModel):
    original: list[WordToken]
    tailored: list[WordToken]


class DiffLine(CamelModel):
    """A classified line. `original`/`tailored`/`highlight` are set only for modified lines."""

    type: DiffType
    content: str
    original: Optional[str] = None
    tailored: Optional[str] = None
    highlight: Optional[WordDiff] = None
    is_spacer: bool = False


class SectionDiff(CamelModel):
    name: str
    lines: list[DiffLine]
    has_changes: bool


class ResumeDiff(CamelModel):
    """Ordered per-section diff plus the aggregate changed-line count."""

    sections: list[SectionDiff]
    total_changes: int
