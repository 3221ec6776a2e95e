"""
Resume Service — base resumes parsed from pasted text.

Responsibilities:
  • Clean up pasted resume text
  • Send it to the text backend for structured extraction
  • Persist the parsed ResumeJSON as a base resume for the user
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from resume_tailor.exceptions import NotFoundError, ValidationError
from resume_tailor.models.resume_models import BaseResume
from resume_tailor.services.backend import TextBackend
from resume_tailor.services.store import Store
from resume_tailor.utils.text_cleanup import normalize_text

logger = logging.getLogger(__name__)


# ── Public API ───────────────────────────────────────────────────────────────


async def parse_base_resume(
    *,
    user_id: str,
    text: str,
    backend: TextBackend,
    store: Store,
) -> BaseResume:
    """Parse freeform resume text into a stored base resume."""
    if not text or not text.strip():
        raise ValidationError("Resume text is required.")

    raw_text = normalize_text(text)
    logger.info(f"Parsing base resume text ({len(raw_text)} chars) for user {user_id}")

    parsed = await backend.parse_freeform_resume_text(raw_text)

    record = BaseResume(
        id=str(uuid.uuid4()),
        user_id=user_id,
        raw_text=raw_text,
        parsed_resume_json=parsed,
        created_at=datetime.now(timezone.utc),
    )
    store.save_base_resume(record)
    logger.info(
        f"Saved base resume: id={record.id} name={parsed.header.name or '?'} "
        f"experience={len(parsed.experience)} education={len(parsed.education)}"
    )
    return record


def get_base_resume(user_id: str, resume_id: str, store: Store) -> BaseResume:
    """Fetch a base resume owned by `user_id`. Raises NotFoundError."""
    record = store.get_base_resume(user_id, resume_id)
    if record is None:
        raise NotFoundError("base_resume", resume_id)
    return record
