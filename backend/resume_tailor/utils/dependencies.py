"""
Request-scoped helpers — resolve the calling user and the shared collaborators.
"""

from __future__ import annotations

from fastapi import Header
from typing import Optional

from resume_tailor.exceptions import ValidationError
from resume_tailor.services.backend import TextBackend, get_backend
from resume_tailor.services.store import Store, get_store


async def get_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> str:
    """
    FastAPI dependency that reads the authenticated user id.
    Authentication happens upstream; this service only trusts the forwarded header.
    """
    if not x_user_id or not x_user_id.strip():
        raise ValidationError("Missing user identity. Sign in and try again.")
    return x_user_id.strip()


async def store_dependency() -> Store:
    """FastAPI dependency for the persistence collaborator."""
    return get_store()


async def backend_dependency() -> TextBackend:
    """FastAPI dependency for the configured text-understanding backend."""
    return get_backend()
