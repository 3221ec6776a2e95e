"""
Text Backend — the single capability interface to the text-understanding service.

Operations:
  • extract_requirements(jd_text)          → JobRequirements
  • tailor(base_resume, requirements)      → TailoringResult (tailored resume only; analysis is derived later)
  • parse_freeform_resume_text(text)       → ResumeJSON
  • parse_freeform_profile_text(text)      → UserProfile

One implementation is selected from settings and created lazily on first use.
After creation the handle is read-only and shared by every request; reset_backend()
drops it (tests, reconfiguration).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from resume_tailor.config import MODELS, PROVIDER_KEY_SETTINGS, settings
from resume_tailor.exceptions import SchemaValidationError, TailoringOutputInvalidError
from resume_tailor.models.jd_models import JobRequirements
from resume_tailor.models.profile_models import UserProfile
from resume_tailor.models.resume_models import ResumeJSON
from resume_tailor.models.tailor_models import TailoringResult
from resume_tailor.prompts import jd_parser, profile_extractor, resume_extractor, tailor_resume
from resume_tailor.services.llm_service import complete_json
from resume_tailor.services.schema_validation import (
    validate_job_requirements,
    validate_resume_json,
    validate_user_profile,
)

logger = logging.getLogger(__name__)


class TextBackend(Protocol):
    """Capability interface consumed by the core. Implementations must return validated models."""

    async def extract_requirements(self, jd_text: str) -> JobRequirements: ...

    async def tailor(self, base_resume: ResumeJSON, requirements: JobRequirements) -> TailoringResult: ...

    async def parse_freeform_resume_text(self, text: str) -> ResumeJSON: ...

    async def parse_freeform_profile_text(self, text: str) -> UserProfile: ...


# ── LiteLLM Implementation ───────────────────────────────────────────────────


class LiteLLMBackend:
    """TextBackend backed by a chat model reached through LiteLLM."""

    def __init__(
        self,
        provider: str,
        model_key: str,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        if provider not in MODELS or model_key not in MODELS[provider]:
            raise ValueError(f"Unsupported LLM model: {provider}/{model_key}")
        self.provider = provider
        self.model_key = model_key
        self.api_key = api_key
        self.timeout = timeout

    async def _complete_json(self, prompt_name: str, system: str, user: str) -> dict[str, Any]:
        return await complete_json(
            provider=self.provider,
            model_key=self.model_key,
            api_key=self.api_key,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            prompt_name=prompt_name,
            timeout=self.timeout,
        )

    async def extract_requirements(self, jd_text: str) -> JobRequirements:
        data = await self._complete_json(
            "requirements_extractor",
            jd_parser.SYSTEM_PROMPT,
            jd_parser.USER_PROMPT_TEMPLATE.format(jd_text=jd_text),
        )
        return validate_job_requirements(data, source="requirements_extractor")

    async def tailor(self, base_resume: ResumeJSON, requirements: JobRequirements) -> TailoringResult:
        user_prompt = tailor_resume.USER_PROMPT_TEMPLATE.format(
            role_category=requirements.role_category or "unspecified",
            seniority=requirements.seniority_level or "unspecified",
            must_have_skills=", ".join(requirements.must_have_skills) or "none",
            preferred_skills=", ".join(requirements.preferred_skills) or "none",
            keywords=", ".join(requirements.keywords) or "none",
            responsibilities="; ".join(requirements.responsibilities[:8]) or "none",
            base_resume_json=json.dumps(base_resume.model_dump(by_alias=True), indent=2, ensure_ascii=False),
        )

        try:
            data = await self._complete_json("tailor_resume", tailor_resume.SYSTEM_PROMPT, user_prompt)
        except SchemaValidationError as e:
            raise TailoringOutputInvalidError(["response is not a JSON object"], cause=e) from e

        # Some models return the resume itself instead of wrapping it
        raw_resume = data.get("tailoredResume", data if "header" in data else None)
        if raw_resume is None:
            raise TailoringOutputInvalidError(["response has no tailoredResume"])

        try:
            tailored = validate_resume_json(raw_resume, source="tailor_resume")
        except SchemaValidationError as e:
            violations = [f"schema: {'.'.join(map(str, err['loc']))} {err['msg']}" for err in e.errors]
            raise TailoringOutputInvalidError(violations, cause=e) from e

        return TailoringResult(tailored_resume=tailored)

    async def parse_freeform_resume_text(self, text: str) -> ResumeJSON:
        data = await self._complete_json(
            "resume_extractor",
            resume_extractor.SYSTEM_PROMPT,
            resume_extractor.USER_PROMPT_TEMPLATE.format(resume_text=text),
        )
        return validate_resume_json(data, source="resume_extractor")

    async def parse_freeform_profile_text(self, text: str) -> UserProfile:
        data = await self._complete_json(
            "profile_extractor",
            profile_extractor.SYSTEM_PROMPT,
            profile_extractor.USER_PROMPT_TEMPLATE.format(resume_text=text),
        )
        return validate_user_profile(data, source="profile_extractor")


# ── Process-wide Handle ──────────────────────────────────────────────────────

_backend: TextBackend | None = None


def create_backend() -> TextBackend:
    """Build the backend named by settings.llm_provider / settings.llm_model_key."""
    provider = settings.llm_provider.lower()
    key_attr = PROVIDER_KEY_SETTINGS.get(provider)
    api_key = getattr(settings, key_attr) if key_attr else None
    return LiteLLMBackend(
        provider=provider,
        model_key=settings.llm_model_key,
        api_key=api_key,
        timeout=settings.llm_timeout_seconds,
    )


def get_backend() -> TextBackend:
    """Return the shared backend, creating it on first use."""
    global _backend
    if _backend is None:
        _backend = create_backend()
        logger.info(f"Text backend initialized: {settings.llm_provider}/{settings.llm_model_key}")
    return _backend


def reset_backend() -> None:
    """Drop the shared backend so the next get_backend() rebuilds it from settings."""
    global _backend
    _backend = None
