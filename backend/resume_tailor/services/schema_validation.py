"""
Schema Validation — strict shape checks at every boundary.

Anything claiming to be a ResumeJSON / JobRequirements / UserProfile passes
through here, whether it came from the text backend, from storage, or from a
projection. Missing text defaults to "" and missing lists to []; values of the
wrong type are rejected, never coerced.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import pydantic

from resume_tailor.exceptions import SchemaValidationError
from resume_tailor.models.jd_models import JobRequirements
from resume_tailor.models.profile_models import UserProfile
from resume_tailor.models.resume_models import ResumeJSON

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def validate_model(model: type[ModelT], data: Any, source: str) -> ModelT:
    """Validate `data` against any wire model. Raises SchemaValidationError."""
    if isinstance(data, model):
        # Round-trip so instances assembled in code get the same checks as raw dicts
        data = data.model_dump(by_alias=True)
    if not isinstance(data, dict):
        raise SchemaValidationError(
            source,
            [{"loc": [], "msg": f"expected an object, got {type(data).__name__}"}],
        )
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        logger.warning(f"{model.__name__} from {source} rejected: {len(errors)} error(s), first={errors[0]}")
        raise SchemaValidationError(source, errors, cause=e) from e


def validate_resume_json(data: Any, source: str = "resume") -> ResumeJSON:
    """Validate a ResumeJSON candidate. Raises SchemaValidationError."""
    return validate_model(ResumeJSON, data, source)


def validate_job_requirements(data: Any, source: str = "job_requirements") -> JobRequirements:
    """Validate a JobRequirements candidate. Raises SchemaValidationError."""
    return validate_model(JobRequirements, data, source)


def validate_user_profile(data: Any, source: str = "user_profile") -> UserProfile:
    """Validate a UserProfile candidate. Raises SchemaValidationError."""
    return validate_model(UserProfile, data, source)
