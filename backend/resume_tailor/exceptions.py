"""
Error taxonomy for the tailoring pipeline.

Every error carries:
  • message      — internal description (logged, never shown as primary text)
  • user_message — short corrective text safe to return to the end user
  • details      — structured context (field paths, counts, ids)
  • cause        — the underlying exception, if any

The API layer maps `kind` / `status_code` to the response envelope.
"""

from __future__ import annotations

from typing import Any, Optional


class TailorError(Exception):
    """Base class for all pipeline errors."""

    kind: str = "internal_error"
    status_code: int = 500
    default_user_message: str = "Something went wrong. Please try again."

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message

    def to_response(self) -> dict[str, Any]:
        return {"error": self.user_message, "kind": self.kind}


class ValidationError(TailorError):
    """Caller-supplied input fails a structural or length precondition."""

    kind = "validation_error"
    status_code = 400
    default_user_message = "The request is missing required information."

    def __init__(self, message: str, **kwargs: Any):
        # Input problems are the user's to fix, so the message doubles as the user message
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)


class SchemaValidationError(TailorError):
    """A value that should be ResumeJSON / JobRequirements / UserProfile has the wrong shape."""

    kind = "schema_validation_error"
    status_code = 422
    default_user_message = "The data could not be read in the expected format."

    def __init__(self, source: str, errors: list[dict[str, Any]], cause: Optional[BaseException] = None):
        super().__init__(
            f"{source} failed shape validation with {len(errors)} error(s)",
            details={"source": source, "errors": errors},
            cause=cause,
        )
        self.source = source
        self.errors = errors


class TailoringOutputInvalidError(TailorError):
    """Tailoring output violated the non-fabrication or structural-parity invariants."""

    kind = "tailoring_output_invalid"
    status_code = 502
    default_user_message = "The tailored resume did not pass our accuracy checks. Please try again."

    def __init__(self, violations: list[str], cause: Optional[BaseException] = None):
        preview = "; ".join(violations[:5])
        super().__init__(
            f"Tailoring output rejected: {preview}",
            details={"violations": violations},
            cause=cause,
        )
        self.violations = violations


class UpstreamUnavailableError(TailorError):
    """The text-understanding backend is unreachable, timed out, or failed at transport level."""

    kind = "upstream_unavailable"
    status_code = 503
    default_user_message = "The resume assistant is temporarily unavailable. Please try again shortly."

    def __init__(self, operation: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"Backend call '{operation}' failed: {reason}",
            details={"operation": operation, "reason": reason},
            cause=cause,
        )
        self.operation = operation


class NotFoundError(TailorError):
    """A referenced base resume, job, profile, or tailored resume does not exist for this user."""

    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        label = entity.replace("_", " ")
        super().__init__(
            f"{entity} '{entity_id}' not found" if entity_id else f"{entity} not found",
            user_message=f"{label.capitalize()} not found.",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
