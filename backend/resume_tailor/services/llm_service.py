"""
LLM Service — chat completions through LiteLLM for every configured provider.

  • model ids come from the MODELS registry, sampling defaults from PROMPT_CONFIG
  • every call is bounded by a caller-supplied timeout
  • transport failures of any kind surface as UpstreamUnavailableError
  • complete_json() requests JSON mode and tolerates markdown code fences
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any

import litellm
from litellm import acompletion

from resume_tailor.config import MODELS, PROMPT_CONFIG
from resume_tailor.exceptions import SchemaValidationError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

litellm.suppress_debug_info = True

DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 1500

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


# ── Helpers ──────────────────────────────────────────────────────────────────


def resolve_model_id(provider: str, model_key: str) -> str:
    """LiteLLM model id for a registry entry. Raises ValueError for unknown pairs."""
    try:
        return MODELS[provider][model_key]["model_id"]
    except KeyError:
        raise ValueError(f"Unknown model '{model_key}' for provider '{provider}'") from None


def extract_json_object(raw: str) -> Any:
    """
    Parse a model response as JSON, falling back to the first fenced block.
    Raises ValueError if nothing parses.
    """
    text = raw.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    match = _FENCED_BLOCK.search(text)
    if match:
        try:
            return json.loads(match.group(1).strip())
        except json.JSONDecodeError:
            pass

    raise ValueError(f"Response is not JSON: {text[:200]}...")


def _sampling(prompt_name: str | None, temperature: float | None, max_tokens: int | None) -> tuple[float, int]:
    defaults = PROMPT_CONFIG.get(prompt_name or "", {})
    return (
        temperature if temperature is not None else defaults.get("temperature", DEFAULT_TEMPERATURE),
        max_tokens if max_tokens is not None else defaults.get("max_tokens", DEFAULT_MAX_TOKENS),
    )


# ── Core Completion ──────────────────────────────────────────────────────────


async def complete(
    *,
    provider: str,
    model_key: str,
    api_key: str | None,
    messages: list[dict[str, str]],
    prompt_name: str | None = None,
    temperature: float | None = None,
    max_tokens: int | None = None,
    json_mode: bool = False,
    timeout: float | None = None,
) -> str:
    """
    Send one chat completion and return the assistant text.

    `prompt_name` selects the PROMPT_CONFIG defaults and names the operation in
    logs and errors; explicit `temperature` / `max_tokens` win over it.

    Raises:
        UpstreamUnavailableError: provider error, timeout, or empty response.
    """
    model_id = resolve_model_id(provider, model_key)
    operation = prompt_name or "completion"
    temp, tokens = _sampling(prompt_name, temperature, max_tokens)

    request: dict[str, Any] = {
        "model": model_id,
        "messages": messages,
        "temperature": temp,
        "max_tokens": tokens,
    }
    if api_key:
        request["api_key"] = api_key
    if json_mode:
        request["response_format"] = {"type": "json_object"}

    logger.info(f"LLM call: op={operation} model={model_id} temp={temp} tokens={tokens}")

    try:
        response = await asyncio.wait_for(acompletion(**request), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"LLM timeout ({operation}, {model_id}) after {timeout}s")
        raise UpstreamUnavailableError(operation, f"timed out after {timeout}s", cause=e) from e
    except Exception as e:
        # LiteLLM raises its own types for auth, rate-limit and connection failures
        logger.error(f"LLM error ({operation}, {model_id}): {e}")
        raise UpstreamUnavailableError(operation, type(e).__name__, cause=e) from e

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise UpstreamUnavailableError(operation, "empty response")

    logger.info(f"LLM response: op={operation} {len(content)} chars, usage={getattr(response, 'usage', None)}")
    return content


async def complete_json(**kwargs: Any) -> dict[str, Any]:
    """
    complete() in JSON mode, parsed into a dict. Takes the same keyword arguments.

    Raises:
        SchemaValidationError: the response is not a JSON object.
        UpstreamUnavailableError: as for complete().
    """
    raw = await complete(**kwargs, json_mode=True)
    source = kwargs.get("prompt_name") or "completion"

    try:
        data = extract_json_object(raw)
    except ValueError as e:
        raise SchemaValidationError(source, [{"loc": [], "msg": "response is not valid JSON"}], cause=e) from e

    if not isinstance(data, dict):
        raise SchemaValidationError(source, [{"loc": [], "msg": f"expected a JSON object, got {type(data).__name__}"}])
    return data
