"""Tests for the LiteLLM wrapper and the LiteLLM-backed text backend."""

import asyncio
import json
from types import SimpleNamespace

import pytest

from resume_tailor.exceptions import SchemaValidationError, TailoringOutputInvalidError, UpstreamUnavailableError
from resume_tailor.services import backend as backend_module
from resume_tailor.services import llm_service
from resume_tailor.services.backend import LiteLLMBackend

from conftest import SAMPLE_PROFILE, SAMPLE_REQUIREMENTS, SAMPLE_RESUME


def _response(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=None,
    )


@pytest.fixture
def fake_completion(monkeypatch):
    """Replace litellm.acompletion; returns the list of captured kwargs."""
    state = {"content": "{}", "error": None, "delay": 0.0, "calls": []}

    async def acompletion(**kwargs):
        state["calls"].append(kwargs)
        if state["delay"]:
            await asyncio.sleep(state["delay"])
        if state["error"]:
            raise state["error"]
        return _response(state["content"])

    monkeypatch.setattr(llm_service, "acompletion", acompletion)
    return state


def _complete_json(**overrides):
    kwargs = dict(
        provider="groq",
        model_key="llama-3.3-70b",
        api_key="test-key",
        messages=[{"role": "user", "content": "hi"}],
        prompt_name="requirements_extractor",
    )
    kwargs.update(overrides)
    return llm_service.complete_json(**kwargs)


# ── Helpers ──────────────────────────────────────────────────────────────────


def test_resolve_model_id():
    assert llm_service.resolve_model_id("groq", "llama-3.3-70b") == "groq/llama-3.3-70b-versatile"
    with pytest.raises(ValueError):
        llm_service.resolve_model_id("groq", "nope")
    with pytest.raises(ValueError):
        llm_service.resolve_model_id("nope", "llama-3.3-70b")


def test_extract_json_object_handles_fences():
    assert llm_service.extract_json_object('{"a": 1}') == {"a": 1}
    assert llm_service.extract_json_object('Here you go:\n```json\n{"a": 1}\n```') == {"a": 1}
    assert llm_service.extract_json_object('```\n{"a": 2}\n```') == {"a": 2}
    with pytest.raises(ValueError):
        llm_service.extract_json_object("not json at all")


# ── Completion ───────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_complete_json_uses_prompt_config(fake_completion):
    fake_completion["content"] = '{"mustHaveSkills": ["Python"]}'

    data = await _complete_json()

    assert data == {"mustHaveSkills": ["Python"]}
    call = fake_completion["calls"][0]
    assert call["model"] == "groq/llama-3.3-70b-versatile"
    assert call["temperature"] == 0.1
    assert call["api_key"] == "test-key"
    assert call["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_non_json_response_is_schema_error(fake_completion):
    fake_completion["content"] = "Sorry, I can't help with that."
    with pytest.raises(SchemaValidationError):
        await _complete_json()

    fake_completion["content"] = "[1, 2, 3]"
    with pytest.raises(SchemaValidationError):
        await _complete_json()


@pytest.mark.asyncio
async def test_provider_error_is_upstream_unavailable(fake_completion):
    fake_completion["error"] = ConnectionError("connection refused")

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await _complete_json()

    assert exc_info.value.status_code == 503
    assert exc_info.value.operation == "requirements_extractor"


@pytest.mark.asyncio
async def test_timeout_is_upstream_unavailable(fake_completion):
    fake_completion["delay"] = 1.0

    with pytest.raises(UpstreamUnavailableError):
        await _complete_json(timeout=0.01)


@pytest.mark.asyncio
async def test_empty_response_is_upstream_unavailable(fake_completion):
    fake_completion["content"] = ""

    with pytest.raises(UpstreamUnavailableError):
        await _complete_json()


# ── LiteLLMBackend ───────────────────────────────────────────────────────────


def _backend():
    return LiteLLMBackend(provider="groq", model_key="llama-3.3-70b", api_key="test-key", timeout=5)


def test_unknown_model_rejected():
    with pytest.raises(ValueError):
        LiteLLMBackend(provider="groq", model_key="gpt-17")


@pytest.mark.asyncio
async def test_extract_requirements(fake_completion):
    fake_completion["content"] = json.dumps(SAMPLE_REQUIREMENTS)

    reqs = await _backend().extract_requirements("We need a Python engineer ...")

    assert reqs.must_have_skills == ["Python", "React", "Kubernetes"]
    assert "We need a Python engineer" in fake_completion["calls"][0]["messages"][1]["content"]


@pytest.mark.asyncio
async def test_extract_requirements_wrong_shape(fake_completion):
    fake_completion["content"] = json.dumps({"mustHaveSkills": "Python"})

    with pytest.raises(SchemaValidationError):
        await _backend().extract_requirements("We need a Python engineer ...")


@pytest.mark.asyncio
async def test_tailor_reads_wrapped_or_bare_resume(fake_completion, base_resume, requirements):
    fake_completion["content"] = json.dumps({"tailoredResume": SAMPLE_RESUME})
    result = await _backend().tailor(base_resume, requirements)
    assert result.tailored_resume.header.name == "Jane Doe"

    fake_completion["content"] = json.dumps(SAMPLE_RESUME)
    result = await _backend().tailor(base_resume, requirements)
    assert result.tailored_resume.experience[0].company == "Acme Corp"


@pytest.mark.asyncio
async def test_tailor_invalid_output(fake_completion, base_resume, requirements):
    fake_completion["content"] = json.dumps({"notes": "no resume here"})
    with pytest.raises(TailoringOutputInvalidError):
        await _backend().tailor(base_resume, requirements)

    broken = dict(SAMPLE_RESUME, experience=[{"company": 42}])
    fake_completion["content"] = json.dumps({"tailoredResume": broken})
    with pytest.raises(TailoringOutputInvalidError) as exc_info:
        await _backend().tailor(base_resume, requirements)
    assert exc_info.value.violations[0].startswith("schema: experience.0.company")

    fake_completion["content"] = "not json"
    with pytest.raises(TailoringOutputInvalidError):
        await _backend().tailor(base_resume, requirements)


@pytest.mark.asyncio
async def test_parse_freeform_text(fake_completion):
    fake_completion["content"] = json.dumps(SAMPLE_RESUME)
    resume = await _backend().parse_freeform_resume_text("Jane Doe ...")
    assert resume.header.name == "Jane Doe"

    fake_completion["content"] = json.dumps(SAMPLE_PROFILE)
    profile = await _backend().parse_freeform_profile_text("Jane Doe ...")
    assert profile.full_name == "Jane Doe"
    assert profile.experience[0].current is True


def test_backend_is_created_once():
    backend_module.reset_backend()
    try:
        first = backend_module.get_backend()
        assert backend_module.get_backend() is first
        backend_module.reset_backend()
        assert backend_module.get_backend() is not first
    finally:
        backend_module.reset_backend()
