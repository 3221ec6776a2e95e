"""Tests for job-posting extraction and base resume parsing."""

import pytest

from resume_tailor.exceptions import NotFoundError, SchemaValidationError, ValidationError
from resume_tailor.models.jd_models import JobTextInput
from resume_tailor.services import jd_service, resume_service

from conftest import USER_ID, FakeBackend

JD_TEXT = (
    "Backend Engineer at Globex.\n\n\n\n"
    "We are looking for an engineer with Python, React and Kubernetes experience "
    "to build scalable web services."
)


# ── Jobs ─────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_short_text_rejected_before_backend_call(store, backend):
    with pytest.raises(ValidationError) as exc_info:
        await jd_service.extract_job(
            user_id=USER_ID, payload=JobTextInput(jd_text="Python dev"), backend=backend, store=store,
        )

    assert exc_info.value.status_code == 400
    assert backend.calls["extract"] == 0


@pytest.mark.asyncio
async def test_extract_job_defaults(store, backend):
    job = await jd_service.extract_job(
        user_id=USER_ID, payload=JobTextInput(jd_text=JD_TEXT), backend=backend, store=store,
    )

    assert job.job_title == "backend"  # falls back to the extracted role category
    assert job.company == jd_service.DEFAULT_COMPANY
    assert job.job_url == "manual-entry"
    assert "\n\n\n" not in job.jd_text
    assert job.requirements.must_have_skills == ["Python", "React", "Kubernetes"]
    assert store.get_job(USER_ID, job.id) == job


@pytest.mark.asyncio
async def test_extract_job_without_role_category_uses_default_title(store):
    backend = FakeBackend(requirements={"mustHaveSkills": ["Python"]})

    job = await jd_service.extract_job(
        user_id=USER_ID, payload=JobTextInput(jd_text=JD_TEXT), backend=backend, store=store,
    )

    assert job.job_title == jd_service.DEFAULT_JOB_TITLE


@pytest.mark.asyncio
async def test_extract_job_uses_supplied_metadata(store, backend):
    payload = JobTextInput.model_validate({
        "jdText": JD_TEXT,
        "jobTitle": " Senior Backend Engineer ",
        "company": "Globex",
        "jobUrl": "https://globex.example/jobs/1",
    })

    job = await jd_service.extract_job(user_id=USER_ID, payload=payload, backend=backend, store=store)

    assert job.job_title == "Senior Backend Engineer"
    assert job.company == "Globex"
    assert job.job_url == "https://globex.example/jobs/1"


@pytest.mark.asyncio
async def test_invalid_requirements_are_surfaced_and_not_saved(store):
    class BrokenExtractor(FakeBackend):
        async def extract_requirements(self, jd_text):
            raise SchemaValidationError("requirements_extractor", [{"loc": ["mustHaveSkills"], "msg": "bad"}])

    with pytest.raises(SchemaValidationError):
        await jd_service.extract_job(
            user_id=USER_ID, payload=JobTextInput(jd_text=JD_TEXT), backend=BrokenExtractor(), store=store,
        )


@pytest.mark.asyncio
async def test_get_job_is_scoped_to_user(store, backend):
    job = await jd_service.extract_job(
        user_id=USER_ID, payload=JobTextInput(jd_text=JD_TEXT), backend=backend, store=store,
    )

    assert jd_service.get_job(USER_ID, job.id, store).id == job.id
    with pytest.raises(NotFoundError):
        jd_service.get_job("someone-else", job.id, store)
    with pytest.raises(NotFoundError):
        jd_service.get_job(USER_ID, "missing", store)


# ── Base Resumes ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_parse_base_resume_saves_record(store, backend):
    record = await resume_service.parse_base_resume(
        user_id=USER_ID, text="  Jane Doe\n\n\n\nSoftware Engineer at Acme  ", backend=backend, store=store,
    )

    assert record.raw_text == "Jane Doe\n\nSoftware Engineer at Acme"
    assert record.parsed_resume_json.header.name == "Jane Doe"
    assert resume_service.get_base_resume(USER_ID, record.id, store) == record

    with pytest.raises(NotFoundError):
        resume_service.get_base_resume("someone-else", record.id, store)


@pytest.mark.asyncio
async def test_each_parse_creates_a_new_base_resume(store, backend):
    first = await resume_service.parse_base_resume(user_id=USER_ID, text="Jane Doe", backend=backend, store=store)
    second = await resume_service.parse_base_resume(user_id=USER_ID, text="Jane Doe", backend=backend, store=store)

    assert first.id != second.id


@pytest.mark.asyncio
async def test_blank_resume_text_rejected(store, backend):
    with pytest.raises(ValidationError):
        await resume_service.parse_base_resume(user_id=USER_ID, text="   ", backend=backend, store=store)

    assert backend.calls["resume"] == 0
