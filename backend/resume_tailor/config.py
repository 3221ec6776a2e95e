from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Resume Tailor"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    frontend_url: str = "http://localhost:3000"

    # Text-understanding backend (selected once at startup)
    llm_provider: str = "groq"
    llm_model_key: str = "llama-3.3-70b"
    llm_timeout_seconds: float = 90.0

    # Provider API keys (server-side, never sent by the client)
    groq_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    # Tailoring
    min_job_text_length: int = 50
    tailor_output_retries: int = 1

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


# ── Model Registry ──────────────────────────────────────────────────────────

MODELS = {
    "groq": {
        "llama-3.3-70b": {
            "name": "LLaMA 3.3 70B",
            "model_id": "groq/llama-3.3-70b-versatile",
            "description": "Best all-rounder for constrained rewriting",
            "recommended": True,
        },
        "llama-3.1-8b": {
            "name": "LLaMA 3.1 8B",
            "model_id": "groq/llama-3.1-8b-instant",
            "description": "Fast extraction for short postings",
            "recommended": False,
        },
    },
    "google": {
        "gemini-2.0-flash": {
            "name": "Gemini 2.0 Flash",
            "model_id": "gemini/gemini-2.0-flash",
            "description": "Most reliable structured output",
            "recommended": True,
        },
    },
    "openrouter": {
        "kimi-k2": {
            "name": "Kimi K2",
            "model_id": "openrouter/moonshotai/kimi-k2:free",
            "description": "Best for tech-heavy roles",
            "recommended": False,
        },
    },
    "openai": {
        "gpt-4o-mini": {
            "name": "GPT-4o mini",
            "model_id": "openai/gpt-4o-mini",
            "description": "Cheap, strong JSON adherence",
            "recommended": True,
        },
    },
}

# Maps provider key → settings attribute holding its API key
PROVIDER_KEY_SETTINGS = {
    "groq": "groq_api_key",
    "google": "gemini_api_key",
    "openrouter": "openrouter_api_key",
    "openai": "openai_api_key",
}

# ── Prompt Configuration ────────────────────────────────────────────────────

PROMPT_CONFIG = {
    "requirements_extractor": {"temperature": 0.1, "max_tokens": 1500},
    "resume_extractor": {"temperature": 0.1, "max_tokens": 4000},
    "profile_extractor": {"temperature": 0.1, "max_tokens": 4000},
    "tailor_resume": {"temperature": 0.2, "max_tokens": 6000},
}
