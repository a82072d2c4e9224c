from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and provider endpoints centralized here. Keyword
    overrides replace individual values, which is how responders get an
    explicit configuration in tests.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    default_response_mode: str = os.getenv("DEFAULT_RESPONSE_MODE", "local")

    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    openai_api_url: str = os.getenv(
        "OPENAI_API_URL", "https://api.openai.com/v1/chat/completions"
    )
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

    hf_inference_url: str = os.getenv(
        "HF_INFERENCE_URL",
        "https://api-inference.huggingface.co/models/mistralai/Mistral-7B-Instruct-v0.2",
    )

    google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

    temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.7"))
    top_p: float = float(os.getenv("MODEL_TOP_P", "0.95"))
    max_tokens: int = int(os.getenv("MODEL_MAX_TOKENS", "500"))
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    def __init__(self, **overrides: Any) -> None:
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
