"""Configuration models for the furigana service."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, SecretStr

DEFAULT_MAX_TEXT_LENGTH = 10_000
DEFAULT_MODEL = "gpt-4o"
DEFAULT_STORAGE_KEY = "furigana-history"


class AnnotatorConfig(BaseModel):
    """Configures request validation and the upstream chat model."""

    max_text_length: int = Field(default=DEFAULT_MAX_TEXT_LENGTH, ge=1)
    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    api_key: SecretStr | None = None

    @classmethod
    def from_env(cls) -> "AnnotatorConfig":
        """Build a config from `OPENAI_API_KEY`, `OPENAI_MODEL` and
        `FURIGANA_MAX_TEXT_LENGTH`; unset or blank variables keep defaults."""
        values: dict[str, object] = {}
        api_key = os.getenv("OPENAI_API_KEY", "").strip()
        if api_key:
            values["api_key"] = api_key
        model = os.getenv("OPENAI_MODEL", "").strip()
        if model:
            values["model"] = model
        max_length = os.getenv("FURIGANA_MAX_TEXT_LENGTH", "").strip()
        if max_length:
            values["max_text_length"] = max_length
        return cls.model_validate(values)

    @property
    def credential_configured(self) -> bool:
        return self.api_key is not None and bool(self.api_key.get_secret_value())


class HistoryConfig(BaseModel):
    """Configures the client-side history list."""

    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)
    label_length: int = Field(default=40, ge=1)
