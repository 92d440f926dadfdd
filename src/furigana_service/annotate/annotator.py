"""Annotation request handler: validate text, call the model once, check the reply."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from furigana_service.annotate.prompt import RESPONSE_FORMAT, FuriganaPayload, build_prompt
from furigana_service.config import AnnotatorConfig
from furigana_service.errors import (
    EmptyInputError,
    ServiceUnavailableError,
    TooLongError,
    UpstreamError,
    UpstreamInvalidResponseError,
)
from furigana_service.sanitizer import trim_text
from furigana_service.types import AnnotationRequest, AnnotationResult, RawHtml

LOGGER = logging.getLogger(__name__)


def create_llm(config: AnnotatorConfig) -> Any:
    """Return a `ChatOpenAI` model, or None when no API key is configured."""
    if not config.credential_configured:
        return None

    from langchain_openai import ChatOpenAI

    return ChatOpenAI(
        model=config.model,
        temperature=config.temperature,
        api_key=config.api_key,
    )


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units, the unit the length cap is expressed in."""
    return len(text.encode("utf-16-le")) // 2


def validate_request(text: Any, *, max_length: int) -> AnnotationRequest:
    """Check emptiness first, then length. Non-string input counts as empty."""
    trimmed = trim_text(text) if isinstance(text, str) else ""
    if not trimmed:
        raise EmptyInputError()
    if utf16_length(trimmed) > max_length:
        raise TooLongError(max_length)
    return AnnotationRequest(text=trimmed)


class FuriganaAnnotator:
    """Sends one annotation request per call to the chat model.

    The returned HTML is the model's raw output. Callers must run it through
    `furigana_service.sanitizer.sanitize` before rendering or storing it.
    """

    def __init__(
        self,
        *,
        llm: Any | None,
        config: AnnotatorConfig | None = None,
        executor: Any | None = None,
    ) -> None:
        self.llm = llm
        self.config = config or AnnotatorConfig()
        if executor is not None:
            self.executor = executor
        elif llm is not None:
            self.executor = build_prompt() | llm.bind(response_format=RESPONSE_FORMAT)
        else:
            self.executor = None

    @classmethod
    def from_config(cls, config: AnnotatorConfig | None = None) -> "FuriganaAnnotator":
        config = config or AnnotatorConfig.from_env()
        return cls(llm=create_llm(config), config=config)

    @property
    def configured(self) -> bool:
        return self.executor is not None

    def annotate(self, text: Any) -> AnnotationResult:
        """Annotate `text` with ruby readings.

        Raises:
            EmptyInputError: text is empty after trimming.
            TooLongError: text exceeds `config.max_text_length`.
            ServiceUnavailableError: no model credential is configured.
            UpstreamError: the model call itself failed.
            UpstreamInvalidResponseError: the reply is not `{"html": str}` JSON.
        """

        request = validate_request(text, max_length=self.config.max_text_length)
        if self.executor is None:
            raise ServiceUnavailableError()

        try:
            message = self.executor.invoke({"text": request.text})
        except Exception as exc:
            LOGGER.exception("event=annotate status=upstream_error model=%s", self.config.model)
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc

        content = _message_text(message)
        if not content.strip():
            raise UpstreamInvalidResponseError("No response from model")

        try:
            payload = FuriganaPayload.model_validate_json(content)
        except ValidationError as exc:
            LOGGER.warning(
                "event=annotate status=invalid_response errors=%d", exc.error_count()
            )
            raise UpstreamInvalidResponseError(
                "Model response did not match the expected schema"
            ) from exc

        return AnnotationResult(html=RawHtml(payload.html))


def _message_text(message: Any) -> str:
    if message is None:
        return ""
    if isinstance(message, str):
        return message
    content = getattr(message, "content", "")
    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, dict):
                parts.append(str(item.get("text", "")))
            else:
                parts.append(str(item))
        return "".join(parts)
    return str(content or "")
