"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawHtml(str):
    """Untrusted HTML as returned by the annotation model."""

    __slots__ = ()


class SanitizedHtml(str):
    """HTML holding only escaped text and canonical ruby fragments.

    Only `furigana_service.sanitizer.sanitize` should construct instances.
    """

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class AnnotationRequest:
    """A validated, trimmed annotation request."""

    text: str


@dataclass(frozen=True, slots=True)
class AnnotationResult:
    """Raw model output; must be sanitized before display or storage."""

    html: RawHtml


class HistoryEntry(BaseModel):
    """One past annotation, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    id: str = Field(min_length=1)
    original_text: str = Field(alias="originalText")
    html: str
    created_at: int = Field(alias="createdAt")
    name: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _reject_null_name(cls, value: object) -> object:
        # Stored entries either omit the name or carry a string.
        if value is None:
            raise ValueError("name must be a string when present")
        return value

    @field_validator("html", mode="after")
    @classmethod
    def _sanitize_html(cls, value: str) -> SanitizedHtml:
        from furigana_service.sanitizer import sanitize

        return sanitize(value)

    def to_storage(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


class HistoryUpdate(BaseModel):
    """Partial update for a history entry; unset fields are left alone."""

    name: str | None = None

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)
