# models/assistant_models.py
"""Request and result models for the assistant agents."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import Field, field_validator

from .context_models import BookType, ClientModel


class AIPromptType(str, Enum):
    """Quick-action prompts offered next to the chat box."""

    CHAPTER_IDEA = "chapter_idea"
    PLOT_DEVELOPMENT = "plot_development"
    CHARACTER_DEVELOPMENT = "character_development"
    STYLE_IMPROVEMENT = "style_improvement"
    GENERAL = "general"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ChatMessage(ClientModel):
    """One turn in a conversation's history."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: str = Field(default_factory=_utc_now_iso)


class OutlineOptions(ClientModel):
    """Optional knobs for outline generation."""

    chapter_count: int | None = None
    genre: str | None = None
    target_audience: str | list[str] | None = None
    existing_outline: list[Any] | None = None
    book_type: BookType | None = None


def _loose_int(value: object) -> int | None:
    """Model-written numbers: digits or ints pass, anything else is dropped."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class OutlineChapter(ClientModel):
    """A single chapter entry of a generated outline.

    Fields are lenient since the entries come straight from model output; a
    missing ``chapter_number`` is filled in from the array position by the
    outline agent.
    """

    chapter_number: int | None = None
    title: str = ""
    summary: str = ""
    key_points: list[str] = []
    estimated_word_count: int | None = None

    @field_validator("chapter_number", "estimated_word_count", mode="before")
    @classmethod
    def _lenient_numbers(cls, value: object) -> int | None:
        return _loose_int(value)

    @field_validator("title", "summary", mode="before")
    @classmethod
    def _text_or_empty(cls, value: object) -> str:
        return "" if value is None else str(value)

    @field_validator("key_points", mode="before")
    @classmethod
    def _points_as_strings(cls, value: object) -> list[str]:
        if isinstance(value, str):
            return [value] if value else []
        if isinstance(value, list):
            return [str(point) for point in value if point is not None]
        return []


class OutlineResult(ClientModel):
    """Parsed outline, or the raw reply when it was not valid JSON."""

    chapters: list[OutlineChapter] = []
    raw_response: str = ""
    note: str | None = None
    usage: dict[str, Any] | None = None

    @property
    def parsed(self) -> bool:
        return self.note is None


class ChapterSummaryRequest(ClientModel):
    """Inputs for summarising a drafted chapter."""

    book_title: str
    book_genre: str | None = None
    book_type: BookType | None = None
    chapter_title: str
    chapter_order: int
    chapter_content: str
    target_audience: list[str] | None = None

    @field_validator("target_audience", mode="before")
    @classmethod
    def _wrap_single_audience(cls, value: object) -> object:
        if isinstance(value, str):
            return [value] if value else []
        return value


class ChapterSummaryResult(ClientModel):
    """Summary produced for one chapter."""

    summary: str
    chapter_order: int
    chapter_title: str
    word_count: int
