# models/context_models.py
"""Data models describing the book and chapter material behind a chat turn."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ContextMode(str, Enum):
    """How much of the conversation context goes into a prompt."""

    CHAPTER = "chapter"
    BOOK = "book"
    FULL = "full"


class BookType(str, Enum):
    """Broad classification driving the assistant's writing guidance."""

    FICTION = "fiction"
    NON_FICTION = "non-fiction"


class ClientModel(BaseModel):
    """Base model accepting the camelCase keys sent by the web client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class ConversationContext(ClientModel):
    """Material available to ground one request.

    Built fresh by the caller for every request and never persisted.
    ``full_book_content`` holds every chapter concatenated with
    ``===== CHAPTER <n>:`` markers (see ``context_budgeting.full_book``).
    """

    book_title: str | None = None
    book_description: str | None = None
    book_type: BookType | None = None
    genre: str | None = None
    target_audience: list[str] | None = None
    reading_level: str | None = None
    current_chapter_title: str | None = None
    current_chapter_number: int | None = None
    current_chapter_content: str | None = None
    current_chapter_outline: str | None = None
    word_count: int | None = None
    full_book_content: str | None = None
    previous_chapters: str | None = None
    chapter_summaries: list[str] | None = None
    total_chapters: int | None = None

    @field_validator("target_audience", mode="before")
    @classmethod
    def _wrap_single_audience(cls, value: object) -> object:
        if isinstance(value, str):
            return [value] if value else []
        return value


class BookChapter(ClientModel):
    """One chapter as stored by the editor, used to compose full-book text."""

    chapter_number: int | None = None
    title: str
    outline: str | None = None
    content: str | None = None
