# context_budgeting/full_book.py
"""Compose the full-book text used by ``full`` context mode."""

from __future__ import annotations

import re
from collections.abc import Sequence

from models import BookChapter, ConversationContext

_BLANK_LINES = re.compile(r"\n\s*\n+")


def _single_block(text: str | None, placeholder: str) -> str:
    # Blank lines end a section part when the text is optimized.
    if not text or not text.strip():
        return placeholder
    return _BLANK_LINES.sub("\n", text.strip())


def _metadata_block(book: ConversationContext, chapter_count: int) -> str:
    lines = ["Book Metadata:"]
    if book.book_title:
        lines.append(f"Title: {book.book_title}")
    if book.book_description:
        lines.append(f"Description: {_single_block(book.book_description, '')}")
    if book.book_type:
        lines.append(f"Type: {book.book_type.value}")
    if book.genre:
        lines.append(f"Genre: {book.genre}")
    if book.target_audience:
        lines.append(f"Target Audience: {', '.join(book.target_audience)}")
    if book.reading_level:
        lines.append(f"Reading Level: {book.reading_level}")
    lines.append(f"Total Chapters: {book.total_chapters or chapter_count}")
    return "\n".join(lines)


def compose_full_book_content(
    chapters: Sequence[BookChapter],
    book: ConversationContext | None = None,
    focus_chapter: int | None = None,
) -> str:
    """Concatenate every chapter into the marker format the optimizer parses.

    Layout::

        Book Metadata:
        ...

        Currently focused on: Chapter 2 - "Title"

        ===== CHAPTER 1: Title
        OUTLINE: ...

        CONTENT: ...

    ``focus_chapter`` is a chapter number; it is ignored when no chapter
    carries that number.
    """
    blocks: list[str] = []
    if book is not None:
        blocks.append(_metadata_block(book, len(chapters)))

    numbered = [
        (chapter.chapter_number or position, chapter)
        for position, chapter in enumerate(chapters, start=1)
    ]
    if focus_chapter is not None:
        for number, chapter in numbered:
            if number == focus_chapter:
                blocks.append(
                    f'Currently focused on: Chapter {number} - "{chapter.title}"'
                )
                break

    for number, chapter in numbered:
        blocks.append(
            f"===== CHAPTER {number}: {chapter.title}\n"
            f"OUTLINE: {_single_block(chapter.outline, '(no outline)')}\n\n"
            f"CONTENT: {_single_block(chapter.content, '(not yet written)')}"
        )

    return "\n\n".join(blocks)
