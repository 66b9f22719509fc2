# context_budgeting/optimizer.py
"""Shrink an oversized full-book context while keeping its chapter structure."""

from __future__ import annotations

import re

import structlog
from config import settings

from .token_budget import estimate_tokens, is_over_budget

logger = structlog.get_logger(__name__)

METADATA_PATTERN = re.compile(r"Book Metadata:[\s\S]*?(?=\n\n)")
FOCUS_PATTERN = re.compile(r"Currently focused on:[\s\S]*?(?=\n\n)")
# ASCII digits only in chapter numbers.
CHAPTER_MARKER_PATTERN = re.compile(
    r"=====\s*CHAPTER\s+\d+:", re.IGNORECASE | re.ASCII
)

SECTION_TITLE_PATTERN = re.compile(r".*?(?=\n)")
SECTION_OUTLINE_PATTERN = re.compile(r"OUTLINE:[\s\S]*?(?=\n\nCONTENT:)")
SECTION_CONTENT_PATTERN = re.compile(r"CONTENT:([\s\S]*?)(?=\n\n|\Z)")

TRUNCATION_NOTICE = "[Content truncated for brevity]"
ABBREVIATION_NOTE = (
    "NOTE: The following is an abbreviated version of all chapters. "
    "Full content has been truncated to work within token limits."
)


def _match_text(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(0) if match else ""


def _truncate_section(section: str, max_words: int) -> str:
    """Keep title and outline, cut the chapter content to ``max_words`` words.

    Sections without a recognisable title/outline/content layout are
    returned untouched.
    """
    title_match = SECTION_TITLE_PATTERN.match(section)
    outline_match = SECTION_OUTLINE_PATTERN.search(section)
    content_match = SECTION_CONTENT_PATTERN.search(section)
    if not (title_match and outline_match and content_match):
        return section

    title = title_match.group(0)
    outline = outline_match.group(0)
    preview = " ".join(content_match.group(1).split()[:max_words])
    return f"{title}\n{outline}\nCONTENT: {preview}...\n{TRUNCATION_NOTICE}\n"


def optimize_context(
    full_context: str,
    user_message: str,
    max_words: int | None = None,
) -> str:
    """Return ``full_context`` reduced to fit the token ceiling.

    Under the ceiling the context is returned exactly as given, without the
    user question. Over the ceiling every chapter section is abbreviated and
    the question is appended on the final line.
    """
    if not is_over_budget(full_context):
        return full_context

    logger.info("Context is very large, optimizing for token usage")
    words = (
        max_words
        if max_words is not None
        else settings.OPTIMIZED_CONTENT_PREVIEW_WORDS
    )

    metadata = _match_text(METADATA_PATTERN, full_context)
    current_focus = _match_text(FOCUS_PATTERN, full_context)
    sections = [
        _truncate_section(section, words)
        for section in CHAPTER_MARKER_PATTERN.split(full_context)
    ]

    parts: list[str] = []
    if metadata:
        parts.append(f"{metadata}\n\n")
    if current_focus:
        parts.append(f"{current_focus}\n\n")
    parts.append(f"{ABBREVIATION_NOTE}\n\n")
    # Sections are renumbered by position; index 0 is the preamble.
    for index, section in enumerate(sections):
        if index > 0:
            parts.append(f"===== CHAPTER {index}: {section}\n")
    parts.append(f"\nUser question: {user_message}")

    optimized = "".join(parts)
    logger.info(
        "Reduced context size",
        tokens_before=estimate_tokens(full_context),
        tokens_after=estimate_tokens(optimized),
        chapter_sections=len(sections) - 1,
    )
    return optimized
