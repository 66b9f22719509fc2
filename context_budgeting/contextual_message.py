# context_budgeting/contextual_message.py
"""Assemble the user-role message sent to the chat endpoint."""

from __future__ import annotations

from config import settings

from models import ContextMode, ConversationContext

from .optimizer import optimize_context

CONTENT_LABEL = "📝 Current chapter content"
REFERENCE_PLAN_LABEL = "📋 Chapter plan (for reference)"
OUTLINE_PLAN_LABEL = "📋 Chapter outline/plan"
PLANNING_FOCUS_LINE = (
    "💡 Focus: Help with planning, outlining, and research for this chapter."
)


def _book_block(context: ConversationContext) -> str:
    block = f'Book Context: "{context.book_title}"'
    if context.book_description:
        block += f" - {context.book_description}"
    if context.total_chapters:
        block += f" ({context.total_chapters} chapters)"
    if context.book_type:
        block += f"\nType: {context.book_type.value}"
    if context.genre:
        block += f"\nGenre: {context.genre}"
    if context.target_audience:
        block += f"\nTarget Audience: {', '.join(context.target_audience)}"
    if context.reading_level:
        block += f"\nReading Level: {context.reading_level}"
    return block + "\n\n"


def _summaries_block(summaries: list[str]) -> str:
    lines = ["Story so far:"]
    lines.extend(
        f"Chapter {index + 1}: {summary}" for index, summary in enumerate(summaries)
    )
    return "\n".join(lines) + "\n\n"


def _content_preview(content: str) -> str:
    limit = settings.CHAPTER_CONTENT_PREVIEW_CHARS
    suffix = "..." if len(content) > limit else ""
    return content[:limit] + suffix


def _current_chapter_block(context: ConversationContext) -> str:
    block = f'Currently working on: "{context.current_chapter_title}"'
    if context.current_chapter_number:
        block += f" (Chapter {context.current_chapter_number})"

    if context.current_chapter_content:
        # Writing: the draft leads, the outline is background.
        preview = _content_preview(context.current_chapter_content)
        block += f'\n\n{CONTENT_LABEL}: "{preview}"'
        if context.current_chapter_outline:
            block += (
                f'\n\n{REFERENCE_PLAN_LABEL}: "{context.current_chapter_outline}"'
            )
        if context.word_count:
            block += f"\n\nWord count: {context.word_count}"
    elif context.current_chapter_outline:
        # Planning: nothing drafted yet.
        block += f'\n\n{OUTLINE_PLAN_LABEL}: "{context.current_chapter_outline}"'
        block += f"\n\n{PLANNING_FOCUS_LINE}"

    return block + "\n\n"


def build_contextual_message(
    user_message: str,
    context: ConversationContext | None,
    mode: ContextMode | str = ContextMode.CHAPTER,
) -> str:
    """Combine the writer's question with the context the mode allows.

    In ``full`` mode with full-book text available, the result of
    :func:`optimize_context` is returned as-is. Otherwise the book block
    (``book``/``full`` only), the story-so-far summaries (any mode), the
    current chapter block and the question are joined in that order.
    """
    if context is None:
        return user_message

    mode = ContextMode(mode)
    if mode is ContextMode.FULL and context.full_book_content:
        return optimize_context(context.full_book_content, user_message)

    parts: list[str] = []
    if mode in (ContextMode.BOOK, ContextMode.FULL) and context.book_title:
        parts.append(_book_block(context))
    if context.chapter_summaries:
        parts.append(_summaries_block(context.chapter_summaries))
    if context.current_chapter_title:
        parts.append(_current_chapter_block(context))
    parts.append(f"User question: {user_message}")
    return "".join(parts)
