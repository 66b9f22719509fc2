# agents/writing_assistant_agent.py
"""Chat session for the writing assistant: prompts, history and mode."""

from __future__ import annotations

import structlog
from config import settings
from context_budgeting import build_contextual_message
from core.llm_interface import llm_service
from orchestration.token_accountant import Stage, TokenAccountant
from processing.book_type import (
    get_audience_considerations,
    get_writing_style_guidance,
    resolve_book_type,
)
from prompt_renderer import render_prompt

from models import AIPromptType, ChatMessage, ContextMode, ConversationContext

from agents import AssistantRequestError

logger = structlog.get_logger(__name__)


def generate_prompt(
    prompt_type: AIPromptType | str, context: ConversationContext | None = None
) -> str:
    """Return the canned request for one of the quick-action buttons."""
    prompt_type = AIPromptType(prompt_type)
    book_title = context.book_title if context else None
    chapter_title = context.current_chapter_title if context else None
    book_info = f' for "{book_title}"' if book_title else ""
    chapter_info = f' in the chapter "{chapter_title}"' if chapter_title else ""

    if prompt_type is AIPromptType.CHAPTER_IDEA:
        progress = ""
        if context and context.current_chapter_content:
            preview = context.current_chapter_content[
                : settings.PROMPT_CONTENT_PREVIEW_CHARS
            ]
            progress = f" Current chapter progress: {preview}..."
        return (
            f"Generate three creative ideas for a new chapter{book_info}. Focus on "
            "advancing the plot in an interesting way and maintaining consistency "
            f"with the existing story.{progress}"
        )
    if prompt_type is AIPromptType.PLOT_DEVELOPMENT:
        return (
            "Help me develop the plot further from the current point"
            f"{book_info}{chapter_info}. What interesting complications, twists, or "
            "character developments could I introduce? Consider the story's current "
            "direction and momentum."
        )
    if prompt_type is AIPromptType.CHARACTER_DEVELOPMENT:
        return (
            f"Suggest ways to develop character arcs{chapter_info}{book_info}. How "
            "can I show growth, change, or reveal new aspects of the characters? "
            "Focus on authentic character moments and development."
        )
    if prompt_type is AIPromptType.STYLE_IMPROVEMENT:
        return (
            f"Please analyze my writing style{chapter_info}{book_info} and suggest "
            "improvements for clarity, engagement, and flow. Look at sentence "
            "structure, pacing, dialogue, and descriptive language."
        )
    chapter_part = (
        f" and specifically this chapter{chapter_info}" if chapter_info else ""
    )
    return (
        f"I'm working on my book{book_info}{chapter_part}. Can you help me with "
        "some creative ideas and writing guidance?"
    )


def build_system_prompt(context: ConversationContext | None = None) -> str:
    """Render the Biglio persona prompt with book-type guidance and context."""
    book_type = resolve_book_type(
        context.book_type if context else None, context.genre if context else None
    )
    content_preview = None
    if context and context.current_chapter_content:
        limit = settings.CHAPTER_CONTENT_PREVIEW_CHARS
        content = context.current_chapter_content
        content_preview = (
            content[:limit] + "..." if len(content) > limit else content
        )
    return render_prompt(
        "chat_system.j2",
        {
            "book_type": book_type.value,
            "writing_guidance": get_writing_style_guidance(book_type),
            "audience_guidance": get_audience_considerations(
                book_type, context.target_audience if context else None
            ),
            "context": context,
            "content_preview": content_preview,
        },
    )


class WritingAssistant:
    """One writer's assistant session.

    Keeps the selected context mode and an in-memory history per
    conversation id. Nothing is persisted.
    """

    def __init__(
        self,
        context_mode: ContextMode | str | None = None,
        model_name: str = settings.CHAT_MODEL,
        token_accountant: TokenAccountant | None = None,
    ) -> None:
        self.model_name = model_name
        self._context_mode = ContextMode(
            context_mode or settings.DEFAULT_CONTEXT_MODE
        )
        self.token_accountant = token_accountant or TokenAccountant()
        self.message_history: dict[str, list[ChatMessage]] = {}
        self.is_loading = False
        self.last_error: str | None = None

    @property
    def context_mode(self) -> ContextMode:
        return self._context_mode

    def set_context_mode(self, mode: ContextMode | str) -> None:
        self._context_mode = ContextMode(mode)
        logger.debug("Context mode changed", mode=self._context_mode.value)

    def build_contextual_message(
        self, message: str, context: ConversationContext | None = None
    ) -> str:
        return build_contextual_message(message, context, self._context_mode)

    def generate_prompt(
        self,
        prompt_type: AIPromptType | str,
        context: ConversationContext | None = None,
    ) -> str:
        return generate_prompt(prompt_type, context)

    def _append(self, conversation_id: str, message: ChatMessage) -> None:
        self.message_history.setdefault(conversation_id, []).append(message)

    async def send_message(
        self,
        message: str,
        context: ConversationContext | None = None,
        conversation_id: str = "default",
    ) -> str:
        """Send ``message`` with its budgeted context and return the reply."""
        self.is_loading = True
        self.last_error = None
        try:
            contextual_message = self.build_contextual_message(message, context)
            self._append(conversation_id, ChatMessage(role="user", content=message))

            reply, usage = await llm_service.async_call_llm(
                self.model_name,
                messages=[{"role": "user", "content": contextual_message}],
                system=build_system_prompt(context),
                temperature=settings.TEMPERATURE_CHAT,
                max_tokens=settings.MAX_TOKENS_CHAT,
            )
            self.token_accountant.record_usage(Stage.CHAT, usage)
            if not reply:
                raise AssistantRequestError("AI request failed")

            self._append(
                conversation_id, ChatMessage(role="assistant", content=reply)
            )
            return reply
        except Exception as exc:
            self.last_error = str(exc) or type(exc).__name__
            logger.error(
                "Assistant chat request failed",
                conversation_id=conversation_id,
                error=self.last_error,
                exc_info=not isinstance(exc, AssistantRequestError),
            )
            raise
        finally:
            self.is_loading = False

    def clear_conversation(self, conversation_id: str = "default") -> None:
        self.message_history[conversation_id] = []
