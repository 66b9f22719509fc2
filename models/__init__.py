"""Central package for Biglio assistant data models."""

from .assistant_models import (
    AIPromptType,
    ChapterSummaryRequest,
    ChapterSummaryResult,
    ChatMessage,
    OutlineChapter,
    OutlineOptions,
    OutlineResult,
)
from .context_models import (
    BookChapter,
    BookType,
    ContextMode,
    ConversationContext,
)

__all__ = [
    "AIPromptType",
    "BookChapter",
    "BookType",
    "ChapterSummaryRequest",
    "ChapterSummaryResult",
    "ChatMessage",
    "ContextMode",
    "ConversationContext",
    "OutlineChapter",
    "OutlineOptions",
    "OutlineResult",
]
