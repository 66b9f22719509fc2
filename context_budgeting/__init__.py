"""Prompt assembly and token budgeting for the writing assistant."""

from .contextual_message import build_contextual_message
from .full_book import compose_full_book_content
from .optimizer import optimize_context
from .token_budget import estimate_tokens, is_over_budget

__all__ = [
    "build_contextual_message",
    "compose_full_book_content",
    "estimate_tokens",
    "is_over_budget",
    "optimize_context",
]
