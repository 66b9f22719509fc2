# context_budgeting/token_budget.py
"""Character-based token estimates used for prompt budgeting."""

from __future__ import annotations

import math

from config import settings


def estimate_tokens(text: str) -> int:
    """Approximate token count: characters divided by four, rounded up.

    This is deliberately not a real tokenizer. It is only used to compare
    prompt sizes against :data:`settings.APPROX_TOKEN_LIMIT`.
    """
    if not text:
        return 0
    return math.ceil(len(text) / settings.CHARS_PER_TOKEN)


def is_over_budget(text: str, token_limit: int | None = None) -> bool:
    """Return ``True`` when ``text`` is estimated above the token ceiling."""
    limit = token_limit if token_limit is not None else settings.APPROX_TOKEN_LIMIT
    return estimate_tokens(text) > limit
