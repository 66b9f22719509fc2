# agents/__init__.py
"""LLM-backed agents behind the Biglio writing assistant."""


class AssistantRequestError(Exception):
    """Raised when the AI provider gives no usable reply."""
