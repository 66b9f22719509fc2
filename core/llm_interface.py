# core/llm_interface.py
"""
Handles all direct interactions with the hosted chat-completion API.
Includes the async message call with retries, backoff and usage logging.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

# Standard library imports
import asyncio
import random

# Type hints
from typing import Any

import httpx

# Third-party imports
import structlog

# Local imports
from config import settings

logger = structlog.get_logger(__name__)


def _is_non_retryable(exc: Exception) -> bool:
    """Client errors other than rate limiting will not succeed on retry."""
    return (
        isinstance(exc, httpx.HTTPStatusError)
        and 400 <= exc.response.status_code < 500
        and exc.response.status_code != 429
    )


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text blocks of a messages API response."""
    blocks = data.get("content") or []
    return "".join(
        block.get("text", "")
        for block in blocks
        if isinstance(block, dict) and block.get("type") == "text"
    )


class LLMService:
    """Utility class for interacting with the chat-completion endpoint."""

    def __init__(
        self,
        timeout: float = settings.HTTPX_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # Use a single async client for all requests to reuse connections
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._semaphore = asyncio.Semaphore(settings.MAX_CONCURRENT_LLM_CALLS)
        self.request_count = 0
        logger.debug(
            "LLMService initialized",
            concurrency_limit=settings.MAX_CONCURRENT_LLM_CALLS,
        )

    async def _backoff_delay(self, attempt: int) -> None:
        """Sleep for an exponentially increasing delay with jitter."""
        delay = settings.LLM_RETRY_DELAY_SECONDS * (2**attempt)
        jitter = random.uniform(0, delay / 2)
        await asyncio.sleep(delay + jitter)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": settings.BOOK_ANTHROPIC_API,
            "anthropic-version": settings.ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    def _log_llm_usage(self, model_name: str, usage_data: Any) -> None:
        """Helper to log token usage if available in the response."""
        if usage_data and isinstance(usage_data, dict):
            logger.info(
                f"LLM ('{model_name}') Usage - Input: {usage_data.get('input_tokens', 'N/A')} tk, "
                f"Output: {usage_data.get('output_tokens', 'N/A')} tk"
            )
        else:
            logger.debug(
                f"LLM ('{model_name}') response missing 'usage' information or 'usage' was not a dictionary."
            )

    async def _post_messages(
        self, payload: dict[str, Any]
    ) -> tuple[str, dict[str, int] | None]:
        """Send a single messages request."""
        response = await self._client.post(
            f"{settings.ANTHROPIC_API_BASE.rstrip('/')}/v1/messages",
            json=payload,
            headers=self._headers(),
        )
        response.raise_for_status()
        data = response.json()
        text = _extract_text(data)
        if not text:
            logger.error(
                f"LLM ('{payload['model']}') Invalid response structure - missing text content despite 200 OK: {str(data)[:300]}"
            )
        return text, data.get("usage")

    async def _call_model_with_retries(
        self, model_name: str, payload: dict[str, Any]
    ) -> tuple[str, dict[str, int] | None, Exception | None]:
        """Try calling the model with retry logic."""
        last_exc: Exception | None = None
        for retry_attempt in range(settings.LLM_RETRY_ATTEMPTS):
            try:
                self.request_count += 1
                text, usage = await self._post_messages(payload)
                self._log_llm_usage(model_name, usage)
                return text, usage, None
            except (httpx.HTTPError, ValueError) as exc:
                last_exc = exc
                logger.warning(
                    f"LLM ('{model_name}' Attempt {retry_attempt + 1}): {exc}",
                    exc_info=True,
                )
                if _is_non_retryable(exc):
                    logger.error(
                        f"LLM: '{model_name}' failed with non-429 client error. Not retrying."
                    )
                    break
            if retry_attempt < settings.LLM_RETRY_ATTEMPTS - 1:
                await self._backoff_delay(retry_attempt)
        return "", None, last_exc

    async def async_call_llm(
        self,
        model_name: str,
        prompt: str | None = None,
        *,
        messages: list[dict[str, str]] | None = None,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> tuple[str, dict[str, int] | None]:
        """Call the chat endpoint and return ``(text, usage)``.

        Either ``prompt`` (sent as one user message) or a full ``messages``
        list is required. Failures are logged and yield ``("", None)``.
        """
        async with self._semaphore:
            if not model_name:
                logger.error("async_call_llm: model_name is required.")
                return "", None
            if messages is None:
                if not prompt or not isinstance(prompt, str) or not prompt.strip():
                    logger.error("async_call_llm: empty or invalid prompt.")
                    return "", None
                messages = [{"role": "user", "content": prompt}]
            if not settings.BOOK_ANTHROPIC_API:
                logger.error(
                    "async_call_llm: BOOK_ANTHROPIC_API is not configured. Skipping request."
                )
                return "", None

            payload: dict[str, Any] = {
                "model": model_name,
                "max_tokens": (
                    max_tokens if max_tokens is not None else settings.MAX_TOKENS_CHAT
                ),
                "temperature": (
                    temperature if temperature is not None else settings.TEMPERATURE_CHAT
                ),
                "messages": messages,
            }
            if system:
                payload["system"] = system

            logger.debug(
                f"Calling LLM '{model_name}'. Messages: {len(messages)}. "
                f"Max output tokens: {payload['max_tokens']}. Temp: {payload['temperature']}"
            )
            text, usage, last_exc = await self._call_model_with_retries(
                model_name, payload
            )
            if last_exc is not None:
                logger.error(
                    f"LLM: Call failed for '{model_name}' after all attempts. Last error: {last_exc}"
                )
            return text, usage


# Instantiate the service for other modules to import and use
llm_service = LLMService()
