import json

import httpx
import pytest
from config import settings
from core.llm_interface import LLMService

USAGE = {"input_tokens": 10, "output_tokens": 4}


def _ok(text: str = "Hello writer") -> httpx.Response:
    return httpx.Response(
        200, json={"content": [{"type": "text", "text": text}], "usage": USAGE}
    )


def _service(monkeypatch, handler) -> LLMService:
    service = LLMService(transport=httpx.MockTransport(handler))

    async def no_sleep(attempt: int) -> None:
        return None

    monkeypatch.setattr(service, "_backoff_delay", no_sleep)
    return service


@pytest.mark.asyncio
async def test_call_sends_messages_request(monkeypatch):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _ok()

    service = _service(monkeypatch, handler)
    text, usage = await service.async_call_llm(
        "test-model", "Hi", system="Be kind", temperature=0.2, max_tokens=50
    )
    await service.aclose()

    assert text == "Hello writer"
    assert usage == USAGE
    request = seen[0]
    assert request.url.path == "/v1/messages"
    assert request.headers["x-api-key"] == settings.BOOK_ANTHROPIC_API
    assert request.headers["anthropic-version"] == settings.ANTHROPIC_VERSION
    payload = json.loads(request.content)
    assert payload == {
        "model": "test-model",
        "max_tokens": 50,
        "temperature": 0.2,
        "messages": [{"role": "user", "content": "Hi"}],
        "system": "Be kind",
    }


@pytest.mark.asyncio
async def test_text_blocks_are_joined(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "content": [
                    {"type": "text", "text": "Part one. "},
                    {"type": "tool_use", "id": "x"},
                    {"type": "text", "text": "Part two."},
                ]
            },
        )

    service = _service(monkeypatch, handler)
    text, usage = await service.async_call_llm(
        "test-model", messages=[{"role": "user", "content": "Hi"}]
    )
    await service.aclose()
    assert text == "Part one. Part two."
    assert usage is None


@pytest.mark.asyncio
async def test_server_error_is_retried(monkeypatch):
    responses = [httpx.Response(500, json={"error": "boom"}), _ok("Recovered")]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    service = _service(monkeypatch, handler)
    text, usage = await service.async_call_llm("test-model", "Hi")
    await service.aclose()

    assert text == "Recovered"
    assert usage == USAGE
    assert service.request_count == 2


@pytest.mark.asyncio
async def test_client_error_is_not_retried(monkeypatch):
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(400, json={"error": "bad request"})

    service = _service(monkeypatch, handler)
    result = await service.async_call_llm("test-model", "Hi")
    await service.aclose()

    assert result == ("", None)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_rate_limit_retries_until_exhausted(monkeypatch):
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(429, json={"error": "slow down"})

    service = _service(monkeypatch, handler)
    result = await service.async_call_llm("test-model", "Hi")
    await service.aclose()

    assert result == ("", None)
    assert len(calls) == settings.LLM_RETRY_ATTEMPTS


@pytest.mark.asyncio
async def test_missing_api_key_skips_request(monkeypatch):
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return _ok()

    monkeypatch.setattr(settings, "BOOK_ANTHROPIC_API", "")
    service = _service(monkeypatch, handler)
    result = await service.async_call_llm("test-model", "Hi")
    await service.aclose()

    assert result == ("", None)
    assert calls == []


@pytest.mark.asyncio
async def test_invalid_input_skips_request(monkeypatch):
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return _ok()

    service = _service(monkeypatch, handler)
    assert await service.async_call_llm("test-model", "   ") == ("", None)
    assert await service.async_call_llm("", "Hi") == ("", None)
    await service.aclose()
    assert calls == []
