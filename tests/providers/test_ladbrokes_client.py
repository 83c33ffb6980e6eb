import asyncio

import httpx
import pytest

from propsheet.config import ProviderSettings
from propsheet.providers.ladbrokes import LadbrokesClient
from propsheet.shared.errors import FetchError


def _settings() -> ProviderSettings:
    return ProviderSettings(
        events_url="https://cms.example.com/fsc/16",
        odds_url="https://ss.example.com/EventToOutcomeForEvent/{EVENT_ID}?responseFormat=json",
        timeout_seconds=2,
    )


def _run(handler, call):
    async def _go():
        client = LadbrokesClient(settings=_settings(), transport=httpx.MockTransport(handler))
        try:
            return await call(client)
        finally:
            await client.close()

    return asyncio.run(_go())


def test_fetch_events_returns_body_unmodified():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, json={"modules": [{"data": [{"id": 1}]}]})

    body = _run(handler, lambda c: c.fetch_events())
    assert body == {"modules": [{"data": [{"id": 1}]}]}
    assert seen["url"] == "https://cms.example.com/fsc/16"
    assert seen["accept"] == "application/json"


def test_fetch_odds_substitutes_event_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["query"] = request.url.query
        return httpx.Response(200, json={"SSResponse": {"children": []}})

    _run(handler, lambda c: c.fetch_odds("230549001"))
    assert seen["path"] == "/EventToOutcomeForEvent/230549001"
    assert seen["query"] == b"responseFormat=json"


def test_fetch_odds_requires_event_id():
    def handler(request):  # pragma: no cover - never reached
        raise AssertionError("no request expected")

    with pytest.raises(ValueError):
        _run(handler, lambda c: c.fetch_odds(""))


def test_non_2xx_raises_fetch_error_with_status_and_message():
    def handler(request):
        return httpx.Response(503, json={"error": "Failed to fetch odds", "message": "upstream down"})

    with pytest.raises(FetchError) as info:
        _run(handler, lambda c: c.fetch_events())
    assert info.value.status_code == 503
    assert info.value.message == "upstream down"
    assert "503" in str(info.value)


def test_no_retry_on_failure():
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        return httpx.Response(500, text="boom")

    with pytest.raises(FetchError):
        _run(handler, lambda c: c.fetch_odds("1"))
    assert calls["n"] == 1


def test_network_error_raises_fetch_error_without_status():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as info:
        _run(handler, lambda c: c.fetch_events())
    assert info.value.status_code is None


def test_timeout_raises_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(FetchError) as info:
        _run(handler, lambda c: c.fetch_events())
    assert "timed out" in str(info.value)


def test_non_json_body_raises_fetch_error():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(FetchError):
        _run(handler, lambda c: c.fetch_events())


def test_timeout_setting_must_be_positive():
    with pytest.raises(ValueError):
        ProviderSettings(timeout_seconds=0)
