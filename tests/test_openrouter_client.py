import asyncio

import httpx
import pytest

from fakes import API_URL, UpstreamRecorder, completion_body, make_client, sse_body
from src.llm.errors import (
    UpstreamConnectionError,
    UpstreamEmptyResponseError,
    UpstreamStatusError,
    UpstreamStreamError,
)
from src.llm.prompts import BATCH_PARAMS, SUMMARY_PARAMS, build_batch_messages


async def _drain(client, messages):
    return [delta async for delta in client.stream(messages, BATCH_PARAMS)]


def test_complete_sends_headers_and_payload():
    recorder = UpstreamRecorder(lambda request: httpx.Response(200, json=completion_body("  Short.  ")))
    client = make_client(recorder)

    text = asyncio.run(client.complete(build_batch_messages("Q?"), SUMMARY_PARAMS))

    assert text == "Short."
    request = recorder.requests[0]
    assert str(request.url) == API_URL
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["X-Title"] == "AI Multi-Question App"
    payload = recorder.payloads[0]
    assert payload["model"] == "test/model"
    assert payload["max_tokens"] == 150
    assert payload["temperature"] == 0.3
    assert "stream" not in payload


def test_complete_raises_status_error_with_upstream_code():
    client = make_client(lambda request: httpx.Response(429, text="rate limited"))
    with pytest.raises(UpstreamStatusError) as exc_info:
        asyncio.run(client.complete(build_batch_messages("Q?"), SUMMARY_PARAMS))
    assert exc_info.value.status_code == 429
    assert "rate limited" in str(exc_info.value)


@pytest.mark.parametrize(
    "body",
    [completion_body(None), completion_body("   "), {"choices": []}, {"unexpected": True}],
)
def test_complete_raises_empty_response_error(body):
    client = make_client(lambda request: httpx.Response(200, json=body))
    with pytest.raises(UpstreamEmptyResponseError):
        asyncio.run(client.complete(build_batch_messages("Q?"), SUMMARY_PARAMS))


def test_complete_wraps_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(UpstreamConnectionError):
        asyncio.run(client.complete(build_batch_messages("Q?"), SUMMARY_PARAMS))


def test_stream_yields_deltas_in_order():
    recorder = UpstreamRecorder(lambda request: httpx.Response(200, content=sse_body("Hel", "lo")))
    client = make_client(recorder)

    deltas = asyncio.run(_drain(client, build_batch_messages("Q?")))

    assert deltas == ["Hel", "lo"]
    assert recorder.payloads[0]["stream"] is True
    assert recorder.payloads[0]["max_tokens"] == 400


def test_stream_ends_on_close_without_sentinel():
    client = make_client(lambda request: httpx.Response(200, content=sse_body("a", "b", done=False)))
    assert asyncio.run(_drain(client, build_batch_messages("Q?"))) == ["a", "b"]


def test_stream_skips_malformed_frames():
    body = sse_body("a", "b", extra_lines=["data: {broken\n\n"])
    client = make_client(lambda request: httpx.Response(200, content=body))
    assert asyncio.run(_drain(client, build_batch_messages("Q?"))) == ["a", "b"]


def test_stream_raises_status_error_before_any_delta():
    client = make_client(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(UpstreamStatusError) as exc_info:
        asyncio.run(_drain(client, build_batch_messages("Q?")))
    assert exc_info.value.status_code == 500


def test_stream_raises_on_in_band_error():
    body = sse_body("par", done=False, extra_lines=['data: {"error": {"code": 502, "message": "Provider down"}}\n\n'])
    client = make_client(lambda request: httpx.Response(200, content=body))
    with pytest.raises(UpstreamStreamError, match="Provider down"):
        asyncio.run(_drain(client, build_batch_messages("Q?")))


def test_stream_wraps_network_failure():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    with pytest.raises(UpstreamConnectionError):
        asyncio.run(_drain(client, build_batch_messages("Q?")))


def test_stream_error_message_carries_provider_code():
    body = sse_body(done=False, extra_lines=['data: {"error": {"code": 429, "message": "Slow down"}}\n\n'])
    client = make_client(lambda request: httpx.Response(200, content=body))
    with pytest.raises(UpstreamStreamError) as exc_info:
        asyncio.run(_drain(client, build_batch_messages("Q?")))
    assert exc_info.value.code == 429
    assert str(exc_info.value) == "Stream error 429: Slow down"
