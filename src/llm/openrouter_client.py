from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
from loguru import logger

from src.config.settings import Settings
from src.llm.errors import (
    UpstreamConnectionError,
    UpstreamEmptyResponseError,
    UpstreamStatusError,
    UpstreamStreamError,
)
from src.llm.prompts import GenerationParams, Message
from src.llm.stream_parser import StreamFrame, StreamFrameParser


class OpenRouterClient:
    """
    Async client for an OpenRouter-compatible chat-completions endpoint.

    - ``complete`` issues one non-streaming request and returns the text.
    - ``stream`` issues one streaming request and yields text deltas in order.

    A fresh ``httpx.AsyncClient`` is opened per call so that concurrent
    batches share nothing. ``transport`` lets tests plug in
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        api_url: str,
        referer: str = "http://localhost:3000",
        title: str = "AI Multi-Question App",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.referer = referer
        self.title = title
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "OpenRouterClient":
        return cls(
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            api_url=settings.openrouter_api_url,
            referer=settings.openrouter_referer,
            title=settings.openrouter_title,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

    def _payload(self, messages: List[Message], params: GenerationParams, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
        }
        if stream:
            payload["stream"] = True
        return payload

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def complete(self, messages: List[Message], params: GenerationParams) -> str:
        """Return the trimmed text of ``choices[0].message.content``."""
        payload = self._payload(messages, params, stream=False)
        try:
            async with self._http_client() as client:
                resp = await client.post(self.api_url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("Upstream request failed: {}", exc)
            raise UpstreamConnectionError(str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            logger.error("Upstream returned {}: {}", resp.status_code, resp.text[:500])
            raise UpstreamStatusError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamEmptyResponseError("Upstream returned a non-JSON body") from exc

        text = _message_content(data)
        if not text:
            raise UpstreamEmptyResponseError("Upstream returned no message content")
        return text

    async def stream(self, messages: List[Message], params: GenerationParams) -> AsyncIterator[str]:
        """Yield each delta of a streaming completion until ``[DONE]`` or close."""
        payload = self._payload(messages, params, stream=True)
        parser = StreamFrameParser()
        try:
            async with self._http_client() as client:
                async with client.stream(
                    "POST", self.api_url, json=payload, headers=self._headers()
                ) as resp:
                    if not resp.is_success:
                        body = (await resp.aread()).decode("utf-8", errors="ignore")
                        logger.error("Upstream stream returned {}: {}", resp.status_code, body[:500])
                        raise UpstreamStatusError(resp.status_code, body)

                    async for chunk in resp.aiter_text():
                        for frame in parser.feed(chunk):
                            if frame.done:
                                return
                            yield _frame_text(frame)
                        if parser.finished:
                            return

                    for frame in parser.close():
                        if frame.done:
                            return
                        yield _frame_text(frame)
        except httpx.HTTPError as exc:
            logger.error("Upstream stream failed: {}", exc)
            raise UpstreamConnectionError(str(exc) or exc.__class__.__name__) from exc


def _frame_text(frame: StreamFrame) -> str:
    if frame.error is not None:
        message = frame.error.get("message") or "Upstream stream error"
        code = frame.error.get("code")
        raise UpstreamStreamError(str(message), code if isinstance(code, int) else None)
    return frame.text or ""


def _message_content(data: Any) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str):
        return None
    return content.strip() or None
