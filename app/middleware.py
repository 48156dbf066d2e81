import time

from loguru import logger
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class RequestLoggerMiddleware:
    """
    Logs every HTTP request with method, path, status and duration.

    Pure ASGI so that streaming responses pass through untouched; for SSE the
    duration covers the whole stream.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status = {"code": 500}

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            dur_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "{} {} -> {} in {:.1f}ms", scope["method"], scope["path"], status["code"], dur_ms
            )
