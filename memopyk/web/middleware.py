"""
Journalisation des requêtes de l'API.

Une ligne par requête /api : "GET /api/hero-videos 200 in 12ms",
tronquée à 80 caractères. Middleware ASGI pur : le corps des réponses
(flux vidéo compris) n'est pas mis en mémoire.
"""

import time

from loguru import logger
from starlette.types import ASGIApp, Message, Receive, Scope, Send

MAX_LINE_LENGTH = 80


def format_request_line(method: str, path: str, status: int, duration_ms: int) -> str:
    line = f"{method} {path} {status} in {duration_ms}ms"
    if len(line) > MAX_LINE_LENGTH:
        line = line[: MAX_LINE_LENGTH - 1] + "…"
    return line


class RequestLogMiddleware:
    """Journalise méthode, chemin, statut et durée des appels /api."""

    def __init__(self, app: ASGIApp, prefix: str = "/api") -> None:
        self.app = app
        self.prefix = prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http" or not scope.get("path", "").startswith(self.prefix):
            return await self.app(scope, receive, send)

        start = time.perf_counter()
        status = 500

        async def _send_wrapper(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, _send_wrapper)
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(format_request_line(scope["method"], scope["path"], status, duration_ms))
