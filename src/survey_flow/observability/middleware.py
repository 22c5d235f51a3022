"""Middlewares de observabilidade e controle de admissão."""

from __future__ import annotations

import logging
import threading
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger: logging.Logger = logging.getLogger(__name__)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Gera ou propaga correlation_id em cada request."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        incoming = request.headers.get("x-correlation-id")
        correlation_id = incoming or str(uuid.uuid4())
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)

        response.headers["x-correlation-id"] = correlation_id
        return response


class ConcurrencyLimitMiddleware(BaseHTTPMiddleware):
    """Limita requests simultâneos; acima do teto responde 503.

    Política de admissão apenas: não interfere na atomicidade do registry.
    """

    def __init__(self, app, max_concurrent: int) -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        self._max_concurrent = max_concurrent
        self._in_flight = 0
        self._lock = threading.Lock()

    @property
    def in_flight(self) -> int:
        """Quantidade de requests em andamento."""
        return self._in_flight

    def _try_acquire(self) -> bool:
        with self._lock:
            if self._in_flight >= self._max_concurrent:
                return False
            self._in_flight += 1
            return True

    def _release(self) -> None:
        with self._lock:
            self._in_flight -= 1

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        if not self._try_acquire():
            logger.warning(
                "max_concurrent_requests_reached",
                extra={"max_concurrent": self._max_concurrent, "path": request.url.path},
            )
            return PlainTextResponse("service_busy", status_code=503)
        try:
            return await call_next(request)
        finally:
            self._release()
