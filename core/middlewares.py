# Nombre de archivo: middlewares.py
# Ubicación de archivo: core/middlewares.py
# Descripción: Middleware de request_id compartido para la app FastAPI del bot

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from core.logging import request_id_var


def _upstream_id(value: str | None) -> str | None:
    """Acepta el id de un proxy solo si es un UUID válido."""
    if not value:
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Asigna un id por solicitud (o reutiliza el del proxy), lo deja en el contexto de logging y lo devuelve."""

    header_name = "X-Request-ID"

    def __init__(self, app: ASGIApp, trust_upstream: bool = True) -> None:
        super().__init__(app)
        self.trust_upstream = trust_upstream

    async def dispatch(self, request: Request, call_next):
        request_id = None
        if self.trust_upstream:
            request_id = _upstream_id(request.headers.get(self.header_name))
        request_id = request_id or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[self.header_name] = request_id
        return response
