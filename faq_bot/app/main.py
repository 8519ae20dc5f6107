# Nombre de archivo: main.py
# Ubicación de archivo: faq_bot/app/main.py
# Descripción: Aplicación FastAPI del bot de FAQ (webhook LINE, health, métricas)

"""Aplicación FastAPI del webhook de LINE.

``create_app`` construye todas las dependencias al inicio: si falta una
credencial o el diccionario del tokenizer no carga, la excepción se propaga y
el proceso no llega a servir tráfico.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated

from fastapi import FastAPI, Header, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from core.logging import configure_logging
from core.middlewares import RequestIDMiddleware

from . import metrics
from .config import Settings, get_settings
from .line_gateway import InvalidSignatureError, LineGateway
from .schemas import HealthResponse, WebhookAck
from .service import FaqResponder
from .sheets import SheetFaqSource, build_gspread_client
from .synonyms import SynonymMap
from .tokenizer import KeywordExtractor

CORS_MAX_AGE = 12 * 60 * 60


def build_responder(settings: Settings) -> FaqResponder:
    """Arma el responder con los recursos de larga vida (tokenizer, sinónimos, cliente Sheets)."""
    if settings.faq_synonyms_path:
        synonyms = SynonymMap.from_json(settings.faq_synonyms_path)
    else:
        synonyms = SynonymMap()
    extractor = KeywordExtractor()
    client = build_gspread_client(settings.google_credentials_json)
    source = SheetFaqSource(client, settings.google_sheet_id or "", settings.faq_range)
    return FaqResponder(extractor, source, synonyms, settings.fallbacks)


def create_app(
    settings: Settings | None = None,
    responder: FaqResponder | None = None,
    gateway: LineGateway | None = None,
) -> FastAPI:
    """Construye la instancia de FastAPI; ``responder`` y ``gateway`` se inyectan en tests."""

    settings = settings or get_settings()
    logger = configure_logging(settings.service_name, settings.log_level)
    if responder is None or gateway is None:
        settings.validate_required()
    if responder is None:
        responder = build_responder(settings)
    if gateway is None:
        gateway = LineGateway(settings.line_channel_secret or "", settings.line_channel_access_token or "")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("action=startup service=%s range=%s", settings.service_name, settings.faq_range)
        try:
            yield
        finally:
            logger.info("action=shutdown service=%s", settings.service_name)

    app = FastAPI(title="faq_bot", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.responder = responder
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
        max_age=CORS_MAX_AGE,
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/", tags=["health"])
    async def root() -> dict[str, str]:
        return {"message": "connection success"}

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(
            service=settings.service_name,
            time=datetime.now(timezone.utc).isoformat(),
        )

    @app.get("/metrics", tags=["metrics"])
    async def metrics_endpoint() -> Response:
        return Response(content=metrics.export_metrics(), media_type=metrics.CONTENT_TYPE_LATEST)

    @app.post("/callback", response_model=WebhookAck, tags=["webhook"])
    async def callback(
        request: Request,
        x_line_signature: Annotated[str | None, Header()] = None,
    ) -> WebhookAck:
        if not x_line_signature:
            logger.warning("action=webhook status=rejected reason=missing_signature")
            raise HTTPException(status_code=400, detail="Falta la cabecera X-Line-Signature")

        raw = await request.body()
        try:
            body = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("action=webhook status=rejected reason=invalid_encoding")
            raise HTTPException(status_code=400, detail="El cuerpo no es UTF-8 válido") from exc
        try:
            messages = gateway.parse_text_messages(body, x_line_signature)
        except InvalidSignatureError as exc:
            logger.warning("action=webhook status=rejected reason=invalid_signature")
            raise HTTPException(status_code=400, detail="Firma inválida") from exc
        except Exception as exc:  # noqa: BLE001 - cuerpo no parseable por el SDK
            logger.error("action=webhook status=error error=%s", exc)
            raise HTTPException(status_code=500, detail="No se pudo procesar el webhook") from exc

        metrics.record_webhook()
        for message in messages:
            result = await asyncio.to_thread(responder.answer, message.text)
            sent = await asyncio.to_thread(gateway.reply, message.reply_token, result.answer)
            if not sent:
                metrics.record_reply_failure()
        return WebhookAck(processed=len(messages))

    return app


__all__ = ["create_app", "build_responder"]
