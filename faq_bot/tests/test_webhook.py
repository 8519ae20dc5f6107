# Nombre de archivo: test_webhook.py
# Ubicación de archivo: faq_bot/tests/test_webhook.py
# Descripción: Pruebas de extremo a extremo de la app FastAPI (webhook, health, métricas, CORS)

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest
from google.auth.exceptions import RefreshError
from fastapi.testclient import TestClient
from linebot.v3.messaging import ApiException

from faq_bot.app.config import Settings
from faq_bot.app.errors import ConfigurationError, FaqSourceError
from faq_bot.app.line_gateway import LineGateway
from faq_bot.app.main import create_app
from faq_bot.app.metrics import export_metrics, reset_metrics
from faq_bot.app.schemas import Fallbacks
from faq_bot.app.service import FaqResponder
from faq_bot.app.sheets import SheetFaqSource
from faq_bot.app.synonyms import SynonymMap

from line_helpers import (
    CHANNEL_SECRET,
    FakeFaqSource,
    FakeMessagingApi,
    sign,
    text_event,
    unfollow_event,
    webhook_body,
)


def _settings() -> Settings:
    return Settings(
        line_channel_secret=CHANNEL_SECRET,
        line_channel_access_token="token",
        google_sheet_id="sheet",
        log_level="DEBUG",
    )


@pytest.fixture
def api() -> FakeMessagingApi:
    return FakeMessagingApi()


@pytest.fixture
def source(faq_rows) -> FakeFaqSource:
    return FakeFaqSource(faq_rows)


@pytest.fixture
def client(extractor, source, api) -> TestClient:
    reset_metrics()
    responder = FaqResponder(extractor, source, SynonymMap(), Fallbacks())
    gateway = LineGateway(CHANNEL_SECRET, "token", api=api)
    app = create_app(_settings(), responder=responder, gateway=gateway)
    with TestClient(app) as test_client:
        yield test_client


def _post(client: TestClient, body: str, signature: str | None = None):
    headers = {"Content-Type": "application/json"}
    if signature is not None:
        headers["X-Line-Signature"] = signature
    return client.post("/callback", content=body.encode("utf-8"), headers=headers)


def test_root_health(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "connection success"}


def test_health_y_request_id(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["service"] == "faq_bot"
    assert "time" in data
    uuid.UUID(resp.headers["X-Request-ID"])


def test_webhook_responde_con_la_faq(client, api, source) -> None:
    body = webhook_body(text_event("写真を送ってください", reply_token="rt-1"))
    resp = _post(client, body, sign(body))

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "processed": 1}
    assert len(api.requests) == 1
    assert api.requests[0].reply_token == "rt-1"
    assert api.requests[0].messages[0].text == "画像はこちら"
    assert source.calls == 1


def test_webhook_un_reply_por_mensaje(client, api) -> None:
    body = webhook_body(
        text_event("名前は？", reply_token="rt-a"),
        unfollow_event(),
        text_event("", reply_token="rt-b"),
    )
    resp = _post(client, body, sign(body))

    assert resp.status_code == 200
    assert resp.json()["processed"] == 2
    replies = {r.reply_token: r.messages[0].text for r in api.requests}
    assert replies == {"rt-a": "山田です", "rt-b": Fallbacks().not_understood}


def test_webhook_sin_firma(client, api) -> None:
    resp = _post(client, webhook_body(text_event("名前")))
    assert resp.status_code == 400
    assert api.requests == []


def test_webhook_firma_invalida(client, api, source) -> None:
    body = webhook_body(text_event("名前"))
    resp = _post(client, body, sign(body, secret="otro"))
    assert resp.status_code == 400
    assert api.requests == []
    assert source.calls == 0


def test_webhook_error_de_hoja_responde_error(client, api, source) -> None:
    source.error = FaqSourceError("quota")
    body = webhook_body(text_event("名前"))
    resp = _post(client, body, sign(body))
    assert resp.status_code == 200
    assert api.requests[0].messages[0].text == "エラーが発生しました。"


def test_webhook_fallo_de_reply_igual_devuelve_200(client, api) -> None:
    api.error = ApiException(status=400, reason="Invalid reply token")
    body = webhook_body(text_event("名前"))
    resp = _post(client, body, sign(body))
    assert resp.status_code == 200
    assert len(api.requests) == 1
    assert "faq_bot_reply_failures_total 1.0" in export_metrics().decode()


def test_metricas(client) -> None:
    body = webhook_body(text_event("写真を送ってください"), text_event("天気"))
    _post(client, body, sign(body))
    resp = client.get("/metrics")
    assert resp.status_code == 200
    texto = resp.text
    assert "faq_bot_webhook_requests_total 1.0" in texto
    assert 'faq_bot_match_outcomes_total{outcome="matched"} 1.0' in texto
    assert 'faq_bot_match_outcomes_total{outcome="no_match"} 1.0' in texto
    assert "faq_bot_answer_latency_seconds" in texto


def test_cors_preflight(client) -> None:
    resp = client.options(
        "/callback",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-max-age"] == str(12 * 60 * 60)


def test_create_app_sin_credenciales_no_arranca(monkeypatch) -> None:
    for name in ("LINE_CHANNEL_SECRET", "LINE_CHANNEL_ACCESS_TOKEN", "GOOGLE_SHEET_ID", "GOOGLE_CREDENTIALS_JSON"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SECRETS_DIR", "/nonexistent-secrets")
    with pytest.raises(ConfigurationError):
        create_app(Settings())


def test_create_app_credenciales_google_invalidas(monkeypatch) -> None:
    settings = _settings()
    settings.google_credentials_json = "{roto"
    with pytest.raises(ConfigurationError):
        create_app(settings)


def test_webhook_body_no_utf8_es_400(client, api, source) -> None:
    raw = b'{"destination": "U", "events": [\xff\xfe]}'
    resp = client.post(
        "/callback",
        content=raw,
        headers={"Content-Type": "application/json", "X-Line-Signature": "firma-cualquiera"},
    )
    assert resp.status_code == 400
    assert api.requests == []
    assert source.calls == 0


def test_webhook_credenciales_google_revocadas_responde_error(extractor) -> None:
    reset_metrics()
    sheet_client = MagicMock()
    sheet_client.open_by_key.side_effect = RefreshError("invalid_grant")
    responder = FaqResponder(extractor, SheetFaqSource(sheet_client, "sheet"), SynonymMap(), Fallbacks())
    api = FakeMessagingApi()
    app = create_app(_settings(), responder=responder, gateway=LineGateway(CHANNEL_SECRET, "token", api=api))

    body = webhook_body(text_event("名前", reply_token="rt-1"), text_event("写真", reply_token="rt-2"))
    with TestClient(app) as test_client:
        resp = _post(test_client, body, sign(body))

    assert resp.status_code == 200
    assert resp.json()["processed"] == 2
    assert [r.messages[0].text for r in api.requests] == ["エラーが発生しました。"] * 2
    assert 'faq_bot_match_outcomes_total{outcome="source_error"} 2.0' in export_metrics().decode()
