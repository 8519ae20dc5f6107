# Nombre de archivo: test_request_id.py
# Ubicación de archivo: tests/test_request_id.py
# Descripción: Verifica que el middleware compartido genere X-Request-ID y lo exponga al logging

import uuid

from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.logging import request_id_var
from core.middlewares import RequestIDMiddleware


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"request_id": request_id_var.get()}

    return app


def test_request_id_en_cabecera_y_contexto() -> None:
    client = TestClient(_build_app())
    resp = client.get("/ping")
    assert resp.status_code == 200
    header = resp.headers.get("X-Request-ID")
    assert header is not None
    uuid.UUID(header)
    assert resp.json()["request_id"] == header


def test_request_id_distinto_por_solicitud() -> None:
    client = TestClient(_build_app())
    first = client.get("/ping").headers["X-Request-ID"]
    second = client.get("/ping").headers["X-Request-ID"]
    assert first != second
    assert request_id_var.get() == "-"


def test_reutiliza_request_id_del_proxy() -> None:
    client = TestClient(_build_app())
    upstream = str(uuid.uuid4())
    resp = client.get("/ping", headers={"X-Request-ID": upstream})
    assert resp.headers["X-Request-ID"] == upstream
    assert resp.json()["request_id"] == upstream


def test_ignora_request_id_invalido() -> None:
    client = TestClient(_build_app())
    resp = client.get("/ping", headers={"X-Request-ID": "no-es-uuid"})
    header = resp.headers["X-Request-ID"]
    assert header != "no-es-uuid"
    uuid.UUID(header)
