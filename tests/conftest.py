# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (PYTHONPATH y directorio de secretos aislado)

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture(autouse=True)
def isolated_secrets_dir(monkeypatch, tmp_path_factory):
    """Evita que los tests lean /run/secrets del host."""
    monkeypatch.setenv("SECRETS_DIR", str(tmp_path_factory.mktemp("secrets")))
