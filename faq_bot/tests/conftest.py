# Nombre de archivo: conftest.py
# Ubicación de archivo: faq_bot/tests/conftest.py
# Descripción: Fixtures comunes (PYTHONPATH, tokenizer real compartido, filas FAQ de ejemplo)

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
TESTS_DIR = Path(__file__).resolve().parent
for path in (ROOT_DIR, TESTS_DIR):
    if str(path) not in sys.path:  # pragma: no cover - inicialización
        sys.path.insert(0, str(path))

from faq_bot.app.schemas import FaqRow  # noqa: E402
from faq_bot.app.tokenizer import KeywordExtractor  # noqa: E402


@pytest.fixture(scope="session")
def extractor() -> KeywordExtractor:
    # janome carga el diccionario una sola vez para toda la sesión
    return KeywordExtractor()


@pytest.fixture
def faq_rows() -> list[FaqRow]:
    return [
        FaqRow(keywords="画像 送信", answer="画像はこちら"),
        FaqRow(keywords="名前", answer="山田です"),
    ]
