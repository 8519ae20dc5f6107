# Nombre de archivo: sheets.py
# Ubicación de archivo: faq_bot/app/sheets.py
# Descripción: Lectura de la tabla de FAQ desde Google Sheets (gspread), sin caché
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import gspread
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException, SpreadsheetNotFound

from .errors import ConfigurationError, FaqSourceError
from .matcher import rows_from_values
from .schemas import FaqRow

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[2]


class FaqSource(Protocol):
    def fetch_rows(self) -> list[FaqRow]: ...


def build_gspread_client(credentials_json: str | None = None) -> gspread.Client:
    """Crea el cliente de cuenta de servicio.

    Orden: JSON en memoria (``GOOGLE_CREDENTIALS_JSON``), ``Keys/credentials.json``
    y por último ``credentials.json`` en la raíz del repositorio.
    """
    if credentials_json:
        try:
            payload = json.loads(credentials_json)
        except json.JSONDecodeError as exc:
            raise ConfigurationError("GOOGLE_CREDENTIALS_JSON no contiene JSON válido") from exc
        try:
            return gspread.service_account_from_dict(payload)
        except (ValueError, KeyError) as exc:
            raise ConfigurationError(f"Credenciales de Google inválidas: {exc}") from exc

    for candidate in (ROOT_DIR / "Keys" / "credentials.json", ROOT_DIR / "credentials.json"):
        if candidate.exists():
            return gspread.service_account(filename=str(candidate))

    raise ConfigurationError("No se encontró credentials.json en /Keys ni la variable GOOGLE_CREDENTIALS_JSON")


class SheetFaqSource:
    """Lee el rango de FAQ en cada llamada; nunca escribe ni guarda copias."""

    def __init__(self, client: gspread.Client, sheet_id: str, range_name: str = "FAQ!A:B") -> None:
        self._client = client
        self.sheet_id = sheet_id
        self.range_name = range_name
        # Solo se conserva el handle (metadatos), nunca los valores
        self._spreadsheet: gspread.Spreadsheet | None = None

    def _read_values(self) -> list[list[Any]]:
        if self._spreadsheet is None:
            self._spreadsheet = self._client.open_by_key(self.sheet_id)
        response = self._spreadsheet.values_get(self.range_name)
        return response.get("values", [])

    def fetch_rows(self) -> list[FaqRow]:
        try:
            values = self._read_values()
        except SpreadsheetNotFound as exc:
            raise FaqSourceError(f"No se encontró el Sheet con ID {self.sheet_id}") from exc
        except (GSpreadException, GoogleAuthError, OSError) as exc:
            raise FaqSourceError(f"Error leyendo {self.range_name}: {exc}") from exc

        rows = rows_from_values(values)
        logger.info(
            "action=faq_fetch fetched_rows=%d usable_rows=%d sheet=%s range=%s",
            len(values),
            len(rows),
            self.sheet_id,
            self.range_name,
        )
        return rows


__all__ = ["FaqSource", "SheetFaqSource", "build_gspread_client"]
