# Nombre de archivo: synonyms.py
# Ubicación de archivo: faq_bot/app/synonyms.py
# Descripción: Diccionario de sinónimos inmutable y expansión de palabras clave

"""Expansión de palabras clave con sinónimos.

El mapa se construye una sola vez al iniciar el servicio y queda de solo
lectura: puede compartirse entre requests concurrentes sin locks.
"""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import ConfigurationError

# Diccionario por defecto: palabra canónica -> formas equivalentes
DEFAULT_SYNONYMS: dict[str, list[str]] = {
    "画像": ["写真", "スクリーンショット", "スクショ"],
    "名前": ["氏名", "フルネーム", "よびかた"],
    "趣味": ["好きなこと", "興味", "遊び"],
    "年齢": ["生まれた年", "誕生日", "年数"],
    "好きな言葉": ["好きなフレーズ", "好きなセリフ", "好きなことば"],
    "吸ってるタバコ": ["タバコ", "煙草", "喫煙"],
}


class SynonymMap:
    """Mapa canónico -> sinónimos, inmutable durante la vida del proceso."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        source = DEFAULT_SYNONYMS if entries is None else entries
        normalized: dict[str, tuple[str, ...]] = {}
        for key, values in source.items():
            canonical = str(key).strip().lower()
            if not canonical:
                continue
            synonyms = tuple(s for s in (str(v).strip() for v in values) if s)
            normalized[canonical] = normalized.get(canonical, ()) + synonyms
        self._entries = MappingProxyType(normalized)

    @classmethod
    def from_json(cls, path: str | Path) -> "SynonymMap":
        """Carga un JSON ``{"canónica": ["sinónimo", ...]}``.

        Cualquier problema de lectura o formato es un error de configuración.
        """
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"No se pudo leer el diccionario de sinónimos {path}: {exc}") from exc
        if not isinstance(payload, dict) or not all(isinstance(v, list) for v in payload.values()):
            raise ConfigurationError(f"Formato inválido en {path}: se espera un objeto de listas")
        return cls(payload)

    @property
    def entries(self) -> Mapping[str, tuple[str, ...]]:
        return self._entries

    def expand(self, word: str) -> frozenset[str]:
        """Devuelve ``word`` junto con sus sinónimos (búsqueda exacta por clave)."""
        return frozenset((word, *self._entries.get(word.lower(), ())))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DEFAULT_SYNONYMS", "SynonymMap"]
