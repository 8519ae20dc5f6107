# Nombre de archivo: matcher.py
# Ubicación de archivo: faq_bot/app/matcher.py
# Descripción: Selección de la respuesta FAQ por coincidencia de subcadenas con sinónimos

"""Matcher de FAQ.

Política: la primera fila que coincide gana. Se recorren las filas en el
orden de la hoja, dentro de cada fila las palabras clave del usuario en orden
de extracción y luego los términos de la fila de izquierda a derecha. Hay
coincidencia cuando el término de la fila (o alguno de sus sinónimos) es
subcadena de la palabra del usuario, sin distinguir mayúsculas.

No hay puntajes: el orden de la hoja decide los empates y debe conservarse.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .schemas import Fallbacks, FaqRow, Keyword, MatchOutcome, MatchResult
from .synonyms import SynonymMap


def rows_from_values(values: Iterable[Sequence[Any]] | None) -> list[FaqRow]:
    """Convierte la matriz cruda de la hoja en filas FAQ.

    Las filas con menos de dos celdas (sin respuesta) se descartan sin error.
    Las columnas extra se ignoran.
    """
    rows: list[FaqRow] = []
    for raw in values or ():
        if len(raw) < 2:
            continue
        rows.append(FaqRow(keywords=str(raw[0]), answer=str(raw[1])))
    return rows


def _row_matches(row: FaqRow, keywords: Sequence[str], synonyms: SynonymMap) -> bool:
    terms = row.terms
    for keyword in keywords:
        for term in terms:
            for synonym in synonyms.expand(term):
                candidate = synonym.lower()
                if candidate and candidate in keyword:
                    return True
    return False


def match(
    keywords: Sequence[Keyword],
    rows: Sequence[FaqRow],
    synonyms: SynonymMap,
    fallbacks: Fallbacks | None = None,
) -> MatchResult:
    """Elige la respuesta para ``keywords`` entre ``rows``.

    Sin palabras clave devuelve NOT_UNDERSTOOD sin recorrer las filas.
    """
    fallbacks = fallbacks or Fallbacks()
    if not keywords:
        return MatchResult(outcome=MatchOutcome.NOT_UNDERSTOOD, answer=fallbacks.not_understood)

    lowered = [k.surface.lower() for k in keywords]
    for index, row in enumerate(rows):
        if _row_matches(row, lowered, synonyms):
            return MatchResult(outcome=MatchOutcome.MATCHED, answer=row.answer, row_index=index)
    return MatchResult(outcome=MatchOutcome.NO_MATCH, answer=fallbacks.no_match)


__all__ = ["match", "rows_from_values"]
