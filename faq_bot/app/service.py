# Nombre de archivo: service.py
# Ubicación de archivo: faq_bot/app/service.py
# Descripción: Orquestador tokenizer -> hoja de FAQ -> matcher para un mensaje entrante

from __future__ import annotations

import hashlib
import logging
import time

from . import metrics
from .errors import FaqSourceError
from .matcher import match
from .schemas import Fallbacks, MatchOutcome, MatchResult
from .sheets import FaqSource
from .synonyms import SynonymMap
from .tokenizer import KeywordExtractor

logger = logging.getLogger(__name__)


class FaqResponder:
    """Elige la respuesta para un texto.

    Todas las dependencias son de solo lectura salvo la fuente de FAQ, que se
    consulta en cada llamada; la instancia se comparte entre requests.
    """

    def __init__(
        self,
        extractor: KeywordExtractor,
        source: FaqSource,
        synonyms: SynonymMap,
        fallbacks: Fallbacks | None = None,
    ) -> None:
        self.extractor = extractor
        self.source = source
        self.synonyms = synonyms
        self.fallbacks = fallbacks or Fallbacks()

    def _resolve(self, text: str) -> MatchResult:
        keywords = self.extractor.extract(text)
        for keyword in keywords:
            logger.debug("action=tokenize token=%s pos=%s", keyword.surface, keyword.pos.value)
        if not keywords:
            return MatchResult(outcome=MatchOutcome.NOT_UNDERSTOOD, answer=self.fallbacks.not_understood)

        try:
            rows = self.source.fetch_rows()
        except FaqSourceError as exc:
            logger.warning("action=faq_fetch status=failed error=%s", exc)
            return MatchResult(outcome=MatchOutcome.SOURCE_ERROR, answer=self.fallbacks.error)

        return match(keywords, rows, self.synonyms, self.fallbacks)

    def answer(self, text: str) -> MatchResult:
        started = time.perf_counter()
        result = self._resolve(text)
        metrics.record_answer(result.outcome.value, time.perf_counter() - started)
        logger.info(
            "action=answer outcome=%s row=%s len_text=%d hash_sha256=%s",
            result.outcome.value,
            result.row_index,
            len(text),
            hashlib.sha256(text.encode()).hexdigest()[:12],
        )
        return result


__all__ = ["FaqResponder"]
