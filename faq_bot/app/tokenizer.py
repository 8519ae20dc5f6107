# Nombre de archivo: tokenizer.py
# Ubicación de archivo: faq_bot/app/tokenizer.py
# Descripción: Extracción de palabras clave (sustantivos, verbos, adjetivos) con janome

"""Extracción de palabras clave mediante análisis morfológico.

Se usa janome (diccionario IPADIC incluido en el paquete). El tokenizer se
crea una sola vez al arrancar; si el diccionario no carga el servicio no debe
iniciar, por eso el constructor eleva :class:`TokenizerInitError`.
"""

from __future__ import annotations

import logging

from janome.tokenizer import Tokenizer

from .errors import TokenizerInitError
from .schemas import Keyword, PartOfSpeech

logger = logging.getLogger(__name__)

# Primer campo de la categoría gramatical de IPADIC
POS_CLASSES: dict[str, PartOfSpeech] = {
    "名詞": PartOfSpeech.NOUN,
    "動詞": PartOfSpeech.VERB,
    "形容詞": PartOfSpeech.ADJECTIVE,
}


def classify_pos(part_of_speech: str) -> PartOfSpeech:
    """Mapea la cadena ``"名詞,一般,*,*"`` de janome a :class:`PartOfSpeech`."""
    head = part_of_speech.split(",", 1)[0]
    return POS_CLASSES.get(head, PartOfSpeech.OTHER)


class KeywordExtractor:
    """Envuelve el tokenizer de janome y filtra por categoría gramatical."""

    def __init__(self, tokenizer: Tokenizer | None = None) -> None:
        if tokenizer is None:
            try:
                tokenizer = Tokenizer()
            except Exception as exc:  # noqa: BLE001 - cualquier fallo del diccionario es fatal
                raise TokenizerInitError(f"No se pudo inicializar janome: {exc}") from exc
        self._tokenizer = tokenizer
        logger.info("action=tokenizer_init status=ok")

    def extract(self, text: str) -> list[Keyword]:
        """Devuelve las palabras con contenido en orden de aparición.

        Texto vacío o solo espacios devuelve lista vacía; no es un error.
        """
        if not text or not text.strip():
            return []
        keywords: list[Keyword] = []
        for token in self._tokenizer.tokenize(text):
            pos = classify_pos(token.part_of_speech)
            if pos is PartOfSpeech.OTHER:
                continue
            keywords.append(Keyword(surface=token.surface, pos=pos))
        return keywords


__all__ = ["KeywordExtractor", "classify_pos", "POS_CLASSES"]
