# Nombre de archivo: schemas.py
# Ubicación de archivo: faq_bot/app/schemas.py
# Descripción: Tipos de dominio (palabras clave, filas FAQ, resultado) y respuestas HTTP

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Keyword:
    """Palabra extraída del mensaje del usuario."""

    surface: str
    pos: PartOfSpeech = PartOfSpeech.OTHER


@dataclass(frozen=True, slots=True)
class FaqRow:
    """Una fila de la hoja: texto de palabras clave y respuesta."""

    keywords: str
    answer: str

    @property
    def terms(self) -> list[str]:
        # str.split() sin argumentos también corta en espacios de ancho completo
        return self.keywords.lower().split()


@dataclass(frozen=True, slots=True)
class Fallbacks:
    not_understood: str = "ご質問の意図がうまく読み取れませんでした。"
    no_match: str = "その質問にはまだ対応していません。"
    error: str = "エラーが発生しました。"


class MatchOutcome(str, Enum):
    MATCHED = "matched"
    NOT_UNDERSTOOD = "not_understood"
    NO_MATCH = "no_match"
    SOURCE_ERROR = "source_error"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Respuesta elegida para un mensaje.

    ``answer`` es siempre el texto a enviar; ``row_index`` solo está presente
    cuando ``outcome`` es MATCHED.
    """

    outcome: MatchOutcome
    answer: str
    row_index: int | None = None

    @property
    def matched(self) -> bool:
        return self.outcome is MatchOutcome.MATCHED


@dataclass(frozen=True, slots=True)
class InboundText:
    """Mensaje de texto entrante ya validado por el gateway."""

    reply_token: str
    text: str
    user_id: str | None = None


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
    service: str
    time: str


class WebhookAck(BaseModel):
    status: str = Field(default="ok")
    processed: int = Field(default=0, description="Mensajes de texto respondidos")
