# Nombre de archivo: config.py
# Ubicación de archivo: faq_bot/app/config.py
# Descripción: Configuración y settings del bot de FAQ (LINE + Google Sheets)

"""Configuración central del bot de FAQ.

Los valores se leen del entorno. Las credenciales aceptan además Docker
Secrets (ver :func:`core.secrets.get_secret`).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.secrets import get_secret

from .errors import ConfigurationError
from .schemas import Fallbacks

DEFAULT_FALLBACKS = Fallbacks()


class Settings(BaseSettings):
    """Parámetros configurables del servicio."""

    service_name: str = Field(default="faq_bot", description="Nombre lógico del servicio")
    host: str = Field(default="0.0.0.0", description="Host de escucha para Uvicorn")
    port: int = Field(default=80, description="Puerto HTTP del webhook")
    log_level: str = Field(default="INFO", description="Nivel de logging del servicio")

    line_channel_secret: str | None = Field(
        default_factory=lambda: get_secret("LINE_CHANNEL_SECRET"),
        description="Secreto del canal LINE (verificación de firma)",
    )
    line_channel_access_token: str | None = Field(
        default_factory=lambda: get_secret("LINE_CHANNEL_ACCESS_TOKEN"),
        description="Access token del canal LINE (envío de respuestas)",
    )
    google_sheet_id: str | None = Field(default=None, description="ID del Google Sheet con las FAQ")
    google_credentials_json: str | None = Field(
        default_factory=lambda: get_secret("GOOGLE_CREDENTIALS_JSON"),
        description="JSON de la cuenta de servicio de Google",
    )
    faq_range: str = Field(default="FAQ!A:B", description="Rango A1 leído en cada mensaje (palabras clave, respuesta)")
    faq_synonyms_path: Path | None = Field(default=None, description="JSON opcional con el diccionario de sinónimos")

    faq_fallback_not_understood: str = Field(default=DEFAULT_FALLBACKS.not_understood)
    faq_fallback_no_match: str = Field(default=DEFAULT_FALLBACKS.no_match)
    faq_fallback_error: str = Field(default=DEFAULT_FALLBACKS.error)

    cors_allow_origins: str = Field(default="*", description="Orígenes CORS separados por coma")

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    @property
    def fallbacks(self) -> Fallbacks:
        return Fallbacks(
            not_understood=self.faq_fallback_not_understood,
            no_match=self.faq_fallback_no_match,
            error=self.faq_fallback_error,
        )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    def validate_required(self) -> None:
        """Validación fail-fast al construir la app.

        Sin secreto de canal no se puede verificar la firma del webhook, sin
        token no se puede responder y sin ID de hoja no hay FAQ que consultar.
        """
        missing = [
            name
            for name, value in (
                ("LINE_CHANNEL_SECRET", self.line_channel_secret),
                ("LINE_CHANNEL_ACCESS_TOKEN", self.line_channel_access_token),
                ("GOOGLE_SHEET_ID", self.google_sheet_id),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Variables de entorno ausentes: {', '.join(missing)}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna settings cacheados para reutilizar en el proyecto."""

    return Settings()


__all__ = ["Settings", "get_settings"]
