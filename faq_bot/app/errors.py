# Nombre de archivo: errors.py
# Ubicación de archivo: faq_bot/app/errors.py
# Descripción: Excepciones propias del bot de FAQ (configuración y fuente de datos)

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Configuración inválida o incompleta; el servicio no debe arrancar."""


class TokenizerInitError(ConfigurationError):
    """No se pudo inicializar el analizador morfológico (diccionario no disponible)."""


class FaqSourceError(RuntimeError):
    """Fallo al leer la hoja de FAQ; se responde al usuario con el mensaje de error."""


__all__ = ["ConfigurationError", "TokenizerInitError", "FaqSourceError"]
