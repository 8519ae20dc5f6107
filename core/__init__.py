# Nombre de archivo: __init__.py
# Ubicación de archivo: core/__init__.py
# Descripción: Inicializa el paquete de utilidades compartidas (logging, secretos, middlewares)

"""Utilidades compartidas por el bot de FAQ."""

from .logging import configure_logging, request_id_var
from .secrets import get_secret

__all__ = ["configure_logging", "get_secret", "request_id_var"]
