# Nombre de archivo: secrets.py
# Ubicación de archivo: core/secrets.py
# Descripción: Lectura de credenciales (LINE, Google) desde entorno o Docker secrets

"""Funciones para leer secretos de variables de entorno o archivos en `/run/secrets`.

El bot necesita el secreto del canal LINE, su access token y el JSON de la
cuenta de servicio de Google. En despliegues con Docker Secrets ninguno de
ellos está en el entorno: se busca un archivo con el mismo nombre (en
minúsculas) dentro de ``SECRETS_DIR`` (por defecto `/run/secrets`).
"""

from pathlib import Path
from typing import Optional
import os

DEFAULT_SECRETS_DIR = "/run/secrets"


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Obtiene el secreto `name` desde variables de entorno o el directorio de secretos.

    Parameters
    ----------
    name:
        Nombre de la variable de entorno a buscar (ej. ``LINE_CHANNEL_SECRET``).
    default:
        Valor a retornar si no se encuentra el secreto o el archivo está vacío.

    Returns
    -------
    Optional[str]
        Valor del secreto sin espacios finales o `default` si no está disponible.
    """

    value = os.getenv(name)
    if value and value.strip():
        return value.strip()

    secret_file = Path(os.getenv("SECRETS_DIR", DEFAULT_SECRETS_DIR)) / name.lower()
    try:
        content = secret_file.read_text(encoding="utf-8").strip()
    except (FileNotFoundError, NotADirectoryError, PermissionError):
        return default
    return content or default
