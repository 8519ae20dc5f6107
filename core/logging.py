# Nombre de archivo: logging.py
# Ubicación de archivo: core/logging.py
# Descripción: Logging centralizado (stdout + archivo rotativo opcional) con request_id por contexto

from __future__ import annotations

import logging
import os
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s service=%(name)s level=%(levelname)s request_id=%(request_id)s msg=%(message)s"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Inyecta el request_id del contexto actual en cada registro."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    service: str,
    level: str | int = "INFO",
    enable_file: bool | None = None,
    logs_dir: str | Path | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Configura el logging raíz y devuelve el logger del servicio.

    Args:
        service: nombre lógico del servicio (aparece como ``service=`` en cada línea)
        level: nivel (str o int), INFO por defecto; niveles desconocidos caen en INFO
        enable_file: fuerza la escritura a archivo; si None se activa cuando ENV=development
        logs_dir: carpeta destino (default: ./Logs)
        max_bytes: tamaño máximo antes de rotar
        backup_count: cantidad de backups
    """
    lvl = _resolve_level(level)
    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.addFilter(RequestIdFilter())
        root.addHandler(handler)
    root.setLevel(lvl)

    logger = logging.getLogger(service)
    # Evitar duplicados al llamar varias veces
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger
    if enable_file is None:
        enable_file = os.getenv("ENV", "production").lower() == "development"
    if enable_file:
        try:
            base_dir = Path(logs_dir) if logs_dir else (Path.cwd() / "Logs")
            base_dir.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(base_dir / f"{service}.log", maxBytes=max_bytes, backupCount=backup_count)
            fh.setFormatter(logging.Formatter(_FORMAT))
            fh.addFilter(RequestIdFilter())
            fh.setLevel(lvl)
            logger.addHandler(fh)
            logger.debug("action=logging file_handler=enabled path=%s", base_dir / f"{service}.log")
        except OSError as exc:
            logger.error("action=logging file_handler=failed error=%s", exc)
    return logger


__all__ = ["configure_logging", "request_id_var", "RequestIdFilter"]
