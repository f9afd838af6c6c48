# Nombre de archivo: logging.py
# Ubicación de archivo: core/logging.py
# Descripción: Configuración de logging del cliente de reportes (stdout + archivo rotativo opcional)

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_settings

_FORMAT = "%(asctime)s service=%(name)s level=%(levelname)s msg=%(message)s"


def setup_logging(
    service: str,
    level: str | int | None = None,
    enable_file: bool | None = None,
    logs_dir: str | Path | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Configura el logging para un punto de entrada (CLI, pruebas manuales).

    Args:
        service: nombre lógico del proceso; también nombra el archivo ``<service>.log``
        level: nivel (str o int); si es None se toma ``LOG_LEVEL``
        enable_file: fuerza la escritura a archivo; si es None se activa con ENV=development
        logs_dir: carpeta destino; si es None se usa ``LOGS_DIR`` o ``./Logs``
        max_bytes: tamaño máximo antes de rotar
        backup_count: cantidad de backups
    """
    settings = get_settings().logging
    level = level if level is not None else settings.level
    lvl = logging.getLevelName(level) if isinstance(level, str) else level
    logging.basicConfig(level=lvl, format=_FORMAT)
    logger = logging.getLogger(service)
    root = logging.getLogger()
    # Evitar handlers duplicados si se llama más de una vez
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return logger
    if enable_file is None:
        enable_file = settings.enable_file
    if not enable_file:
        return logger
    base_dir = Path(logs_dir or settings.logs_dir or Path.cwd() / "Logs")
    try:
        base_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(base_dir / f"{service}.log", maxBytes=max_bytes, backupCount=backup_count)
    except OSError as exc:
        logger.error("action=logging file_handler=failed error=%s", exc)
        return logger
    fh.setFormatter(logging.Formatter(_FORMAT))
    fh.setLevel(lvl)
    # En la raíz para capturar también los loggers por módulo (gateway, store)
    root.addHandler(fh)
    logger.debug("action=logging file_handler=enabled path=%s", base_dir / f"{service}.log")
    return logger


__all__ = ["setup_logging"]
