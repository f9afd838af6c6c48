# Nombre de archivo: config.py
# Ubicación de archivo: core/config.py
# Descripción: Configuración centralizada (entorno) para el cliente de reportes de oportunidad

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv


@dataclass(slots=True)
class ReportsApiSettings:
    """Parámetros de conexión con el servicio remoto de reportes."""

    base_url: str
    timeout: float


@dataclass(slots=True)
class LoggingSettings:
    level: str
    enable_file: bool
    logs_dir: str | None


@dataclass(slots=True)
class Settings:
    reports_api: ReportsApiSettings
    logging: LoggingSettings

    def __init__(self) -> None:
        self.reports_api = ReportsApiSettings(
            base_url=getenv("REPORTS_API_URL", "http://localhost:3000").rstrip("/"),
            timeout=float(getenv("REPORTS_API_TIMEOUT", "15")),
        )
        self.logging = LoggingSettings(
            level=getenv("LOG_LEVEL", "INFO").upper(),
            enable_file=getenv("ENV", "development").lower() == "development",
            logs_dir=getenv("LOGS_DIR"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
