# Nombre de archivo: __init__.py
# Ubicación de archivo: core/__init__.py
# Descripción: Inicializa el paquete de utilidades centrales (configuración y logging)

"""Punto de entrada para utilidades compartidas del proyecto."""

from .config import Settings, get_settings
from .logging import setup_logging

__all__ = ["Settings", "get_settings", "setup_logging"]
