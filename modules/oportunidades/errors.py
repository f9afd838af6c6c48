# Nombre de archivo: errors.py
# Ubicación de archivo: modules/oportunidades/errors.py
# Descripción: Canal de errores visible al usuario y fallo uniforme de operaciones del store

from __future__ import annotations

import logging
from typing import Dict, Optional

from integrations.reports_gateway import GatewayError

from .schemas import SchemaError

logger = logging.getLogger(__name__)

ERROR_MESSAGES: Dict[str, str] = {
    "load_all": "Error al cargar los reportes. Por favor, intente de nuevo más tarde.",
    "load_detail": "Error al cargar los detalles del reporte. Por favor, intente de nuevo.",
    "create": "Error al crear el reporte. Por favor, intente de nuevo.",
    "update": "Error al actualizar el reporte. Por favor, intente de nuevo.",
    "remove": "Error al eliminar el reporte. Por favor, intente de nuevo.",
    "add_update": "Error al añadir la actualización. Por favor, intente de nuevo.",
    "remove_update": "Error al eliminar la actualización. Por favor, intente de nuevo.",
}


class OperationFailed(Exception):
    """Resultado único de cualquier fallo de una operación del store.

    Red, estado HTTP y cuerpo malformado colapsan aquí; ``kind`` queda solo
    para el log.
    """

    def __init__(self, operation: str, kind: str, *, detail: str | None = None) -> None:
        self.operation = operation
        self.kind = kind
        self.user_message = ERROR_MESSAGES[operation]
        self.detail = detail or self.user_message
        super().__init__(self.user_message)

    @classmethod
    def from_exception(cls, operation: str, exc: Exception) -> "OperationFailed":
        if isinstance(exc, GatewayError):
            return cls(operation, exc.kind, detail=str(exc))
        if isinstance(exc, SchemaError):
            return cls(operation, "formato", detail=exc.detail)
        return cls(operation, "desconocido", detail=repr(exc))


class ErrorChannel:
    """Último mensaje de error visible; un solo casillero."""

    def __init__(self) -> None:
        self._message: Optional[str] = None

    @property
    def message(self) -> Optional[str]:
        return self._message

    def emit(self, failure: OperationFailed) -> None:
        logger.warning(
            "action=%s outcome=failed kind=%s detail=%s",
            failure.operation,
            failure.kind,
            failure.detail,
        )
        self._message = failure.user_message

    def clear(self) -> None:
        self._message = None


__all__ = ["ERROR_MESSAGES", "ErrorChannel", "OperationFailed"]
