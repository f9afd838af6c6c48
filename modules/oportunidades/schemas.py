# Nombre de archivo: schemas.py
# Ubicación de archivo: modules/oportunidades/schemas.py
# Descripción: Modelos de dominio de reportes de oportunidad y mapeo con el esquema del servidor

"""Modelos de datos y traducción servidor <-> dominio.

Este módulo es el único lugar que conoce los nombres de campo del servicio
remoto (``nombre``, ``numero_habitacion``, ``estado_oportunidad``...). Todo lo
que entra desde el gateway pasa por ``parse_report_list`` o
``parse_report_detail``; todo lo que sale hacia un POST/PUT pasa por
``draft_to_server`` o ``patch_to_server``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class ReportStatus(str, Enum):
    """Estado del ciclo de vida de un reporte."""

    ABIERTO = "abierto"
    EN_PROCESO = "en proceso"
    CERRADO = "cerrado"


class SchemaError(Exception):
    """Payload con forma inesperada (del servidor o del propio cliente)."""

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail or message


def _as_id(value: Any) -> Any:
    # Ids numéricos del servidor se normalizan a str; None sigue siendo inválido
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _as_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# --- Dominio ------------------------------------------------------------------


class Update(BaseModel):
    """Una entrada del hilo de seguimiento de un reporte."""

    id: str
    text: str
    timestamp: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Report(BaseModel):
    """Reporte de oportunidad tal como lo consume la interfaz."""

    id: str
    guest_name: str
    room_number: str
    reservation_number: str = ""
    reported_by: str = ""
    department: str = ""
    agency: str = ""
    arrival_date: Optional[str] = None
    departure_date: Optional[str] = None
    created_at: Optional[str] = None
    incident_report: str = ""
    guest_mood: str = ""
    status: ReportStatus
    # Vacío hasta que se carga el detalle del reporte
    updates: Tuple[Update, ...] = ()

    model_config = ConfigDict(frozen=True)


class ReportDraft(BaseModel):
    """Datos de un reporte nuevo (sin id ni fecha de creación, los asigna el servidor)."""

    guest_name: str
    room_number: str
    reservation_number: str = ""
    reported_by: str = ""
    department: str = ""
    agency: str = ""
    arrival_date: Optional[str] = None
    departure_date: Optional[str] = None
    incident_report: str = ""
    guest_mood: str = ""
    status: ReportStatus = ReportStatus.ABIERTO

    model_config = ConfigDict(frozen=True)


# --- Esquema del servidor -----------------------------------------------------


class ServerUpdate(BaseModel):
    id: str
    actualizacion: str
    fecha_actualizacion: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> Any:
        return _as_id(value)

    @field_validator("actualizacion", mode="before")
    @classmethod
    def _texto(cls, value: Any) -> Any:
        return _as_text(value)

    def to_domain(self) -> Update:
        return Update(id=self.id, text=self.actualizacion, timestamp=self.fecha_actualizacion)


class ServerReport(BaseModel):
    """Registro de reporte con los nombres de campo del servicio remoto."""

    id: str
    nombre: str
    numero_habitacion: str
    folio: str = ""
    reportadopor: str = ""
    departamento: str = ""
    fecha_entrada: Optional[str] = None
    fecha_salida: Optional[str] = None
    descripcion_reporte: str = ""
    estado_animo: str = ""
    estado_oportunidad: ReportStatus
    agencia: str = ""
    fecha_creacion: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> Any:
        return _as_id(value)

    @field_validator(
        "nombre",
        "numero_habitacion",
        "folio",
        "reportadopor",
        "departamento",
        "descripcion_reporte",
        "estado_animo",
        "agencia",
        mode="before",
    )
    @classmethod
    def _texto(cls, value: Any) -> Any:
        return _as_text(value)

    def to_domain(self) -> Report:
        return Report(
            id=self.id,
            guest_name=self.nombre,
            room_number=self.numero_habitacion,
            reservation_number=self.folio,
            reported_by=self.reportadopor,
            department=self.departamento,
            arrival_date=self.fecha_entrada,
            departure_date=self.fecha_salida,
            incident_report=self.descripcion_reporte,
            guest_mood=self.estado_animo,
            status=self.estado_oportunidad,
            agency=self.agencia,
            created_at=self.fecha_creacion,
        )


class ServerReportDetail(BaseModel):
    updates: List[ServerUpdate]

    model_config = ConfigDict(extra="ignore")


# Dominio -> servidor. Se usa para POST/PUT y para validar parches.
FIELD_MAP: Dict[str, str] = {
    "id": "id",
    "guest_name": "nombre",
    "room_number": "numero_habitacion",
    "reservation_number": "folio",
    "reported_by": "reportadopor",
    "department": "departamento",
    "arrival_date": "fecha_entrada",
    "departure_date": "fecha_salida",
    "incident_report": "descripcion_reporte",
    "guest_mood": "estado_animo",
    "status": "estado_oportunidad",
    "agency": "agencia",
    "created_at": "fecha_creacion",
}


def parse_report_list(payload: Any) -> List[Report]:
    """Convierte la respuesta de ``GET /api/reports`` en reportes de dominio.

    Rechaza la respuesta completa si no es una lista, si algún registro no
    cumple el esquema o si hay identificadores repetidos.
    """
    if not isinstance(payload, list):
        raise SchemaError("La lista de reportes no es un arreglo", detail=type(payload).__name__)
    try:
        reports = [ServerReport.model_validate(item).to_domain() for item in payload]
    except ValidationError as exc:
        raise SchemaError("Registro de reporte inválido", detail=str(exc)) from exc
    seen: set[str] = set()
    for report in reports:
        if report.id in seen:
            raise SchemaError("Identificador de reporte duplicado", detail=report.id)
        seen.add(report.id)
    return reports


def parse_report_detail(payload: Any) -> Tuple[Update, ...]:
    """Extrae el hilo de actualizaciones de ``GET /api/reports/{id}`` en el orden del servidor."""
    try:
        detail = ServerReportDetail.model_validate(payload)
    except ValidationError as exc:
        raise SchemaError("Detalle de reporte inválido", detail=str(exc)) from exc
    return tuple(u.to_domain() for u in detail.updates)


def _to_server_value(field: str, value: Any) -> Any:
    if field == "status":
        try:
            return ReportStatus(value).value
        except ValueError as exc:
            raise SchemaError("Estado de reporte inválido", detail=repr(value)) from exc
    return value


def patch_to_server(patch: Report | Mapping[str, Any]) -> Dict[str, Any]:
    """Serializa un reporte completo o un parche parcial con los nombres del servidor.

    ``updates`` nunca se envía: el hilo se gestiona por sus propios endpoints.
    """
    if isinstance(patch, Report):
        fields = patch.model_dump(exclude={"updates"})
    else:
        fields = dict(patch)
    unknown = sorted(set(fields) - set(FIELD_MAP))
    if unknown:
        raise SchemaError("Campos de reporte desconocidos", detail=", ".join(unknown))
    return {FIELD_MAP[name]: _to_server_value(name, value) for name, value in fields.items()}


def draft_to_server(draft: ReportDraft) -> Dict[str, Any]:
    return patch_to_server(draft.model_dump())


__all__ = [
    "FIELD_MAP",
    "Report",
    "ReportDraft",
    "ReportStatus",
    "SchemaError",
    "ServerReport",
    "ServerReportDetail",
    "ServerUpdate",
    "Update",
    "draft_to_server",
    "parse_report_detail",
    "parse_report_list",
    "patch_to_server",
]
