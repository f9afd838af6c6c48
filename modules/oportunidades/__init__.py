# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/oportunidades/__init__.py
# Descripción: Paquete del store de reportes de oportunidad de huéspedes

from .errors import ERROR_MESSAGES, ErrorChannel, OperationFailed
from .filters import TAB_ALL, TABS, filter_reports
from .schemas import Report, ReportDraft, ReportStatus, SchemaError, Update
from .selection import SelectionController
from .store import ReportStore, StoreState
from .view import ReportView, build_view

__all__ = [
    "ERROR_MESSAGES",
    "ErrorChannel",
    "OperationFailed",
    "Report",
    "ReportDraft",
    "ReportStatus",
    "ReportStore",
    "ReportView",
    "SchemaError",
    "SelectionController",
    "StoreState",
    "TABS",
    "TAB_ALL",
    "Update",
    "build_view",
    "filter_reports",
]
