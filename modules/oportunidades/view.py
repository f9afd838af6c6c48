# Nombre de archivo: view.py
# Ubicación de archivo: modules/oportunidades/view.py
# Descripción: Foto de lo que se renderiza (lista visible, detalle, estados vacíos y error)

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .filters import TAB_ALL, filter_reports
from .schemas import Report
from .store import StoreState

NO_RESULTS_MESSAGE = "No se encontraron reportes."
NO_SELECTION_MESSAGE = "Seleccione un reporte para ver los detalles."


@dataclass(frozen=True, slots=True)
class ReportView:
    visible: Tuple[Report, ...]
    selected: Optional[Report]
    error: Optional[str]
    empty_message: Optional[str]
    detail_placeholder: Optional[str]


def build_view(state: StoreState, tab: str = TAB_ALL, search: str = "") -> ReportView:
    """Combina store, filtro y selección en una vista lista para pintar.

    El reporte seleccionado se busca en la colección completa: sigue en el
    detalle aunque el filtro lo oculte de la lista.
    """
    visible = tuple(filter_reports(state.reports, tab, search))
    selected = None
    if state.selected_id is not None:
        selected = next((r for r in state.reports if r.id == state.selected_id), None)
    return ReportView(
        visible=visible,
        selected=selected,
        error=state.error,
        empty_message=None if visible else NO_RESULTS_MESSAGE,
        detail_placeholder=None if selected else NO_SELECTION_MESSAGE,
    )


__all__ = ["NO_RESULTS_MESSAGE", "NO_SELECTION_MESSAGE", "ReportView", "build_view"]
