# Nombre de archivo: filters.py
# Ubicación de archivo: modules/oportunidades/filters.py
# Descripción: Filtro de vista por pestaña de estado y texto de búsqueda

from __future__ import annotations

from typing import Iterable, List

from .schemas import Report, ReportStatus

TAB_ALL = "todos"
TABS = (TAB_ALL,) + tuple(s.value for s in ReportStatus)


def matches_tab(report: Report, tab: str) -> bool:
    if tab == TAB_ALL:
        return True
    return report.status == tab


def matches_search(report: Report, search: str) -> bool:
    """Búsqueda sin distinguir mayúsculas sobre nombre del huésped o habitación."""
    term = search.lower()
    return term in report.guest_name.lower() or term in report.room_number.lower()


def filter_reports(reports: Iterable[Report], tab: str = TAB_ALL, search: str = "") -> List[Report]:
    """Devuelve los reportes visibles conservando el orden del store.

    Una lista vacía significa "sin resultados"; quien renderiza debe mostrarlo
    explícitamente.
    """
    if tab not in TABS:
        raise ValueError(f"Pestaña desconocida: {tab!r}")
    return [r for r in reports if matches_tab(r, tab) and matches_search(r, search)]


__all__ = ["TABS", "TAB_ALL", "filter_reports", "matches_search", "matches_tab"]
