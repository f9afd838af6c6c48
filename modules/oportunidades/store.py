# Nombre de archivo: store.py
# Ubicación de archivo: modules/oportunidades/store.py
# Descripción: Store de reportes de oportunidad sincronizado con el servicio remoto

"""Store de reportes: única fuente de verdad para la interfaz.

Cada comando llama al gateway y, si la escritura se confirma, vuelve a leer
el estado del servidor antes de tocar el caché local. Nada se modifica a
partir de datos armados en el cliente:

- ``create`` / ``update`` recargan la colección completa (``update`` además
  recarga el hilo del reporte).
- ``add_update`` / ``remove_update`` recargan solo el hilo del reporte.
- ``remove`` quita el reporte localmente una vez que el servidor confirmó.

Todas las lecturas de una operación se obtienen antes de aplicar cambios, así
un fallo en cualquier paso deja el estado exactamente como estaba. Los
errores nunca se propagan: se registran en el ``ErrorChannel`` y la
operación devuelve ``False``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Tuple

from integrations.reports_gateway import GatewayError, ReportGateway

from .errors import ErrorChannel, OperationFailed
from .schemas import (
    Report,
    ReportDraft,
    SchemaError,
    Update,
    draft_to_server,
    parse_report_detail,
    parse_report_list,
    patch_to_server,
)
from .selection import SelectionController

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoreState:
    """Foto inmutable del store para renderizar."""

    reports: Tuple[Report, ...]
    selected_id: Optional[str]
    error: Optional[str]


class ReportStore:
    def __init__(self, gateway: ReportGateway, errors: Optional[ErrorChannel] = None) -> None:
        self.gateway = gateway
        self.errors = errors or ErrorChannel()
        self.selection = SelectionController(self.load_detail)
        self._reports: Tuple[Report, ...] = ()

    # --- Lectura ---------------------------------------------------------------

    @property
    def reports(self) -> Tuple[Report, ...]:
        return self._reports

    @property
    def state(self) -> StoreState:
        return StoreState(self._reports, self.selection.selected_id, self.errors.message)

    def get(self, report_id: str) -> Optional[Report]:
        return next((r for r in self._reports if r.id == report_id), None)

    # --- Comandos ----------------------------------------------------------------

    async def load_all(self) -> bool:
        return await self._run("load_all", self._load_all())

    async def load_detail(self, report_id: str) -> bool:
        return await self._run("load_detail", self._load_detail(report_id))

    async def create(self, draft: ReportDraft) -> bool:
        return await self._run("create", self._create(draft))

    async def update(self, report_id: str, patch: Report | Mapping[str, Any]) -> bool:
        return await self._run("update", self._update(report_id, patch))

    async def remove(self, report_id: str) -> bool:
        return await self._run("remove", self._remove(report_id))

    async def add_update(self, report_id: str, text: str) -> bool:
        return await self._run("add_update", self._add_update(report_id, text))

    async def remove_update(self, report_id: str, update_id: str) -> bool:
        return await self._run("remove_update", self._remove_update(report_id, update_id))

    def select(self, report_id: str) -> asyncio.Task[bool]:
        """Atajo para la interfaz: selecciona y dispara la carga del detalle."""
        return self.selection.select(report_id)

    def deselect(self) -> None:
        self.selection.deselect()

    # --- Implementación ----------------------------------------------------------

    async def _run(self, operation: str, work: Awaitable[None]) -> bool:
        try:
            await work
        except (GatewayError, SchemaError) as exc:
            self.errors.emit(OperationFailed.from_exception(operation, exc))
            return False
        logger.info("action=%s outcome=ok reports=%s", operation, len(self._reports))
        return True

    async def _fetch_all(self) -> List[Report]:
        return parse_report_list(await self.gateway.list_reports())

    async def _fetch_detail(self, report_id: str) -> Tuple[Update, ...]:
        return parse_report_detail(await self.gateway.get_report(report_id))

    def _commit_all(self, reports: List[Report]) -> None:
        # Reemplazo total: los hilos cargados se descartan
        self._reports = tuple(reports)
        self.errors.clear()

    def _commit_detail(self, report_id: str, updates: Tuple[Update, ...]) -> None:
        # Se aplica por id, nunca por "el seleccionado"
        if self.get(report_id) is None:
            logger.info("action=load_detail report_id=%s outcome=discarded reason=not_in_collection", report_id)
            return
        self._reports = tuple(
            r.model_copy(update={"updates": updates}) if r.id == report_id else r for r in self._reports
        )

    async def _load_all(self) -> None:
        self._commit_all(await self._fetch_all())

    async def _load_detail(self, report_id: str) -> None:
        self._commit_detail(report_id, await self._fetch_detail(report_id))

    async def _create(self, draft: ReportDraft) -> None:
        await self.gateway.create_report(draft_to_server(draft))
        self._commit_all(await self._fetch_all())

    async def _update(self, report_id: str, patch: Report | Mapping[str, Any]) -> None:
        payload: Dict[str, Any] = patch_to_server(patch)
        await self.gateway.replace_report(report_id, payload)
        reports = await self._fetch_all()
        updates = await self._fetch_detail(report_id)
        self._commit_all(reports)
        self._commit_detail(report_id, updates)

    async def _remove(self, report_id: str) -> None:
        await self.gateway.delete_report(report_id)
        self._reports = tuple(r for r in self._reports if r.id != report_id)
        if self.selection.clear_if(report_id):
            logger.info("action=remove report_id=%s selection=cleared", report_id)

    async def _add_update(self, report_id: str, text: str) -> None:
        if not text.strip():
            raise SchemaError("La actualización no puede estar vacía")
        await self.gateway.add_update(report_id, text)
        self._commit_detail(report_id, await self._fetch_detail(report_id))

    async def _remove_update(self, report_id: str, update_id: str) -> None:
        await self.gateway.delete_update(report_id, update_id)
        self._commit_detail(report_id, await self._fetch_detail(report_id))


__all__ = ["ReportStore", "StoreState"]
