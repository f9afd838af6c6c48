# Nombre de archivo: selection.py
# Ubicación de archivo: modules/oportunidades/selection.py
# Descripción: Controlador de selección del reporte mostrado en detalle

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

DetailLoader = Callable[[str], Awaitable[bool]]


class SelectionController:
    """Sin selección o exactamente un reporte seleccionado.

    Seleccionar fija el id de inmediato y dispara la carga del detalle en
    segundo plano. Las cargas previas no se cancelan: el store aplica cada
    respuesta al reporte con su propio id.
    """

    def __init__(self, loader: DetailLoader) -> None:
        self._loader = loader
        self._selected_id: Optional[str] = None
        self._pending: Set[asyncio.Task[bool]] = set()

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def select(self, report_id: str) -> asyncio.Task[bool]:
        """Selecciona ``report_id`` y programa ``load_detail``. Requiere un loop activo."""
        self._selected_id = report_id
        logger.debug("action=select report_id=%s pending=%s", report_id, len(self._pending))
        task = asyncio.get_running_loop().create_task(self._loader(report_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def deselect(self) -> None:
        self._selected_id = None

    def clear_if(self, report_id: str) -> bool:
        """Quita la selección solo si apunta a ``report_id``."""
        if self._selected_id != report_id:
            return False
        self._selected_id = None
        return True

    async def wait_pending(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending)


__all__ = ["DetailLoader", "SelectionController"]
