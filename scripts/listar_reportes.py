# Nombre de archivo: listar_reportes.py
# Ubicación de archivo: scripts/listar_reportes.py
# Descripción: Script de consola para listar reportes de oportunidad filtrados y ver su detalle

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core.logging import setup_logging
from integrations.reports_gateway import HttpReportGateway
from modules.oportunidades import TABS, ReportStore, ReportView, build_view


def render(view: ReportView) -> str:
    lines: List[str] = []
    if view.error:
        lines.append(f"[ERROR] {view.error}")
    for report in view.visible:
        marker = "*" if view.selected and view.selected.id == report.id else " "
        lines.append(f"{marker} #{report.id} hab. {report.room_number} {report.guest_name} [{report.status.value}]")
    if view.empty_message:
        lines.append(view.empty_message)
    lines.append("")
    if view.selected is None:
        lines.append(view.detail_placeholder or "")
        return "\n".join(lines)
    sel = view.selected
    lines.append(f"Reporte #{sel.id} ({sel.status.value}) creado {sel.created_at or '-'}")
    lines.append(f"  Huésped: {sel.guest_name}  Folio: {sel.reservation_number}  Agencia: {sel.agency}")
    lines.append(f"  Estancia: {sel.arrival_date or '-'} a {sel.departure_date or '-'}")
    lines.append(f"  Reportado por: {sel.reported_by} ({sel.department})  Ánimo: {sel.guest_mood}")
    lines.append(f"  {sel.incident_report}")
    for upd in sel.updates:
        lines.append(f"  - [{upd.timestamp or '-'}] {upd.text}")
    return "\n".join(lines)


async def run(tab: str, search: str, detail_id: Optional[str], base_url: Optional[str]) -> int:
    async with HttpReportGateway(base_url=base_url) as gateway:
        store = ReportStore(gateway)
        ok = await store.load_all()
        if ok and detail_id:
            await store.select(detail_id)
        print(render(build_view(store.state, tab, search)))
    return 0 if store.state.error is None else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Listar reportes de oportunidad")
    parser.add_argument("--tab", choices=TABS, default=TABS[0])
    parser.add_argument("--buscar", default="", help="Texto a buscar en nombre o habitación")
    parser.add_argument("--detalle", default=None, help="Id del reporte a mostrar en detalle")
    parser.add_argument("--url", default=None, help="URL base del servicio (default REPORTS_API_URL)")
    args = parser.parse_args()
    setup_logging("listar_reportes", enable_file=False)
    sys.exit(asyncio.run(run(args.tab, args.buscar, args.detalle, args.url)))


if __name__ == "__main__":  # pragma: no cover
    try:
        main()
    except KeyboardInterrupt:
        print("Interrumpido por el usuario.")
        sys.exit(130)
