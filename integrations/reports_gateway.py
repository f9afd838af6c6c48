# Nombre de archivo: reports_gateway.py
# Ubicación de archivo: integrations/reports_gateway.py
# Descripción: Cliente HTTP asíncrono para el servicio remoto de reportes de oportunidad

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import httpx

from core.config import get_settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Fallo al hablar con el servicio de reportes.

    ``kind`` distingue el origen solo para el log: ``transporte`` (red),
    ``estado`` (respuesta no exitosa) o ``formato`` (cuerpo ilegible).
    """

    def __init__(self, kind: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class ReportGateway(Protocol):
    """Contrato del servicio de reportes. Devuelve payloads con los nombres del servidor."""

    async def list_reports(self) -> Any:
        """``GET /api/reports``."""

    async def get_report(self, report_id: str) -> Any:
        """``GET /api/reports/{id}`` (incluye ``updates``)."""

    async def create_report(self, payload: Dict[str, Any]) -> Any:
        """``POST /api/reports``."""

    async def replace_report(self, report_id: str, payload: Dict[str, Any]) -> Any:
        """``PUT /api/reports/{id}``."""

    async def delete_report(self, report_id: str) -> None:
        """``DELETE /api/reports/{id}``."""

    async def add_update(self, report_id: str, text: str) -> None:
        """``POST /api/reports/{id}/updates``."""

    async def delete_update(self, report_id: str, update_id: str) -> None:
        """``DELETE /api/reports/{id}/updates/{updateId}``."""


class HttpReportGateway(ReportGateway):
    """Implementación sobre ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        settings = get_settings().reports_api
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.http_client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "HttpReportGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, *, json_body: Any = None, expect_body: bool = True) -> Any:
        action = f"{method.lower()} {path}"
        try:
            response = await self.http_client.request(method, path, json=json_body)
        except httpx.HTTPError as exc:
            logger.warning("service=reports_gateway action=%r error=transport detail=%s", action, exc)
            raise GatewayError("transporte", f"Fallo de red: {exc}") from exc
        logger.info("service=reports_gateway action=%r status=%s", action, response.status_code)
        if not response.is_success:
            raise GatewayError(
                "estado",
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )
        if not expect_body or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("service=reports_gateway action=%r error=json detail=%s", action, exc)
            raise GatewayError("formato", "Respuesta JSON inválida", status_code=response.status_code) from exc

    async def list_reports(self) -> Any:
        return await self._request("GET", "/api/reports")

    async def get_report(self, report_id: str) -> Any:
        return await self._request("GET", f"/api/reports/{report_id}")

    async def create_report(self, payload: Dict[str, Any]) -> Any:
        return await self._request("POST", "/api/reports", json_body=payload)

    async def replace_report(self, report_id: str, payload: Dict[str, Any]) -> Any:
        return await self._request("PUT", f"/api/reports/{report_id}", json_body=payload)

    async def delete_report(self, report_id: str) -> None:
        await self._request("DELETE", f"/api/reports/{report_id}", expect_body=False)

    async def add_update(self, report_id: str, text: str) -> None:
        await self._request(
            "POST",
            f"/api/reports/{report_id}/updates",
            json_body={"actualizacion": text},
            expect_body=False,
        )

    async def delete_update(self, report_id: str, update_id: str) -> None:
        await self._request("DELETE", f"/api/reports/{report_id}/updates/{update_id}", expect_body=False)


@dataclass
class InMemoryReportGateway(ReportGateway):
    """Servicio de reportes en memoria útil para pruebas unitarias.

    Guarda los registros con los nombres del servidor y asigna ids numéricos,
    igual que el servicio real. ``fail_on`` permite forzar fallos por método.
    """

    reports: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    updates: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    fail_on: set[str] = field(default_factory=set)
    calls: List[str] = field(default_factory=list)
    _next_id: int = 0
    _next_update_id: int = 0

    def seed(self, record: Dict[str, Any], updates: Optional[List[Dict[str, Any]]] = None) -> str:
        report_id = str(record["id"])
        self.reports[report_id] = dict(record)
        self.updates[report_id] = [dict(u) for u in updates or []]
        self._next_id = max(self._next_id, int(report_id) if report_id.isdigit() else 0)
        for u in self.updates[report_id]:
            if str(u["id"]).isdigit():
                self._next_update_id = max(self._next_update_id, int(u["id"]))
        return report_id

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        if method in self.fail_on:
            raise GatewayError("estado", f"HTTP error! status: 500 ({method})", status_code=500)

    def _require(self, report_id: str) -> Dict[str, Any]:
        record = self.reports.get(report_id)
        if record is None:
            raise GatewayError("estado", "HTTP error! status: 404", status_code=404)
        return record

    async def list_reports(self) -> Any:
        self._enter("list_reports")
        return [copy.deepcopy(r) for r in self.reports.values()]

    async def get_report(self, report_id: str) -> Any:
        self._enter("get_report")
        record = copy.deepcopy(self._require(report_id))
        record["updates"] = copy.deepcopy(self.updates.get(report_id, []))
        return record

    async def create_report(self, payload: Dict[str, Any]) -> Any:
        self._enter("create_report")
        self._next_id += 1
        record = {**payload, "id": self._next_id, "fecha_creacion": "2024-01-01T00:00:00Z"}
        self.reports[str(self._next_id)] = record
        self.updates[str(self._next_id)] = []
        return copy.deepcopy(record)

    async def replace_report(self, report_id: str, payload: Dict[str, Any]) -> Any:
        self._enter("replace_report")
        record = self._require(report_id)
        record.update({k: v for k, v in payload.items() if k != "id"})
        return copy.deepcopy(record)

    async def delete_report(self, report_id: str) -> None:
        self._enter("delete_report")
        self._require(report_id)
        del self.reports[report_id]
        self.updates.pop(report_id, None)

    async def add_update(self, report_id: str, text: str) -> None:
        self._enter("add_update")
        self._require(report_id)
        self._next_update_id += 1
        self.updates.setdefault(report_id, []).append(
            {
                "id": self._next_update_id,
                "actualizacion": text,
                "fecha_actualizacion": f"2024-01-01T00:00:{self._next_update_id:02d}Z",
            }
        )

    async def delete_update(self, report_id: str, update_id: str) -> None:
        self._enter("delete_update")
        self._require(report_id)
        thread = self.updates.get(report_id, [])
        remaining = [u for u in thread if str(u["id"]) != str(update_id)]
        if len(remaining) == len(thread):
            raise GatewayError("estado", "HTTP error! status: 404", status_code=404)
        self.updates[report_id] = remaining


__all__ = [
    "GatewayError",
    "HttpReportGateway",
    "InMemoryReportGateway",
    "ReportGateway",
]
