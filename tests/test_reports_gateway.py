# Nombre de archivo: test_reports_gateway.py
# Ubicación de archivo: tests/test_reports_gateway.py
# Descripción: Pruebas del cliente HTTP del servicio de reportes

from __future__ import annotations

import json

import httpx
import pytest

from integrations.reports_gateway import GatewayError, HttpReportGateway

BASE_URL = "http://reportes.test"


def _gateway(handler) -> HttpReportGateway:
    transport = httpx.MockTransport(handler)
    return HttpReportGateway(
        base_url=BASE_URL,
        http_client=httpx.AsyncClient(transport=transport, base_url=BASE_URL),
    )


@pytest.mark.asyncio
async def test_endpoints_and_methods() -> None:
    seen: list[tuple[str, str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        seen.append((request.method, request.url.path, body))
        if request.method == "GET" and request.url.path == "/api/reports":
            return httpx.Response(200, json=[])
        if request.method == "GET":
            return httpx.Response(200, json={"updates": []})
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json={"id": 9})

    gw = _gateway(handler)
    assert await gw.list_reports() == []
    assert await gw.get_report("9") == {"updates": []}
    assert await gw.create_report({"nombre": "Ana"}) == {"id": 9}
    await gw.replace_report("9", {"estado_oportunidad": "cerrado"})
    await gw.add_update("9", "Se ofreció upgrade")
    await gw.delete_update("9", "4")
    await gw.delete_report("9")
    await gw.aclose()

    assert seen == [
        ("GET", "/api/reports", None),
        ("GET", "/api/reports/9", None),
        ("POST", "/api/reports", {"nombre": "Ana"}),
        ("PUT", "/api/reports/9", {"estado_oportunidad": "cerrado"}),
        ("POST", "/api/reports/9/updates", {"actualizacion": "Se ofreció upgrade"}),
        ("DELETE", "/api/reports/9/updates/4", None),
        ("DELETE", "/api/reports/9", None),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
async def test_non_success_status_is_failure(status_code: int) -> None:
    gw = _gateway(lambda request: httpx.Response(status_code, json={"error": "x"}))
    with pytest.raises(GatewayError) as exc:
        await gw.list_reports()
    assert exc.value.kind == "estado"
    assert exc.value.status_code == status_code


@pytest.mark.asyncio
async def test_transport_error_is_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("sin red", request=request)

    gw = _gateway(handler)
    with pytest.raises(GatewayError) as exc:
        await gw.get_report("1")
    assert exc.value.kind == "transporte"


@pytest.mark.asyncio
async def test_invalid_json_is_failure() -> None:
    gw = _gateway(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(GatewayError) as exc:
        await gw.list_reports()
    assert exc.value.kind == "formato"


@pytest.mark.asyncio
async def test_base_url_from_settings(monkeypatch) -> None:
    from core import config

    monkeypatch.setenv("REPORTS_API_URL", "http://desde-env:8080/")
    config.get_settings.cache_clear()
    try:
        gw = HttpReportGateway()
        assert gw.base_url == "http://desde-env:8080"
        await gw.aclose()
    finally:
        config.get_settings.cache_clear()
