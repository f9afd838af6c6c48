# Nombre de archivo: test_error_channel.py
# Ubicación de archivo: tests/test_error_channel.py
# Descripción: Pruebas del canal de errores y de la política de limpieza

from __future__ import annotations

import logging

import pytest

from integrations.reports_gateway import GatewayError
from modules.oportunidades import ERROR_MESSAGES, ErrorChannel, OperationFailed, ReportStore
from modules.oportunidades.schemas import SchemaError


def test_operation_failed_collapses_sources() -> None:
    net = OperationFailed.from_exception("load_all", GatewayError("transporte", "sin red"))
    bad = OperationFailed.from_exception("create", SchemaError("raro", detail="campo x"))
    assert (net.kind, net.user_message) == ("transporte", ERROR_MESSAGES["load_all"])
    assert (bad.kind, bad.detail) == ("formato", "campo x")
    assert str(bad) == ERROR_MESSAGES["create"]


def test_emit_overwrites_and_logs(caplog) -> None:
    channel = ErrorChannel()
    assert channel.message is None
    with caplog.at_level(logging.WARNING):
        channel.emit(OperationFailed("remove", "estado", detail="HTTP error! status: 500"))
        channel.emit(OperationFailed("add_update", "transporte"))
    assert channel.message == ERROR_MESSAGES["add_update"]
    assert "action=remove outcome=failed kind=estado" in caplog.text
    channel.clear()
    assert channel.message is None


@pytest.mark.asyncio
async def test_successful_load_all_clears_error(gateway) -> None:
    store = ReportStore(gateway)
    gateway.fail_on.add("list_reports")
    await store.load_all()
    assert store.state.error == ERROR_MESSAGES["load_all"]
    gateway.fail_on.clear()
    await store.load_all()
    assert store.state.error is None


@pytest.mark.asyncio
async def test_detail_success_does_not_clear_error(gateway) -> None:
    store = ReportStore(gateway)
    await store.load_all()
    gateway.fail_on.add("delete_report")
    await store.remove("3")
    assert await store.load_detail("1") is True
    assert store.state.error == ERROR_MESSAGES["remove"]
    assert await store.add_update("1", "ok") is True
    assert store.state.error == ERROR_MESSAGES["remove"]


@pytest.mark.asyncio
async def test_failures_never_raise(gateway) -> None:
    store = ReportStore(gateway)
    gateway.fail_on.update({"list_reports", "get_report", "delete_update"})
    assert await store.load_all() is False
    assert await store.load_detail("1") is False
    assert await store.remove_update("1", "10") is False
    assert store.state.error == ERROR_MESSAGES["remove_update"]
