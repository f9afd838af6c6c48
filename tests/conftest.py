# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (PYTHONPATH y datos de reportes de ejemplo)

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))

from integrations.reports_gateway import InMemoryReportGateway  # noqa: E402


def _record(report_id: Any = 1, **overrides: Any) -> Dict[str, Any]:
    record = {
        "id": report_id,
        "nombre": "Ana",
        "numero_habitacion": 204,
        "folio": "F-100",
        "reportadopor": "Recepción",
        "departamento": "Front Desk",
        "fecha_entrada": "2024-05-01",
        "fecha_salida": "2024-05-04",
        "descripcion_reporte": "Aire acondicionado ruidoso",
        "estado_animo": "molesto",
        "estado_oportunidad": "abierto",
        "agencia": "Directo",
        "fecha_creacion": "2024-05-01T10:00:00Z",
    }
    record.update(overrides)
    return record


@pytest.fixture
def server_record() -> Callable[..., Dict[str, Any]]:
    """Fábrica de registros con los nombres de campo del servidor."""
    return _record


@pytest.fixture
def gateway() -> InMemoryReportGateway:
    gw = InMemoryReportGateway()
    gw.seed(_record(1), updates=[{"id": 10, "actualizacion": "Se avisó a mantenimiento", "fecha_actualizacion": "t1"}])
    gw.seed(_record(2, nombre="Bruno", numero_habitacion="310", estado_oportunidad="en proceso"))
    gw.seed(_record(3, nombre="Carla", numero_habitacion="1204", estado_oportunidad="cerrado"))
    return gw
