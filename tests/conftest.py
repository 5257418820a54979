from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from igdfare.models.ambulance import TripRequest, VehicleServiceConfig
from igdfare.repositories.ambulance_config import AmbulanceConfigRepository


_GRANDMAX_RECORD = {
    "id": "GRANDMAX",
    "vehicleType": "GRANDMAX",
    "costPerKm": 6000,
    "driverPct": 0.16,
    "adminPct": 0.08,
    "maintenancePct": 0.05,
    "hospitalPct": 0.10,
    "taxPct": 0.11,
    "isActive": True,
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-01-01T00:00:00Z",
}


@pytest.fixture
def grandmax_record():
    """A GRANDMAX configuration as the document store keeps it."""
    return dict(_GRANDMAX_RECORD)


@pytest.fixture
def config_records():
    return [
        dict(_GRANDMAX_RECORD),
        dict(_GRANDMAX_RECORD, id="AMBULANS_JENAZAH", vehicleType="AMBULANS_JENAZAH"),
        dict(_GRANDMAX_RECORD, id="PREGIO", vehicleType="PREGIO", costPerKm=7500, isActive=False),
    ]


@pytest.fixture
def grandmax_config():
    return VehicleServiceConfig.from_record(_GRANDMAX_RECORD)


@pytest.fixture
def make_config():
    """Build a config with every rate overridable."""

    def _make(**overrides):
        values = {
            "vehicle_type": "GRANDMAX",
            "cost_per_km": Decimal("6000"),
            "driver_pct": Decimal("0.16"),
            "admin_pct": Decimal("0.08"),
            "maintenance_pct": Decimal("0.05"),
            "hospital_pct": Decimal("0.10"),
            "tax_pct": Decimal("0.11"),
            "is_active": True,
        }
        values.update(overrides)
        return VehicleServiceConfig(**values)

    return _make


@pytest.fixture
def make_trip():
    def _make(one_way_km, **overrides):
        values = {"vehicle_type": "GRANDMAX", "service_type": "PASIEN", "one_way_km": one_way_km}
        values.update(overrides)
        return TripRequest(**values)

    return _make


@pytest.fixture
def config_repository(config_records):
    return AmbulanceConfigRepository(loader=lambda: config_records)


@pytest.fixture
def test_client(config_repository):
    from igdfare.api.dependencies import get_config_repository
    from igdfare.main import app

    app.dependency_overrides[get_config_repository] = lambda: config_repository
    yield TestClient(app)
    app.dependency_overrides.clear()
