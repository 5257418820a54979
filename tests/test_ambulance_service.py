from decimal import Decimal
from unittest.mock import Mock

import pytest

from igdfare.models.billing import BillingCategory, VisitService
from igdfare.repositories.ambulance_config import (
    InactiveConfigurationError,
    UnknownVehicleTypeError,
)
from igdfare.services.ambulance import AmbulanceTariffService
from igdfare.services.billing import build_ambulance_line_item, format_rupiah
from igdfare.services.tariff import InvalidTariffInput, calculate_ambulance_tariff


@pytest.fixture
def ambulance_service(config_repository):
    return AmbulanceTariffService(config_repository=config_repository)


def test_quote_uses_active_config(ambulance_service, make_trip):
    breakdown = ambulance_service.quote(make_trip(5))
    assert breakdown.total == Decimal("92574")


def test_quote_propagates_lookup_errors(ambulance_service, make_trip):
    with pytest.raises(UnknownVehicleTypeError):
        ambulance_service.quote(make_trip(5, vehicle_type="HELIKOPTER"))
    with pytest.raises(InactiveConfigurationError):
        ambulance_service.quote(make_trip(5, vehicle_type="PREGIO"))


def test_quote_does_not_fall_back_to_another_config(make_trip):
    repository = Mock()
    repository.get_active.side_effect = UnknownVehicleTypeError("PREGIO")
    service = AmbulanceTariffService(config_repository=repository)

    with pytest.raises(UnknownVehicleTypeError):
        service.quote(make_trip(5, vehicle_type="PREGIO"))
    repository.get_active.assert_called_once_with("PREGIO")


def test_quote_accepts_zero_distance(ambulance_service, make_trip):
    assert ambulance_service.quote(make_trip(0)).total == 0


def test_available_vehicles(ambulance_service):
    assert [c.vehicle_type for c in ambulance_service.available_vehicles()] == [
        "GRANDMAX",
        "AMBULANS_JENAZAH",
    ]


def test_create_line_item(ambulance_service, make_trip):
    trip = make_trip(
        5,
        vehicle_type="AMBULANS_JENAZAH",
        service_type="JENAZAH",
        reference_url="https://www.google.com/maps/dir/a/b",
    )
    item = ambulance_service.create_line_item(trip)

    assert isinstance(item, VisitService)
    assert item.nama == "Ambulance AMBULANS JENAZAH - JENAZAH (5.0 km)"
    assert item.category == BillingCategory.AMBULANCE.value
    assert item.section == "11. AMBULANCE"
    assert item.quantity == 1
    assert item.harga == item.total == Decimal("92574")
    assert item.notes == "10 km PP x Rp 6.000/km"
    assert item.ambulance_meta.reference_url == "https://www.google.com/maps/dir/a/b"
    assert item.ambulance_meta.subtotal == Decimal("83400")


def test_create_line_item_requires_distance(ambulance_service, make_trip):
    with pytest.raises(InvalidTariffInput, match="zero"):
        ambulance_service.create_line_item(make_trip(0))


def test_create_line_item_rejects_negative_distance(ambulance_service, make_trip):
    with pytest.raises(InvalidTariffInput):
        ambulance_service.create_line_item(make_trip(-3))


def test_line_items_get_distinct_ids(grandmax_config, make_trip):
    breakdown = calculate_ambulance_tariff(make_trip(2), grandmax_config)
    assert build_ambulance_line_item(breakdown).id != build_ambulance_line_item(breakdown).id


def test_line_item_label_rounds_distance(grandmax_config, make_trip):
    breakdown = calculate_ambulance_tariff(make_trip(Decimal("12.46")), grandmax_config)
    assert build_ambulance_line_item(breakdown).nama == "Ambulance GRANDMAX - PASIEN (12.5 km)"


def test_line_item_metadata_uses_stored_field_names(grandmax_config, make_trip):
    breakdown = calculate_ambulance_tariff(make_trip(5), grandmax_config)
    data = build_ambulance_line_item(breakdown).model_dump(by_alias=True)
    assert data["category"] == "AMBULANCE"
    assert data["ambulanceMeta"]["taxAmount"] == Decimal("9174")
    assert data["ambulanceMeta"]["roundTripKm"] == Decimal("10")


@pytest.mark.parametrize(
    "amount,minor_units,expected",
    [
        (Decimal("92574"), 0, "Rp 92.574"),
        (Decimal("0"), 0, "Rp 0"),
        (Decimal("1250000"), 0, "Rp 1.250.000"),
        (Decimal("1234.5"), 2, "Rp 1.234,50"),
    ],
)
def test_format_rupiah(amount, minor_units, expected):
    assert format_rupiah(amount, minor_units) == expected


@pytest.mark.parametrize("km,shown", [("12.25", "12.3"), ("0.05", "0.1"), ("7", "7.0")])
def test_line_item_label_rounds_distance_half_up(grandmax_config, make_trip, km, shown):
    breakdown = calculate_ambulance_tariff(make_trip(Decimal(km)), grandmax_config)
    assert build_ambulance_line_item(breakdown).nama == f"Ambulance GRANDMAX - PASIEN ({shown} km)"
