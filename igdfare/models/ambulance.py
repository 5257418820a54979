from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, Field, validator


class VehicleType(str, Enum):
    """Vehicle types known to the hospital fleet. Operators may add others."""

    GRANDMAX = "GRANDMAX"
    AMBULANS_JENAZAH = "AMBULANS_JENAZAH"
    PREGIO = "PREGIO"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class ServiceType(str, Enum):
    """Purpose of an ambulance trip. Carried on the bill, not priced."""

    PASIEN = "PASIEN"
    JENAZAH = "JENAZAH"
    NON_MEDIS = "NON_MEDIS"

    @property
    def label(self) -> str:
        return {
            ServiceType.PASIEN: "Pasien",
            ServiceType.JENAZAH: "Jenazah",
            ServiceType.NON_MEDIS: "Non Medis",
        }[self]


def vehicle_types() -> List[Dict[str, str]]:
    return [{"value": v.value, "label": v.label} for v in VehicleType]


def service_types() -> List[Dict[str, str]]:
    return [{"value": s.value, "label": s.label} for s in ServiceType]


def to_decimal(value: Any) -> Any:
    """Convert numeric input to Decimal without going through binary floats.

    Floats are converted via their shortest repr so that 0.16 becomes
    Decimal("0.16") rather than 0.16000000000000000333...
    """
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid amount")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, (int, str)):
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"invalid decimal value: {value!r}") from e
    return value


def _code(value: Any) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
    return value


class VehicleServiceConfig(BaseModel):
    """Pricing configuration for one vehicle type.

    Rates are fractions (0.16 means 16%). Instances are immutable and are
    only ever built from validated input, see ``from_record``.
    """

    vehicle_type: str = Field(..., alias="vehicleType", description="Vehicle type code")
    cost_per_km: Decimal = Field(..., alias="costPerKm", ge=0, description="Rate per kilometer")
    driver_pct: Decimal = Field(..., alias="driverPct", ge=0, le=1)
    admin_pct: Decimal = Field(..., alias="adminPct", ge=0, le=1)
    maintenance_pct: Decimal = Field(..., alias="maintenancePct", ge=0, le=1)
    hospital_pct: Decimal = Field(..., alias="hospitalPct", ge=0, le=1)
    tax_pct: Decimal = Field(..., alias="taxPct", ge=0, le=1, description="PPN rate")
    is_active: bool = Field(..., alias="isActive")

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "vehicleType": "GRANDMAX",
                "costPerKm": 6000,
                "driverPct": 0.16,
                "adminPct": 0.08,
                "maintenancePct": 0.05,
                "hospitalPct": 0.10,
                "taxPct": 0.11,
                "isActive": True,
            }
        }

    @validator("vehicle_type", pre=True)
    def vehicle_type_code(cls, v):
        return _code(v)

    @validator(
        "cost_per_km",
        "driver_pct",
        "admin_pct",
        "maintenance_pct",
        "hospital_pct",
        "tax_pct",
        pre=True,
    )
    def amounts_as_decimal(cls, v):
        v = to_decimal(v)
        if isinstance(v, Decimal) and v.is_signed():
            raise ValueError("must not be negative")
        return v

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "VehicleServiceConfig":
        """Build a config from a loosely-typed stored record.

        Storage bookkeeping such as ``id``, ``createdAt`` and ``updatedAt`` is
        ignored. Raises ``pydantic.ValidationError`` on malformed records.
        """
        return cls.model_validate(dict(record))


class TripRequest(BaseModel):
    vehicle_type: str = Field(..., alias="vehicleType")
    service_type: str = Field(ServiceType.PASIEN.value, alias="serviceType")
    one_way_km: Decimal = Field(..., alias="oneWayKm", description="One-way distance in km")
    reference_url: Optional[str] = Field(
        None, alias="referenceUrl", description="Maps URL kept for the audit trail"
    )

    class Config:
        frozen = True
        populate_by_name = True

    @validator("vehicle_type", "service_type", pre=True)
    def type_codes(cls, v):
        return _code(v)

    @validator("one_way_km", pre=True)
    def distance_as_decimal(cls, v):
        return to_decimal(v)


class TariffBreakdown(BaseModel):
    """Itemized ambulance fare, persisted with the bill as an audit record."""

    vehicle_type: str = Field(..., alias="vehicleType")
    service_type: str = Field(..., alias="serviceType")
    one_way_km: Decimal = Field(..., alias="oneWayKm")
    round_trip_km: Decimal = Field(..., alias="roundTripKm")
    cost_per_km: Decimal = Field(..., alias="costPerKm")

    driver_pct: Decimal = Field(..., alias="driverPct")
    admin_pct: Decimal = Field(..., alias="adminPct")
    maintenance_pct: Decimal = Field(..., alias="maintenancePct")
    hospital_pct: Decimal = Field(..., alias="hospitalPct")
    tax_pct: Decimal = Field(..., alias="taxPct")

    base_amount: Decimal = Field(..., alias="baseAmount")
    driver_cost: Decimal = Field(..., alias="driverCost")
    admin_cost: Decimal = Field(..., alias="adminCost")
    maintenance_cost: Decimal = Field(..., alias="maintenanceCost")
    hospital_cost: Decimal = Field(..., alias="hospitalCost")
    subtotal: Decimal
    tax_amount: Decimal = Field(..., alias="taxAmount")
    total: Decimal

    reference_url: Optional[str] = Field(None, alias="referenceUrl")

    class Config:
        frozen = True
        populate_by_name = True
