"""Ambulance tariff calculation.

The fare is always billed on the round trip: the ambulance returns to the
hospital empty and that leg is chargeable. Surcharges (driver, admin,
maintenance, hospital service) are fractions of the base amount, tax (PPN)
is a fraction of the post-surcharge subtotal.

Every monetary field is rounded half-up to the currency's minor unit on its
own, and the subtotal and total are summed from the rounded parts, so a
printed breakdown always adds up to the printed total.

Everything here is a pure function of its arguments and safe to call from
any thread or event loop. Arithmetic runs in its own decimal context, so
the caller's context never changes a result.
"""
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    ROUND_HALF_UP,
    localcontext,
)
from typing import Tuple

from igdfare.models.ambulance import TariffBreakdown, TripRequest, VehicleServiceConfig

ZERO = Decimal("0")
ONE = Decimal("1")

TARIFF_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

# (attribute, stored field name)
RATE_FIELDS = (
    ("driver_pct", "driverPct"),
    ("admin_pct", "adminPct"),
    ("maintenance_pct", "maintenancePct"),
    ("hospital_pct", "hospitalPct"),
    ("tax_pct", "taxPct"),
)


class TariffError(Exception):
    """Base class for tariff calculation errors."""
    pass


class InvalidTariffInput(TariffError, ValueError):
    """Distance or configuration values the tariff cannot be computed from."""
    pass


def _quantum(minor_units: int) -> Decimal:
    if minor_units < 0:
        raise InvalidTariffInput(f"minor_units must be non-negative, got {minor_units}")
    return ONE.scaleb(-minor_units)


def round_money(amount: Decimal, minor_units: int = 0) -> Decimal:
    """Round half-up to the currency minor unit (0 decimals for Rupiah)."""
    with localcontext(TARIFF_CONTEXT):
        try:
            return amount.quantize(_quantum(minor_units), rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise InvalidTariffInput(f"Amount {amount} cannot be represented") from e


def validate_tariff_input(request: TripRequest, config: VehicleServiceConfig) -> None:
    """Reject input the calculation must not silently coerce.

    Signed values are rejected too: a negative zero would carry its sign
    into every amount of the breakdown.
    """
    km = request.one_way_km
    if not km.is_finite():
        raise InvalidTariffInput(f"oneWayKm must be a finite number, got {km}")
    if km.is_signed():
        raise InvalidTariffInput(f"oneWayKm must not be negative, got {km}")

    cost = config.cost_per_km
    if not cost.is_finite() or cost.is_signed():
        raise InvalidTariffInput(
            f"costPerKm for {config.vehicle_type} must be a non-negative number, got {cost}"
        )

    for name, stored_name in RATE_FIELDS:
        rate = getattr(config, name)
        if not rate.is_finite() or rate.is_signed() or rate > ONE:
            raise InvalidTariffInput(
                f"{stored_name} for {config.vehicle_type} must be between 0 and 1, got {rate}"
            )


def _surcharges(base: Decimal, config: VehicleServiceConfig, minor_units: int) -> Tuple[Decimal, ...]:
    return tuple(
        round_money(base * rate, minor_units)
        for rate in (
            config.driver_pct,
            config.admin_pct,
            config.maintenance_pct,
            config.hospital_pct,
        )
    )


def calculate_ambulance_tariff(
    request: TripRequest,
    config: VehicleServiceConfig,
    minor_units: int = 0,
) -> TariffBreakdown:
    """Compute the itemized fare for one ambulance trip.

    The caller selects ``config`` for ``request.vehicle_type`` and makes sure
    it is active; no lookup or fallback happens here.

    Raises:
        InvalidTariffInput: negative or non-finite distance, or a
            configuration value outside its allowed range.
    """
    validate_tariff_input(request, config)

    with localcontext(TARIFF_CONTEXT):
        try:
            round_trip_km = request.one_way_km * 2
            base_amount = round_money(round_trip_km * config.cost_per_km, minor_units)

            driver_cost, admin_cost, maintenance_cost, hospital_cost = _surcharges(
                base_amount, config, minor_units
            )
            subtotal = base_amount + driver_cost + admin_cost + maintenance_cost + hospital_cost

            tax_amount = round_money(subtotal * config.tax_pct, minor_units)
            total = subtotal + tax_amount
        except Overflow as e:
            raise InvalidTariffInput(f"Tariff for {request.one_way_km} km is out of range") from e

        return TariffBreakdown(
            vehicle_type=request.vehicle_type,
            service_type=request.service_type,
            one_way_km=request.one_way_km,
            round_trip_km=round_trip_km,
            cost_per_km=config.cost_per_km,
            driver_pct=config.driver_pct,
            admin_pct=config.admin_pct,
            maintenance_pct=config.maintenance_pct,
            hospital_pct=config.hospital_pct,
            tax_pct=config.tax_pct,
            base_amount=base_amount,
            driver_cost=driver_cost,
            admin_cost=admin_cost,
            maintenance_cost=maintenance_cost,
            hospital_cost=hospital_cost,
            subtotal=subtotal,
            tax_amount=tax_amount,
            total=total,
            reference_url=request.reference_url,
        )
