from decimal import Decimal, ROUND_HALF_UP, localcontext

from igdfare.models.ambulance import TariffBreakdown
from igdfare.models.billing import BillingCategory, VisitService
from igdfare.services.tariff import TARIFF_CONTEXT


def format_rupiah(amount: Decimal, minor_units: int = 0) -> str:
    """Format an amount the Indonesian way, e.g. ``Rp 92.574``."""
    text = f"{amount:,.{minor_units}f}"
    # swap "," and "." in one pass
    return "Rp " + text.translate(str.maketrans(",.", ".,"))


def ambulance_label(breakdown: TariffBreakdown) -> str:
    vehicle = breakdown.vehicle_type.replace("_", " ")
    with localcontext(TARIFF_CONTEXT):
        km = breakdown.one_way_km.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"Ambulance {vehicle} - {breakdown.service_type} ({km} km)"


def build_ambulance_line_item(breakdown: TariffBreakdown, minor_units: int = 0) -> VisitService:
    """Wrap a tariff breakdown as a single AMBULANCE billing line."""
    notes = (
        f"{breakdown.round_trip_km} km PP x {format_rupiah(breakdown.cost_per_km, minor_units)}/km"
    )
    return VisitService(
        nama=ambulance_label(breakdown),
        harga=breakdown.total,
        quantity=1,
        category=BillingCategory.AMBULANCE,
        total=breakdown.total,
        notes=notes,
        ambulance_meta=breakdown,
    )
