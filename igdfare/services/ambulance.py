import logging
from typing import List

from igdfare.models.ambulance import TariffBreakdown, TripRequest, VehicleServiceConfig
from igdfare.models.billing import VisitService
from igdfare.repositories.base import BaseConfigRepository
from igdfare.services.billing import build_ambulance_line_item, format_rupiah
from igdfare.services.tariff import InvalidTariffInput, calculate_ambulance_tariff

logger = logging.getLogger(__name__)


class AmbulanceTariffService:
    """Service tying configuration lookup, tariff calculation and billing together."""

    def __init__(self, config_repository: BaseConfigRepository, minor_units: int = 0):
        self.config_repository = config_repository
        self.minor_units = minor_units

    def available_vehicles(self) -> List[VehicleServiceConfig]:
        return self.config_repository.list_active()

    def quote(self, request: TripRequest) -> TariffBreakdown:
        """Price a trip with the active configuration for its vehicle type.

        Raises UnknownVehicleTypeError / InactiveConfigurationError from the
        repository and InvalidTariffInput from the calculation.
        """
        config = self.config_repository.get_active(request.vehicle_type)
        breakdown = calculate_ambulance_tariff(request, config, self.minor_units)
        logger.info(
            f"Ambulance tariff for {request.vehicle_type}/{request.service_type} "
            f"{request.one_way_km} km one way: {format_rupiah(breakdown.total, self.minor_units)}"
        )
        return breakdown

    def create_line_item(self, request: TripRequest) -> VisitService:
        # A zero distance at this point means the distance was never filled in
        if request.one_way_km == 0:
            raise InvalidTariffInput(
                "oneWayKm is zero; calculate the distance or enter it manually first"
            )
        breakdown = self.quote(request)
        return build_ambulance_line_item(breakdown, self.minor_units)
