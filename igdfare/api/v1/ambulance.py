from typing import List
import logging
from fastapi import APIRouter, Depends, HTTPException

from igdfare.api.dependencies import get_ambulance_service
from igdfare.api.v1.models import ErrorResponse, TypeOption, VehicleListResponse
from igdfare.core.settings import get_settings
from igdfare.models.ambulance import TariffBreakdown, TripRequest, service_types
from igdfare.models.billing import VisitService
from igdfare.repositories.ambulance_config import (
    ConfigurationError,
    InactiveConfigurationError,
    UnknownVehicleTypeError,
)
from igdfare.services.ambulance import AmbulanceTariffService
from igdfare.services.tariff import InvalidTariffInput


logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def _raise_http_error(request: TripRequest, e: Exception):
    """Translate service errors into HTTP errors."""
    if isinstance(e, InvalidTariffInput):
        logger.warning(f"Invalid tariff input for {request.vehicle_type}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, UnknownVehicleTypeError):
        logger.warning(str(e))
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InactiveConfigurationError):
        logger.warning(str(e))
        raise HTTPException(status_code=409, detail=str(e))
    logger.error(f"Ambulance configuration error for {request.vehicle_type}: {e}", exc_info=True)
    raise HTTPException(status_code=500, detail="Ambulance configuration is unavailable.")


@router.get("/vehicles", response_model=VehicleListResponse)
async def list_vehicles_api(
    ambulance_service: AmbulanceTariffService = Depends(get_ambulance_service),
):
    """List the vehicle types that can currently be billed."""
    try:
        configs = ambulance_service.available_vehicles()
    except ConfigurationError as e:
        logger.error(f"Could not load ambulance configurations: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Ambulance configuration is unavailable.")
    return VehicleListResponse(
        items=configs, total_count=len(configs), currency=get_settings().CURRENCY
    )


@router.get("/service-types", response_model=List[TypeOption])
async def list_service_types_api():
    """Service types selectable for an ambulance trip."""
    return service_types()


@router.post("/tariff", response_model=TariffBreakdown, responses=ERROR_RESPONSES)
async def calculate_tariff_api(
    request: TripRequest,
    ambulance_service: AmbulanceTariffService = Depends(get_ambulance_service),
):
    """Itemized ambulance fare for a one-way distance."""
    logger.info(
        f"Received tariff request: vehicle='{request.vehicle_type}', "
        f"service='{request.service_type}', km={request.one_way_km}"
    )
    try:
        return ambulance_service.quote(request)
    except (InvalidTariffInput, ConfigurationError) as e:
        _raise_http_error(request, e)


@router.post("/line-item", response_model=VisitService, responses=ERROR_RESPONSES)
async def create_line_item_api(
    request: TripRequest,
    ambulance_service: AmbulanceTariffService = Depends(get_ambulance_service),
):
    """Billing line item for an ambulance trip, ready to attach to a visit."""
    try:
        item = ambulance_service.create_line_item(request)
    except (InvalidTariffInput, ConfigurationError) as e:
        _raise_http_error(request, e)
    logger.info(f"Created ambulance line item {item.id}: {item.nama}")
    return item
