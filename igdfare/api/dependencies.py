from functools import lru_cache
from fastapi import Depends

from igdfare.core.settings import get_settings
from igdfare.repositories.ambulance_config import (
    AmbulanceConfigRepository,
    load_configs_from_file,
    load_default_configs,
)
from igdfare.services.ambulance import AmbulanceTariffService


@lru_cache()
def get_config_repository() -> AmbulanceConfigRepository:
    """Get AmbulanceConfigRepository instance."""
    path = get_settings().AMBULANCE_CONFIG_PATH
    if path:
        return AmbulanceConfigRepository(loader=lambda: load_configs_from_file(path))
    return AmbulanceConfigRepository(loader=load_default_configs)


def get_ambulance_service(
    config_repository: AmbulanceConfigRepository = Depends(get_config_repository),
) -> AmbulanceTariffService:
    """Get AmbulanceTariffService instance."""
    return AmbulanceTariffService(
        config_repository=config_repository,
        minor_units=get_settings().CURRENCY_MINOR_UNITS,
    )
