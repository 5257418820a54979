import json
import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from igdfare.models.ambulance import VehicleServiceConfig
from igdfare.repositories.base import BaseConfigRepository

logger = logging.getLogger(__name__)

ConfigLoader = Callable[[], Iterable[Mapping[str, Any]]]


# Custom Exception Hierarchy
class ConfigurationError(Exception):
    """Base class for ambulance configuration errors."""
    pass


class UnknownVehicleTypeError(ConfigurationError):
    """No configuration exists for the requested vehicle type."""

    def __init__(self, vehicle_type: str):
        self.vehicle_type = vehicle_type
        super().__init__(f"No ambulance configuration for vehicle type '{vehicle_type}'")


class InactiveConfigurationError(ConfigurationError):
    """The vehicle type exists but its configuration is switched off."""

    def __init__(self, vehicle_type: str):
        self.vehicle_type = vehicle_type
        super().__init__(f"Ambulance configuration for '{vehicle_type}' is not active")


class ConfigurationRecordError(ConfigurationError):
    """A stored record could not be turned into a valid configuration."""
    pass


DEFAULT_AMBULANCE_CONFIGS: List[Dict[str, Any]] = [
    {
        "vehicleType": "GRANDMAX",
        "costPerKm": 6000,
        "driverPct": "0.16",
        "adminPct": "0.08",
        "maintenancePct": "0.05",
        "hospitalPct": "0.10",
        "taxPct": "0.11",
        "isActive": True,
    },
    {
        "vehicleType": "AMBULANS_JENAZAH",
        "costPerKm": 6000,
        "driverPct": "0.16",
        "adminPct": "0.08",
        "maintenancePct": "0.05",
        "hospitalPct": "0.10",
        "taxPct": "0.11",
        "isActive": True,
    },
    {
        "vehicleType": "PREGIO",
        "costPerKm": 7500,
        "driverPct": "0.16",
        "adminPct": "0.08",
        "maintenancePct": "0.05",
        "hospitalPct": "0.10",
        "taxPct": "0.11",
        "isActive": True,
    },
]


def load_default_configs() -> List[Dict[str, Any]]:
    return [dict(record) for record in DEFAULT_AMBULANCE_CONFIGS]


def load_configs_from_file(path: str) -> List[Dict[str, Any]]:
    """Read a JSON array of configuration records."""
    logger.info(f"Loading ambulance configurations from '{path}'")
    try:
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read ambulance configurations from '{path}': {e}", exc_info=True)
        raise ConfigurationRecordError(f"Could not read configurations from '{path}': {e}") from e
    if not isinstance(records, list):
        raise ConfigurationRecordError(f"Expected a JSON array of records in '{path}'")
    return records


class AmbulanceConfigRepository(BaseConfigRepository):
    """Cache of vehicle configurations over an injected loader.

    The loader is called lazily on first access and again after
    ``refresh()``. Each repository instance owns its cache; nothing is shared
    between instances.
    """

    def __init__(self, loader: ConfigLoader):
        self._loader = loader
        self._lock = threading.Lock()
        self._cache: Optional[Dict[str, VehicleServiceConfig]] = None

    def _load(self) -> Dict[str, VehicleServiceConfig]:
        configs: Dict[str, VehicleServiceConfig] = {}
        for index, record in enumerate(self._loader()):
            if not isinstance(record, Mapping):
                raise ConfigurationRecordError(f"Ambulance configuration record #{index} is not an object")
            name = record.get("vehicleType") or record.get("vehicle_type") or f"#{index}"
            try:
                config = VehicleServiceConfig.from_record(record)
            except ValidationError as e:
                logger.error(f"Invalid ambulance configuration record {name}: {e}")
                raise ConfigurationRecordError(
                    f"Invalid ambulance configuration record {name}: {e}"
                ) from e
            if config.vehicle_type in configs:
                raise ConfigurationRecordError(
                    f"Duplicate ambulance configuration for '{config.vehicle_type}'"
                )
            configs[config.vehicle_type] = config
        logger.info(f"Loaded {len(configs)} ambulance configurations")
        return configs

    def _configs(self) -> Dict[str, VehicleServiceConfig]:
        with self._lock:
            if self._cache is None:
                self._cache = self._load()
            return self._cache

    def refresh(self) -> None:
        with self._lock:
            self._cache = None

    def list_configs(self) -> List[VehicleServiceConfig]:
        return list(self._configs().values())

    def get(self, vehicle_type: str) -> VehicleServiceConfig:
        try:
            return self._configs()[vehicle_type]
        except KeyError:
            raise UnknownVehicleTypeError(vehicle_type) from None

    def get_active(self, vehicle_type: str) -> VehicleServiceConfig:
        config = self.get(vehicle_type)
        if not config.is_active:
            raise InactiveConfigurationError(vehicle_type)
        return config
