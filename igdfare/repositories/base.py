from abc import ABC, abstractmethod
from typing import List

from igdfare.models.ambulance import VehicleServiceConfig


class BaseConfigRepository(ABC):
    """Base class for vehicle pricing configuration sources."""

    @abstractmethod
    def list_configs(self) -> List[VehicleServiceConfig]:
        """All configurations, active or not."""
        pass

    @abstractmethod
    def get_active(self, vehicle_type: str) -> VehicleServiceConfig:
        """The active configuration for a vehicle type."""
        pass

    def list_active(self) -> List[VehicleServiceConfig]:
        return [config for config in self.list_configs() if config.is_active]
