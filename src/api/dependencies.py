"""FastAPI dependencies for dependency injection."""

from dataclasses import dataclass

from src.data.beacon.client import BeaconClient
from src.data.relays.aggregator import RelayAggregator
from src.data.validators.directory import ValidatorDirectory
from src.rewards.resolver import RewardResolver


@dataclass(frozen=True)
class Services:
    """Collaborators shared by every request."""

    beacon: BeaconClient
    relays: RelayAggregator
    resolver: RewardResolver
    directory: ValidatorDirectory


# Global services instance - initialized at app startup
_services: Services | None = None


def set_services(services: Services | None) -> None:
    """Set the global services instance."""
    global _services
    _services = services


def get_services() -> Services:
    """Get the global services instance for dependency injection."""
    if _services is None:
        raise RuntimeError("Services not initialized. Call set_services() first.")
    return _services
