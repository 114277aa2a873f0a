"""In-memory validator index to public key directory."""

from enum import StrEnum
from typing import Protocol

from src.helpers.constants import VALIDATOR_DIRECTORY_KEY
from src.helpers.exceptions import DataInconsistencyError
from src.helpers.logging import get_logger
from src.helpers.singleflight import SingleFlight


class ValidatorSource(Protocol):
    """What the directory needs from a beacon node."""

    async def get_head_slot(self) -> int: ...

    async def get_validator_snapshot(self, slot: int) -> dict[str, str]: ...


class DirectoryState(StrEnum):
    """Lifecycle of the directory."""

    ABSENT = "absent"
    POPULATED = "populated"
    REBUILDING = "rebuilding"


class ValidatorDirectory:
    """Snapshot of validator public keys keyed by validator index.

    The snapshot is never patched. A miss rebuilds it wholesale from the
    head state, and concurrent rebuilds are collapsed into one fetch.
    """

    def __init__(
        self, source: ValidatorSource, flight: SingleFlight | None = None
    ) -> None:
        """Initialize an empty directory.

        Args:
            source: Beacon node reader
            flight: Single-flight registry, shared if other caches use one
        """
        self.source = source
        self.flight = flight or SingleFlight()
        self.logger = get_logger(__name__)
        self._pubkeys: dict[str, str] | None = None
        self._slot: int | None = None

    @property
    def state(self) -> DirectoryState:
        """Current lifecycle state."""
        if self.flight.in_flight(VALIDATOR_DIRECTORY_KEY):
            return DirectoryState.REBUILDING
        if self._pubkeys is None:
            return DirectoryState.ABSENT
        return DirectoryState.POPULATED

    @property
    def slot(self) -> int | None:
        """Slot the current snapshot was taken at."""
        return self._slot

    def __len__(self) -> int:
        return len(self._pubkeys) if self._pubkeys is not None else 0

    def lookup(self, index: str) -> str | None:
        """Public key for a validator index, or None on a miss."""
        if self._pubkeys is None:
            return None
        return self._pubkeys.get(index)

    async def rebuild(self) -> None:
        """Replace the snapshot with the validator set at the head slot.

        Concurrent callers share a single in-flight rebuild and all see its
        outcome.

        Raises:
            httpx.HTTPError: If the beacon node request fails
            DataInconsistencyError: If the beacon node response is malformed
        """
        await self.flight.do(VALIDATOR_DIRECTORY_KEY, self._load)

    async def _load(self) -> None:
        self.logger.info("rebuilding validator directory")
        slot = await self.source.get_head_slot()
        pubkeys = await self.source.get_validator_snapshot(slot)

        # Swap in one assignment so readers never see a partial mapping
        self._pubkeys, self._slot = pubkeys, slot
        self.logger.info(
            "validator directory rebuilt at slot %d with %d validators",
            slot,
            len(pubkeys),
        )

    async def resolve(self, indices: list[str]) -> list[str]:
        """Translate validator indices to public keys, in order.

        Misses trigger one rebuild, after which every index must resolve.

        Args:
            indices: Validator indices as decimal strings

        Returns:
            Public keys in the order of indices

        Raises:
            DataInconsistencyError: If an index is still unknown after a rebuild
        """
        if any(self.lookup(index) is None for index in indices):
            self.logger.info("validator directory miss, rebuilding")
            await self.rebuild()

        pubkeys: list[str] = []
        for index in indices:
            pubkey = self.lookup(index)
            if pubkey is None:
                msg = f"validator index {index} not found after rebuild at slot {self._slot}"
                self.logger.error(msg)
                raise DataInconsistencyError(msg)
            pubkeys.append(pubkey)
        return pubkeys


__all__ = ["DirectoryState", "ValidatorDirectory", "ValidatorSource"]
