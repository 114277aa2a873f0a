"""Beacon node REST API client."""

import httpx
from pydantic import ValidationError

from src.data.beacon.models import (
    BeaconBlock,
    BeaconBlockResponse,
    BeaconHeadersResponse,
    SyncCommitteesResponse,
    ValidatorsResponse,
)
from src.helpers.constants import SYNC_COMMITTEE_SIZE
from src.helpers.exceptions import DataInconsistencyError
from src.helpers.logging import get_logger
from src.helpers.parsers import parse_decimal_int, sanitize_url


class BeaconClient:
    """Reads head slot, blocks, sync committees and validators from a beacon node."""

    def __init__(self, client: httpx.AsyncClient, node_endpoint: str) -> None:
        """Initialize the beacon client.

        Args:
            client: Shared HTTP client
            node_endpoint: Beacon node base URL

        Raises:
            ValueError: If node_endpoint is empty
        """
        if not node_endpoint:
            msg = "Node endpoint cannot be empty"
            raise ValueError(msg)

        self.client = client
        self.node_endpoint = node_endpoint.rstrip("/")
        self.logger = get_logger(__name__)

    async def _get(self, path: str) -> bytes:
        url = f"{self.node_endpoint}{path}"
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.error(
                "beacon request failed url=%s status=%d",
                sanitize_url(url),
                e.response.status_code,
            )
            raise
        except httpx.HTTPError as e:
            # The exception text carries the unmasked URL
            self.logger.error(
                "beacon request failed url=%s: %s", sanitize_url(url), type(e).__name__
            )
            raise
        return response.content

    async def get_head_slot(self) -> int:
        """Get the slot of the current head block.

        Raises:
            httpx.HTTPError: If the request fails
            DataInconsistencyError: If the response has no header or a bad slot
        """
        body = await self._get("/eth/v1/beacon/headers")
        try:
            headers = BeaconHeadersResponse.model_validate_json(body)
        except ValidationError as e:
            msg = f"malformed beacon headers response: {e}"
            raise DataInconsistencyError(msg) from e

        if not headers.data:
            msg = "beacon headers response is empty"
            raise DataInconsistencyError(msg)

        return parse_decimal_int(headers.data[0].header.message.slot, "head slot")

    async def get_block_by_slot(self, slot: int) -> BeaconBlock:
        """Get the canonical block for a slot.

        Raises:
            httpx.HTTPError: If the request fails (a missed slot is a 404)
            DataInconsistencyError: If the block has no execution payload
        """
        body = await self._get(f"/eth/v2/beacon/blocks/{slot}")
        try:
            return BeaconBlockResponse.model_validate_json(body).to_block()
        except ValidationError as e:
            msg = f"malformed beacon block response for slot {slot}: {e}"
            raise DataInconsistencyError(msg) from e

    async def get_sync_committee(self, slot: int) -> list[str]:
        """Get the validator indices of the sync committee at a slot.

        Raises:
            httpx.HTTPError: If the request fails
            DataInconsistencyError: If the response is malformed or the
                committee does not have SYNC_COMMITTEE_SIZE members
        """
        body = await self._get(f"/eth/v1/beacon/states/{slot}/sync_committees")
        try:
            indices = SyncCommitteesResponse.model_validate_json(body).data.validators
        except ValidationError as e:
            msg = f"malformed sync committee response for slot {slot}: {e}"
            raise DataInconsistencyError(msg) from e

        if len(indices) != SYNC_COMMITTEE_SIZE:
            msg = (
                f"sync committee for slot {slot} has {len(indices)} members, "
                f"expected {SYNC_COMMITTEE_SIZE}"
            )
            raise DataInconsistencyError(msg)
        return indices

    async def get_validator_snapshot(self, slot: int) -> dict[str, str]:
        """Get every validator's public key at a slot, keyed by index.

        Raises:
            httpx.HTTPError: If the request fails
            DataInconsistencyError: If the response is malformed
        """
        body = await self._get(f"/eth/v1/beacon/states/{slot}/validators")
        try:
            validators = ValidatorsResponse.model_validate_json(body)
        except ValidationError as e:
            msg = f"malformed validators response for slot {slot}: {e}"
            raise DataInconsistencyError(msg) from e

        snapshot = {entry.index: entry.validator.pubkey for entry in validators.data}
        self.logger.info("loaded %d validators at slot %d", len(snapshot), slot)
        return snapshot


__all__ = ["BeaconClient"]
