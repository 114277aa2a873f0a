"""Fan-out over relay data APIs for the payload delivered in a slot."""

import asyncio

import httpx
from pydantic import TypeAdapter

from src.data.relays.constants import ENDPOINTS, LIMITS
from src.data.relays.models import BidTrace
from src.helpers.constants import RELAY_RETRY_ATTEMPTS, RELAY_RETRY_BASE_DELAY
from src.helpers.exceptions import RelayAggregationError
from src.helpers.http import retry_call
from src.helpers.logging import get_logger


BID_TRACES = TypeAdapter(list[BidTrace])


class RelayClient:
    """Client for one relay's data API."""

    def __init__(self, client: httpx.AsyncClient, relay: str) -> None:
        """Initialize the relay client.

        Args:
            client: Shared HTTP client
            relay: Relay base URL, e.g. https://boost-relay.flashbots.net
        """
        self.client = client
        self.relay = relay.rstrip("/")
        self.endpoint = ENDPOINTS["proposer_payload_delivered"]
        self.limit = LIMITS["proposer_payload_delivered"]

    async def get_bid_traces(self, slot: int) -> list[BidTrace]:
        """Fetch the delivered payload at or before a slot cursor.

        The relay treats the slot as a cursor, so the result can belong to an
        earlier slot. Callers must filter on the slot field.

        Args:
            slot: Slot used as the cursor

        Returns:
            At most ``limit`` bid traces

        Raises:
            httpx.HTTPError: If the request fails
            pydantic.ValidationError: If the body is not a list of bid traces
        """
        url = f"{self.relay}{self.endpoint}"
        params = {"limit": str(self.limit), "cursor": str(slot)}

        response = await self.client.get(url, params=params)
        response.raise_for_status()
        return BID_TRACES.validate_json(response.content)


class RelayAggregator:
    """Queries every configured relay concurrently for one slot."""

    def __init__(
        self,
        relays: list[RelayClient],
        *,
        attempts: int = RELAY_RETRY_ATTEMPTS,
        base_delay: float = RELAY_RETRY_BASE_DELAY,
    ) -> None:
        """Initialize the aggregator.

        Args:
            relays: One client per relay, fixed for the process lifetime
            attempts: Attempts per relay before the aggregation fails
            base_delay: Initial backoff between attempts in seconds
        """
        self.relays = tuple(relays)
        self.attempts = attempts
        self.base_delay = base_delay
        self.logger = get_logger(__name__)

    @classmethod
    def from_endpoints(
        cls, client: httpx.AsyncClient, endpoints: list[str]
    ) -> "RelayAggregator":
        """Build an aggregator with one RelayClient per endpoint sharing a client."""
        return cls([RelayClient(client, endpoint) for endpoint in endpoints])

    async def _fetch_matching(self, relay: RelayClient, slot: int) -> list[BidTrace]:
        """Fetch one relay with retries and keep only traces for exactly slot.

        Raises:
            RelayAggregationError: If the relay still fails after retries
        """
        try:
            traces = await retry_call(
                lambda: relay.get_bid_traces(slot),
                self.attempts,
                self.base_delay,
                name=f"relay {relay.relay}",
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise RelayAggregationError(relay.relay, e) from e

        matching = [trace for trace in traces if trace.slot == slot]
        self.logger.debug(
            "relay %s returned %d trace(s), %d for slot %d",
            relay.relay,
            len(traces),
            len(matching),
            slot,
        )
        return matching

    async def get_reward_data_for_slot(self, slot: int) -> list[BidTrace]:
        """Collect the bid traces every relay reports for a slot.

        Any relay failing after its retries fails the whole call and cancels
        the outstanding relay requests. Order across relays is not meaningful.

        Args:
            slot: Requested slot

        Returns:
            Bid traces whose slot equals the requested slot

        Raises:
            RelayAggregationError: If any relay fails
            asyncio.CancelledError: If the caller is cancelled
        """
        tasks = [
            asyncio.ensure_future(self._fetch_matching(relay, slot))
            for relay in self.relays
        ]

        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let the cancelled tasks unwind before propagating
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        bid_traces: list[BidTrace] = []
        for matching in results:
            bid_traces.extend(matching)

        self.logger.info(
            "found %d bid trace(s) for slot %d across %d relay(s)",
            len(bid_traces),
            slot,
            len(self.relays),
        )
        return bid_traces


__all__ = ["RelayAggregator", "RelayClient"]
