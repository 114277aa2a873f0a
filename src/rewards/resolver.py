"""MEV or vanilla classification and proposer reward computation."""

from typing import Protocol

from src.data.beacon.models import BeaconBlock
from src.data.blocks.models import BlockReward, Transaction
from src.data.relays.models import BidTrace
from src.helpers.logging import get_logger
from src.helpers.parsers import parse_decimal_int
from src.rewards.models import BlockRewardRecord, RewardStatus


class BlockRewardSource(Protocol):
    """What the resolver needs from an execution node."""

    async def get_block_reward(self, block_number: int) -> BlockReward: ...

    async def get_transaction_by_hash(self, tx_hash: str) -> Transaction: ...


def same_address(a: str | None, b: str | None) -> bool:
    """Compare two hex addresses ignoring checksum casing."""
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


class RewardResolver:
    """Cross-checks relay bid traces against the node to price a block.

    A block counts as MEV when the last transaction pays a relay-reported
    value to the relay-reported proposer fee recipient. Everything else is
    priced as vanilla from the block's own priority fees.
    """

    def __init__(self, node: BlockRewardSource) -> None:
        self.node = node
        self.logger = get_logger(__name__)

    async def resolve(
        self, slot: int, bid_traces: list[BidTrace], beacon_block: BeaconBlock
    ) -> BlockRewardRecord:
        """Classify the block of a slot and compute the proposer reward.

        Args:
            slot: Requested slot, for logging
            bid_traces: Relay traces already filtered to slot
            beacon_block: Canonical block for slot

        Returns:
            The reward record

        Raises:
            DataInconsistencyError: If a numeric field cannot be parsed
            httpx.HTTPError: If a node request fails
            RPCError: If the node returns an error
        """
        if not bid_traces:
            self.logger.debug("slot %d has no relay bid trace", slot)
            return await self.vanilla_reward(beacon_block.block_number)

        return await self.mev_reward(slot, bid_traces, beacon_block)

    async def vanilla_reward(self, block_number: str) -> BlockRewardRecord:
        """Price a block from its own priority fees."""
        number = parse_decimal_int(block_number, "block_number")
        block_reward = await self.node.get_block_reward(number)
        return BlockRewardRecord(
            status=RewardStatus.VANILLA, reward=str(block_reward.reward)
        )

    async def mev_reward(
        self, slot: int, bid_traces: list[BidTrace], beacon_block: BeaconBlock
    ) -> BlockRewardRecord:
        """Match the block's last transaction against the relay bid traces.

        Falls back to vanilla pricing at the first trace's block number when
        no trace matches.
        """
        # The first trace decides the block number even if relays disagree
        first = bid_traces[0]
        block_number = parse_decimal_int(first.block_number, "block_number")
        values = [parse_decimal_int(trace.value) for trace in bid_traces]
        block_reward = await self.node.get_block_reward(block_number)

        matched: BidTrace | None = None
        reward = 0
        if block_reward.last_tx_hash is not None:
            last_tx = await self.node.get_transaction_by_hash(block_reward.last_tx_hash)
            for trace, value in zip(bid_traces, values, strict=True):
                if value == last_tx.value and same_address(
                    last_tx.to, trace.proposer_fee_recipient
                ):
                    matched, reward = trace, value
                    break

        if matched is None:
            self.logger.info(
                "slot %d: no bid trace matches the last transaction of block %d, "
                "pricing as vanilla",
                slot,
                block_number,
            )
            return BlockRewardRecord(
                status=RewardStatus.VANILLA, reward=str(block_reward.reward)
            )

        # Builder set the proposer as block fee recipient: the priority fees
        # went to the proposer too
        if same_address(beacon_block.fee_recipient, matched.proposer_fee_recipient):
            reward += block_reward.reward

        return BlockRewardRecord(status=RewardStatus.MEV, reward=str(reward))


__all__ = ["BlockRewardSource", "RewardResolver", "same_address"]
