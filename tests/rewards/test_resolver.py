"""Tests for MEV and vanilla reward resolution."""

from unittest.mock import AsyncMock

import pytest

from src.data.beacon.models import BeaconBlock
from src.data.blocks.client import NodeClient
from src.data.blocks.models import BlockReward, Transaction
from src.data.relays.models import BidTrace
from src.helpers.exceptions import DataInconsistencyError
from src.rewards.models import BlockRewardRecord, RewardStatus
from src.rewards.resolver import RewardResolver, same_address


PROPOSER = "0xa27CEF8aF2B6575903b676e5644657FAe96F491F"
BUILDER = "0x4838B106FCe9647Bdf1E7877BF73cE8B0BAD5f97"


def node_with(
    reward: int = 5000, last_tx: Transaction | None = None
) -> AsyncMock:
    node = AsyncMock(spec=NodeClient)
    node.get_block_reward.return_value = BlockReward(
        block_number=20830417,
        reward=reward,
        last_tx_hash=last_tx.hash if last_tx else None,
    )
    node.get_transaction_by_hash.return_value = last_tx
    return node


def payment(value: int, to: str | None = PROPOSER) -> Transaction:
    return Transaction(hash="0xlast", to=to, value=value, transaction_index=150)


def bid(value: str, recipient: str = PROPOSER, block_number: str = "20830417") -> BidTrace:
    return BidTrace(
        slot=10039755,
        value=value,
        proposer_fee_recipient=recipient,
        block_number=block_number,
    )


def block(fee_recipient: str = BUILDER, block_number: str = "20830417") -> BeaconBlock:
    return BeaconBlock(
        slot="10039755", block_number=block_number, fee_recipient=fee_recipient
    )


class TestVanilla:
    """Blocks without relay bid traces."""

    @pytest.mark.asyncio
    async def test_no_traces_is_vanilla(self) -> None:
        """Test the block's own priority fees are the reward."""
        node = node_with(reward=75784783531378114)

        record = await RewardResolver(node).resolve(10039755, [], block(PROPOSER))

        assert record == BlockRewardRecord(
            status=RewardStatus.VANILLA, reward="75784783531378114"
        )
        node.get_block_reward.assert_awaited_once_with(20830417)
        node.get_transaction_by_hash.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_beacon_block_number(self) -> None:
        """Test a malformed block number is an error, not block zero."""
        node = node_with()

        with pytest.raises(DataInconsistencyError, match="block_number"):
            await RewardResolver(node).resolve(1, [], block(block_number="0x13e"))

        node.get_block_reward.assert_not_awaited()


class TestMev:
    """Blocks with relay bid traces."""

    @pytest.mark.asyncio
    async def test_matching_payment_is_mev(self) -> None:
        """Test the bid value is the reward when the builder kept the fees."""
        node = node_with(reward=5000, last_tx=payment(39485272502785165))

        record = await RewardResolver(node).resolve(
            10039755, [bid("39485272502785165")], block(BUILDER)
        )

        assert record == BlockRewardRecord(
            status=RewardStatus.MEV, reward="39485272502785165"
        )
        node.get_transaction_by_hash.assert_awaited_once_with("0xlast")

    @pytest.mark.asyncio
    async def test_proposer_as_fee_recipient_adds_block_reward(self) -> None:
        """Test priority fees are added when they went to the proposer."""
        node = node_with(reward=5000, last_tx=payment(1000))

        record = await RewardResolver(node).resolve(
            10039755, [bid("1000")], block(PROPOSER)
        )

        assert record == BlockRewardRecord(status=RewardStatus.MEV, reward="6000")

    @pytest.mark.asyncio
    async def test_address_case_is_ignored(self) -> None:
        """Test checksum and lowercase addresses compare equal."""
        node = node_with(reward=5000, last_tx=payment(1000, to=PROPOSER.lower()))

        record = await RewardResolver(node).resolve(
            10039755, [bid("1000", recipient=PROPOSER.upper().replace("0X", "0x"))], block()
        )

        assert record.status == RewardStatus.MEV

    @pytest.mark.asyncio
    async def test_matches_any_trace(self) -> None:
        """Test the second trace can be the one that matches."""
        node = node_with(reward=5000, last_tx=payment(2000))

        record = await RewardResolver(node).resolve(
            10039755, [bid("1000"), bid("2000")], block()
        )

        assert record == BlockRewardRecord(status=RewardStatus.MEV, reward="2000")

    @pytest.mark.asyncio
    async def test_value_mismatch_falls_back_to_vanilla(self) -> None:
        """Test an unmatched last transaction prices the block as vanilla."""
        node = node_with(reward=5000, last_tx=payment(999))

        record = await RewardResolver(node).resolve(10039755, [bid("1000")], block())

        assert record == BlockRewardRecord(status=RewardStatus.VANILLA, reward="5000")
        node.get_block_reward.assert_awaited_once_with(20830417)

    @pytest.mark.asyncio
    async def test_recipient_mismatch_falls_back_to_vanilla(self) -> None:
        """Test paying the right value to someone else is not a match."""
        node = node_with(reward=5000, last_tx=payment(1000, to=BUILDER))

        record = await RewardResolver(node).resolve(10039755, [bid("1000")], block())

        assert record.status == RewardStatus.VANILLA

    @pytest.mark.asyncio
    async def test_contract_creation_is_not_a_match(self) -> None:
        """Test a last transaction without recipient never matches."""
        node = node_with(reward=5000, last_tx=payment(1000, to=None))

        record = await RewardResolver(node).resolve(10039755, [bid("1000")], block())

        assert record.status == RewardStatus.VANILLA

    @pytest.mark.asyncio
    async def test_empty_block_is_vanilla(self) -> None:
        """Test a block without transactions cannot carry a payment."""
        node = node_with(reward=0)

        record = await RewardResolver(node).resolve(10039755, [bid("1000")], block())

        assert record == BlockRewardRecord(status=RewardStatus.VANILLA, reward="0")
        node.get_transaction_by_hash.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_trace_decides_block_number(self) -> None:
        """Test the first trace's block number is the one priced."""
        node = node_with(reward=5000, last_tx=payment(1000))

        await RewardResolver(node).resolve(
            10039755,
            [bid("1000", block_number="20830417"), bid("1000", block_number="20830418")],
            block(),
        )

        node.get_block_reward.assert_awaited_once_with(20830417)

    @pytest.mark.asyncio
    async def test_bad_value_is_an_error(self) -> None:
        """Test a malformed bid value fails instead of reading as zero."""
        node = node_with(reward=5000, last_tx=payment(0))

        with pytest.raises(DataInconsistencyError, match="invalid value"):
            await RewardResolver(node).resolve(
                10039755, [bid("1000"), bid("1.5e18")], block()
            )

        node.get_block_reward.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_block_number_is_an_error(self) -> None:
        """Test a malformed trace block number fails the request."""
        node = node_with()

        with pytest.raises(DataInconsistencyError, match="block_number"):
            await RewardResolver(node).resolve(
                10039755, [bid("1000", block_number="")], block()
            )

    @pytest.mark.asyncio
    async def test_repeatable(self) -> None:
        """Test the same inputs give the same record."""
        node = node_with(reward=5000, last_tx=payment(1000))
        resolver = RewardResolver(node)
        traces = [bid("1000")]

        first = await resolver.resolve(10039755, traces, block(PROPOSER))
        second = await resolver.resolve(10039755, traces, block(PROPOSER))

        assert first == second


def test_same_address() -> None:
    """Test address comparison."""
    assert same_address(PROPOSER, PROPOSER.lower())
    assert not same_address(PROPOSER, BUILDER)
    assert not same_address(None, PROPOSER)
