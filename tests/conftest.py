"""Pytest configuration and shared fixtures."""

import os

import pytest

from src.data.relays.models import BidTrace

# Reference slot 10031063 as reported by boost-relay.flashbots.net
REFERENCE_SLOT = 10031063
REFERENCE_VALUE = "55766506090015659"
REFERENCE_FEE_RECIPIENT = "0xeBec795c9c8bBD61FFc14A6662944748F299cAcf"
REFERENCE_BLOCK_NUMBER = "20821772"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip live-network tests unless a node endpoint is configured."""
    if os.getenv("NODE_ENDPOINT"):
        return

    skip_live = pytest.mark.skip(reason='"NODE_ENDPOINT" env variable is not set')
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def reference_trace() -> BidTrace:
    """Bid trace delivered for the reference slot."""
    return BidTrace(
        slot=REFERENCE_SLOT,
        value=REFERENCE_VALUE,
        proposer_fee_recipient=REFERENCE_FEE_RECIPIENT,
        block_number=REFERENCE_BLOCK_NUMBER,
    )


@pytest.fixture
def relay_payload() -> dict[str, str]:
    """Raw relay API entry for the reference slot, with the extra fields relays send."""
    return {
        "slot": str(REFERENCE_SLOT),
        "parent_hash": "0x" + "11" * 32,
        "block_hash": "0x" + "22" * 32,
        "builder_pubkey": "0x" + "33" * 48,
        "proposer_pubkey": "0x" + "44" * 48,
        "proposer_fee_recipient": REFERENCE_FEE_RECIPIENT,
        "gas_limit": "30000000",
        "gas_used": "12345678",
        "value": REFERENCE_VALUE,
        "block_number": REFERENCE_BLOCK_NUMBER,
        "num_tx": "150",
    }
