"""Pydantic models for execution-layer block data."""

from pydantic import BaseModel, ConfigDict


class BlockReward(BaseModel):
    """Priority fees earned by a block's fee recipient.

    ``reward`` is the sum of every receipt's ``gasUsed * effectiveGasPrice``
    minus the burnt ``baseFeePerGas * gasUsed``. ``last_tx_hash`` is None for
    a block without transactions.
    """

    block_number: int
    reward: int
    last_tx_hash: str | None = None

    model_config = ConfigDict(frozen=True)


class Transaction(BaseModel):
    """Transfer fields of a transaction."""

    hash: str
    to: str | None
    value: int
    transaction_index: int | None = None

    model_config = ConfigDict(frozen=True)
