"""Models for block reward attribution."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class RewardStatus(StrEnum):
    """How the block was built."""

    MEV = "mev"
    VANILLA = "vanilla"


class BlockRewardRecord(BaseModel):
    """Proposer reward for a slot, in wei as a decimal string."""

    status: RewardStatus
    reward: str

    model_config = ConfigDict(frozen=True)


class SyncDuties(BaseModel):
    """Public keys of the sync committee members for a slot."""

    data: list[str]
