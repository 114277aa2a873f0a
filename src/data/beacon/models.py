"""Models for beacon node REST API responses."""

from pydantic import BaseModel, ConfigDict, Field


class BeaconBlock(BaseModel):
    """Canonical block for a slot, reduced to what reward attribution needs."""

    slot: str
    block_number: str = Field(..., description="Execution block number, decimal string")
    fee_recipient: str = Field(..., description="Execution payload fee recipient")

    model_config = ConfigDict(frozen=True)


class ExecutionPayload(BaseModel):
    """Execution payload fields of a beacon block body."""

    fee_recipient: str
    block_number: str


class BeaconBlockBody(BaseModel):
    """Beacon block body."""

    execution_payload: ExecutionPayload


class BeaconBlockMessage(BaseModel):
    """Beacon block message."""

    slot: str
    body: BeaconBlockBody


class SignedBeaconBlock(BaseModel):
    """Signed beacon block."""

    message: BeaconBlockMessage


class BeaconBlockResponse(BaseModel):
    """Response of /eth/v2/beacon/blocks/{slot}."""

    data: SignedBeaconBlock

    def to_block(self) -> BeaconBlock:
        """Flatten into a BeaconBlock."""
        message = self.data.message
        payload = message.body.execution_payload
        return BeaconBlock(
            slot=message.slot,
            block_number=payload.block_number,
            fee_recipient=payload.fee_recipient,
        )


class HeaderMessage(BaseModel):
    """Beacon block header message."""

    slot: str


class SignedHeader(BaseModel):
    """Signed beacon block header."""

    message: HeaderMessage


class HeaderEntry(BaseModel):
    """One entry of /eth/v1/beacon/headers."""

    header: SignedHeader


class BeaconHeadersResponse(BaseModel):
    """Response of /eth/v1/beacon/headers."""

    data: list[HeaderEntry]


class SyncCommittee(BaseModel):
    """Sync committee membership as validator indices."""

    validators: list[str]


class SyncCommitteesResponse(BaseModel):
    """Response of /eth/v1/beacon/states/{slot}/sync_committees."""

    data: SyncCommittee


class ValidatorDetails(BaseModel):
    """Validator record; only the public key is kept."""

    pubkey: str


class ValidatorEntry(BaseModel):
    """One entry of /eth/v1/beacon/states/{slot}/validators."""

    index: str
    validator: ValidatorDetails


class ValidatorsResponse(BaseModel):
    """Response of /eth/v1/beacon/states/{slot}/validators.

    The full response is hundreds of megabytes; every other field is ignored.
    """

    data: list[ValidatorEntry]
