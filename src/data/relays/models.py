"""Models for relay data API responses."""

from pydantic import BaseModel, ConfigDict


class BidTrace(BaseModel):
    """Delivered payload reported by a relay for one slot.

    Relays return more fields; only the ones needed to attribute the
    proposer reward are kept. Numbers other than the slot stay as the
    decimal strings the relay sent.
    """

    slot: int
    value: str
    proposer_fee_recipient: str
    block_number: str

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)
