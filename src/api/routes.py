"""API routes for the validator service."""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from src.api.dependencies import Services, get_services
from src.api.limits import validator_rate_limit
from src.helpers.constants import SYNC_COMMITTEE_ACTIVATION_SLOT
from src.helpers.logging import get_logger
from src.helpers.parsers import parse_slot
from src.rewards.models import BlockRewardRecord, SyncDuties

router = APIRouter(prefix="/eth/validator")

logger = get_logger(__name__)


def reject(status: HTTPStatus) -> HTTPException:
    """HTTP error carrying only the standard reason phrase."""
    return HTTPException(status_code=status, detail=status.phrase)


async def check_slot(raw_slot: str, services: Services) -> int:
    """Parse a slot path parameter and make sure it is not in the future.

    Raises:
        HTTPException: 404 for a malformed slot, 400 for a future slot
    """
    slot = parse_slot(raw_slot)
    if slot is None:
        raise reject(HTTPStatus.NOT_FOUND)

    head_slot = await services.beacon.get_head_slot()
    if slot > head_slot:
        logger.debug("slot %d is after head slot %d", slot, head_slot)
        raise reject(HTTPStatus.BAD_REQUEST)

    return slot


@router.get("/blockreward/{slot}", response_model=BlockRewardRecord)
@validator_rate_limit
async def get_block_reward(
    request: Request,
    slot: str = Path(..., description="Slot number", examples=["10039755"]),
    services: Services = Depends(get_services),
) -> BlockRewardRecord:
    """
    Get the proposer reward for a slot.

    Returns: status (mev or vanilla), reward in wei as a decimal string
    """
    requested = await check_slot(slot, services)

    bid_traces = await services.relays.get_reward_data_for_slot(requested)
    beacon_block = await services.beacon.get_block_by_slot(requested)

    record = await services.resolver.resolve(requested, bid_traces, beacon_block)
    logger.info("slot %d: %s reward %s", requested, record.status, record.reward)
    return record


@router.get("/syncduties/{slot}", response_model=SyncDuties)
@validator_rate_limit
async def get_sync_duties(
    request: Request,
    slot: str = Path(..., description="Slot number", examples=["10039755"]),
    services: Services = Depends(get_services),
) -> SyncDuties:
    """
    Get the public keys of the sync committee on duty in a slot.

    Returns: data, one public key per committee member
    """
    requested = await check_slot(slot, services)

    if requested < SYNC_COMMITTEE_ACTIVATION_SLOT:
        raise reject(HTTPStatus.NOT_FOUND)

    indices = await services.beacon.get_sync_committee(requested)
    pubkeys = await services.directory.resolve(indices)
    return SyncDuties(data=pubkeys)
