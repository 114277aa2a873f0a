"""Execution node client for block rewards and transactions."""

import httpx
from pydantic import TypeAdapter, ValidationError

from src.data.blocks.models import BlockReward, Transaction
from src.helpers.exceptions import DataInconsistencyError
from src.helpers.logging import get_logger
from src.helpers.parsers import parse_hex_int, sanitize_url
from src.helpers.rpc import RPCClient
from src.helpers.rpc_models import ExecutionBlock, RawTransaction, TransactionReceipt


RECEIPTS = TypeAdapter(list[TransactionReceipt])


class NodeClient:
    """Computes block rewards and reads transactions over JSON-RPC."""

    def __init__(self, client: httpx.AsyncClient, rpc: RPCClient) -> None:
        """Initialize the node client.

        Args:
            client: Shared HTTP client
            rpc: JSON-RPC client for the execution node
        """
        self.client = client
        self.rpc = rpc
        self.logger = get_logger(__name__)

    async def get_block_reward(self, block_number: int) -> BlockReward:
        """Compute the priority fee reward of a block.

        Fetches the block and all its receipts in one batch request.

        Args:
            block_number: Execution block number

        Returns:
            BlockReward with the reward in wei and the last transaction hash

        Raises:
            httpx.HTTPError: If the request fails
            RPCError: If the node returns an error
            DataInconsistencyError: If the block is unknown or a field is malformed
        """
        block_param = hex(block_number)
        try:
            raw_block, raw_receipts = await self.rpc.batch_call(
                self.client,
                [
                    ("eth_getBlockByNumber", [block_param, False]),
                    ("eth_getBlockReceipts", [block_param]),
                ],
            )
        except httpx.HTTPError as e:
            self.logger.error(
                "failed to fetch block %d from %s: %s",
                block_number,
                sanitize_url(self.rpc.rpc_url),
                type(e).__name__,
            )
            raise

        if raw_block is None or raw_receipts is None:
            msg = f"block {block_number} not found on node"
            raise DataInconsistencyError(msg)

        try:
            block = ExecutionBlock.model_validate(raw_block)
            receipts = RECEIPTS.validate_python(raw_receipts)
        except ValidationError as e:
            msg = f"malformed block {block_number} data: {e}"
            raise DataInconsistencyError(msg) from e

        total_fees = 0
        last_index = -1
        last_tx_hash: str | None = None
        for receipt in receipts:
            total_fees += parse_hex_int(receipt.gas_used) * parse_hex_int(
                receipt.effective_gas_price
            )
            index = parse_hex_int(receipt.transaction_index)
            if index > last_index:
                last_index = index
                last_tx_hash = receipt.transaction_hash

        burnt_fee = parse_hex_int(block.base_fee_per_gas) * parse_hex_int(block.gas_used)

        reward = total_fees - burnt_fee
        self.logger.debug(
            "block %d reward=%d over %d tx(s)", block_number, reward, len(receipts)
        )
        return BlockReward(
            block_number=block_number, reward=reward, last_tx_hash=last_tx_hash
        )

    async def get_transaction_by_hash(self, tx_hash: str) -> Transaction:
        """Read the recipient and value of a transaction.

        Raises:
            httpx.HTTPError: If the request fails
            RPCError: If the node returns an error
            DataInconsistencyError: If the transaction is unknown or malformed
        """
        raw = await self.rpc.call(self.client, "eth_getTransactionByHash", [tx_hash])
        if raw is None:
            msg = f"transaction {tx_hash} not found on node"
            raise DataInconsistencyError(msg)

        try:
            tx = RawTransaction.model_validate(raw)
        except ValidationError as e:
            msg = f"malformed transaction {tx_hash}: {e}"
            raise DataInconsistencyError(msg) from e

        return Transaction(
            hash=tx.hash,
            to=tx.to,
            value=parse_hex_int(tx.value),
            transaction_index=(
                parse_hex_int(tx.transaction_index)
                if tx.transaction_index is not None
                else None
            ),
        )


__all__ = ["NodeClient"]
