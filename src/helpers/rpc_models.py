"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int | str = Field(..., description="Request ID")


class ExecutionBlock(BaseModel):
    """Subset of an eth_getBlockByNumber result needed to compute the burnt fee."""

    number: str = Field(..., description="Block number as hex string")
    gas_used: str = Field(..., description="Gas used as hex string", alias="gasUsed")
    base_fee_per_gas: str = Field(
        ..., description="Base fee per gas as hex string", alias="baseFeePerGas"
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TransactionReceipt(BaseModel):
    """Subset of a transaction receipt from eth_getBlockReceipts."""

    transaction_hash: str = Field(..., alias="transactionHash")
    transaction_index: str = Field(
        ..., description="Index as hex string", alias="transactionIndex"
    )
    gas_used: str = Field(..., description="Gas used as hex string", alias="gasUsed")
    effective_gas_price: str = Field(
        ..., description="Effective gas price as hex string", alias="effectiveGasPrice"
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawTransaction(BaseModel):
    """Subset of an eth_getTransactionByHash result."""

    hash: str
    to: str | None = Field(default=None, description="Recipient, None for deployments")
    value: str = Field(..., description="Transferred wei as hex string")
    transaction_index: str | None = Field(
        default=None, description="Index as hex string", alias="transactionIndex"
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


__all__ = [
    "ExecutionBlock",
    "JsonRpcRequest",
    "RawTransaction",
    "TransactionReceipt",
]
