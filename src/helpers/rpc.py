"""Ethereum JSON-RPC client utilities."""

import operator

from typing import Any

import httpx

from src.helpers.exceptions import RPCError
from src.helpers.rpc_models import JsonRpcRequest


class RPCClient:
    """Ethereum JSON-RPC client with batching support."""

    def __init__(self, rpc_url: str, timeout: float = 30.0) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Default timeout for requests in seconds

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout

    async def call(
        self,
        client: httpx.AsyncClient,
        method: str,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Make a single JSON-RPC call.

        Args:
            client: HTTP client instance
            method: RPC method name (e.g., "eth_getBlockReceipts")
            params: Method parameters list
            timeout: Optional timeout override

        Returns:
            RPC result value

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RPCError: If the RPC response contains an error
        """
        payload = JsonRpcRequest(method=method, params=params or [], id=1)

        response = await client.post(
            self.rpc_url,
            json=payload.model_dump(),
            timeout=timeout or self.timeout,
        )
        response.raise_for_status()
        result = response.json()

        if "error" in result:
            raise RPCError(method, result["error"])

        return result.get("result")

    async def batch_call(
        self,
        client: httpx.AsyncClient,
        requests: list[tuple[str, list[Any]]],
        *,
        timeout: float | None = None,
    ) -> list[Any]:
        """Make multiple JSON-RPC calls in a single batch request.

        Args:
            client: HTTP client instance
            requests: List of (method, params) tuples
            timeout: Optional timeout override

        Returns:
            List of results in the same order as requests

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RPCError: If any response in the batch carries an error, or the
                reply is not one response per request
        """
        batch_payload = [
            JsonRpcRequest(method=method, params=params, id=idx).model_dump()
            for idx, (method, params) in enumerate(requests)
        ]
        batch_name = ",".join(method for method, _ in requests)

        response = await client.post(
            self.rpc_url, json=batch_payload, timeout=timeout or self.timeout
        )
        response.raise_for_status()
        results = response.json()

        # Nodes answer a rejected batch with a single error object
        if not isinstance(results, list):
            if isinstance(results, dict):
                results = results.get("error", results)
            raise RPCError(batch_name, results)

        ids = [r.get("id") if isinstance(r, dict) else None for r in results]
        int_ids = sorted(i for i in ids if isinstance(i, int))
        if int_ids != list(range(len(requests))):
            raise RPCError(
                batch_name, f"expected ids 0..{len(requests) - 1}, got {ids}"
            )

        # Sort by ID to match request order
        sorted_results = sorted(results, key=operator.itemgetter("id"))

        for r in sorted_results:
            if "error" in r:
                method = requests[r["id"]][0]
                raise RPCError(method, r["error"])

        return [r.get("result") for r in sorted_results]


__all__ = ["RPCClient"]
