"""Exception hierarchy for the validator API."""


class ValidatorApiError(Exception):
    """Base exception for all service errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class RetryExhaustedError(ValidatorApiError):
    """Raised when every attempt of a retried operation failed.

    Attributes:
        attempts: Number of attempts made.
        last_error: Exception raised by the final attempt.
    """

    def __init__(self, attempts: int, last_error: Exception) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"after {attempts} attempts: {last_error}")


class RelayAggregationError(ValidatorApiError):
    """Raised when one relay fails and takes the whole aggregation with it.

    Attributes:
        relay: Base URL of the failing relay.
        cause: Underlying error.
    """

    def __init__(self, relay: str, cause: Exception) -> None:
        self.relay = relay
        self.cause = cause
        super().__init__(f"relay {relay} failed: {cause}")


class DataInconsistencyError(ValidatorApiError):
    """Raised when upstream data cannot be reconciled (bad number, unknown index)."""


class RPCError(ValidatorApiError):
    """Raised when a JSON-RPC response carries an error object.

    Attributes:
        method: RPC method that failed.
        error: Raw error object from the node.
    """

    def __init__(self, method: str, error: object) -> None:
        self.method = method
        self.error = error
        super().__init__(f"RPC error from {method}: {error}")


__all__ = [
    "DataInconsistencyError",
    "RPCError",
    "RelayAggregationError",
    "RetryExhaustedError",
    "ValidatorApiError",
]
