"""Common configuration constants used across the application."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

BEACON_TIMEOUT = 100.0
"""Timeout for beacon node requests; the validator set response is large"""

RELAY_TIMEOUT = 30.0
"""Timeout for relay data API requests"""

# Retry Configuration
MAX_RETRIES = 5
"""Default maximum number of attempts for retry_call"""

RETRY_BASE_DELAY = 1.0
"""Base delay for exponential backoff in seconds"""

RELAY_RETRY_ATTEMPTS = 2
"""Attempts per relay before the aggregation fails"""

RELAY_RETRY_BASE_DELAY = 1.0
"""Initial backoff between relay attempts in seconds"""

# Slot Constants
MAX_SLOT = 2**64 - 1
"""Largest slot a path parameter may name (unsigned 64-bit)"""

MAX_SLOT_DIGITS = len(str(MAX_SLOT))
"""Decimal digits in MAX_SLOT"""

SYNC_COMMITTEE_ACTIVATION_SLOT = 2_375_680
"""First mainnet slot with a sync committee (Altair, epoch 74240)"""

SYNC_COMMITTEE_SIZE = 512
"""Number of validators in a sync committee"""

# Rate Limiting
VALIDATOR_RATE_LIMIT = "100/minute"
"""Requests per client IP allowed on the validator routes"""

# Cache Keys
VALIDATOR_DIRECTORY_KEY = "validator-directory"
"""Single-flight key guarding validator directory rebuilds"""


__all__ = [
    "BEACON_TIMEOUT",
    "DEFAULT_TIMEOUT",
    "MAX_RETRIES",
    "MAX_SLOT",
    "MAX_SLOT_DIGITS",
    "RELAY_RETRY_ATTEMPTS",
    "RELAY_RETRY_BASE_DELAY",
    "RELAY_TIMEOUT",
    "RETRY_BASE_DELAY",
    "SYNC_COMMITTEE_ACTIVATION_SLOT",
    "SYNC_COMMITTEE_SIZE",
    "VALIDATOR_DIRECTORY_KEY",
    "VALIDATOR_RATE_LIMIT",
]
