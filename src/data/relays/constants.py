"""Constants for relay data APIs."""

# Mainnet relays used when RELAYS_ENDPOINT is not set
DEFAULT_RELAYS = [
    "https://boost-relay.flashbots.net",
    "https://bloxroute.max-profit.blxrbdn.com",
    "https://bloxroute.regulated.blxrbdn.com",
    "https://relay.ultrasound.money",
    "https://agnostic-relay.net",
    "https://aestus.live",
    "https://titanrelay.xyz",
    "https://relay.wenmerge.com",
    "https://mainnet-relay.securerpc.com",
]

ENDPOINTS = {
    "proposer_payload_delivered": "/relay/v1/data/bidtraces/proposer_payload_delivered",
}

# Only the exact slot matters, so one result is enough
LIMITS = {
    "proposer_payload_delivered": 1,
}
