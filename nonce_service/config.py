"""
Nonce service configuration. Durations are milliseconds; values come from env with safe defaults.
"""
import os

# Minimum entropy per nonce (bits). Values below 128 are rejected by NonceStore.
NONCE_BITS = int(os.environ.get("NONCE_BITS", "128"))

# Minimum time between sweeps of expired nonces (1 minute)
NONCE_SWEEP_INTERVAL_MS = int(os.environ.get("NONCE_SWEEP_INTERVAL_MS", "60000"))

# Default nonce lifetime for callers that don't pick their own (10 minutes)
NONCE_MAX_AGE_MS = int(os.environ.get("NONCE_MAX_AGE_MS", "600000"))
