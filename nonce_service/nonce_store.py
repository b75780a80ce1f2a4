"""
Single-use nonces for replay protection in SSO redirect flows.
Each nonce has at least 128 bits of entropy, is case-insensitive, and validates at most once.
Expired nonces are swept lazily from generate(); no background thread or timer.
"""
import logging
import threading
import time
from typing import Callable

from nonce_service.config import NONCE_BITS, NONCE_SWEEP_INTERVAL_MS
from nonce_service.identifiers import IdentifierGenerator, generate_identifier

logger = logging.getLogger(__name__)

# Never issue nonces weaker than this, whatever the configuration says
MIN_NONCE_BITS = 128

# Draws allowed when the generator returns a nonce that is still live
MAX_GENERATE_ATTEMPTS = 3

# () -> epoch milliseconds
Clock = Callable[[], int]


def current_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class NonceStore:
    """
    Generates and validates single-use nonces. Validating a nonce removes it, whatever the outcome.

    One instance per application; clock and identifier generator are injectable so tests
    can control time and randomness.
    """

    def __init__(
        self,
        *,
        clock: Clock = current_millis,
        identifier_generator: IdentifierGenerator = generate_identifier,
        sweep_interval_ms: int = NONCE_SWEEP_INTERVAL_MS,
        nonce_bits: int = NONCE_BITS,
    ) -> None:
        if nonce_bits < MIN_NONCE_BITS:
            raise ValueError(f"nonce_bits must be at least {MIN_NONCE_BITS}")
        self._clock = clock
        self._generate_identifier = identifier_generator
        self._sweep_interval_ms = sweep_interval_ms
        self._nonce_bits = nonce_bits
        # nonce (lowercase) -> expiration timestamp (epoch ms)
        self._nonces: dict[str, int] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._nonces)

    def _sweep_expired_nonces(self) -> None:
        """
        Remove every nonce whose expiration has passed. No-op until sweep_interval_ms
        has elapsed since the last sweep.
        """
        now = self._clock()
        with self._lock:
            if now - self._last_sweep < self._sweep_interval_ms:
                return
            self._last_sweep = now
            expired = [n for n, expires in self._nonces.items() if expires <= now]
            for n in expired:
                del self._nonces[n]
            remaining = len(self._nonces)
        logger.debug("Swept %d expired nonce(s); %d remaining", len(expired), remaining)

    def generate(self, max_age_ms: int) -> str:
        """
        Issue a new nonce valid for max_age_ms milliseconds from now.
        A max_age_ms of zero or less yields a nonce that is already expired.
        """
        self._sweep_expired_nonces()

        for _ in range(MAX_GENERATE_ATTEMPTS):
            nonce = self._generate_identifier(self._nonce_bits, False).lower()
            expires = self._clock() + max_age_ms
            with self._lock:
                # Never overwrite a live nonce
                if nonce not in self._nonces:
                    self._nonces[nonce] = expires
                    return nonce
        raise RuntimeError(f"identifier generator repeated a live nonce {MAX_GENERATE_ATTEMPTS} times")

    def is_valid(self, nonce: str | None) -> bool:
        """
        True if nonce was issued by this store and has not expired. Comparison is case-insensitive.
        Checking a nonce consumes it: a second check always returns False.
        """
        if not isinstance(nonce, str):
            return False

        with self._lock:
            expires = self._nonces.pop(nonce.lower(), None)
        if expires is None:
            return False

        return expires > self._clock()
