"""
Random identifier generation backed by the OS CSPRNG (secrets).
Case-insensitive identifiers are lowercase hex; case-sensitive ones are base64url without padding.
"""
import math
import secrets
from base64 import urlsafe_b64encode
from typing import Callable

# (min_bits, case_sensitive) -> identifier
IdentifierGenerator = Callable[[int, bool], str]


def generate_identifier(min_bits: int = 128, case_sensitive: bool = True) -> str:
    """
    Return a random identifier carrying at least min_bits of entropy.
    Pass case_sensitive=False when the value may be case-folded in transit (e.g. compared
    case-insensitively); the result then only uses [0-9a-f].
    """
    if min_bits < 1:
        raise ValueError("min_bits must be positive")
    raw = secrets.token_bytes(math.ceil(min_bits / 8))
    if not case_sensitive:
        return raw.hex()
    return urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
