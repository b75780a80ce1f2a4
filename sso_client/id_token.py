"""
ID token validation via the IdP's JWKS.
Checks signature (RS256), iss, aud, exp and that sub and nonce are present; nonce reuse is checked by the caller.
"""
import logging

import jwt
from jwt import PyJWKClient

from sso_client.config import CLIENT_ID, ISSUER, JWKS_URI

logger = logging.getLogger(__name__)

# Single shared client; PyJWKClient caches the JWK set and keys
_jwks_client: PyJWKClient | None = None


class IdTokenError(Exception):
    """ID token is malformed, badly signed, expired, or issued for someone else."""


def get_jwks_client() -> PyJWKClient:
    global _jwks_client
    if _jwks_client is None:
        _jwks_client = PyJWKClient(
            uri=JWKS_URI,
            cache_jwk_set=True,
            lifespan=300,
        )
    return _jwks_client


def verify_id_token(token: str) -> dict:
    """
    Verify ID token signature via JWKS and validate iss, aud, exp.
    Returns decoded claims. Raises IdTokenError on any failure.
    """
    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=CLIENT_ID,
            issuer=ISSUER,
            options={"require": ["exp", "iss", "aud", "sub", "nonce"]},
        )
    except jwt.PyJWTError as e:
        logger.debug("ID token verification failed: %s", e)
        raise IdTokenError(str(e)) from e
