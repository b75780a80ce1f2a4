"""
SSO client (relying party) configuration. Issuer and client_id are public identifiers, not secrets.
"""
import os

from nonce_service.config import NONCE_MAX_AGE_MS

# Identity provider (OIDC issuer); ID tokens must carry this iss
ISSUER = os.environ.get("SSO_ISSUER", "http://127.0.0.1:9000").rstrip("/")

# Where the browser is sent to log in
AUTHORIZATION_ENDPOINT = os.environ.get("SSO_AUTHORIZATION_ENDPOINT", f"{ISSUER}/authorize")

# Public keys used to verify ID token signatures
JWKS_URI = os.environ.get("SSO_JWKS_URI", f"{ISSUER}/.well-known/jwks.json")

# Our client_id (must be registered at the IdP); ID tokens must carry this aud
CLIENT_ID = os.environ.get("SSO_CLIENT_ID", "sso-client")

# The IdP POSTs the ID token here (response_mode=form_post)
REDIRECT_URI = os.environ.get("SSO_REDIRECT_URI", "http://127.0.0.1:8000/callback")

DEFAULT_SCOPE = os.environ.get("SSO_SCOPE", "openid profile")

# How long a user has to finish logging in at the IdP before the nonce expires
LOGIN_MAX_AGE_MS = int(os.environ.get("SSO_LOGIN_MAX_AGE_MS", str(NONCE_MAX_AGE_MS)))
