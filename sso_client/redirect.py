"""
Authorization request for the OIDC implicit flow (response_type=id_token, response_mode=form_post).
The nonce is echoed back inside the ID token and checked once on callback.
"""
from urllib.parse import urlencode


def build_authorization_url(
    *,
    authorization_endpoint: str,
    client_id: str,
    redirect_uri: str,
    scope: str,
    nonce: str,
) -> str:
    """Build the IdP authorization URL with required params."""
    params = {
        "response_type": "id_token",
        "response_mode": "form_post",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": scope,
        "nonce": nonce,
    }
    return f"{authorization_endpoint}?{urlencode(params)}"
