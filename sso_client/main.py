"""
SSO Client (relying party). OIDC implicit flow with form_post; replay protection via single-use nonces.
GET /, /login; POST /callback. Port 8000.
"""
import html
import logging

from fastapi import APIRouter, Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from nonce_service.nonce_store import NonceStore
from sso_client.config import (
    AUTHORIZATION_ENDPOINT,
    CLIENT_ID,
    DEFAULT_SCOPE,
    LOGIN_MAX_AGE_MS,
    REDIRECT_URI,
)
from sso_client.id_token import IdTokenError, verify_id_token
from sso_client.redirect import build_authorization_url

logger = logging.getLogger(__name__)
router = APIRouter()


def _page(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    """Minimal HTML page; body must already be escaped."""
    return HTMLResponse(
        f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
  <h1>{title}</h1>
  {body}
  <p><a href="/">Home</a></p>
</body>
</html>""",
        status_code=status_code,
    )


def get_nonce_store(request: Request) -> NonceStore:
    """Dependency: the app's NonceStore (created once in create_app)."""
    return request.app.state.nonce_store


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "sso_client"}


@router.get("/", response_class=HTMLResponse)
def home():
    """Home page with link to log in."""
    return _page("SSO Client", '<p><a href="/login">Log in</a></p>')


@router.get("/login")
def login(nonce_store: NonceStore = Depends(get_nonce_store)):
    """
    Issue a nonce and redirect to the IdP. The IdP must echo the nonce in the ID token.
    """
    nonce = nonce_store.generate(LOGIN_MAX_AGE_MS)
    url = build_authorization_url(
        authorization_endpoint=AUTHORIZATION_ENDPOINT,
        client_id=CLIENT_ID,
        redirect_uri=REDIRECT_URI,
        scope=DEFAULT_SCOPE,
        nonce=nonce,
    )
    return RedirectResponse(url=url, status_code=302)


@router.post("/callback", response_class=HTMLResponse)
def callback(
    id_token: str | None = Form(None),
    error: str | None = Form(None),
    error_description: str | None = Form(None),
    nonce_store: NonceStore = Depends(get_nonce_store),
):
    """
    Handle the IdP's form_post. Verifies the ID token, then consumes its nonce.
    Missing, expired and replayed nonces get the same response.
    """
    if error:
        msg = html.escape(error_description or error)
        return _page("Login error", f"<p>{msg}</p>", status_code=400)

    if not id_token:
        return _page("Error", "<p>Missing id_token parameter.</p>", status_code=400)

    try:
        claims = verify_id_token(id_token)
    except IdTokenError:
        return _page("Error", "<p>Invalid ID token. Please try logging in again.</p>", status_code=400)

    nonce = claims.get("nonce")
    if not isinstance(nonce, str) or not nonce_store.is_valid(nonce):
        logger.debug("Rejected callback for sub=%s: nonce not valid", claims.get("sub"))
        return _page("Error", "<p>Invalid or expired login attempt. Please try logging in again.</p>", status_code=400)

    sub = str(claims.get("sub"))
    logger.info("Login accepted for sub=%s", sub)
    return _page("Login success", f"<p>Signed in as <code>{html.escape(sub)}</code>.</p>")


def create_app(nonce_store: NonceStore | None = None) -> FastAPI:
    """Build the app around one NonceStore (a new one unless given, e.g. by tests)."""
    app = FastAPI(title="SSO Client", version="0.1.0")
    app.state.nonce_store = nonce_store if nonce_store is not None else NonceStore()
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "sso_client.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
