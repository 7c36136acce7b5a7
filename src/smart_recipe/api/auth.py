"""Google sign-in endpoints and the session guard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from smart_recipe.domain.sessions import RequestContext, Session
from smart_recipe.services.auth import AuthenticationError

if TYPE_CHECKING:
    from smart_recipe.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

STATE_COOKIE = "oauth-state"
STATE_MAX_AGE_SECONDS = 600
SIGNED_IN_DESTINATION = "/home"


def request_context(request: Request) -> RequestContext:
    """Capture the credential material carried by an incoming request."""
    return RequestContext(cookies=dict(request.cookies), headers=dict(request.headers))


def require_session(request: Request) -> Session:
    """Ensure the caller holds a valid session and return it."""
    container: AppContainer = request.app.state.container
    session = container.session_resolver.resolve(request_context(request))
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return session


@router.get("/signin/google")
async def sign_in_google(request: Request) -> Response:
    """Start the Google flow unless the caller is already signed in."""
    container: AppContainer = request.app.state.container
    if container.auth_service.refresh(request_context(request)) is not None:
        return RedirectResponse(SIGNED_IN_DESTINATION, status_code=303)
    url, state = container.auth_service.begin_sign_in()
    response = RedirectResponse(url, status_code=303)
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=STATE_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=container.settings.secure_cookies,
    )
    return response


@router.get("/callback/google")
async def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> Response:
    """Complete the authorization-code exchange and set the session cookie."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    if error:
        return _error_redirect(error)
    try:
        _, raw_token = await container.auth_service.complete_sign_in(
            code, state, request.cookies.get(STATE_COOKIE)
        )
    except AuthenticationError as exc:
        logger.warning("Google sign-in failed", extra={"error_code": exc.code})
        return _error_redirect(exc.code)
    response = RedirectResponse(SIGNED_IN_DESTINATION, status_code=303)
    response.set_cookie(
        settings.session_cookie_name,
        raw_token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )
    response.delete_cookie(STATE_COOKIE)
    return response


@router.get("/session")
async def current_session(request: Request) -> dict[str, object]:
    """Return the caller's session, or an empty object when signed out."""
    container: AppContainer = request.app.state.container
    session = container.session_resolver.resolve(request_context(request))
    return session.to_payload() if session else {}


@router.post("/signout")
async def sign_out(request: Request) -> Response:
    """Delete the caller's session and clear the cookie."""
    container: AppContainer = request.app.state.container
    cookie_name = container.settings.session_cookie_name
    container.auth_service.sign_out(request.cookies.get(cookie_name))
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(cookie_name)
    return response


@router.get("/error", response_class=HTMLResponse)
async def auth_error(error: str = "Default") -> HTMLResponse:
    """Minimal sign-in error page."""
    return HTMLResponse(
        _ERROR_HTML.format(message=_ERROR_MESSAGES.get(error, _DEFAULT_MESSAGE)),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def _error_redirect(code: str) -> RedirectResponse:
    response = RedirectResponse(
        f"/auth/error?{urlencode({'error': code})}", status_code=303
    )
    response.delete_cookie(STATE_COOKIE)
    return response


_DEFAULT_MESSAGE = "Unable to sign in."
_ERROR_MESSAGES = {
    "access_denied": "Sign-in was cancelled.",
    "OAuthCallback": "Google could not complete the sign-in.",
    "OAuthStateMismatch": "The sign-in request expired. Please try again.",
    "OAuthAccountNotLinked": "Your Google account did not return a profile.",
}

_ERROR_HTML = """<!doctype html>
<html lang="en">
  <head><meta charset="utf-8" /><title>Sign-in error</title></head>
  <body>
    <h1>{message}</h1>
    <a href="/">Back to home</a>
  </body>
</html>
"""
