"""
Auth endpoints.

Magic-link and OAuth entry points, the redirect-back callback page and
sign-out. Errors raised by the auth module are turned into responses by
the application's exception handlers.
"""

import html
import math

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from modules.auth.models import (
    LoginRequest,
    MagicLinkResponse,
    OAuthProvider,
    OAuthStartResponse,
    SignupForm,
)
from modules.callback.models import CallbackOutcome, CallbackParams, Navigation
from modules.callback.navigation import RecordingNavigator
from modules.callback.watcher import AuthStateWatcher
from modules.routing.policy import PUBLIC_ENTRY_PATH
from shared.config import get_settings

from ..dependencies import BrowserContext, get_browser_context
from ..models.errors import ErrorResponse, ValidationErrorResponse

router = APIRouter()

FAILURE_PAGE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta http-equiv="refresh" content="{delay};url={target}">
<title>Authentication Failed</title>
</head>
<body>
<h2>Authentication Failed</h2>
<p>{message}</p>
<p>You will be redirected shortly. If nothing happens, use the link below.</p>
<a href="{recovery}">Go to sign in</a>
</body>
</html>
"""


@router.post(
    "/signup",
    response_model=MagicLinkResponse,
    status_code=202,
    responses={422: {"model": ValidationErrorResponse}, 502: {"model": ErrorResponse}},
)
async def signup(
    form: SignupForm,
    context: BrowserContext = Depends(get_browser_context),
) -> MagicLinkResponse:
    """
    Sign up by magic link.

    The profile fields travel with the link and seed the profile once
    the link is followed.
    """
    await context.accounts.request_signup_link(form)
    return MagicLinkResponse(
        message="Magic link sent! Please check your email to complete registration.",
        email=form.email.strip(),
    )


@router.post(
    "/login",
    response_model=MagicLinkResponse,
    status_code=202,
    responses={422: {"model": ValidationErrorResponse}, 502: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    context: BrowserContext = Depends(get_browser_context),
) -> MagicLinkResponse:
    """Send a sign-in magic link."""
    remember = request.remember
    if remember is None:
        remember = get_settings().remember_me_default
    await context.accounts.request_login_link(request.email, remember=remember)
    return MagicLinkResponse(
        message="Check your email for the login link!",
        email=request.email.strip(),
    )


@router.get("/oauth/{provider}")
async def oauth_sign_in(
    provider: OAuthProvider,
    context: BrowserContext = Depends(get_browser_context),
) -> RedirectResponse:
    """Redirect to the provider to sign in."""
    url = await context.accounts.start_oauth(provider)
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


@router.post(
    "/oauth/{provider}",
    response_model=OAuthStartResponse,
    responses={422: {"model": ValidationErrorResponse}, 502: {"model": ErrorResponse}},
)
async def oauth_sign_up(
    provider: OAuthProvider,
    form: SignupForm,
    context: BrowserContext = Depends(get_browser_context),
) -> OAuthStartResponse:
    """
    Start an OAuth signup.

    The form is kept for the callback; the browser should navigate to
    the returned URL.
    """
    url = await context.accounts.start_oauth(provider, form)
    return OAuthStartResponse(url=url, provider=provider)


@router.get("/callback")
async def auth_callback(
    request: Request,
    context: BrowserContext = Depends(get_browser_context),
) -> Response:
    """
    Redirect-back page for OAuth and magic links.

    Runs the callback flow once, with an auth-state watcher attached for
    the duration of the request, then turns the navigation into a response.
    """
    navigator = RecordingNavigator()
    flow = context.callback_flow(navigator)
    watcher = AuthStateWatcher(context.session_store, flow, context.user_cache)

    watcher.start()
    try:
        outcome = await flow.run(CallbackParams.from_query(request.query_params))
    finally:
        flow.cancel()
        await watcher.close()

    return callback_response(outcome, navigator.last)


def callback_response(outcome: CallbackOutcome, navigation: Navigation | None) -> Response:
    """Render a callback outcome as a redirect or a failure page."""
    navigation = navigation or outcome.navigation or Navigation(path=PUBLIC_ENTRY_PATH)

    if outcome.message is None:
        return RedirectResponse(navigation.path, status_code=status.HTTP_303_SEE_OTHER)

    body = FAILURE_PAGE.format(
        delay=math.ceil(navigation.delay_ms / 1000),
        target=html.escape(navigation.path, quote=True),
        message=html.escape(outcome.message),
        recovery=html.escape(outcome.recovery_path or PUBLIC_ENTRY_PATH, quote=True),
    )
    return HTMLResponse(body, status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/logout")
async def logout(
    context: BrowserContext = Depends(get_browser_context),
) -> RedirectResponse:
    """Sign out and return to the sign-in page."""
    await context.accounts.sign_out()
    return RedirectResponse(PUBLIC_ENTRY_PATH, status_code=status.HTTP_303_SEE_OTHER)
