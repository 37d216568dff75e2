"""
FastAPI dependencies for authentication and authorization

``get_current_identity`` is the authentication stage of the request
pipeline: it reads the session cookie, verifies it and attaches the
decoded identity to ``request.state.identity``. Failures raise AuthError
subclasses, which the application's exception handlers turn into 401s.
"""

import logging

from fastapi import Depends, Request

from booking_api.core.exceptions import AuthMissingError, AuthInvalidError
from booking_api.core.security import Identity, TokenService
from booking_api.core.setting import Settings

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Validate the session cookie and return the caller's identity.

    Raises:
        AuthMissingError: No session cookie on the request
        AuthInvalidError: Cookie present but the token does not verify
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise AuthMissingError("no session cookie")

    try:
        identity = tokens.verify(token)
    except AuthInvalidError as e:
        logger.info("Rejected session token on %s: %s", request.url.path, e.reason)
        raise

    request.state.identity = identity
    return identity
