"""
Authentication endpoints.

``POST /api/auth/token`` signs the submitted identity and returns it as
an HTTP-only cookie; ``POST /api/auth/logout`` expires that cookie.
Identity verification itself (passwords, social login) happens in the
front end's identity provider before the token is requested.
"""

import logging

from fastapi import APIRouter, Request, Response

from help_hive_api.app.core.config import Settings
from help_hive_api.app.core.security import clear_token_cookie, create_access_token, set_token_cookie
from help_hive_api.app.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token")
async def issue_token(claims: TokenClaims, request: Request, response: Response) -> dict:
    """Issue a one-hour token for ``claims`` and set it as a cookie."""
    settings: Settings = request.app.state.settings
    token = create_access_token(claims, settings.secret_key, settings.access_token_expire_seconds)
    set_token_cookie(response, token, settings)
    logger.info("Issued token for %s", claims.email)
    return {"success": True}


@router.post("/logout")
async def logout(request: Request, response: Response) -> dict:
    """Clear the auth cookie.  The token itself is not revoked."""
    clear_token_cookie(response, request.app.state.settings)
    return {"success": True}
