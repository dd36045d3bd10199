"""
Security helpers for cookie-based JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens embed the
``TokenClaims`` fields plus issue (``iat``) and expiration (``exp``)
timestamps and are signed with the secret key from the application
settings.

Tokens travel in an HTTP-only cookie named ``token``.  Logging out
only expires the cookie on the client; there is no server-side
revocation, so a copied token stays valid until ``exp``.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import APIKeyCookie
from pydantic import ValidationError

from ..schemas.auth import TokenClaims
from .config import Settings

logger = logging.getLogger(__name__)

COOKIE_NAME = "token"
UNAUTHORIZED_DETAIL = "unauthorized access"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(claims: TokenClaims, secret: str, expires_in: int = 3600) -> str:
    """Create a signed JWT for the given claims.

    Parameters
    ----------
    claims : TokenClaims
        Identity to embed in the token.  Only the declared fields are
        serialized.
    secret : str
        HMAC signing key.
    expires_in : int
        Lifetime of the token in seconds.  Negative values produce an
        already expired token, which is handy in tests.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    now = int(time.time())
    to_encode: Dict[str, Any] = claims.model_dump(exclude_none=True)
    to_encode["iat"] = now
    to_encode["exp"] = now + expires_in
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT.

    Splits the token into header, payload and signature, verifies the
    HMAC signature and checks the ``exp`` field.  Returns the payload
    dictionary if everything checks out, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret)
    try:
        actual_sig = _b64_url_decode(signature_b64)
    except ValueError:
        return None
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(expected_sig, actual_sig):
        return None
    try:
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        return None
    return data


def _cookie_options(settings: Settings) -> Dict[str, Any]:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "strict",
        "path": "/",
    }


def set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the auth cookie to ``response``."""
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=settings.access_token_expire_seconds,
        **_cookie_options(settings),
    )


def clear_token_cookie(response: Response, settings: Settings) -> None:
    """Overwrite the auth cookie with an empty, already expired value."""
    response.delete_cookie(COOKIE_NAME, **_cookie_options(settings))


cookie_scheme = APIKeyCookie(name=COOKIE_NAME, auto_error=False)


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(cookie_scheme),
) -> TokenClaims:
    """Dependency that authenticates the request from its cookie.

    Raises HTTP 401 if the cookie is missing, the signature does not
    match, the token has expired or its payload is not a valid set of
    claims.  On success the claims are also stored on
    ``request.state.user``.
    """
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    settings: Settings = request.app.state.settings
    payload = decode_access_token(token, settings.secret_key)
    if payload is None:
        logger.info("Rejected invalid or expired token for %s %s", request.method, request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    try:
        user = TokenClaims.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    request.state.user = user
    return user
