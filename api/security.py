"""
Caller resolution - signed bearer tokens and the FastAPI session provider.

Tokens are compact HS256 JWTs carrying ``sub`` (user id), ``role`` and
``exp``. Routes never read identity from anywhere else: they receive the
CallerContext produced by ``get_caller``, which is None for anonymous or
unverifiable requests.
"""

import base64
import hashlib
import hmac
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from pydantic import ValidationError

from app.config import settings
from domain.enums import UserRole
from domain.schemas.caller import CallerContext

logger = logging.getLogger("messplanner.security")

TOKEN_COOKIE_NAME = "messplanner_token"


class InvalidTokenError(ValueError):
    """Token is malformed, badly signed or expired"""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def _jwt_encode(payload: Dict[str, Any], secret: str) -> str:
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    return f"{header_b64}.{payload_b64}.{_b64url_encode(_sign(signing_input, secret))}"


def _jwt_decode(token: str, secret: str) -> Dict[str, Any]:
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidTokenError("invalid token")
    header_b64, payload_b64, sig_b64 = parts
    try:
        signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
        actual_sig = _b64url_decode(sig_b64)
        payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidTokenError("invalid token") from exc
    if not hmac.compare_digest(_sign(signing_input, secret), actual_sig):
        raise InvalidTokenError("bad signature")
    if not isinstance(payload, dict):
        raise InvalidTokenError("bad payload")
    return payload


def create_access_token(
    *,
    user_id: str,
    role: UserRole,
    email: Optional[str] = None,
    ttl: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """Issue a signed token for a caller"""
    now = _utc_now()
    exp = now + (ttl if ttl is not None else timedelta(minutes=settings.token_ttl_minutes))
    payload: Dict[str, Any] = {
        "sub": user_id,
        "role": UserRole(role).value,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if email:
        payload["email"] = email
    return _jwt_encode(payload, secret or settings.jwt_secret)


def decode_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """Verify a token and return its claims"""
    payload = _jwt_decode(token, secret or settings.jwt_secret)
    exp = payload.get("exp")
    if not isinstance(exp, int) or exp <= int(_utc_now().timestamp()):
        raise InvalidTokenError("token expired")
    return payload


def caller_from_claims(claims: Dict[str, Any]) -> CallerContext:
    try:
        return CallerContext(
            user_id=str(claims.get("sub") or ""),
            role=claims.get("role"),
            email=claims.get("email"),
        )
    except ValidationError as exc:
        raise InvalidTokenError("bad claims") from exc


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    cookie = request.cookies.get(TOKEN_COOKIE_NAME)
    return cookie or None


def get_caller(request: Request) -> Optional[CallerContext]:
    """
    Session provider dependency.

    Returns the caller for a verified token, or None. Authorization decisions
    are left to the service layer.
    """
    token = get_token_from_request(request)
    if not token:
        return None
    try:
        caller = caller_from_claims(decode_token(token))
    except InvalidTokenError as exc:
        logger.info(f"Rejected bearer token on {request.url.path}: {exc}")
        return None
    if not caller.user_id:
        return None
    return caller
