from __future__ import annotations

from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from innovatehub.config import Config
from innovatehub.db import connect

from .crud import ROLE_ADMIN, get_user_by_email, has_role
from .security import decode_access_token


_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_config(request: Request) -> Config:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise HTTPException(status_code=500, detail="server_config_missing")
    return cfg


def verify_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    """Require `Authorization: Bearer <jwt>` signed with ACCESS_TOKEN_SECRET.

    The decoded payload is attached to request.state.decoded and returned.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("missing_token")

    try:
        decoded = decode_access_token(token=credentials.credentials, secret=cfg.ACCESS_TOKEN_SECRET)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("token_expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("token_invalid")

    request.state.decoded = decoded
    return decoded


def verify_admin(
    decoded: Dict[str, Any] = Depends(verify_token),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    """Require the token's user to hold the admin role (one lookup per request)."""
    with connect(cfg.DB_DSN) as conn:
        user = get_user_by_email(conn, decoded.get("email"))
    if not has_role(user, ROLE_ADMIN):
        raise HTTPException(status_code=403, detail="admin_required")
    return decoded


def require_self(email: str, decoded: Dict[str, Any]) -> None:
    """Callers may only ask about their own account."""
    if email != decoded.get("email"):
        raise HTTPException(status_code=403, detail="email_mismatch")


# Ordered capability checks, attached to routes via `dependencies=`.
TOKEN_GATE = [Depends(verify_token)]
ADMIN_GATE = [Depends(verify_token), Depends(verify_admin)]
