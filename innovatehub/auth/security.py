from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt


_JWT_ALG = "HS256"
DEFAULT_EXPIRE_MINUTES = 60


def create_access_token(
    payload: Dict[str, Any],
    *,
    secret: str,
    expires_minutes: int = DEFAULT_EXPIRE_MINUTES,
) -> str:
    """Sign an arbitrary identity payload (normally at least {"email": ...}).

    The payload is signed as given; `iat`/`exp` are stamped on top.
    """
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=max(1, int(expires_minutes)))

    claims: Dict[str, Any] = dict(payload or {})
    claims["iat"] = int(now.timestamp())
    claims["exp"] = int(exp.timestamp())
    return jwt.encode(claims, secret, algorithm=_JWT_ALG)


def decode_access_token(*, token: str, secret: str) -> Dict[str, Any]:
    if not token:
        raise ValueError("token_blank")
    if not secret:
        raise ValueError("jwt_secret_blank")
    # Only signature and expiry are enforced; aud/sub/jti are whatever the client signed in.
    return jwt.decode(
        token,
        secret,
        algorithms=[_JWT_ALG],
        options={"verify_aud": False, "verify_sub": False, "verify_jti": False},
    )
