"""Bearer token verification for API routes.

Tokens are issued by the account service; this module only verifies them and
extracts the user identity.
"""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt  # type: ignore[import-untyped]

from poolhq.core.config import Settings, get_settings

security_scheme = HTTPBearer(auto_error=True)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str


def _decode_token(*, token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        ) from exc


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    payload = _decode_token(token=credentials.credentials, settings=settings)
    identity = payload.get(settings.jwt_identity_key)
    if identity is None or str(identity) == "":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has no identity")
    return AuthenticatedUser(id=str(identity))


__all__ = ["AuthenticatedUser", "get_current_user", "security_scheme"]
