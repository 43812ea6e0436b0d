"""Caller identity resolved from the JWT.

The token is read from ``Authorization: Bearer <token>`` first and from the
auth cookie otherwise. The identity (user id, role) is trusted from the
token without a database lookup.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request

from querynet.config import AuthSettings
from querynet.domain.error import AuthenticationError
from querynet.domain.service import JWTService
from querynet.domain.value import UserRole
from querynet.util.error import JWTError


@dataclass(frozen=True)
class Caller:
    user_id: str
    username: str
    role: UserRole


async def _token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization")
    if header and header.lower().startswith("bearer "):
        token = header[7:].strip()
        if token:
            return token
    container = request.state.dishka_container
    auth_settings = await container.get(AuthSettings)
    return request.cookies.get(auth_settings.cookie_name)


async def optional_caller(request: Request) -> Optional[Caller]:
    """Caller if a valid token was sent, None otherwise."""
    token = await _token(request)
    if not token:
        return None
    jwt_service = await request.state.dishka_container.get(JWTService)
    payload = jwt_service.get_payload_from_token(token)
    if payload is None:
        return None
    return _caller(payload.user_id, payload.username, payload.role)


async def require_caller(request: Request) -> Caller:
    """Caller from a valid token.

    Raises:
        AuthenticationError: If no token was sent or it does not verify
    """
    token = await _token(request)
    if not token:
        raise AuthenticationError("Not authorized to access this route")
    jwt_service = await request.state.dishka_container.get(JWTService)
    try:
        payload = jwt_service.verify_token(token)
    except JWTError:
        raise AuthenticationError("Not authorized, token failed")
    return _caller(payload.user_id, payload.username, payload.role)


def _caller(user_id: str, username: str, role: str) -> Caller:
    try:
        user_role = UserRole(role)
    except ValueError:
        user_role = UserRole.USER
    return Caller(user_id=user_id, username=username, role=user_role)


CurrentCaller = Annotated[Caller, Depends(require_caller)]
MaybeCaller = Annotated[Optional[Caller], Depends(optional_caller)]
