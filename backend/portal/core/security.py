from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from portal.core.config import settings

ALGORITHM = "HS256"
TOKEN_TYPE = "caller"
bearer_scheme = HTTPBearer(auto_error=False)


class CallerRole(str, Enum):
    EXTERNAL = "EXTERNAL"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class Caller:
    role: CallerRole = CallerRole.EXTERNAL
    subject: Optional[str] = None

    @property
    def is_internal(self) -> bool:
        return self.role is CallerRole.INTERNAL


ANONYMOUS = Caller()


def create_caller_token(
    role: CallerRole,
    subject: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(minutes=settings.CALLER_TOKEN_EXPIRE_MINUTES)
    to_encode: Dict[str, Any] = {
        "type": TOKEN_TYPE,
        "role": CallerRole(role).value,
        "iat": now,
        "exp": now + expires_delta,
    }
    if subject:
        to_encode["sub"] = subject
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from exc
    if payload.get("type") != TOKEN_TYPE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )
    return payload


def caller_from_token(token: str) -> Caller:
    payload = verify_token(token)
    try:
        role = CallerRole(payload.get("role"))
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        ) from exc
    return Caller(role=role, subject=payload.get("sub"))


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Caller:
    """Resolve who is calling. No credentials means an anonymous external caller."""
    if credentials is None:
        return ANONYMOUS
    return caller_from_token(credentials.credentials)


def get_submitting_caller(
    caller: Caller = Depends(get_caller),
    internal: bool = Query(default=False),
) -> Caller:
    """Caller for registration, also honouring the legacy ``internal`` flag when enabled."""
    if internal and not caller.is_internal and settings.ALLOW_INTERNAL_QUERY_FLAG:
        return Caller(role=CallerRole.INTERNAL, subject=caller.subject)
    return caller
