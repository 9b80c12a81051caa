"""FastAPI dependency that turns a Bearer token into a caller context."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from staybook.auth.jwt import decode_token

# Missing credentials are reported as 401 below rather than HTTPBearer's default.
_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerContext:
    """Who is calling and whether they may bypass ownership checks."""

    user_id: str
    role: str = "user"
    is_privileged: bool = False


async def get_current_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> CallerContext:
    """Validate the Bearer token and return the caller context.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired, or of the wrong type.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    config = request.app.state.settings
    try:
        payload = decode_token(credentials.credentials, config)
    except JWTError:
        raise credentials_exception from None

    token_type: str | None = payload.get("type")
    if token_type != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    sub: str | None = payload.get("sub")
    if not sub:
        raise credentials_exception

    role = str(payload.get("role") or "user")
    return CallerContext(user_id=str(sub), role=role, is_privileged=role == config.admin_role)
