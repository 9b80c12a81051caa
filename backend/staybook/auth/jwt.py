"""JWT access token creation and verification.

Identity is issued elsewhere; this service only needs to read who the caller
is (``sub``) and whether they hold the admin role (``role``).
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from staybook.config import Settings, settings


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
    config: Settings = settings,
) -> str:
    """Create an access token.

    Args:
        data: Payload data. Must include ``sub`` (user id as string); may
            include ``role``.
        expires_delta: Custom expiration duration. Defaults to
            ``jwt_access_token_expire_minutes`` minutes.
        config: Settings providing the signing key and algorithm.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.jwt_access_token_expire_minutes))
    to_encode.update({"exp": expire, "iat": now, "type": "access"})
    return jwt.encode(to_encode, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def decode_token(token: str, config: Settings = settings) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, config.jwt_secret_key, algorithms=[config.jwt_algorithm])
