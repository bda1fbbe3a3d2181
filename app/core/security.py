from datetime import datetime, timedelta, timezone
from jose import jwt

from app.core.config import settings

def create_jwt(payload: dict, secret: str | None = None, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = expires_delta or timedelta(minutes=settings.JWT_TTL_MINUTES)
    data = payload.copy()
    data.update({"iat": int(now.timestamp()), "exp": int((now + ttl).timestamp())})
    if settings.JWT_ISSUER:
        data.setdefault("iss", settings.JWT_ISSUER)
    return jwt.encode(data, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def decode_jwt(token: str, secret: str | None = None) -> dict:
    return jwt.decode(
        token,
        secret or settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        issuer=settings.JWT_ISSUER or None,
    )
