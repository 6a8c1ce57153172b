from datetime import datetime, timedelta, timezone

from jose import jwt

from groundbook.core.config import settings


# -------- CREATE TOKEN --------
def create_access_token(user_id: int, is_admin: bool, expires_minutes: int | None = None) -> str:
    """Sign a bearer token carrying the user id and admin flag."""
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {"sub": str(user_id), "is_admin": bool(is_admin), "exp": expire}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
