from dataclasses import dataclass

from jose import JWTError, jwt

from groundbook.core.config import settings
from groundbook.core.exceptions import InvalidCredentialError


@dataclass(frozen=True)
class Principal:
    """Caller identity as embedded in the bearer token at issuance."""

    user_id: int
    is_admin: bool


def decode_token(token: str) -> Principal:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise InvalidCredentialError("Invalid token")

    if "sub" not in payload or "is_admin" not in payload:
        raise InvalidCredentialError("Invalid token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise InvalidCredentialError("Invalid token")

    return Principal(user_id=user_id, is_admin=bool(payload["is_admin"]))
