from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from groundbook.core.auth_utils import Principal, decode_token
from groundbook.core.exceptions import AuthenticationError, AuthorizationError
from groundbook.db.session import SessionLocal
from groundbook.models.user import User

# auto_error=False so a missing header becomes our 401 rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return decode_token(credentials.credentials)


def require_admin(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> Principal:
    """Admin gate. The flag is re-read from the users table so demotions apply at once."""
    if not principal.is_admin:
        raise AuthorizationError("Admin access required")

    user = db.get(User, principal.user_id)
    if user is None or not user.is_admin:
        raise AuthorizationError("Admin access required")

    return principal
