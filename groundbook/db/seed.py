from sqlalchemy.orm import Session

from groundbook.core.logging_config import get_logger
from groundbook.core.security import hash_password
from groundbook.db.transaction import commit_or_raise
from groundbook.models.user import User

logger = get_logger("admin")


def ensure_admin(db: Session, name: str, email: str, password: str, phone: str = "") -> User:
    """Create the admin account, or promote an existing user with that email."""
    user = db.query(User).filter(User.email == email).first()

    if user is None:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            phone=phone,
            is_admin=True,
        )
        db.add(user)
        commit_or_raise(db)
        db.refresh(user)
        logger.info(f"Admin created: {email}")
        return user

    if not user.is_admin:
        user.is_admin = True
        commit_or_raise(db)
        logger.info(f"Existing user promoted to admin: {email}")

    return user
