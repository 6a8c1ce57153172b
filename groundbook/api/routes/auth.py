from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from groundbook.core.dependencies import get_db
from groundbook.core.exceptions import ValidationError
from groundbook.core.jwt import create_access_token
from groundbook.core.logging_config import get_logger
from groundbook.core.security import hash_password, verify_password
from groundbook.db.transaction import commit_or_raise
from groundbook.models.user import User
from groundbook.schemas.user import AuthResponse, UserCreate, UserLogin, UserOut

router = APIRouter(prefix="/api", tags=["Authentication"])
logger = get_logger()


def auth_response(message: str, user: User) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=create_access_token(user.id, user.is_admin),
        user=UserOut.model_validate(user),
    )


# =====================================================================
#                           USER REGISTER
# =====================================================================
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == data.email).first():
        raise ValidationError("User already exists")

    user = User(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        phone=data.phone,
        is_admin=False,
    )
    db.add(user)
    commit_or_raise(db, on_integrity_error=ValidationError("User already exists"))
    db.refresh(user)

    logger.info(f"User registered: {user.email}")
    return auth_response("User registered successfully", user)


# =====================================================================
#                           USER LOGIN
# =====================================================================
@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == data.email).first()

    if not user or not verify_password(data.password, user.password_hash):
        raise ValidationError("Invalid credentials")

    return auth_response("Login successful", user)
