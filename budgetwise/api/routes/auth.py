"""
Authentication routes for signup and login.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from budgetwise.core.config import Settings
from budgetwise.db.session import get_db
from budgetwise.schemas.user import UserCreate, UserLogin, Token, UserResponse
from budgetwise.models.user import User
from budgetwise.core.security import verify_password, get_password_hash, create_access_token
from budgetwise.api.dependencies import get_app_settings

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    email = user_data.email.lower()
    existing_email = db.query(User).filter(func.lower(User.email) == email).first()
    if existing_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists"
        )

    new_user = User(
        email=email,
        display_name=user_data.display_name or email.split("@")[0],
        hashed_password=get_password_hash(user_data.password)
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    return new_user


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db)
):
    """Login and get JWT token."""
    user = db.query(User).filter(func.lower(User.email) == credentials.email.lower()).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    access_token = create_access_token(data={"sub": user.email, "user_id": user.id}, settings=settings)

    return {"access_token": access_token, "token_type": "bearer"}
