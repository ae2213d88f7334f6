"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_, select

from app.auth import (
    TOKEN_COOKIE,
    authenticate_user,
    create_access_token,
    get_current_active_user,
    hash_password,
)
from app.config import Settings, get_settings
from app.database import get_db
from app.exceptions import AuthenticationError, ConflictError
from app.models.user import User, UserRole
from app.schemas.user import LoginRequest, Token, User as UserSchema, UserCreate

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange a username and password for an access token.
    """
    user = await authenticate_user(db, credentials.username, credentials.password)
    if user is None:
        raise AuthenticationError("Invalid username or password")
    if not user.is_active:
        raise AuthenticationError("Inactive user")

    access_token = create_access_token(user.username, settings)
    response.set_cookie(
        TOKEN_COOKIE,
        access_token,
        httponly=True,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )
    return {"access_token": access_token, "token_type": "bearer", "user": user}


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    """
    Create an attendant account.
    """
    conditions = [User.username == user.username]
    if user.email:
        conditions.append(User.email == user.email)
    result = await db.execute(select(User).where(or_(*conditions)))
    if result.scalar_one_or_none():
        raise ConflictError("Username or email already registered")

    db_user = User(
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        hashed_password=hash_password(user.password),
        role=UserRole.ATTENDANT,
    )
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)

    return db_user


@router.get("/me", response_model=UserSchema)
async def read_current_user(current_user: User = Depends(get_current_active_user)):
    """
    Get the authenticated user.
    """
    return current_user


@router.post("/logout")
async def logout(response: Response):
    """
    Clear the session cookie.
    """
    response.delete_cookie(TOKEN_COOKIE)
    return {"success": True, "message": "Logged out successfully"}
