"""Authentication routes."""

from typing import Annotated

from fastapi import (
    APIRouter,
    Cookie,
    Depends,
    Form,
    HTTPException,
    Response,
    status,
)
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from catso.config import config
from catso.database import get_db
from catso.models import User
from catso.utils.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    decode_access_token,
    get_user_by_email,
)

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


async def get_current_user(
    session_token: Annotated[str | None, Cookie()] = None,
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Get current user from session token."""
    if not session_token:
        return None

    email = decode_access_token(session_token)
    if not email:
        return None

    user = await get_user_by_email(db, email)
    if user is None or not user.is_active:
        return None
    return user


async def require_auth(
    current_user: User | None = Depends(get_current_user),
) -> User:
    """Require authentication."""
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return current_user


async def require_admin(current_user: User = Depends(require_auth)) -> User:
    """Require an authenticated admin."""
    if not getattr(current_user, "is_admin", False):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def _session_redirect(user: User, url: str = "/admin") -> RedirectResponse:
    access_token = create_access_token(data={"sub": user.email})
    response = RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key="session_token",
        value=access_token,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
    )
    return response


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Create a regular (non-admin) account."""
    if not config.FEATURE_SIGNUP_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Signup is disabled",
        )

    email = (payload.email or "").strip().lower()
    if not email or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    if await get_user_by_email(db, email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = await create_user(db, email, payload.password, name=payload.name)
    return JSONResponse(
        {"message": "User created", "user_id": user.id},
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/login")
async def login(
    email: Annotated[str, Form()],
    password: Annotated[str, Form()],
    db: AsyncSession = Depends(get_db),
) -> Response:
    """User login."""
    user = await authenticate_user(db, email.strip().lower(), password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return _session_redirect(user, "/admin" if user.is_admin else "/")


@router.post("/logout")
async def logout() -> Response:
    """User logout."""
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(
        key="session_token",
        secure=config.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite=config.COOKIE_SAMESITE,
    )
    return response


@router.get("/me")
async def me(current_user: User = Depends(require_auth)) -> dict[str, object]:
    """Get current user info."""
    return {
        "id": current_user.id,
        "email": current_user.email,
        "is_admin": bool(getattr(current_user, "is_admin", False)),
    }
