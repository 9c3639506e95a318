"""
FastAPI application for the payroll admin backend.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Body, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from datetime import datetime
import logging

from .database import get_db
from .config import settings, configure_logging
from .models import User
from .schemas import (
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    UserResponse,
    SettingsUpdate,
    SettingResponse,
    SettingsMap,
)
from .auth import (
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_current_user,
)
from .services import SettingsStore, SettingsStoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    from .database import init_db

    configure_logging()
    init_db()
    logger.info(f"✓ {settings.app_name} ready")

    yield


# Create FastAPI app with lifespan
app = FastAPI(
    title=settings.app_name,
    description="Payroll administration API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SettingsStoreError)
async def settings_store_error_handler(request: Request, exc: SettingsStoreError):
    """Log store failures with context and answer with a generic message."""
    context = f"operation={exc.operation} category={exc.category}"
    if exc.status_code >= 500:
        logger.error(f"Settings store failure ({context}): {exc}", exc_info=exc)
    else:
        logger.warning(f"Settings request rejected ({context}): {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.public_message})


# ============================================================================
# Authentication Endpoints
# ============================================================================


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(data={"sub": user.username}),
        refresh_token=create_refresh_token(data={"sub": user.username}),
        must_change_password=user.must_change_password,
        role=user.role.value,
        username=user.username,
    )


@app.post("/api/auth/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login endpoint.
    Returns JWT access and refresh tokens.
    """
    user = db.query(User).filter(User.username == request.username).first()

    if not user or not user.is_active or not verify_password(request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password"
        )

    # Update last login
    user.last_login = datetime.utcnow()
    db.commit()

    return _issue_tokens(user)


@app.get("/api/auth/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@app.post("/api/auth/refresh", response_model=TokenResponse)
async def refresh_token(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """
    Refresh access token using refresh token.
    Returns new access and refresh tokens.
    """
    payload = decode_token(request.refresh_token)
    if payload is None or payload.get("type") != "refresh" or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired refresh token"
        )

    user = db.query(User).filter(User.username == payload["sub"]).first()
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive"
        )

    return _issue_tokens(user)


# ============================================================================
# Settings Endpoints
# ============================================================================


@app.get("/api/settings", response_model=SettingsMap)
async def list_settings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get every settings category.
    Returns an object mapping category name to its settings.
    """
    return SettingsMap(SettingsStore(db).list())


@app.get("/api/settings/{category}")
async def get_settings_by_category(
    category: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the settings of one category."""
    return SettingsStore(db).get_by_category(category)


@app.put("/api/settings/{category}", response_model=SettingResponse)
async def update_settings(
    category: str,
    payload: SettingsUpdate = Body(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create or replace the settings of one category.
    Records the caller as the last writer.
    """
    blob = payload.settings if payload is not None else None
    return SettingsStore(db).upsert(category, blob, updated_by=current_user.id)


# ============================================================================
# Health Check
# ============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "payroll-admin-api", "version": "1.0.0"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
