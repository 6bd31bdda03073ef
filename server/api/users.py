# server/api/users.py

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import BaseModel
from fastapi import APIRouter, Depends, File, Form, Header, UploadFile
from sqlalchemy.orm import Session
from database import get_db
from core.accounts import AccountService
from core.config import get_settings
from core.security import CredentialManager
from core.store import UserStore
from core.utils import save_profile_image


# -------------------------------
# Router & Dependencies
# -------------------------------

router = APIRouter(prefix="/users")


@lru_cache
def get_credentials() -> CredentialManager:
    settings = get_settings()
    return CredentialManager(
        settings.require_secret(),
        algorithm=settings.jwt_algorithm,
        rounds=settings.bcrypt_rounds,
        expires_delta=settings.token_expires_delta,
    )


def get_images_dir() -> Path:
    return get_settings().images_dir


def get_account_service(
    db: Session = Depends(get_db),
    credentials: CredentialManager = Depends(get_credentials)
) -> AccountService:
    return AccountService(UserStore(db), credentials)


def get_token(authorization: str | None = Header(None)) -> str:
    return CredentialManager.extract_bearer(authorization)


# -------------------------------
# Schemas
# -------------------------------

class RegisterRequest(BaseModel):
    """
    Registration payload. Every field is optional at the schema level so that
    missing values are reported by the account flow, in its field order.
    """
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    password: str | None = None
    confirmpassword: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user_id: int


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    image: str | None = None


class EditResponse(BaseModel):
    message: str
    user: UserOut


# -------------------------------
# Account Endpoints
# -------------------------------

@router.post("/register", response_model=AuthResponse)
def register(req: RegisterRequest, service: AccountService = Depends(get_account_service)):
    result = service.register(
        req.name, req.email, req.phone, req.password, req.confirmpassword
    )
    return {"message": result.message, "token": result.token, "user_id": result.user_id}


@router.post("/login", response_model=AuthResponse)
def login(req: LoginRequest, service: AccountService = Depends(get_account_service)):
    result = service.login(req.email, req.password)
    return {"message": result.message, "token": result.token, "user_id": result.user_id}


@router.get("/checkuser", response_model=Optional[UserOut])
def check_user(
    authorization: str | None = Header(None),
    service: AccountService = Depends(get_account_service)
):
    """
    Returns the user owning the bearer token, or null when no Authorization
    header is sent.
    """
    token = CredentialManager.extract_bearer(authorization) if authorization else None
    return service.check_user(token)


@router.patch("/edit", response_model=EditResponse)
def edit_user(
    name: str | None = Form(None),
    email: str | None = Form(None),
    phone: str | None = Form(None),
    password: str | None = Form(None),
    confirmpassword: str | None = Form(None),
    image: UploadFile | None = File(None),
    token: str = Depends(get_token),
    images_dir: Path = Depends(get_images_dir),
    service: AccountService = Depends(get_account_service)
):
    saved_image = save_profile_image(image, images_dir) if image and image.filename else None

    try:
        user = service.edit_user(
            token,
            name,
            email,
            phone,
            password=password,
            confirmpassword=confirmpassword,
            image=saved_image.name if saved_image else None,
        )
    except Exception:
        if saved_image is not None:
            saved_image.unlink(missing_ok=True)
        raise

    return {"message": "User updated successfully", "user": user}


@router.get("/{user_id}", response_model=UserOut)
def get_user_by_id(user_id: int, service: AccountService = Depends(get_account_service)):
    return service.get_user_by_id(user_id)
