import json
import logging
from typing import Any, Mapping, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from signup_backend.core.dependencies import get_auth_service
from signup_backend.modules.auth.schemas import (
    SignupForm, PhotoUpload, LoginRequest, MessageResponse, LoginResponse
)
from signup_backend.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _text(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) else None


async def _read_login_payload(request: Request) -> Mapping[str, Any]:
    """Login accepts either a JSON object or a form body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Ignoring malformed JSON login body")
            return {}
        return payload if isinstance(payload, dict) else {}
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        return await request.form()
    return {}


@router.post("/signup", response_model=MessageResponse, status_code=201)
async def signup(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    service: AuthService = Depends(get_auth_service)
):
    """Register a new account with a profile photo"""
    upload = None
    if photo is not None:
        upload = PhotoUpload(
            content=await photo.read(),
            content_type=photo.content_type or "application/octet-stream",
            filename=photo.filename,
        )
    form = SignupForm(name=name, email=email, password=password)
    return await service.signup(form, upload)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    service: AuthService = Depends(get_auth_service)
):
    """Check credentials and return the account's public profile"""
    payload = await _read_login_payload(request)
    login_data = LoginRequest(email=_text(payload, "email"), password=_text(payload, "password"))
    return await service.login(login_data)
