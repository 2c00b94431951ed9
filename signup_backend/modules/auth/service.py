import logging
import re
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from signup_backend.core.errors import ApiError, EmailAlreadyRegistered, internal_error
from signup_backend.core.security import PasswordHasher
from signup_backend.modules.auth.models import Account
from signup_backend.modules.auth.repository import AccountRepository
from signup_backend.modules.auth.schemas import (
    SignupForm, PhotoUpload, LoginRequest, MessageResponse, AccountPublic, LoginResponse
)
from signup_backend.modules.photos.s3_storage import S3PhotoStorage

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def _is_image(photo: Optional[PhotoUpload]) -> bool:
    return photo is not None and bool(photo.content) and photo.content_type.startswith("image/")


class AuthService:
    def __init__(
        self,
        accounts: AccountRepository,
        photos: S3PhotoStorage,
        hasher: PasswordHasher,
    ):
        self.accounts = accounts
        self.photos = photos
        self.hasher = hasher

    async def signup(self, form: SignupForm, photo: Optional[PhotoUpload]) -> MessageResponse:
        """Register a new account with a profile photo"""
        if not form.name or not form.email or not form.password or not _is_image(photo):
            raise ApiError(400, "All fields are required")

        if not EMAIL_RE.fullmatch(form.email):
            raise ApiError(400, "Invalid email format")

        if len(form.password) < MIN_PASSWORD_LENGTH:
            raise ApiError(400, f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        try:
            existing = await run_in_threadpool(self.accounts.find_by_email, form.email)
            if existing:
                raise ApiError(400, "Email is already registered")

            password_hash = await run_in_threadpool(self.hasher.hash, form.password)

            photo_url = await run_in_threadpool(
                self.photos.upload_photo, photo.content, photo.content_type, photo.filename
            )

            account = Account(
                name=form.name,
                email=form.email,
                password_hash=password_hash,
                photo_url=photo_url,
            )
            try:
                await run_in_threadpool(self.accounts.insert, account)
            except Exception:
                await self._discard_photo(photo_url)
                raise
        except ApiError:
            raise
        except EmailAlreadyRegistered:
            raise ApiError(400, "Email is already registered")
        except Exception as e:
            logger.exception("Error during signup")
            raise internal_error(e)

        logger.info("Registered account %s", form.email)
        return MessageResponse(message="User registered successfully!")

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        """Check credentials and return the public profile"""
        if not login_data.email or not login_data.password:
            raise ApiError(400, "All fields are required")

        try:
            account = await run_in_threadpool(self.accounts.find_by_email, login_data.email)
            if account is None:
                raise ApiError(404, "User not found")

            valid = await run_in_threadpool(
                self.hasher.verify, login_data.password, account.password_hash
            )
            if not valid:
                raise ApiError(401, "Invalid email or password")
        except ApiError:
            raise
        except Exception as e:
            logger.exception("Error during login")
            raise internal_error(e)

        logger.info("Login succeeded for %s", account.email)
        return LoginResponse(
            message="Login successful",
            user=AccountPublic(name=account.name, email=account.email, photo_url=account.photo_url),
        )

    async def _discard_photo(self, photo_url: str) -> None:
        # The account was not written, so the uploaded photo has no owner
        try:
            await run_in_threadpool(self.photos.delete_photo, photo_url)
        except Exception as e:
            logger.warning("Failed to discard orphaned photo %s: %s", photo_url, e)
