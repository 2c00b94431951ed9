"""
Application context and the FastAPI dependencies that hand it to routes.

The context is built once at startup and stored on app.state, so every
request sees the same collaborators without module-level singletons.
"""

from dataclasses import dataclass

from fastapi import Depends, Request

from signup_backend.config.settings import Settings
from signup_backend.core.security import PasswordHasher
from signup_backend.database.supabase_client import create_supabase
from signup_backend.modules.auth.repository import AccountRepository
from signup_backend.modules.auth.service import AuthService
from signup_backend.modules.photos.s3_storage import S3PhotoStorage


@dataclass
class AppContext:
    accounts: AccountRepository
    photos: S3PhotoStorage
    hasher: PasswordHasher


def build_context(settings: Settings) -> AppContext:
    return AppContext(
        accounts=AccountRepository(create_supabase(settings), table=settings.accounts_table),
        photos=S3PhotoStorage.from_settings(settings),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_auth_service(context: AppContext = Depends(get_context)) -> AuthService:
    return AuthService(context.accounts, context.photos, context.hasher)
