import threading
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from signup_backend.config.settings import Settings
from signup_backend.core.dependencies import AppContext
from signup_backend.core.errors import EmailAlreadyRegistered
from signup_backend.core.security import PasswordHasher
from signup_backend.main import create_app
from signup_backend.modules.auth.models import Account

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


class FakeAccountRepository:
    """In-memory store with the same unique-email rule as the accounts table."""

    def __init__(self):
        self.accounts: Dict[str, Account] = {}
        self.lock = threading.Lock()
        self.ping_error: Optional[Exception] = None
        self.insert_error: Optional[Exception] = None

    def ping(self) -> None:
        if self.ping_error:
            raise self.ping_error

    def find_by_email(self, email: str) -> Optional[Account]:
        return self.accounts.get(email)

    def insert(self, account: Account) -> Account:
        if self.insert_error:
            raise self.insert_error
        with self.lock:
            if account.email in self.accounts:
                raise EmailAlreadyRegistered(account.email)
            self.accounts[account.email] = account
        return account


class FakePhotoStorage:
    def __init__(self):
        self.uploads: List[bytes] = []
        self.deleted: List[str] = []
        self.upload_error: Optional[Exception] = None

    def upload_photo(self, content: bytes, content_type: str, filename: Optional[str] = None) -> str:
        if self.upload_error:
            raise self.upload_error
        self.uploads.append(content)
        return f"https://photos.example.com/user_photos/{len(self.uploads)}.jpg"

    def delete_photo(self, url: str) -> bool:
        self.deleted.append(url)
        return True


@pytest.fixture
def context():
    return AppContext(
        accounts=FakeAccountRepository(),
        photos=FakePhotoStorage(),
        hasher=PasswordHasher(rounds=4),
    )


@pytest.fixture
def app(context):
    return create_app(Settings(), context=context)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signup(client):
    def _signup(name="Ana", email="ana@x.com", password="longpass1", photo=JPEG_BYTES):
        data = {k: v for k, v in {"name": name, "email": email, "password": password}.items() if v is not None}
        files = {"photo": ("ana.jpg", photo, "image/jpeg")} if photo is not None else None
        return client.post("/api/signup", data=data, files=files)
    return _signup
