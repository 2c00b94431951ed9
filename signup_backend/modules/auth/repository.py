import logging
from typing import Optional

from postgrest.exceptions import APIError
from supabase import Client

from signup_backend.core.errors import EmailAlreadyRegistered
from signup_backend.modules.auth.models import Account

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class AccountRepository:
    """Credential store backed by a Supabase table."""

    def __init__(self, supabase: Client, table: str = "accounts"):
        self.supabase = supabase
        self.table = table

    def ping(self) -> None:
        """Raise if the store cannot be reached"""
        self.supabase.table(self.table)\
            .select("id")\
            .limit(1)\
            .execute()

    def find_by_email(self, email: str) -> Optional[Account]:
        result = self.supabase.table(self.table)\
            .select("name, email, password_hash, photo_url")\
            .eq("email", email)\
            .limit(1)\
            .execute()

        if not result.data:
            return None
        return Account(**result.data[0])

    def insert(self, account: Account) -> None:
        """Insert a new account; the email unique constraint decides concurrent races"""
        try:
            self.supabase.table(self.table)\
                .insert(account.model_dump())\
                .execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.info("Duplicate email rejected by store: %s", account.email)
                raise EmailAlreadyRegistered(account.email) from e
            raise
