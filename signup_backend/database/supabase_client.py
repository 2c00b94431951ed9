from supabase import create_client, Client
from signup_backend.config.settings import Settings


def create_supabase(settings: Settings) -> Client:
    """Build the Supabase client used as the credential store."""
    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be configured")
    return create_client(settings.supabase_url, settings.supabase_key)
