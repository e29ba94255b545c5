# app/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client
from supabase.client import ClientOptions

from app.core.config import get_settings


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Use cases:
      - uploading holiday images to storage
      - verifying caller tokens (auth.get_user)
      - admin Auth operations (auth.admin.delete_user)

    The client never refreshes or persists a session: every call carries
    the service role key, nothing is tied to a signed-in user.

    WARNING:
      - Never expose service role key to frontend.
      - Only backend should call this.

    Raises:
        RuntimeError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
