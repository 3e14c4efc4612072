from functools import lru_cache
from supabase import Client, ClientOptions, create_client
from .config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """
    Returns a singleton Supabase client configured with service role credentials.
    Used for table and storage access, never for signing users in.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


def get_supabase_anon_client() -> Client:
    """
    Returns a fresh Supabase client using the anon key for auth flows (password login/signup).

    Not cached: the auth client keeps the signed-in session on the instance,
    so each request gets its own. Token auto-refresh is off so a request's
    client leaves no refresh timer running after the response is sent.
    """
    settings = get_settings()
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY or settings.SUPABASE_SERVICE_ROLE_KEY,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
