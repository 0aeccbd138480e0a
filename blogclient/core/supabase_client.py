# blogclient/core/supabase_client.py
from supabase import AsyncClient, acreate_client

from blogclient.core.config import get_settings

_public_client: AsyncClient | None = None


async def supabase_public() -> AsyncClient:
    """
    Create (once) an async Supabase client with the anon/public key.

    Use cases:
      - users / sessions / content table access from the client

    Note: This client still respects RLS, so the tables must allow
    the anon role to read and write the rows this client touches.
    """
    global _public_client
    if _public_client is None:
        settings = get_settings()
        _public_client = await acreate_client(
            settings.SUPABASE_URL, settings.SUPABASE_KEY
        )
    return _public_client
