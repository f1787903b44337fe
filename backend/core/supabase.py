from supabase import create_client, Client
from supabase.client import ClientOptions
from typing import Optional

from config.settings import Settings, get_settings
from core.errors import ConfigurationError


class SupabaseClient:
    _instance: Optional[Client] = None
    _instance_key: Optional[tuple] = None

    @staticmethod
    def _credentials(settings: Settings) -> tuple:
        if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
            raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY must be configured")
        return settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY

    @classmethod
    def get_client(cls, settings: Optional[Settings] = None) -> Client:
        supabase_url, supabase_key = cls._credentials(settings or get_settings())

        # Rebuild when the environment points at a different project
        if cls._instance is None or cls._instance_key != (supabase_url, supabase_key):
            cls._instance = create_client(supabase_url, supabase_key)
            cls._instance_key = (supabase_url, supabase_key)

        return cls._instance

    @classmethod
    def create_authed_client(cls, access_token: str, settings: Optional[Settings] = None) -> Client:
        """Client whose table queries run under the caller's row-level security."""
        supabase_url, supabase_key = cls._credentials(settings or get_settings())

        headers = {
            "Authorization": f"Bearer {access_token}",
            "apikey": supabase_key,
        }
        client = create_client(supabase_url, supabase_key, ClientOptions(headers=headers))
        client.postgrest.auth(access_token)
        return client


# Convenience function to get the client
def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_supabase_for_token(access_token: str) -> Client:
    return SupabaseClient.create_authed_client(access_token)
