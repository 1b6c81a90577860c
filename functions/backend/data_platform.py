"""
Hosted data platform (Supabase) client wiring.

Storage, auth and row-level security are enforced by the platform. This
module only builds the client, and only from runtime configuration.
"""

from __future__ import annotations

from supabase import Client, create_client

from backend.config import Settings


class DataPlatformConfigError(RuntimeError):
    pass


def create_data_platform_client(settings: Settings) -> Client:
    if not settings.supabase_url or not settings.supabase_key:
        raise DataPlatformConfigError(
            "Supabase URL and Key must be provided in environment variables."
        )
    return create_client(settings.supabase_url, settings.supabase_key)
