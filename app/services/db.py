"""Lazily created Supabase client for the ``vehicles`` dataset backend."""

import threading

from app.core.config import Settings, get_settings
from app.core.logging import logger
from app.services.exceptions import DatasetLoadError
from supabase import Client, create_client

_supabase: Client | None = None
_client_lock = threading.Lock()


def get_supabase_client(settings: Settings | None = None) -> Client:
    """Return the shared client, creating it on first use.

    Raises ``DatasetLoadError`` when SUPABASE_URL or SUPABASE_KEY is missing,
    so a misconfigured remote source ends up as an unavailable dataset.
    """
    global _supabase
    if _supabase is None:
        with _client_lock:
            if _supabase is None:
                settings = settings or get_settings()
                if not settings.supabase_url or not settings.supabase_key:
                    raise DatasetLoadError(
                        "SUPABASE_URL and SUPABASE_KEY must be set", source="supabase"
                    )
                _supabase = create_client(settings.supabase_url, settings.supabase_key)
                logger.info(f"Supabase client created for {settings.supabase_url}")
    return _supabase
