from __future__ import annotations

import logging
from typing import Optional

from supabase import Client, create_client

from japan_travel.core.config import Settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Optional[Client]:
    """
    Build a Supabase client when credentials are provided.
    Returns None when Supabase is not configured so the app can fall back to the
    in-memory blob backend without crashing.
    """
    if not (settings.supabase_url and settings.supabase_key):
        logger.warning("Supabase credentials not configured; using in-memory storage.")
        return None

    client = create_client(settings.supabase_url, settings.supabase_key)
    logger.info("Supabase client initialized for bucket %s.", settings.supabase_bucket)
    return client
