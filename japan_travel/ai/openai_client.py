from __future__ import annotations

import logging
from typing import Optional

from openai import AsyncOpenAI

from japan_travel.core.config import Settings

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """Returns an AsyncOpenAI client if the api key is configured."""
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; plan generation and search are disabled.")
        return None
    return AsyncOpenAI(api_key=settings.openai_api_key)
