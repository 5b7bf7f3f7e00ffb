"""
OpenAI client service - assistant runs and chat completions
"""
from typing import Optional

import httpx
from openai import OpenAI

from profile_review.config import Settings


def _httpx_timeout(seconds: float) -> httpx.Timeout:
    return httpx.Timeout(
        connect=min(seconds, 10.0),  # Time to establish connection
        read=seconds,                # Time to read response
        write=seconds,               # Time to write request
        pool=seconds,                # Time to get connection from pool
    )


_httpx_limits = httpx.Limits(
    max_keepalive_connections=20,
    max_connections=100,
    keepalive_expiry=30.0,
)


def create_openai_client(settings: Settings) -> Optional[OpenAI]:
    """Create an OpenAI client, or None when no API key is configured."""
    if not settings.openai_api_key:
        return None
    return OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout,
        max_retries=2,
        http_client=httpx.Client(
            timeout=_httpx_timeout(settings.openai_timeout),
            limits=_httpx_limits,
        ),
    )
