"""Shared HTTP client for camera probes."""
import httpx
import logging
from typing import Optional

from ..core.config import get_settings

logger = logging.getLogger(__name__)

PROBE_USER_AGENT = "vms-camera-probe/1.0"

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client() -> httpx.AsyncClient:
    """
    Get or create the async HTTP client used to probe IP cameras.

    The default timeout is the configured probe timeout; callers may pass a
    shorter per-request timeout. Redirects are followed.

    Returns:
        Shared AsyncClient instance
    """
    global _shared_client

    if _shared_client is None:
        settings = get_settings()
        _shared_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.camera_probe_timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": PROBE_USER_AGENT},
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=50, keepalive_expiry=15.0),
        )
        logger.info(f"Created camera probe HTTP client (timeout {settings.camera_probe_timeout_seconds}s)")

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the probe client; the next get_shared_http_client() builds a new one"""
    global _shared_client

    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.info("Closed camera probe HTTP client")
