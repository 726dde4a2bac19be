# HTTP Client Registry for managing shared clients across the application
import httpx
import logging
from typing import Dict
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

class ClientRegistry:
    """
    Keeps one AsyncClient per host so holiday lookups reuse connections
    instead of paying a TLS handshake per request.
    """

    def __init__(self):
        self._clients: Dict[str, httpx.AsyncClient] = {}
        self._default_timeout = httpx.Timeout(connect=10, read=30, write=30, pool=30)
        self._default_limits = httpx.Limits(max_keepalive_connections=8, max_connections=32)

    def get_client(self, base_url: str, **kwargs) -> httpx.AsyncClient:
        """
        Get or create a shared client for the given base URL.

        Args:
            base_url: The base URL for the client
            **kwargs: Additional httpx.AsyncClient kwargs

        Returns:
            Shared AsyncClient instance for the host
        """
        # Normalize base_url to just scheme + netloc
        parsed = urlparse(base_url)
        host_key = f"{parsed.scheme}://{parsed.netloc}"

        if host_key not in self._clients:
            kwargs.setdefault("timeout", self._default_timeout)
            kwargs.setdefault("limits", self._default_limits)
            kwargs.setdefault("http2", True)
            kwargs.setdefault("headers", {"Accept": "application/json"})
            self._clients[host_key] = httpx.AsyncClient(base_url=host_key, **kwargs)
            logger.debug("Created holiday API client for %s", host_key)

        return self._clients[host_key]

    def register(self, base_url: str, client: httpx.AsyncClient) -> None:
        """Install a preconfigured client for a host (e.g. a mock transport in tests)."""
        parsed = urlparse(base_url)
        self._clients[f"{parsed.scheme}://{parsed.netloc}"] = client

    async def close_all(self):
        """Close all managed clients."""
        for host, client in self._clients.items():
            try:
                await client.aclose()
                logger.debug(f"Closed client for {host}")
            except Exception as e:
                logger.warning(f"Error closing client for {host}: {e}")
        self._clients.clear()

# Global registry instance
client_registry = ClientRegistry()
