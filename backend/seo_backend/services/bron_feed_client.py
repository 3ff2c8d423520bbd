"""
BRON content-feed client.

Looks up the article feed the BRON platform publishes for a domain. The
dashboard never talks to BRON directly; it goes through the relay route,
which keeps the API credentials on the server.
"""
import logging
import requests
from typing import Any, Optional

from seo_backend.config import settings

logger = logging.getLogger(__name__)


class BronFeedError(Exception):
    """BRON answered with a non-2xx status."""

    def __init__(self, status_code: int, details: str = ""):
        super().__init__(f"BRON API returned {status_code}")
        self.status_code = status_code
        self.details = details


class BronFeedClient:
    """Client for the BRON Article feed endpoint."""

    def __init__(
        self,
        base_url: str = None,
        api_id: str = None,
        api_key: str = None,
        api_secret: str = None,
        timeout: float = None,
    ):
        self.base_url = (base_url or settings.BRON_API_BASE).rstrip("/")
        self.api_id = api_id if api_id is not None else settings.BRON_API_ID
        self.api_key = api_key if api_key is not None else settings.BRON_API_KEY
        self.api_secret = api_secret if api_secret is not None else settings.BRON_API_SECRET
        self.timeout = timeout or settings.BRON_TIMEOUT_SECONDS

    def fetch_feed(self, domain: str) -> Any:
        """
        Fetch the content feed for a domain.

        Args:
            domain: Domain to look up (e.g., "example.com")

        Returns:
            Decoded JSON body returned by BRON

        Raises:
            BronFeedError: BRON answered with a non-2xx status
            requests.RequestException: Network failure or undecodable body
        """
        logger.info(f"Calling BRON feed for domain: {domain}")
        response = requests.get(
            f"{self.base_url}/Article.php",
            params={
                "feedit": 1,
                "domain": domain,
                "apiid": self.api_id,
                "apikey": self.api_key,
                "kkyy": self.api_secret,
            },
            headers={
                "Accept": "application/json",
                "User-Agent": settings.BRON_USER_AGENT,
            },
            timeout=self.timeout,
        )
        logger.info(f"BRON feed response status: {response.status_code}")

        if not response.ok:
            logger.error(f"BRON feed error: {response.status_code} - {response.text}")
            raise BronFeedError(response.status_code, response.text)

        data = response.json()
        count = len(data) if isinstance(data, list) else "not an array"
        logger.info(f"Fetched BRON feed for {domain}, items: {count}")
        return data


# Singleton instance
_client: Optional[BronFeedClient] = None


def get_bron_feed_client() -> BronFeedClient:
    """Get the BRON feed client singleton."""
    global _client
    if _client is None:
        _client = BronFeedClient()
    return _client
