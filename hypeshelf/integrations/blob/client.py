"""HTTP client for the external blob store that holds recommendation images."""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


@dataclass
class BlobStoreClient:
    """Issues upload URLs and resolves stored references to URLs.

    Image bytes never pass through this client; callers upload directly to
    the URL it hands out.
    """

    base_url: str
    api_key: Optional[str] = None
    timeout: float = 10

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def generate_upload_url(self) -> str:
        """Get a single-use, time-limited upload URL.

        Raises:
            httpx.HTTPStatusError: If the blob store rejects the request.
        """
        url = f"{self.base_url.rstrip('/')}/upload-urls"
        with httpx.Client() as client:
            response = client.post(url, headers=self._headers(), timeout=self.timeout)
        if response.status_code != 200:
            logger.error(
                f"Blob store refused upload URL: status={response.status_code}, "
                f"body={response.text}"
            )
            response.raise_for_status()
        return response.json()["uploadUrl"]

    def get_url(self, ref: str) -> Optional[str]:
        """Get a retrievable URL for a stored reference, or None if unknown."""
        url = f"{self.base_url.rstrip('/')}/objects/{quote(ref, safe='')}/url"
        with httpx.Client() as client:
            response = client.get(url, headers=self._headers(), timeout=self.timeout)
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.error(
                f"Blob store URL lookup failed for {ref}: status={response.status_code}"
            )
            response.raise_for_status()
        return response.json()["url"]
