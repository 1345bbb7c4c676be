"""
Document acquisition for the render pipeline.

Delivers the HTML markup to render, either as given by the caller or fetched
from a URI. Fetch failures are reported as warnings; callers simply get no
document.
"""

import logging
from typing import Optional

import httpx

from htmlview.core.config import settings
from htmlview.utils.error_handler import AcquisitionError, ConfigurationError, create_error_response

logger = logging.getLogger(__name__)


class DocumentLoader:
    """
    Loads HTML documents from a literal string or a remote URI.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_size_mb: Optional[int] = None
    ):
        """
        Initialize the loader.

        Args:
            timeout: Request timeout in seconds, defaults to settings.FETCH_TIMEOUT_SECONDS
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
            max_size_mb: Maximum accepted document size, defaults to settings.MAX_HTML_SIZE_MB
        """
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECONDS
        self.transport = transport
        self.max_size_bytes = (max_size_mb if max_size_mb is not None else settings.MAX_HTML_SIZE_MB) * 1024 * 1024
        self.headers = {
            "User-Agent": settings.FETCH_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }

    async def fetch(self, uri: str) -> str:
        """
        Fetch a remote document.

        Args:
            uri: Address of the document

        Returns:
            str: The document markup

        Raises:
            AcquisitionError: If the request fails, the status is not 2xx or the body is too large
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
                headers=self.headers
            ) as client:
                resp = await client.get(uri)
        except httpx.TimeoutException as e:
            raise AcquisitionError(f"Timeout fetching {uri}", details={"uri": uri, "original_error": str(e)})
        except httpx.HTTPError as e:
            raise AcquisitionError(f"Network error fetching {uri}: {e}", details={"uri": uri})

        if not resp.is_success:
            raise AcquisitionError(
                f"Fetching {uri} returned status {resp.status_code}",
                details={"uri": uri, "status_code": resp.status_code}
            )

        if len(resp.content) > self.max_size_bytes:
            raise AcquisitionError(
                f"Document at {uri} exceeds {self.max_size_bytes} bytes",
                details={"uri": uri, "size": len(resp.content)}
            )

        logger.info(f"Fetched {len(resp.content)} bytes from {uri}")
        return resp.text

    async def load(self, html: Optional[str] = None, uri: Optional[str] = None) -> Optional[str]:
        """
        Deliver the markup to render.

        Literal HTML takes precedence over the URI. A failed fetch is logged as a
        warning and yields None.

        Raises:
            ConfigurationError: If neither html nor uri is given
        """
        if html:
            return html
        if not uri:
            raise ConfigurationError("Please provide the html or uri of the document to render.")

        try:
            return await self.fetch(uri)
        except AcquisitionError as e:
            error_response = create_error_response(e)
            logger.warning(f"Couldn't fetch remote HTML from uri {uri}: {error_response['message']}")
            return None
