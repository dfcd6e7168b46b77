"""
Client for the headless content API (Prismic REST API v2).

A request first connects to the API root with the access token to learn the
master ref, then queries documents against that ref. Both steps go through a
shared httpx client; failures surface as ``ContentGatewayError`` with no
retry.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from folio_site.content.exceptions import ContentGatewayError
from folio_site.content.models import Entry, parse_entries

logger = logging.getLogger("quart.app")

DEFAULT_PAGE_SIZE = 100


class ContentApi:
    """A connected view of the content API, bound to one ref."""

    def __init__(self, gateway: "ContentGateway", ref: str):
        self.gateway = gateway
        self.ref = ref

    async def query(self, q: str = "", page_size: Optional[int] = None) -> List[Entry]:
        """
        Queries documents against the bound ref.

        Args:
            q: Predicate query; the empty string fetches everything.
            page_size: Results per page; defaults to the gateway's page size.

        Returns:
            The parsed entries of the first page, in API order.
        """
        params: Dict[str, Any] = {
            "ref": self.ref,
            "pageSize": page_size or self.gateway.page_size,
        }
        if q:
            params["q"] = q

        payload = await self.gateway._get_json(self.gateway.search_url, params)

        try:
            entries = parse_entries(payload.get("results", []))
        except (ValidationError, AttributeError, TypeError) as e:
            raise ContentGatewayError(f"Content API returned malformed documents: {e}") from e

        logger.debug(f"Fetched {len(entries)} entries (total {payload.get('total_results_size')})")
        return entries


class ContentGateway:
    """Wraps the remote content API."""

    def __init__(
        self,
        endpoint: str,
        access_token: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self.page_size = page_size
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    @property
    def search_url(self) -> str:
        return f"{self.endpoint}/documents/search"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._http_client

    async def close(self):
        """Close HTTP client."""
        if self._http_client and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.access_token:
            params = {**params, "access_token": self.access_token}

        client = await self._get_client()
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Content API error: {e.response.status_code} for {url}")
            raise ContentGatewayError(
                f"Content API responded with {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error talking to content API at {url}: {e}")
            raise ContentGatewayError(f"Content API unreachable: {e}") from e
        except ValueError as e:
            raise ContentGatewayError(f"Content API returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise ContentGatewayError("Content API returned an unexpected payload")
        return payload

    async def connect(self) -> ContentApi:
        """
        Authenticates against the API root and binds to the master ref.

        Raises:
            ContentGatewayError: the API is unreachable, rejects the token,
                or advertises no master ref.
        """
        payload = await self._get_json(self.endpoint, {})

        refs = payload.get("refs") or []
        master = next((ref for ref in refs if ref.get("isMasterRef")), None)
        if master is None or not master.get("ref"):
            raise ContentGatewayError("Content API did not advertise a master ref")

        return ContentApi(self, master["ref"])
