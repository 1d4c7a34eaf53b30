"""
Yelp Fusion search client.

Authenticates with client credentials, then runs a term/location business
search. A fresh token is requested for every search; Yelp tokens are cheap
and the bot searches rarely.
"""

import logging
import time
from typing import Optional

import httpx

from yelp_bot.config.settings import Config
from yelp_bot.domain.entities.business import SearchResponse
from yelp_bot.domain.exceptions import ProviderAuthenticationError
from yelp_bot.observability.metrics import (
    MetricsErrorType,
    increment_error,
    observe_search_latency,
)

logger = logging.getLogger(__name__)

YELP_OAUTH = "oauth2/token"
YELP_SEARCH = "v3/businesses/search"


class YelpSearchClient:
    """
    Thin async client for the two Yelp Fusion endpoints the bot needs.

    Example Usage:
        client = YelpSearchClient(http_client)
        response = await client.search("10001")
        for business in response.businesses:
            print(f"{business.name}: {business.url}")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self._http = http_client
        self.client_id = client_id if client_id is not None else Config.YELP_ID
        self.client_secret = (
            client_secret if client_secret is not None else Config.YELP_SECRET
        )
        self.base_url = (base_url or Config.YELP_API_URL).rstrip("/")

    async def authenticate(self) -> str:
        """
        Exchange client id/secret for a bearer token.

        Raises:
            ProviderAuthenticationError: If Yelp answers with anything but 200
        """
        response = await self._http.post(
            f"{self.base_url}/{YELP_OAUTH}",
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
        )
        if response.status_code != 200:
            logger.error("[YELP] Authentication failed (%d)", response.status_code)
            increment_error(MetricsErrorType.AUTH_FAILED)
            raise ProviderAuthenticationError("Yelp", response.status_code)
        return response.json()["access_token"]

    async def search(
        self,
        zip_code: str,
        term: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> SearchResponse:
        """
        Search businesses near a location.

        Args:
            zip_code: Passed verbatim as Yelp's ``location`` parameter
            term: Search term, defaults to Config.YELP_SEARCH_TERM
            limit: Maximum results, defaults to Config.YELP_SEARCH_LIMIT

        Returns:
            SearchResponse in the order Yelp ranked the businesses

        Raises:
            ProviderAuthenticationError: If the token request is rejected
            httpx.HTTPStatusError: If the search itself returns an error status
            ValueError: If the body is not valid JSON
        """
        token = await self.authenticate()
        params = {
            "location": zip_code,
            "term": term or Config.YELP_SEARCH_TERM,
            "limit": limit if limit is not None else Config.YELP_SEARCH_LIMIT,
        }

        started = time.perf_counter()
        response = await self._http.get(
            f"{self.base_url}/{YELP_SEARCH}",
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
        observe_search_latency(time.perf_counter() - started)

        if response.status_code >= 400:
            increment_error(MetricsErrorType.SEARCH_FAILED)
            raise httpx.HTTPStatusError(
                f"Yelp search error ({response.status_code}): {response.text}",
                request=response.request,
                response=response,
            )

        result = SearchResponse.from_dict(response.json())
        logger.info(
            "[YELP] %d businesses for location=%s", len(result.businesses), zip_code
        )
        return result
