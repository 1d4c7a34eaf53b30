"""Watson Work Adapter - Authenticates the app and posts messages into spaces."""

import logging
from typing import Optional

import httpx

from yelp_bot.adapters.base_bot_adapter import BaseBotAdapter, BotResponse
from yelp_bot.adapters.watson_work.workspace_formatter import WorkspaceFormatter
from yelp_bot.config.settings import Config
from yelp_bot.domain.exceptions import ProviderAuthenticationError
from yelp_bot.observability.metrics import (
    MetricsErrorType,
    increment_error,
    increment_outbound_message,
)

logger = logging.getLogger(__name__)

AUTHENTICATION_API = "oauth/token"


class WatsonWorkAdapter(BaseBotAdapter):
    """Outbound side of the Watson Work integration."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        app_id: Optional[str] = None,
        app_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        formatter: Optional[WorkspaceFormatter] = None,
    ):
        self._http = http_client
        self.app_id = app_id if app_id is not None else Config.APP_ID
        self.app_secret = app_secret if app_secret is not None else Config.APP_SECRET
        self.base_url = (base_url or Config.WATSON_WORK_URL).rstrip("/")
        self._formatter = formatter or WorkspaceFormatter()

    async def authenticate(self) -> str:
        """
        Get an app token with the client-credentials grant (HTTP basic auth).

        Raises:
            ProviderAuthenticationError: If Watson Work answers with anything but 200
        """
        response = await self._http.post(
            f"{self.base_url}/{AUTHENTICATION_API}",
            auth=(self.app_id, self.app_secret),
            data={"grant_type": "client_credentials"},
        )
        if response.status_code != 200:
            logger.error(
                "[WORKSPACE] Error authenticating application (%d)",
                response.status_code,
            )
            increment_error(MetricsErrorType.AUTH_FAILED)
            raise ProviderAuthenticationError("Watson Work", response.status_code)
        return response.json()["access_token"]

    async def send_response(self, channel_id: str, response: BotResponse) -> bool:
        """
        Post a message into a space.

        Delivery failures are logged and reported through the return value;
        they are never retried.
        """
        token = await self.authenticate()
        result = await self._http.post(
            f"{self.base_url}/v1/spaces/{channel_id}/messages",
            json=self._formatter.format_response(response),
            headers={"Authorization": f"Bearer {token}"},
        )

        delivered = result.status_code == 201
        increment_outbound_message(delivered)
        if not delivered:
            logger.error(
                "[WORKSPACE] Error sending message to space=%s (%d): %s",
                channel_id,
                result.status_code,
                result.text,
            )
        return delivered
