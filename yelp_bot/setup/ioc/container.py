"""
Dishka DI Container Setup.

- Registers the shared HTTP client, the state store, both provider clients
  and the conversation flow controller
- Maps abstract interfaces to concrete implementations
- Everything here is app-scoped: the state store in particular must be a
  single instance for conversations to survive between webhook calls

Flow:
  Container → provides → InMemoryConversationStateStore ─┐
                         YelpSearchClient ───────────────┼─► ConversationFlowController
                         WatsonWorkAdapter ──────────────┘
"""

from collections.abc import AsyncIterator

import httpx
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from yelp_bot.adapters.base_bot_adapter import BaseBotAdapter
from yelp_bot.adapters.watson_work.workspace_adapter import WatsonWorkAdapter
from yelp_bot.adapters.watson_work.workspace_routes import WebhookVerifier
from yelp_bot.config.settings import Config
from yelp_bot.domain.ports.conversation_state_store import ConversationStateStore
from yelp_bot.infrastructure.state import InMemoryConversationStateStore
from yelp_bot.services.conversation_flow import ConversationFlowController
from yelp_bot.services.yelp_search import YelpSearchClient


class AppProvider(Provider):
    """
    Application dependency provider.

    Tests subclass this and override the provider methods for the external
    clients.
    """

    # ==================== HTTP CLIENT ====================
    @provide(scope=Scope.APP)
    async def get_http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Shared outbound client, closed when the container closes."""
        async with httpx.AsyncClient(timeout=Config.HTTP_TIMEOUT) as client:
            yield client

    # ==================== STATE ====================
    @provide(scope=Scope.APP)
    def get_state_store(self) -> ConversationStateStore:
        return InMemoryConversationStateStore()

    # ==================== EXTERNAL CLIENTS ====================
    @provide(scope=Scope.APP)
    def get_search_client(self, http_client: httpx.AsyncClient) -> YelpSearchClient:
        return YelpSearchClient(http_client)

    @provide(scope=Scope.APP)
    def get_messenger(self, http_client: httpx.AsyncClient) -> BaseBotAdapter:
        return WatsonWorkAdapter(http_client)

    @provide(scope=Scope.APP)
    def get_webhook_verifier(self) -> WebhookVerifier:
        return WebhookVerifier(Config.WEBHOOK_SECRET)

    # ==================== SERVICES ====================
    @provide(scope=Scope.APP)
    def get_flow_controller(
        self,
        store: ConversationStateStore,
        search_client: YelpSearchClient,
        messenger: BaseBotAdapter,
    ) -> ConversationFlowController:
        return ConversationFlowController(
            store=store,
            search_client=search_client,
            messenger=messenger,
            app_id=Config.APP_ID,
        )


def create_container(provider: Provider | None = None) -> AsyncContainer:
    """
    Create and configure the DI container.

    - make_async_container() creates the container with all providers
    - Call this ONCE per application instance
    """
    return make_async_container(provider or AppProvider())
