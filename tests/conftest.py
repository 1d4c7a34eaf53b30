import pytest
from dishka import Provider, Scope, make_async_container, provide
from fastapi.testclient import TestClient

from yelp_bot.adapters.base_bot_adapter import BaseBotAdapter, BotResponse
from yelp_bot.adapters.watson_work.workspace_events import InboundEvent
from yelp_bot.adapters.watson_work.workspace_routes import WebhookVerifier
from yelp_bot.domain.entities.business import SearchResponse
from yelp_bot.domain.ports.conversation_state_store import ConversationStateStore
from yelp_bot.fastapi_app import create_fastapi_app
from yelp_bot.infrastructure.state import InMemoryConversationStateStore
from yelp_bot.services.conversation_flow import ConversationFlowController
from yelp_bot.services.yelp_search import YelpSearchClient

APP_ID = "bot-app-id"
WEBHOOK_SECRET = "test-webhook-secret"
SPACE_ID = "space-1"
USER_ID = "user-1"

YELP_PAYLOAD = {
    "total": 3,
    "businesses": [
        {
            "id": "joes",
            "name": "Joe's Pizza",
            "url": "https://www.yelp.com/biz/joes-pizza",
            "rating": 4.5,
            "categories": [
                {"alias": "pizza", "title": "Pizza"},
                {"alias": "italian", "title": "Italian"},
            ],
        },
        {
            "id": "katz",
            "name": "Katz's Delicatessen",
            "url": "https://www.yelp.com/biz/katzs",
            "rating": 4,
            "categories": [{"alias": "delis", "title": "Delis"}],
        },
        {
            "id": "xian",
            "name": "Xi'an Famous Foods",
            "url": "https://www.yelp.com/biz/xian",
            "rating": 3.5,
            "categories": [{"alias": "chinese", "title": "Chinese"}],
        },
    ],
}


class FakeMessenger(BaseBotAdapter):
    """Records every message instead of posting it."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def authenticate(self) -> str:
        return "fake-token"

    async def send_response(self, channel_id: str, response: BotResponse) -> bool:
        self.sent.append((channel_id, response.text))
        return True


class FakeSearchClient(YelpSearchClient):
    """Returns a canned response and records the locations searched."""

    def __init__(self, response: SearchResponse | None = None, error: Exception | None = None):
        super().__init__(
            http_client=None,
            client_id="",
            client_secret="",
            base_url="http://yelp.test",
        )
        self.response = response or SearchResponse(businesses=[])
        self.error = error
        self.calls: list[str] = []

    async def search(self, zip_code, term=None, limit=None):
        self.calls.append(zip_code)
        if self.error is not None:
            raise self.error
        return self.response


class StubProvider(Provider):
    """Provides test doubles in place of the real external clients."""

    def __init__(self, store, search_client, messenger, verifier):
        super().__init__(scope=Scope.APP)
        self._store = store
        self._search_client = search_client
        self._messenger = messenger
        self._verifier = verifier

    @provide
    def get_state_store(self) -> ConversationStateStore:
        return self._store

    @provide
    def get_search_client(self) -> YelpSearchClient:
        return self._search_client

    @provide
    def get_messenger(self) -> BaseBotAdapter:
        return self._messenger

    @provide
    def get_webhook_verifier(self) -> WebhookVerifier:
        return self._verifier

    @provide
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
            app_id=APP_ID,
        )


def make_event(event_type: str, **fields) -> InboundEvent:
    data = {"type": event_type, "spaceId": SPACE_ID, "userId": USER_ID}
    data.update(fields)
    return InboundEvent.model_validate(data)


@pytest.fixture()
def store():
    return InMemoryConversationStateStore()


@pytest.fixture()
def messenger():
    return FakeMessenger()


@pytest.fixture()
def search_response():
    return SearchResponse.from_dict(YELP_PAYLOAD)


@pytest.fixture()
def search_client(search_response):
    return FakeSearchClient(response=search_response)


@pytest.fixture()
def controller(store, search_client, messenger):
    return ConversationFlowController(
        store=store,
        search_client=search_client,
        messenger=messenger,
        app_id=APP_ID,
    )


@pytest.fixture()
def app(store, search_client, messenger):
    """Create a FastAPI app wired to test doubles."""
    container = make_async_container(
        StubProvider(store, search_client, messenger, WebhookVerifier(WEBHOOK_SECRET))
    )
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client
