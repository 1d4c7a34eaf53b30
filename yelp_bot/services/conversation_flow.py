"""
Conversation flow for the restaurant search dialog.

    Idle ──annotation(Food/Request)──► AWAITING_CONFIRMATION
    AWAITING_CONFIRMATION ──affirmative──► zip collection
    AWAITING_CONFIRMATION ──anything else──► Idle (cancel notice)
    zip collection ──no zip yet──► AWAITING_ZIP (zip prompt)
    AWAITING_ZIP ──any content──► search ──► Idle (results posted)

A space with no stored state is Idle and its messages are ignored, as are
messages posted by the bot itself.
"""

import logging
import re

from yelp_bot.adapters.base_bot_adapter import BaseBotAdapter
from yelp_bot.adapters.watson_work.workspace_events import InboundEvent
from yelp_bot.config.settings import Config
from yelp_bot.domain.entities.business import SearchResponse
from yelp_bot.domain.entities.conversation_state import (
    ConversationStage,
    ConversationState,
)
from yelp_bot.domain.ports.conversation_state_store import ConversationStateStore
from yelp_bot.observability.metrics import Transition, increment_transition
from yelp_bot.services.yelp_search import YelpSearchClient

logger = logging.getLogger(__name__)

# Bot prompts
PROMPT_TO_LIST = "Would you like to search for restaurants?"
WHICH_ZIP = "Which zipcode should we search in?"
CANCEL_REQUEST = "No problem! Let us know if you need to later!"
RESULTS_HEADER = "Here are some options:\n\n"

# Annotation that carries the cognitive "focus" of a message
FOCUS_ANNOTATION = "message-focus"
FOOD_LENS = "Food"
REQUEST_CATEGORY = "Request"

CONFIRMATION_PATTERN = re.compile(r"^\s*(?:o?k(?:ay)?|y(?:es|eah|ep|up)?)\b", re.IGNORECASE)


def is_affirmative(content: str) -> bool:
    return CONFIRMATION_PATTERN.match(content or "") is not None


def format_search_results(response: SearchResponse) -> str:
    """Render businesses as a markdown bullet list, one line each."""
    message = RESULTS_HEADER
    for business in response.businesses:
        message += f"* [{business.name}]({business.url})"
        message += (
            f" - {business.primary_category} (Rated: {business.rating:g} stars)\n"
        )
    return message


class ConversationFlowController:
    """Drives one restaurant-search dialog per space."""

    def __init__(
        self,
        store: ConversationStateStore,
        search_client: YelpSearchClient,
        messenger: BaseBotAdapter,
        app_id: str | None = None,
    ):
        self.store = store
        self.search_client = search_client
        self.messenger = messenger
        self.app_id = app_id if app_id is not None else Config.APP_ID

    async def handle_annotation(self, event: InboundEvent) -> bool:
        """
        Start a dialog when Watson Work tags a message as a food request.

        Returns:
            True if a conversation was started

        Raises:
            MalformedEventError: If the annotation payload cannot be decoded
        """
        if event.user_id == self.app_id:
            logger.debug(
                "[FLOW] Ignoring annotation on bot message in space=%s", event.space_id
            )
            return False

        if event.annotation_type != FOCUS_ANNOTATION:
            logger.debug(
                "[FLOW] Ignoring annotation type=%s in space=%s",
                event.annotation_type,
                event.space_id,
            )
            return False

        focus = event.annotation()
        if focus.get("lens") != FOOD_LENS or focus.get("category") != REQUEST_CATEGORY:
            return False

        self.store.save(event.space_id, ConversationState())
        increment_transition(Transition.STARTED)
        logger.info("[FLOW] Food request detected in space=%s", event.space_id)
        await self.messenger.send_message(event.space_id, PROMPT_TO_LIST)
        return True

    async def handle_message(self, event: InboundEvent) -> None:
        """Advance the dialog for a new message in a space."""
        space_id = event.space_id
        state = self.store.get(space_id)

        if state is None or event.user_id == self.app_id:
            logger.debug("[FLOW] Ignoring message in space=%s", space_id)
            return

        if state.stage == ConversationStage.AWAITING_CONFIRMATION:
            if not is_affirmative(event.content):
                self.store.delete(space_id)
                increment_transition(Transition.CANCELLED)
                logger.info("[FLOW] Search declined in space=%s", space_id)
                await self.messenger.send_message(space_id, CANCEL_REQUEST)
                return
            increment_transition(Transition.CONFIRMED)
        elif state.stage == ConversationStage.AWAITING_ZIP:
            # Any content is accepted as the location, Yelp decides what it means
            state.zip = event.content
            self.store.save(space_id, state)
            increment_transition(Transition.ZIP_RECEIVED)

        await self.list_restaurants(space_id)

    async def list_restaurants(self, space_id: str) -> None:
        """Ask for a zip code if none is known yet, otherwise search and reply."""
        state = self.store.get(space_id)
        if state is None:
            return

        if not state.zip:
            state.stage = ConversationStage.AWAITING_ZIP
            self.store.save(space_id, state)
            increment_transition(Transition.ZIP_REQUESTED)
            await self.messenger.send_message(space_id, WHICH_ZIP)
            return

        # Failures propagate and leave the state in place for another attempt
        response = await self.search_client.search(state.zip)
        await self.messenger.send_message(space_id, format_search_results(response))
        self.store.delete(space_id)
        increment_transition(Transition.COMPLETED)
        logger.info(
            "[FLOW] Posted %d restaurants to space=%s",
            len(response.businesses),
            space_id,
        )
