"""
Unit tests for ConversationFlowController.

Run with: pytest tests/test_conversation_flow.py -v
"""

import json

import pytest

from conftest import APP_ID, SPACE_ID, FakeSearchClient, make_event
from yelp_bot.domain.entities.business import SearchResponse
from yelp_bot.domain.entities.conversation_state import (
    ConversationStage,
    ConversationState,
)
from yelp_bot.domain.exceptions import MalformedEventError
from yelp_bot.services.conversation_flow import (
    CANCEL_REQUEST,
    PROMPT_TO_LIST,
    RESULTS_HEADER,
    WHICH_ZIP,
    ConversationFlowController,
    format_search_results,
    is_affirmative,
)

FOOD_REQUEST = json.dumps({"lens": "Food", "category": "Request", "phrase": "lunch"})


def food_annotation(**overrides):
    fields = {"annotationType": "message-focus", "annotationPayload": FOOD_REQUEST}
    fields.update(overrides)
    return make_event("message-annotation-added", **fields)


def reply(content, user_id="user-1"):
    return make_event("message-created", content=content, userId=user_id)


class TestIntentDetection:
    """Annotations that may start a dialog."""

    @pytest.mark.asyncio
    async def test_food_request_starts_conversation(self, controller, store, messenger):
        started = await controller.handle_annotation(food_annotation())

        assert started is True
        assert store.get(SPACE_ID) == ConversationState(
            stage=ConversationStage.AWAITING_CONFIRMATION, zip=""
        )
        assert messenger.sent == [(SPACE_ID, PROMPT_TO_LIST)]

    @pytest.mark.asyncio
    async def test_new_food_request_resets_existing_dialog(
        self, controller, store, messenger
    ):
        store.save(
            SPACE_ID, ConversationState(stage=ConversationStage.AWAITING_ZIP, zip="10001")
        )

        started = await controller.handle_annotation(food_annotation())

        assert started is True
        assert store.get(SPACE_ID) == ConversationState(
            stage=ConversationStage.AWAITING_CONFIRMATION, zip=""
        )
        assert messenger.sent == [(SPACE_ID, PROMPT_TO_LIST)]

    @pytest.mark.asyncio
    async def test_annotation_on_bot_message_is_ignored(
        self, controller, store, messenger, search_client
    ):
        store.save(SPACE_ID, ConversationState(stage=ConversationStage.AWAITING_ZIP))

        started = await controller.handle_annotation(food_annotation(userId=APP_ID))

        assert started is False
        assert store.get(SPACE_ID) == ConversationState(
            stage=ConversationStage.AWAITING_ZIP, zip=""
        )
        assert messenger.sent == []
        assert search_client.calls == []

    @pytest.mark.asyncio
    async def test_other_annotation_types_are_ignored(self, controller, store, messenger):
        started = await controller.handle_annotation(
            food_annotation(annotationType="generic")
        )

        assert started is False
        assert SPACE_ID not in store
        assert messenger.sent == []

    @pytest.mark.asyncio
    async def test_non_food_focus_is_ignored(self, controller, store, messenger):
        payload = json.dumps({"lens": "Weather", "category": "Request"})
        started = await controller.handle_annotation(
            food_annotation(annotationPayload=payload)
        )

        assert started is False
        assert len(store) == 0
        assert messenger.sent == []

    @pytest.mark.asyncio
    async def test_undecodable_payload_raises(self, controller, store):
        with pytest.raises(MalformedEventError):
            await controller.handle_annotation(
                food_annotation(annotationPayload="{not json")
            )
        assert len(store) == 0


class TestConfirmation:
    """Replies while waiting for a yes/no."""

    @pytest.fixture(autouse=True)
    def awaiting_confirmation(self, store):
        store.save(SPACE_ID, ConversationState())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["yes", "Ok", "y", "OKAY", "k", "Yes please", "yeah"])
    async def test_affirmative_reply_asks_for_zip(
        self, controller, store, messenger, search_client, content
    ):
        await controller.handle_message(reply(content))

        assert store.get(SPACE_ID).stage == ConversationStage.AWAITING_ZIP
        assert messenger.sent == [(SPACE_ID, WHICH_ZIP)]
        assert search_client.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["no", "maybe", "Nope", "not now", ""])
    async def test_other_reply_cancels(self, controller, store, messenger, content):
        await controller.handle_message(reply(content))

        assert SPACE_ID not in store
        assert messenger.sent == [(SPACE_ID, CANCEL_REQUEST)]

    @pytest.mark.asyncio
    async def test_known_zip_skips_zip_prompt(self, controller, store, messenger, search_client):
        store.save(SPACE_ID, ConversationState(zip="94103"))

        await controller.handle_message(reply("yes"))

        assert search_client.calls == ["94103"]
        assert messenger.sent[0][1].startswith(RESULTS_HEADER)
        assert SPACE_ID not in store


class TestZipAndSearch:
    """Replies while waiting for a zip code."""

    @pytest.fixture(autouse=True)
    def awaiting_zip(self, store):
        store.save(SPACE_ID, ConversationState(stage=ConversationStage.AWAITING_ZIP))

    @pytest.mark.asyncio
    async def test_zip_reply_triggers_search(self, controller, search_client):
        await controller.handle_message(reply("10001"))

        assert search_client.calls == ["10001"]

    @pytest.mark.asyncio
    async def test_results_posted_and_state_cleared(
        self, controller, store, messenger, search_response
    ):
        await controller.handle_message(reply("10001"))

        assert len(messenger.sent) == 1
        space_id, text = messenger.sent[0]
        assert space_id == SPACE_ID
        bullets = [line for line in text.splitlines() if line.startswith("* ")]
        assert len(bullets) == len(search_response.businesses)
        for line, business in zip(bullets, search_response.businesses):
            assert business.name in line
            assert business.url in line
            assert business.categories[0].title in line
            assert f"{business.rating:g}" in line
        assert SPACE_ID not in store

    @pytest.mark.asyncio
    async def test_message_after_search_is_ignored(self, controller, messenger, search_client):
        await controller.handle_message(reply("10001"))
        await controller.handle_message(reply("yes"))

        assert len(messenger.sent) == 1
        assert search_client.calls == ["10001"]

    @pytest.mark.asyncio
    async def test_zip_is_stored_verbatim(self, store, messenger):
        search_client = FakeSearchClient(error=RuntimeError("yelp down"))
        controller = ConversationFlowController(
            store=store, search_client=search_client, messenger=messenger, app_id=APP_ID
        )

        with pytest.raises(RuntimeError):
            await controller.handle_message(reply("  Brooklyn, NY "))

        # Failed search keeps the dialog so the next reply retries
        assert store.get(SPACE_ID).zip == "  Brooklyn, NY "
        assert search_client.calls == ["  Brooklyn, NY "]
        assert messenger.sent == []


class TestIgnoredMessages:
    """Messages that never move the dialog."""

    @pytest.mark.asyncio
    async def test_unknown_space_is_ignored(self, controller, messenger, search_client):
        await controller.handle_message(reply("yes"))

        assert messenger.sent == []
        assert search_client.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "stage", [ConversationStage.AWAITING_CONFIRMATION, ConversationStage.AWAITING_ZIP]
    )
    async def test_bot_messages_are_ignored(
        self, controller, store, messenger, search_client, stage
    ):
        store.save(SPACE_ID, ConversationState(stage=stage))

        await controller.handle_message(reply(PROMPT_TO_LIST, user_id=APP_ID))

        assert store.get(SPACE_ID).stage == stage
        assert store.get(SPACE_ID).zip == ""
        assert messenger.sent == []
        assert search_client.calls == []


class TestFormatting:
    def test_single_business_line(self):
        response = SearchResponse.from_dict(
            {
                "businesses": [
                    {
                        "name": "Joe's Pizza",
                        "url": "https://yelp.test/joes",
                        "rating": 4,
                        "categories": [{"title": "Pizza"}, {"title": "Italian"}],
                    }
                ]
            }
        )

        assert format_search_results(response) == (
            "Here are some options:\n\n"
            "* [Joe's Pizza](https://yelp.test/joes) - Pizza (Rated: 4 stars)\n"
        )

    def test_no_results_renders_header_only(self):
        assert format_search_results(SearchResponse(businesses=[])) == RESULTS_HEADER

    def test_missing_categories_render_empty_title(self):
        response = SearchResponse.from_dict(
            {"businesses": [{"name": "X", "url": "u", "rating": 3.5, "categories": []}]}
        )

        assert "* [X](u) -  (Rated: 3.5 stars)" in format_search_results(response)


class TestAffirmativePattern:
    @pytest.mark.parametrize(
        "content", ["ok", "OK!", "okay", "k", "y", "yes", "YES sure", "yeah", "Yep", "yup!"]
    )
    def test_accepts(self, content):
        assert is_affirmative(content)

    @pytest.mark.parametrize("content", ["no", "maybe", "yellow", "kind of", "sure", ""])
    def test_rejects(self, content):
        assert not is_affirmative(content)
