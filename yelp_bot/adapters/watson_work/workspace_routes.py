"""
Watson Work Routes (Webhook Endpoint)
=====================================

FastAPI route receiving outbound webhook calls from Watson Work.

ENDPOINTS:
----------
POST /webhook - Receives all subscribed events (verification, message-created,
                message-annotation-added)

VERIFICATION:
-------------
When a webhook is enabled, Watson Work sends a ``verification`` event with a
``challenge``. We echo ``{"response": challenge}`` and prove ownership of the
shared webhook secret with an HMAC-SHA256 of that exact body in the
``X-OUTBOUND-TOKEN`` header.

BACKGROUND PROCESSING:
----------------------
Watson Work treats anything but 200 as a failed delivery and redelivers.
We return 200 OK immediately and run the conversation flow in background
tasks, whatever its outcome.
"""

import hashlib
import hmac
import json
import logging

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, BackgroundTasks, Request, Response

from yelp_bot.adapters.watson_work.workspace_events import EventType, InboundEvent
from yelp_bot.domain.exceptions import MalformedEventError
from yelp_bot.observability.metrics import (
    MetricsErrorType,
    increment_error,
    increment_webhook_event,
)
from yelp_bot.services.conversation_flow import ConversationFlowController

logger = logging.getLogger(__name__)

router = APIRouter(tags=["watson-work"])

OUTBOUND_TOKEN_HEADER = "X-OUTBOUND-TOKEN"


class WebhookVerifier:
    """Signs verification responses with the shared webhook secret."""

    def __init__(self, webhook_secret: str):
        if not webhook_secret:
            logger.warning("WEBHOOK_SECRET not configured, verification will fail")
        self._secret = webhook_secret.encode("utf-8")

    def sign(self, body: bytes) -> str:
        return hmac.new(self._secret, body, hashlib.sha256).hexdigest()

    def challenge_response(self, challenge: str) -> Response:
        """Build the signed response to a verification event."""
        # Compact separators: the signature covers these exact bytes
        body = json.dumps({"response": challenge}, separators=(",", ":")).encode(
            "utf-8"
        )
        return Response(
            content=body,
            media_type="application/json",
            headers={OUTBOUND_TOKEN_HEADER: self.sign(body)},
        )


async def _process_annotation(
    controller: ConversationFlowController, event: InboundEvent
) -> None:
    """Background task to process annotation events."""
    try:
        await controller.handle_annotation(event)
    except MalformedEventError as e:
        logger.warning("[WORKSPACE] Dropping annotation in space=%s: %s", event.space_id, e)
        increment_error(MetricsErrorType.MALFORMED_EVENT)
    except Exception as e:
        logger.exception(f"Error processing Watson Work annotation: {e}")
        increment_error(MetricsErrorType.EVENT_PROCESSING_FAILED)


async def _process_message(
    controller: ConversationFlowController, event: InboundEvent
) -> None:
    """Background task to process message events."""
    try:
        await controller.handle_message(event)
    except Exception as e:
        logger.exception(f"Error processing Watson Work message: {e}")
        increment_error(MetricsErrorType.EVENT_PROCESSING_FAILED)


@router.post("/webhook")
@inject
async def workspace_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    controller: FromDishka[ConversationFlowController],
    verifier: FromDishka[WebhookVerifier],
):
    """
    Handle all Watson Work events.

    EVENT TYPES:
    ------------
    1. verification - Watson Work verifying the endpoint (signed echo)
    2. message-annotation-added - Possible food request, may start a dialog
    3. message-created - Reply inside a space, may advance a dialog
    Anything else is acknowledged and dropped.
    """
    body = await request.body()
    try:
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("event body is not a JSON object")
        event = InboundEvent.model_validate(data)
    except ValueError as e:
        # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
        logger.warning("[WORKSPACE] Ignoring malformed webhook body: %s", e)
        increment_error(MetricsErrorType.MALFORMED_EVENT)
        return Response(status_code=200)

    event_type = event.event_type
    increment_webhook_event(event_type.value)
    logger.debug("[WORKSPACE] Event type=%s space=%s", event.type, event.space_id)

    if event_type == EventType.VERIFICATION:
        logger.info("[WORKSPACE] Verifying challenge")
        return verifier.challenge_response(event.challenge)

    if event_type == EventType.ANNOTATION_ADDED:
        background_tasks.add_task(_process_annotation, controller, event)
    elif event_type == EventType.MESSAGE_CREATED:
        background_tasks.add_task(_process_message, controller, event)
    else:
        logger.debug("[WORKSPACE] Ignoring event type=%s", event.type)

    # Watson Work expects 200 OK before we do any work
    return Response(status_code=200)
