"""Watson Work Events - Normalized view of the outbound webhook payloads."""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from yelp_bot.domain.exceptions import MalformedEventError


class EventType(str, Enum):
    VERIFICATION = "verification"
    ANNOTATION_ADDED = "message-annotation-added"
    MESSAGE_CREATED = "message-created"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "EventType":
        """Map a raw ``type`` field to a member; anything unknown is OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class InboundEvent(BaseModel):
    """
    Webhook event as delivered by Watson Work.

    Missing fields default to empty strings so a sparse payload still parses;
    handlers decide whether an event carries enough to act on.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = ""
    space_id: str = Field(default="", alias="spaceId")
    user_id: str = Field(default="", alias="userId")
    content: str = ""
    challenge: str = ""
    annotation_type: str = Field(default="", alias="annotationType")
    annotation_payload: str = Field(default="", alias="annotationPayload")

    @property
    def event_type(self) -> EventType:
        return EventType.parse(self.type)

    def annotation(self) -> dict:
        """
        Decode the JSON-encoded annotation payload.

        Raises:
            MalformedEventError: If the payload is not a JSON object
        """
        try:
            payload = json.loads(self.annotation_payload or "{}")
        except json.JSONDecodeError as e:
            raise MalformedEventError(f"Invalid annotationPayload: {e}") from e
        if not isinstance(payload, dict):
            raise MalformedEventError("annotationPayload is not a JSON object")
        return payload
