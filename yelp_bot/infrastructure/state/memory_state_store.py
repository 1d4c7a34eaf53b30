"""
In-memory conversation state, one entry per Watson Work space.

Nothing survives a restart. There is no locking: two messages for the same
space handled concurrently resolve as last write wins.
"""

import logging
from typing import Optional

from yelp_bot.domain.entities.conversation_state import ConversationState
from yelp_bot.domain.ports.conversation_state_store import ConversationStateStore

logger = logging.getLogger(__name__)


class InMemoryConversationStateStore(ConversationStateStore):
    def __init__(self):
        self._states: dict[str, ConversationState] = {}

    def get(self, space_id: str) -> Optional[ConversationState]:
        return self._states.get(space_id)

    def save(self, space_id: str, state: ConversationState) -> None:
        self._states[space_id] = state
        logger.debug(
            "[STATE] space=%s stage=%s zip=%r", space_id, state.stage.name, state.zip
        )

    def delete(self, space_id: str) -> bool:
        """Drop the entry for a space. Returns False if there was none."""
        removed = self._states.pop(space_id, None) is not None
        if removed:
            logger.debug("[STATE] space=%s cleared", space_id)
        return removed

    def __contains__(self, space_id: str) -> bool:
        return space_id in self._states

    def __len__(self) -> int:
        return len(self._states)
