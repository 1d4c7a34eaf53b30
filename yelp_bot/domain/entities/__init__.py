from yelp_bot.domain.entities.conversation_state import (
    ConversationStage,
    ConversationState,
)
from yelp_bot.domain.entities.business import Business, SearchResponse

__all__ = [
    "ConversationStage",
    "ConversationState",
    "Business",
    "SearchResponse",
]
