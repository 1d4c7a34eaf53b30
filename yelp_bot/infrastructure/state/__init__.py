from yelp_bot.infrastructure.state.memory_state_store import (
    InMemoryConversationStateStore,
)

__all__ = ["InMemoryConversationStateStore"]
