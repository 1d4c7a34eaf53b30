from yelp_bot.domain.ports.conversation_state_store import ConversationStateStore

__all__ = ["ConversationStateStore"]
