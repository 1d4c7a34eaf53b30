"""
Conversation State Store Port - Interface for dialog state keyed by space id.
Implementation: yelp_bot/infrastructure/state/memory_state_store.py
"""

from abc import ABC, abstractmethod
from typing import Optional
from yelp_bot.domain.entities.conversation_state import ConversationState


class ConversationStateStore(ABC):
    @abstractmethod
    def get(self, space_id: str) -> Optional[ConversationState]: ...

    @abstractmethod
    def save(self, space_id: str, state: ConversationState) -> None: ...

    @abstractmethod
    def delete(self, space_id: str) -> bool: ...

    @abstractmethod
    def __contains__(self, space_id: str) -> bool: ...

    @abstractmethod
    def __len__(self) -> int: ...
