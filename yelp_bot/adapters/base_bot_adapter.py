"""Base Bot Adapter - Abstract base class for outbound chat platform messengers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class BotResponse:
    """Response to send back to platform."""

    text: str
    title: str | None = None


class BaseBotAdapter(ABC):
    """Abstract base for all bot adapters."""

    @abstractmethod
    async def authenticate(self) -> str:
        """Obtain a bearer token for the platform API."""
        ...

    @abstractmethod
    async def send_response(self, channel_id: str, response: BotResponse) -> bool:
        """Post a formatted response. Returns False if the platform rejected it."""
        ...

    async def send_message(self, channel_id: str, text: str) -> bool:
        """Post plain text using the adapter's default formatting."""
        return await self.send_response(channel_id, BotResponse(text=text))
