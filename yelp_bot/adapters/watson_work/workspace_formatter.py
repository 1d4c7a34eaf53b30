"""Watson Work Formatter - Formats bot responses into Watson Work appMessages."""

from yelp_bot.adapters.base_bot_adapter import BotResponse
from yelp_bot.config.settings import Config


class WorkspaceFormatter:
    """Formats BotResponse into the appMessage body posted to a space."""

    def __init__(self, title: str | None = None, color: str | None = None):
        self.title = title or Config.BOT_MESSAGE_TITLE
        self.color = color or Config.BOT_MESSAGE_COLOR

    def format_response(self, response: BotResponse) -> dict:
        """Wrap the text in a single generic annotation."""
        return {
            "type": "appMessage",
            "version": 1.0,
            "annotations": [
                {
                    "type": "generic",
                    "version": 1.0,
                    "color": self.color,
                    "title": response.title or self.title,
                    "text": response.text,
                }
            ],
        }
