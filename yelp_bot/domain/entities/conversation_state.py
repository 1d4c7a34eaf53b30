"""
ConversationState Entity - Dialog progress of a single Watson Work space.

A space with no stored state is idle.
"""

from dataclasses import dataclass
from enum import IntEnum


class ConversationStage(IntEnum):
    AWAITING_CONFIRMATION = 1
    AWAITING_ZIP = 2


@dataclass
class ConversationState:
    stage: ConversationStage = ConversationStage.AWAITING_CONFIRMATION
    zip: str = ""
