"""
Callback Data
Tagged string protocol for inline keyboard callbacks: "<action>_<payload>"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

SEPARATOR = '_'


class CallbackAction(str, Enum):
    """Actions that can be carried by an inline button"""
    COPY = 'copy'


@dataclass(frozen=True)
class CallbackData:
    """Decoded callback token"""

    action: CallbackAction
    payload: str

    def encode(self) -> str:
        return f"{self.action.value}{SEPARATOR}{self.payload}"

    @classmethod
    def copy(cls, address: str) -> 'CallbackData':
        return cls(CallbackAction.COPY, address)

    @classmethod
    def decode(cls, data: Optional[str]) -> Optional['CallbackData']:
        """
        Parse raw callback data

        Args:
            data: Callback data string from Telegram (may be None)

        Returns:
            CallbackData, or None if the tag is unknown
        """
        if not data:
            return None

        tag, separator, payload = data.partition(SEPARATOR)
        if not separator:
            return None

        try:
            action = CallbackAction(tag)
        except ValueError:
            return None

        return cls(action, payload)
