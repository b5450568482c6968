"""
Message log module for the engine.

The message log is the sink for every user-visible event: damage, status
effects applied or expired, deaths and level-ups. Entries are kept newest
first and mirrored to the ``crawler.messages`` logger.
"""

from collections.abc import Iterator

from pydantic import BaseModel, Field

from core.constants import MessageCategory
from core.logging import get_logger

_logger = get_logger("crawler.messages")


class Message(BaseModel):
    """A single log entry."""

    text: str = Field(description="The rendered event text.")
    category: MessageCategory = Field(
        MessageCategory.INFO,
        description="Drives the colour the event is displayed with.",
    )
    turn: int = Field(0, ge=0, description="The global turn the event happened on.")

    def __str__(self) -> str:
        return self.text


class MessageLog:
    """
    Bounded, newest-first log of user-visible events.

    Attributes:
        max_messages (int):
            The number of entries retained.
        turn (int):
            The turn stamped onto new entries; the owning context keeps it in
            sync with its turn counter.

    """

    def __init__(self, max_messages: int = 200) -> None:
        self.max_messages = max_messages
        self.turn = 0
        self._messages: list[Message] = []

    def add(self, text: str, category: MessageCategory = MessageCategory.INFO) -> None:
        """
        Records a message.

        Args:
            text (str):
                The message text.
            category (MessageCategory):
                The message category.

        """
        self._messages.insert(0, Message(text=text, category=category, turn=self.turn))
        del self._messages[self.max_messages :]
        _logger.debug(f"[{category.value}] {text}")

    def recent(self, count: int = 20) -> list[Message]:
        """Returns the newest ``count`` messages, newest first."""
        return self._messages[:count]

    def texts(self) -> list[str]:
        """Returns every retained message text, oldest first."""
        return [m.text for m in reversed(self._messages)]

    def contains(self, fragment: str) -> bool:
        """Whether any retained message contains ``fragment``."""
        return any(fragment in m.text for m in self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
