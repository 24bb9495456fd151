"""Chat message model and the partial update events applied to it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A chat user."""

    id: int = 0
    name: str = ""
    bot: bool = False


@dataclass
class Attachment:
    """A file attached to a message."""

    id: int = 0
    filename: str = ""
    url: str = ""
    size: int = 0


@dataclass
class Message:
    """A chat message."""

    id: int = 0
    channel_id: int = 0
    guild_id: int | None = None
    kind: int = 0
    content: str = ""
    tts: bool = False
    pinned: bool = False
    timestamp: datetime = field(default_factory=_now)
    edited_timestamp: datetime | None = None
    author: User = field(default_factory=User)
    mention_everyone: bool = False
    mentions: list[User] = field(default_factory=list)
    mention_roles: list[int] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)

    def last_update(self) -> datetime:
        """Return the edit time if the message was edited, else its creation time."""
        return self.edited_timestamp if self.edited_timestamp is not None else self.timestamp


@dataclass
class MessageUpdateEvent:
    """A partial message update; fields left as ``None`` were not changed."""

    id: int
    channel_id: int
    guild_id: int | None = None
    kind: int | None = None
    content: str | None = None
    tts: bool | None = None
    pinned: bool | None = None
    timestamp: datetime | None = None
    edited_timestamp: datetime | None = None
    author: User | None = None
    mention_everyone: bool | None = None
    mentions: list[User] | None = None
    mention_roles: list[int] | None = None
    attachments: list[Attachment] | None = None


_OPTIONAL_FIELDS = (
    "kind",
    "content",
    "tts",
    "pinned",
    "timestamp",
    "edited_timestamp",
    "author",
    "mention_everyone",
)
_LIST_FIELDS = ("mentions", "mention_roles", "attachments")


def update_message(message: Message, update: MessageUpdateEvent) -> None:
    """Apply ``update`` to ``message`` in place."""
    message.id = update.id
    message.channel_id = update.channel_id
    message.guild_id = update.guild_id
    for name in _OPTIONAL_FIELDS:
        value = getattr(update, name)
        if value is not None:
            setattr(message, name, value)
    for name in _LIST_FIELDS:
        value = getattr(update, name)
        if value is not None:
            setattr(message, name, list(value))