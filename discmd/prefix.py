"""Definitions used by message-prefix commands: prefixes, their context and options."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from .edit_tracker import EditTracker
from .messages import Message


class MessageDispatchTrigger(enum.Enum):
    """The event that caused a prefix command to run."""

    MESSAGE_CREATE = "message_create"
    """The invocation message was posted directly."""
    MESSAGE_EDIT = "message_edit"
    """The message was edited and was already a valid invocation before."""
    MESSAGE_EDIT_FROM_INVALID = "message_edit_from_invalid"
    """The message was edited and only became a valid invocation through the edit."""


@dataclass(frozen=True)
class Prefix:
    """A command prefix: either a case-sensitive literal or a regular expression."""

    text: str | None = None
    pattern: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.pattern is None):
            raise ValueError("a prefix is either a literal or a regular expression")

    @classmethod
    def literal(cls, text: str) -> Prefix:
        """Build a prefix that matches ``text`` exactly, case-sensitively."""
        return cls(text=text)

    @classmethod
    def regex(cls, pattern: str | re.Pattern[str]) -> Prefix:
        """Build a prefix that matches ``pattern`` at the start of a message."""
        return cls(pattern=re.compile(pattern))

    def strip(self, content: str) -> tuple[str, str] | None:
        """Split ``content`` into ``(matched_prefix, rest)``, or return ``None`` if it does not match."""
        if self.text is not None:
            if content.startswith(self.text):
                return self.text, content[len(self.text):]
            return None
        match = self.pattern.match(content)
        if match is None:
            return None
        return match.group(0), content[match.end():]


@dataclass(eq=False)
class PrefixContext:
    """Context passed to a prefix command invocation.

    ``client`` is the connection used to talk to the chat service.
    """

    client: Any
    msg: Message
    prefix: str
    invoked_command_name: str
    args: str
    command: Any
    framework: Any = None
    data: Any = None
    parent_commands: list[Any] = field(default_factory=list)
    invocation_data: Any = None
    trigger: MessageDispatchTrigger = MessageDispatchTrigger.MESSAGE_CREATE
    action: Callable[[PrefixContext], Awaitable[None]] | None = None


@dataclass
class PrefixFrameworkOptions:
    """Configuration specific to prefix commands."""

    prefix: str | None = None
    additional_prefixes: list[Prefix] = field(default_factory=list)
    dynamic_prefix: Callable[[Any], Awaitable[str | None]] | None = None
    stripped_dynamic_prefix: (
        Callable[[Any, Message, Any], Awaitable[tuple[str, str] | None]] | None
    ) = None
    mention_as_prefix: bool = True
    edit_tracker: EditTracker | None = None
    execute_untracked_edits: bool = True
    ignore_edits_if_not_yet_responded: bool = False
    execute_self_messages: bool = False
    ignore_bots: bool = True
    case_insensitive_commands: bool = True