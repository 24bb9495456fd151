"""The command invocation context shared by prefix and application commands."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

from .messages import Message, User
from .prefix import PrefixContext
from .slash import (
    CHAT_INPUT_COMMAND_TYPE,
    ApplicationContext,
    ContextMenuKind,
    InteractionKind,
)

T = TypeVar("T")

DISCORD_EPOCH_MS = 1420070400000
"""Milliseconds between the Unix epoch and the epoch of snowflake IDs."""

_U64_MASK = (1 << 64) - 1
_TIMESTAMP_SHIFT = 22
_LOW_BITS_MASK = _U64_MASK >> 42
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _unix_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _UNIX_EPOCH) // timedelta(milliseconds=1)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value
    return ""


@dataclass(frozen=True, eq=False)
class Context:
    """Either an :class:`ApplicationContext` or a :class:`PrefixContext`, with shared accessors."""

    inner: ApplicationContext | PrefixContext

    def __post_init__(self) -> None:
        if not isinstance(self.inner, (ApplicationContext, PrefixContext)):
            raise TypeError(
                "a context wraps an ApplicationContext or a PrefixContext, "
                f"not {type(self.inner).__name__}"
            )

    @property
    def is_application(self) -> bool:
        """Whether this is an application command context."""
        return isinstance(self.inner, ApplicationContext)

    async def defer(self) -> None:
        """Defer the response publicly; does nothing for prefix commands."""
        if isinstance(self.inner, ApplicationContext):
            await self.inner.defer_response(False)

    async def defer_ephemeral(self) -> None:
        """Defer the response so that only the invoking user sees it."""
        if isinstance(self.inner, ApplicationContext):
            await self.inner.defer_response(True)

    def client(self) -> Any:
        """Return the connection used to talk to the chat service."""
        return self.inner.client

    def framework(self) -> Any:
        """Return the framework this command runs in."""
        return self.inner.framework

    def data(self) -> Any:
        """Return the custom user data."""
        return self.inner.data

    def channel_id(self) -> int:
        """Return the ID of the channel the command was invoked in."""
        if isinstance(self.inner, ApplicationContext):
            return self.inner.interaction.channel_id
        return self.inner.msg.channel_id

    def guild_id(self) -> int | None:
        """Return the guild ID, or ``None`` outside a guild."""
        if isinstance(self.inner, ApplicationContext):
            return self.inner.interaction.guild_id
        return self.inner.msg.guild_id

    def created_at(self) -> datetime:
        """Return when the invoking message or interaction was created."""
        if isinstance(self.inner, ApplicationContext):
            millis = (self.inner.interaction.id >> _TIMESTAMP_SHIFT) + DISCORD_EPOCH_MS
            return _UNIX_EPOCH + timedelta(milliseconds=millis)
        return self.inner.msg.timestamp

    def author(self) -> User:
        """Return the user who invoked the command."""
        if isinstance(self.inner, ApplicationContext):
            return self.inner.interaction.user
        return self.inner.msg.author

    def id(self) -> int:
        """Return an ID that uniquely identifies this invocation, even across edits."""
        if isinstance(self.inner, ApplicationContext):
            return self.inner.interaction.id
        msg = self.inner.msg
        ident = msg.id
        if msg.edited_timestamp is not None:
            # Replace the timestamp bits with the edit time so each edit gets its own ID.
            ident &= _LOW_BITS_MASK
            offset = (_unix_millis(msg.edited_timestamp) - DISCORD_EPOCH_MS) & _U64_MASK
            ident |= (offset << _TIMESTAMP_SHIFT) & _U64_MASK
        return ident

    def parent_commands(self) -> list[Any]:
        """Return the parent commands of a subcommand, top-level first."""
        return self.inner.parent_commands

    def command(self) -> Any:
        """Return the command being run."""
        return self.inner.command

    def prefix(self) -> str:
        """Return the prefix used, or ``"/"`` for application commands."""
        if isinstance(self.inner, ApplicationContext):
            return "/"
        return self.inner.prefix

    def invoked_command_name(self) -> str:
        """Return the command name as the user invoked it."""
        if isinstance(self.inner, ApplicationContext):
            return self.inner.interaction.name
        return self.inner.invoked_command_name

    async def rerun(self) -> None:
        """Run the command action again, skipping all checks; its exceptions propagate."""
        inner = self.inner
        command = inner.command
        if isinstance(inner, PrefixContext):
            if command.prefix_action is not None:
                await command.prefix_action(inner)
            return

        interaction = inner.interaction
        if interaction.kind is InteractionKind.AUTOCOMPLETE:
            return
        if interaction.command_type == CHAT_INPUT_COMMAND_TYPE:
            if command.slash_action is not None:
                await command.slash_action(inner)
            return

        menu = command.context_menu_action
        target = interaction.target
        if menu is None or target is None:
            return
        if menu.kind is ContextMenuKind.USER and isinstance(target, User):
            await menu.action(inner, copy.deepcopy(target))
        elif menu.kind is ContextMenuKind.MESSAGE and isinstance(target, Message):
            await menu.action(inner, copy.deepcopy(target))

    def invocation_string(self) -> str:
        """Return the text the command was invoked with, e.g. ``"/cmd sub arg:value"``."""
        inner = self.inner
        if isinstance(inner, PrefixContext):
            return inner.msg.content
        parts = ["/"]
        parts.extend(f"{parent.name} " for parent in inner.parent_commands)
        parts.append(inner.command.name)
        for arg in inner.args:
            if arg.value is not None:
                parts.append(f" {arg.name}:{_format_value(arg.value)}")
        return "".join(parts)

    def set_invocation_data(self, data: Any) -> None:
        """Store data carried across hooks, checks and the command of this invocation."""
        self.inner.invocation_data = data

    def invocation_data(self, kind: type[T]) -> T | None:
        """Return the stored invocation data if it is of type ``kind``, else ``None``."""
        data = self.inner.invocation_data
        return data if isinstance(data, kind) else None

    def locale(self) -> str | None:
        """Return the invoking user's locale, if known."""
        if isinstance(self.inner, ApplicationContext):
            return self.inner.interaction.locale
        return None


@dataclass(frozen=True)
class PartialContext:
    """A reduced context holding only what is known before a command is chosen."""

    guild_id: int | None
    channel_id: int
    author: User
    client: Any
    framework: Any
    data: Any

    @classmethod
    def from_context(cls, ctx: Context) -> PartialContext:
        """Take the shared fields out of a full context."""
        return cls(
            guild_id=ctx.guild_id(),
            channel_id=ctx.channel_id(),
            author=ctx.author(),
            client=ctx.client(),
            framework=ctx.framework(),
            data=ctx.data(),
        )