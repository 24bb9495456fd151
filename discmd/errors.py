"""Errors raised by user code or by the framework while a bot runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any

from .context import Context, PartialContext
from .messages import Message
from .prefix import MessageDispatchTrigger
from .slash import ApplicationContext, Interaction


def _full_command_name(ctx: Context) -> str:
    return f"{ctx.prefix()}{ctx.command().qualified_name}"


def _quoted(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_duration(duration: timedelta) -> str:
    micros = duration // timedelta(microseconds=1)
    if abs(micros) >= 1_000_000:
        return f"{Decimal(micros) / Decimal(1_000_000)}s"
    if abs(micros) >= 1_000:
        return f"{Decimal(micros) / Decimal(1_000)}ms"
    return f"{micros}µs"


def _event_name(event: Any) -> str:
    name = getattr(event, "name", None)
    if callable(name):
        name = name()
    return str(name) if name is not None else type(event).__name__


class FrameworkError(Exception):
    """Any error that can occur while the bot runs.

    Variants carrying an ``error`` field wrap an exception raised by user code;
    it is also exposed as ``__cause__``.
    """

    def __post_init__(self) -> None:
        error = getattr(self, "error", None)
        if isinstance(error, BaseException):
            self.__cause__ = error

    def ctx(self) -> Context | None:
        """Return the command context of this error, if it has one."""
        return None

    async def handle(self, options: Any) -> None:
        """Pass this error to the command's ``on_error`` hook, or the global one."""
        ctx = self.ctx()
        on_error = ctx.command().on_error if ctx is not None else None
        if on_error is None:
            on_error = options.on_error
        await on_error(self)


class _WithContext(FrameworkError):
    context: Context

    def ctx(self) -> Context | None:
        return self.context


@dataclass(eq=False)
class SetupError(FrameworkError):
    """User code raised an error while setting up user data."""

    error: Any
    framework: Any
    data_about_bot: Any
    client: Any

    def __str__(self) -> str:
        return "framework setup error"


@dataclass(eq=False)
class EventHandlerError(FrameworkError):
    """User code raised an error in the generic event handler."""

    error: Any
    client: Any
    event: Any
    framework: Any

    def __str__(self) -> str:
        return f"error in {_event_name(self.event)} event event handler"


@dataclass(eq=False)
class CommandError(_WithContext):
    """User code raised an error while a command ran."""

    error: Any
    context: Context

    def __str__(self) -> str:
        return f"error in command `{_full_command_name(self.context)}`"


@dataclass(eq=False)
class CommandPanic(_WithContext):
    """An unexpected failure escaped a command; ``payload`` describes it if known."""

    payload: str | None
    context: Context

    def __str__(self) -> str:
        return f"panic in command `{_full_command_name(self.context)}`"


@dataclass(eq=False)
class ArgumentParseError(_WithContext):
    """A command argument could not be parsed from the message or interaction."""

    error: Any
    context: Context
    input: str | None = None

    def __str__(self) -> str:
        shown = "None" if self.input is None else _quoted(self.input)
        return (
            "failed to parse argument in command "
            f"`{_full_command_name(self.context)}` on input {shown}"
        )


@dataclass(eq=False)
class CommandStructureMismatchError(FrameworkError):
    """The received arguments do not match the command, usually a stale registration."""

    description: str
    context: ApplicationContext

    def ctx(self) -> Context | None:
        return Context(self.context)

    def __str__(self) -> str:
        return (
            "unexpected application command structure in command "
            f"`{_full_command_name(Context(self.context))}`: {self.description}"
        )


@dataclass(eq=False)
class CooldownHit(_WithContext):
    """A command was invoked before its cooldown expired."""

    remaining_cooldown: timedelta
    context: Context

    def __str__(self) -> str:
        return (
            f"cooldown hit in command `{_full_command_name(self.context)}` "
            f"({_format_duration(self.remaining_cooldown)} remaining)"
        )


@dataclass(eq=False)
class MissingBotPermissions(_WithContext):
    """The bot lacks permissions the command requires."""

    missing_permissions: int
    context: Context

    def __str__(self) -> str:
        return (
            f"bot is missing permisions ({self.missing_permissions}) "
            f"to execute command `{_full_command_name(self.context)}`"
        )


@dataclass(eq=False)
class MissingUserPermissions(_WithContext):
    """The user lacks, or may lack, permissions the command requires.

    ``missing_permissions`` is ``None`` when they could not be determined.
    """

    context: Context
    missing_permissions: int | None = None

    def __str__(self) -> str:
        return (
            f"user is or may be missing permisions ({self.missing_permissions}) "
            f"to execute command `{_full_command_name(self.context)}`"
        )


@dataclass(eq=False)
class NotAnOwner(_WithContext):
    """A non-owner tried to run an owners-only command."""

    context: Context

    def __str__(self) -> str:
        return (
            f"owner-only command `{_full_command_name(self.context)}` "
            "cannot be run by non-owners"
        )


@dataclass(eq=False)
class GuildOnly(_WithContext):
    """A guild-only command was invoked in a direct message."""

    context: Context

    def __str__(self) -> str:
        return f"guild-only command `{_full_command_name(self.context)}` cannot run in DMs"


@dataclass(eq=False)
class DmOnly(_WithContext):
    """A DM-only command was invoked in a guild."""

    context: Context

    def __str__(self) -> str:
        return f"DM-only command `{_full_command_name(self.context)}` cannot run in guilds"


@dataclass(eq=False)
class NsfwOnly(_WithContext):
    """An NSFW-only command was invoked in a non-NSFW channel."""

    context: Context

    def __str__(self) -> str:
        return (
            f"nsfw-only command `{_full_command_name(self.context)}` "
            "cannot run in non-nsfw channels"
        )


@dataclass(eq=False)
class CommandCheckFailed(_WithContext):
    """A pre-command check denied access (``error`` is ``None``) or raised an error."""

    context: Context
    error: Any = None

    def __str__(self) -> str:
        return (
            f"pre-command check for command `{_full_command_name(self.context)}` "
            "either denied access or errored"
        )


@dataclass(eq=False)
class DynamicPrefixError(FrameworkError):
    """The dynamic prefix callback raised an error."""

    error: Any
    context: PartialContext
    msg: Message

    def __str__(self) -> str:
        return f"dynamic prefix callback errored on message {_quoted(self.msg.content)}"


@dataclass(eq=False)
class UnknownCommand(FrameworkError):
    """A message had a valid prefix but named no known command."""

    client: Any
    msg: Message
    prefix: str
    msg_content: str
    framework: Any
    invocation_data: Any
    trigger: MessageDispatchTrigger

    def __str__(self) -> str:
        return f"unknown command `{self.msg_content}`"


@dataclass(eq=False)
class UnknownInteraction(FrameworkError):
    """An interaction named a command that is not registered with the framework."""

    client: Any
    framework: Any
    interaction: Interaction

    def __str__(self) -> str:
        return f"unknown interaction `{self.interaction.name}`"