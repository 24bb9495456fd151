"""Application command interactions, their context, and parameter definitions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from .messages import Attachment, Message, User
from .slash_args import CommandDataOption

CHAT_INPUT_COMMAND_TYPE = 1
"""Command type of a slash (chat input) command."""

DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
"""Interaction response type that acknowledges now and answers later."""

EPHEMERAL_FLAG = 1 << 6
"""Message flag that makes a response visible only to the invoking user."""


class InteractionKind(enum.Enum):
    """Whether an interaction invokes a command or asks for autocomplete suggestions."""

    APPLICATION_COMMAND = "application_command"
    AUTOCOMPLETE = "autocomplete"


@dataclass
class Interaction:
    """An application command or autocomplete interaction."""

    id: int
    channel_id: int
    user: User
    name: str = ""
    kind: InteractionKind = InteractionKind.APPLICATION_COMMAND
    guild_id: int | None = None
    member: Any = None
    locale: str = "en-US"
    options: list[CommandDataOption] = field(default_factory=list)
    attachments: dict[int, Attachment] = field(default_factory=dict)
    command_type: int = CHAT_INPUT_COMMAND_TYPE
    target: Any = None

    def unwrap(self) -> Interaction:
        """Return this interaction, which must be an application command interaction."""
        if self.kind is InteractionKind.AUTOCOMPLETE:
            raise ValueError(
                "expected application command interaction, got autocomplete interaction"
            )
        return self


@dataclass(eq=False)
class ApplicationContext:
    """Context passed to an application command invocation.

    ``client`` must provide an awaitable
    ``create_interaction_response(interaction, response)`` method.
    """

    client: Any
    interaction: Interaction
    command: Any
    args: list[CommandDataOption] = field(default_factory=list)
    framework: Any = None
    data: Any = None
    parent_commands: list[Any] = field(default_factory=list)
    invocation_data: Any = None
    has_sent_initial_response: bool = False

    async def defer_response(self, ephemeral: bool = False) -> None:
        """Acknowledge the interaction so the answer may come later.

        Does nothing for autocomplete interactions or once an initial response was sent.
        """
        if self.interaction.kind is InteractionKind.AUTOCOMPLETE:
            return
        if self.has_sent_initial_response:
            return
        response = {
            "type": DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
            "data": {"flags": EPHEMERAL_FLAG if ephemeral else 0},
        }
        await self.client.create_interaction_response(self.interaction, response)
        self.has_sent_initial_response = True


class ContextMenuKind(enum.IntEnum):
    """What a context menu entry is attached to; values are the command types."""

    USER = 2
    MESSAGE = 3


ContextMenuCallback = Callable[[ApplicationContext, Any], Awaitable[None]]


@dataclass(frozen=True)
class ContextMenuCommandAction:
    """The callback of a context menu command and the kind of item it acts on."""

    kind: ContextMenuKind
    action: ContextMenuCallback

    @classmethod
    def for_parameter(
        cls, parameter_type: type, action: ContextMenuCallback
    ) -> ContextMenuCommandAction:
        """Build the action for a callback taking a ``User`` or a ``Message``."""
        if isinstance(parameter_type, type) and issubclass(parameter_type, User):
            return cls(ContextMenuKind.USER, action)
        if isinstance(parameter_type, type) and issubclass(parameter_type, Message):
            return cls(ContextMenuKind.MESSAGE, action)
        raise TypeError(
            f"{getattr(parameter_type, '__name__', parameter_type)!s} "
            "cannot be a context menu parameter"
        )


@dataclass
class CommandParameterChoice:
    """A single drop-down choice of a choice parameter."""

    name: str
    localizations: dict[str, str] = field(default_factory=dict)


def _add_localizations(builder: dict[str, Any], key: str, values: dict[str, str]) -> None:
    for locale, text in values.items():
        builder.setdefault(key, {})[locale] = text


@dataclass
class CommandParameter:
    """A single parameter of a command.

    ``type_setter`` receives the option dict and fills in its type and bounds.
    """

    name: str
    name_localizations: dict[str, str] = field(default_factory=dict)
    description: str | None = None
    description_localizations: dict[str, str] = field(default_factory=dict)
    required: bool = False
    channel_types: list[int] | None = None
    choices: list[CommandParameterChoice] = field(default_factory=list)
    type_setter: Callable[[dict[str, Any]], None] | None = None
    autocomplete_callback: Callable[..., Awaitable[Any]] | None = None

    def create_as_slash_command_option(self) -> dict[str, Any] | None:
        """Return the option definition for registration, or ``None`` if it has no type."""
        if self.type_setter is None:
            return None
        builder: dict[str, Any] = {
            "required": self.required,
            "name": self.name,
            "description": self.description or "A slash command parameter",
            "autocomplete": self.autocomplete_callback is not None,
        }
        _add_localizations(builder, "name_localizations", self.name_localizations)
        _add_localizations(
            builder, "description_localizations", self.description_localizations
        )
        if self.channel_types is not None:
            builder["channel_types"] = list(self.channel_types)
        if self.choices:
            builder["choices"] = [
                {
                    "name": choice.name,
                    "value": index,
                    "name_localizations": dict(choice.localizations),
                }
                for index, choice in enumerate(self.choices)
            ]
        self.type_setter(builder)
        return builder