"""The command definition and its conversion into registration payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from .slash import CommandParameter, ContextMenuCommandAction, _add_localizations
from .slash_args import OptionType


@dataclass(eq=False)
class Command:
    """Everything known about a single prefix, slash or context menu command.

    Commands compare equal only to themselves.
    """

    name: str
    prefix_action: Callable[[Any], Awaitable[None]] | None = None
    slash_action: Callable[[Any], Awaitable[None]] | None = None
    context_menu_action: ContextMenuCommandAction | None = None
    subcommands: list[Command] = field(default_factory=list)
    name_localizations: dict[str, str] = field(default_factory=dict)
    qualified_name: str = ""
    identifying_name: str = ""
    category: str | None = None
    hide_in_help: bool = False
    description: str | None = None
    description_localizations: dict[str, str] = field(default_factory=dict)
    help_text: Callable[[], str] | None = None
    reuse_response: bool = False
    default_member_permissions: int = 0
    required_permissions: int = 0
    required_bot_permissions: int = 0
    owners_only: bool = False
    guild_only: bool = False
    dm_only: bool = False
    nsfw_only: bool = False
    on_error: Callable[[Any], Awaitable[None]] | None = None
    checks: list[Callable[[Any], Awaitable[bool]]] = field(default_factory=list)
    parameters: list[CommandParameter] = field(default_factory=list)
    custom_data: Any = None
    aliases: tuple[str, ...] = ()
    invoke_on_edit: bool = False
    track_deletion: bool = False
    broadcast_typing: bool = False
    context_menu_name: str | None = None
    ephemeral: bool = False

    def __post_init__(self) -> None:
        if not self.qualified_name:
            self.qualified_name = self.name
        if not self.identifying_name:
            self.identifying_name = self.name

    def _base_builder(self) -> dict[str, Any]:
        builder: dict[str, Any] = {
            "name": self.name,
            "description": self.description or "A slash command",
        }
        _add_localizations(builder, "name_localizations", self.name_localizations)
        _add_localizations(
            builder, "description_localizations", self.description_localizations
        )
        return builder

    def _parameter_options(self) -> list[dict[str, Any]] | None:
        options = []
        for param in self.parameters:
            option = param.create_as_slash_command_option()
            # A slash-incompatible parameter makes the whole command unregistrable.
            if option is None:
                return None
            options.append(option)
        return options

    def _subcommand_options(self) -> list[dict[str, Any]]:
        return [
            option
            for option in (sub.create_as_subcommand() for sub in self.subcommands)
            if option is not None
        ]

    def create_as_subcommand(self) -> dict[str, Any] | None:
        """Return this command as a subcommand option, or ``None`` if it is not a slash command."""
        if self.slash_action is None:
            return None
        builder = self._base_builder()
        if not self.subcommands:
            builder["type"] = OptionType.SUB_COMMAND
            options = self._parameter_options()
            if options is None:
                return None
        else:
            builder["type"] = OptionType.SUB_COMMAND_GROUP
            options = self._subcommand_options()
        builder["options"] = options
        return builder

    def create_as_slash_command(self) -> dict[str, Any] | None:
        """Return the slash command registration payload, or ``None`` if not a slash command."""
        if self.slash_action is None:
            return None
        builder = self._base_builder()
        # An empty permission set would mean "administrators only".
        if self.default_member_permissions:
            builder["default_member_permissions"] = str(self.default_member_permissions)
        if self.guild_only:
            builder["dm_permission"] = False
        if not self.subcommands:
            options = self._parameter_options()
            if options is None:
                return None
        else:
            options = self._subcommand_options()
        builder["options"] = options
        return builder

    def create_as_context_menu_command(self) -> dict[str, Any] | None:
        """Return the context menu registration payload, or ``None`` if there is no such action."""
        if self.context_menu_action is None:
            return None
        builder: dict[str, Any] = {
            "name": self.context_menu_name or self.name,
            "type": int(self.context_menu_action.kind),
        }
        if self.guild_only:
            builder["dm_permission"] = False
        return builder