"""Framework-wide configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from .command import Command
from .prefix import PrefixFrameworkOptions

logger = logging.getLogger(__name__)


@dataclass
class AllowedMentions:
    """Which mentions in an outgoing message may actually ping someone."""

    parse: list[str] = field(default_factory=list)
    users: list[int] = field(default_factory=list)
    roles: list[int] = field(default_factory=list)
    replied_user: bool | None = None


def _user_pings_only() -> AllowedMentions:
    return AllowedMentions(parse=["users"])


async def _default_on_error(error: Any) -> None:
    logger.error("Unhandled framework error: %s", error)


async def _ignore_event(client: Any, event: Any, framework: Any, data: Any) -> None:
    return None


async def _no_hook(ctx: Any) -> None:
    return None


@dataclass
class FrameworkOptions:
    """Framework configuration: commands, hooks and defaults for replies."""

    commands: list[Command] = field(default_factory=list)
    on_error: Callable[[Any], Awaitable[None]] = _default_on_error
    pre_command: Callable[[Any], Awaitable[None]] = _no_hook
    post_command: Callable[[Any], Awaitable[None]] = _no_hook
    command_check: Callable[[Any], Awaitable[bool]] | None = None
    skip_checks_for_owners: bool = False
    allowed_mentions: AllowedMentions | None = field(default_factory=_user_pings_only)
    reply_callback: Callable[[Any, Any], None] | None = None
    manual_cooldowns: bool = False
    require_cache_for_guild_check: bool = False
    event_handler: Callable[[Any, Any, Any, Any], Awaitable[None]] = _ignore_event
    prefix_options: PrefixFrameworkOptions = field(default_factory=PrefixFrameworkOptions)
    owners: set[int] = field(default_factory=set)