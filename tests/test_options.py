import logging

import pytest

from discmd.command import Command
from discmd.options import AllowedMentions, FrameworkOptions
from discmd.prefix import PrefixFrameworkOptions


def test_default_allowed_mentions_only_ping_users():
    options = FrameworkOptions()
    assert options.allowed_mentions == AllowedMentions(parse=["users"])
    assert options.allowed_mentions.roles == []


def test_default_flags():
    options = FrameworkOptions()
    assert options.commands == []
    assert options.command_check is None
    assert options.skip_checks_for_owners is False
    assert options.reply_callback is None
    assert options.manual_cooldowns is False
    assert options.require_cache_for_guild_check is False
    assert options.owners == set()


def test_default_prefix_options():
    options = FrameworkOptions()
    assert options.prefix_options == PrefixFrameworkOptions()


def test_mutable_defaults_are_not_shared():
    first = FrameworkOptions()
    second = FrameworkOptions()
    first.owners.add(1)
    first.commands.append(Command(name="ping"))
    first.allowed_mentions.users.append(5)
    first.prefix_options.prefix = "!"
    assert second.owners == set()
    assert second.commands == []
    assert second.allowed_mentions.users == []
    assert second.prefix_options.prefix is None


def test_commands_are_stored_in_order():
    ping = Command(name="ping")
    echo = Command(name="echo")
    options = FrameworkOptions(commands=[ping, echo])
    assert [command.name for command in options.commands] == ["ping", "echo"]


@pytest.mark.asyncio
async def test_default_on_error_logs_error(caplog):
    options = FrameworkOptions()
    with caplog.at_level(logging.ERROR, logger="discmd.options"):
        await options.on_error(RuntimeError("boom happened"))
    assert any("boom happened" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_default_hooks_do_nothing():
    options = FrameworkOptions()
    assert await options.pre_command(object()) is None
    assert await options.post_command(object()) is None
    assert await options.event_handler(None, object(), None, None) is None


@pytest.mark.asyncio
async def test_custom_hook_is_used():
    seen = []

    async def pre(ctx):
        seen.append(ctx)
        return len(seen)

    options = FrameworkOptions(pre_command=pre)
    assert options.pre_command is pre
    assert await options.pre_command("ctx") == 1
    assert seen == ["ctx"]