from datetime import timedelta

import pytest

from discmd.command import Command
from discmd.context import Context, PartialContext
from discmd.errors import (
    ArgumentParseError,
    CommandCheckFailed,
    CommandError,
    CommandPanic,
    CommandStructureMismatchError,
    CooldownHit,
    DmOnly,
    DynamicPrefixError,
    EventHandlerError,
    FrameworkError,
    GuildOnly,
    MissingBotPermissions,
    MissingUserPermissions,
    NotAnOwner,
    NsfwOnly,
    SetupError,
    UnknownCommand,
    UnknownInteraction,
)
from discmd.messages import Message, User
from discmd.options import FrameworkOptions
from discmd.prefix import MessageDispatchTrigger, PrefixContext
from discmd.slash import ApplicationContext, Interaction


def _prefix_ctx(command=None, content="!ping"):
    command = command or Command("ping")
    inner = PrefixContext(
        client=None,
        msg=Message(id=10, channel_id=20, content=content, author=User(id=3)),
        prefix="!",
        invoked_command_name=command.name,
        args="",
        command=command,
    )
    return Context(inner)


def _app_inner(command=None):
    command = command or Command("ping")
    interaction = Interaction(id=1, channel_id=2, user=User(id=3), name=command.name)
    return ApplicationContext(client=None, interaction=interaction, command=command)


class _Recorder:
    def __init__(self):
        self.seen = []

    async def __call__(self, error):
        self.seen.append(error)


def test_command_error_message_and_cause():
    cause = ValueError("boom")
    err = CommandError(error=cause, context=_prefix_ctx())
    assert str(err) == "error in command `!ping`"
    assert err.__cause__ is cause


def test_application_prefix_is_slash():
    err = NotAnOwner(context=Context(_app_inner()))
    assert str(err) == "owner-only command `/ping` cannot be run by non-owners"


def test_qualified_name_used():
    cmd = Command("sub", qualified_name="parent sub")
    err = GuildOnly(context=_prefix_ctx(cmd))
    assert str(err) == "guild-only command `!parent sub` cannot run in DMs"


@pytest.mark.parametrize(
    "cls, text",
    [
        (DmOnly, "DM-only command `!ping` cannot run in guilds"),
        (NsfwOnly, "nsfw-only command `!ping` cannot run in non-nsfw channels"),
        (
            CommandCheckFailed,
            "pre-command check for command `!ping` either denied access or errored",
        ),
    ],
)
def test_context_only_messages(cls, text):
    assert str(cls(context=_prefix_ctx())) == text


def test_panic_message():
    err = CommandPanic(payload="oops", context=_prefix_ctx())
    assert str(err) == "panic in command `!ping`"
    assert err.payload == "oops"


def test_argument_parse_message_includes_input():
    err = ArgumentParseError(error=ValueError("x"), context=_prefix_ctx(), input="abc")
    text = str(err)
    assert text.startswith("failed to parse argument in command `!ping` on input ")
    assert '"abc"' in text


def test_argument_parse_without_input():
    err = ArgumentParseError(error=ValueError("x"), context=_prefix_ctx())
    assert str(err).endswith("on input None")


def test_structure_mismatch_wraps_application_context():
    inner = _app_inner()
    err = CommandStructureMismatchError(description="expected string", context=inner)
    assert err.ctx().inner is inner
    assert str(err) == (
        "unexpected application command structure in command `/ping`: expected string"
    )


def test_cooldown_message():
    err = CooldownHit(remaining_cooldown=timedelta(seconds=5), context=_prefix_ctx())
    assert str(err) == "cooldown hit in command `!ping` (5s remaining)"


def test_missing_permissions_messages():
    bot = MissingBotPermissions(missing_permissions=8, context=_prefix_ctx())
    assert "missing permisions (8)" in str(bot)
    user = MissingUserPermissions(context=_prefix_ctx())
    assert "(None)" in str(user)
    assert str(user).endswith("to execute command `!ping`")


def test_unknown_command_and_interaction():
    msg = Message(content="!nope")
    err = UnknownCommand(
        client=None,
        msg=msg,
        prefix="!",
        msg_content="nope",
        framework=None,
        invocation_data=None,
        trigger=MessageDispatchTrigger.MESSAGE_CREATE,
    )
    assert str(err) == "unknown command `nope`"
    assert err.ctx() is None
    inter = UnknownInteraction(
        client=None,
        framework=None,
        interaction=Interaction(id=1, channel_id=2, user=User(), name="ghost"),
    )
    assert str(inter) == "unknown interaction `ghost`"
    assert inter.ctx() is None


def test_dynamic_prefix_has_no_context():
    ctx = _prefix_ctx()
    err = DynamicPrefixError(
        error=RuntimeError("bad"),
        context=PartialContext.from_context(ctx),
        msg=Message(content="hello"),
    )
    assert err.ctx() is None
    assert str(err) == 'dynamic prefix callback errored on message "hello"'
    assert isinstance(err.__cause__, RuntimeError)


def test_setup_and_event_handler():
    cause = KeyError("k")
    setup = SetupError(error=cause, framework=None, data_about_bot=None, client=None)
    assert setup.ctx() is None
    assert setup.__cause__ is cause

    class Event:
        name = "message"

    handler = EventHandlerError(error=cause, client=None, event=Event(), framework=None)
    assert str(handler) == "error in message event event handler"


def test_check_failed_without_error_has_no_cause():
    err = CommandCheckFailed(context=_prefix_ctx())
    assert err.error is None
    assert err.__cause__ is None


def test_errors_can_be_raised():
    command = Command("ping")
    err = NotAnOwner(context=_prefix_ctx(command))
    assert err.ctx().command() is command
    with pytest.raises(FrameworkError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "owner-only command `!ping` cannot be run by non-owners"


@pytest.mark.asyncio
async def test_handle_uses_global_hook():
    recorder = _Recorder()
    options = FrameworkOptions(on_error=recorder)
    err = CommandError(error=ValueError(), context=_prefix_ctx())
    await err.handle(options)
    assert recorder.seen == [err]


@pytest.mark.asyncio
async def test_handle_prefers_command_hook():
    global_hook = _Recorder()
    command_hook = _Recorder()
    cmd = Command("ping", on_error=command_hook)
    err = GuildOnly(context=_prefix_ctx(cmd))
    await err.handle(FrameworkOptions(on_error=global_hook))
    assert command_hook.seen == [err]
    assert global_hook.seen == []


@pytest.mark.asyncio
async def test_handle_without_context_uses_global_hook():
    global_hook = _Recorder()
    err = SetupError(error=ValueError(), framework=None, data_about_bot=None, client=None)
    await err.handle(FrameworkOptions(on_error=global_hook))
    assert global_hook.seen == [err]