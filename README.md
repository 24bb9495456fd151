# discmd

Building blocks for chat bot command frameworks. Commands, the contexts they
run in and the errors they raise are plain Python objects. The package can:

- turn command definitions into the payloads that register slash commands and
  context-menu commands;
- parse the arguments a slash command receives;
- keep track of edited and deleted invocation messages, so that bot responses
  can follow those edits and deletions.

## Installation

```
pip install discmd
```

The package has no runtime dependencies. It needs Python 3.10 or newer.

## Modules

### `discmd.messages`

Dataclasses for `User`, `Attachment`, `Message` and `MessageUpdateEvent`.

- `update_message(message, update)` applies the fields of a partial update to a
  message in place.
- `Message.last_update()` returns the edit time if the message was edited, and
  its creation time otherwise.

### `discmd.edit_tracker`

`EditTracker` caches invocation messages together with their bot responses.
Create one with `EditTracker.for_timespan(duration)`. The duration is a
`timedelta` or a number of seconds.

- `track_command(user_msg, track_deletion)` records that a command is running
  for a message.
- `set_bot_response(user_msg, bot_response, track_deletion)` associates a
  response with a message. It replaces any response stored earlier.
- `process_message_update(update, ignore_edits_if_not_yet_responded)` returns
  `(message, was_tracked)`, or `None` when the command should not re-run. A
  command does not re-run when the update leaves the content untouched, or when
  the edit is ignored because no response exists yet.
- `process_message_delete(message_id)` forgets the invocation. It returns the bot
  response if deletion tracking was requested for that invocation.
- `find_bot_response(message_id)` looks up a cached response.
- `purge()` drops entries whose last update is older than the timespan. Entries
  are never dropped on their own: call `purge()` yourself.

### `discmd.slash_args`

These functions read typed values from received slash options
(`CommandDataOption`).

- `extract_slash_argument(target, value, attachments=None)` converts one raw
  value. It supports:
  - `bool`, `int`, `float`, `str` and `Attachment`;
  - classes that provide `extract_slash(value, attachments)`;
  - any other callable that parses a string.
- `parse_slash_args(args, spec, attachments=None)` extracts several named
  parameters at once. Each entry of `spec` is `(name, type)`. The type decides
  how a missing argument is treated:
  - a plain type is required;
  - `T | None` is optional;
  - `list[T]` gives zero or one values;
  - `FLAG` is a boolean that defaults to `False`.
- `create_slash_argument(target)` returns the option type and bounds for a
  target type, as an `OptionType` entry in a dict. For `int` the bounds are
  ±9007199254740991.
- `slash_argument_choices(target)` returns the choices that a type lists through
  `slash_choices()`.
- `into_async_iter(value)` turns an iterable or an async iterable into an async
  iterator.

Failures raise `CommandStructureMismatch` or `SlashArgParseError`. Both are
subclasses of `SlashArgError`.

### `discmd.autocomplete`

`AutocompleteChoice(name, value)` is a single autocomplete suggestion.
`AutocompleteChoice.from_value(value)` builds one that uses the value's text as
its name.

### `discmd.slash`

- `Interaction` is an application command interaction or an autocomplete
  interaction; `InteractionKind` tells which.
- `ApplicationContext` is the context of an application command invocation.
  `defer_response(ephemeral)` acknowledges the interaction once. It calls
  `client.create_interaction_response(interaction, response)` on the client you
  supply.
- `ContextMenuCommandAction.for_parameter(User or Message, callback)` wraps a
  context-menu callback. The kind it gets is a `ContextMenuKind`.
- `CommandParameter` and `CommandParameterChoice` describe slash parameters.
  `create_as_slash_command_option()` builds the option payload.

### `discmd.command`

`Command` holds a single command and its metadata:

- name, description and localizations;
- parameters and subcommands;
- permissions, plus flags such as `guild_only`;
- its prefix, slash and context-menu actions.

It builds registration payloads with `create_as_slash_command()`,
`create_as_subcommand()` and `create_as_context_menu_command()`. Each of these
returns `None` when the command has no matching action. The first two also
return `None` when one of the parameters has no type.

### `discmd.prefix`

- `Prefix.literal(text)` and `Prefix.regex(pattern)` define prefixes.
  `prefix.strip(content)` returns `(matched_prefix, rest)`, or `None` when the
  content does not start with the prefix.
- `PrefixContext` is the context of a prefix command invocation.
- `MessageDispatchTrigger` tells what caused a prefix command to run.
- `PrefixFrameworkOptions` holds the options specific to prefix commands.

### `discmd.options`

`FrameworkOptions` is the framework configuration. Its defaults are:

- the error handler logs errors;
- the hooks do nothing;
- `AllowedMentions` lets replies ping users only.

### `discmd.context`

`Context` wraps an `ApplicationContext` or a `PrefixContext` and gives both the
same accessors:

- author, channel ID, guild ID, locale, prefix and invoked command name;
- `id()`, which stays unique across edits;
- `invocation_string()`;
- invocation data, through `set_invocation_data(data)` and
  `invocation_data(kind)`;
- `defer()` and `defer_ephemeral()`;
- `rerun()`, which runs the command action again without any checks.

`PartialContext.from_context(ctx)` keeps only the fields that are known before a
command is chosen.

### `discmd.errors`

`FrameworkError` is the base of the error hierarchy. Its subclasses are
`CommandError`, `ArgumentParseError`, `CooldownHit`, `MissingBotPermissions`,
`UnknownCommand` and the others in the module. `error.ctx()` returns the
command context, if the error has one. `await error.handle(options)` passes the
error to the command's `on_error`, or to `options.on_error` when the command has
none.

## Example

```python
from datetime import timedelta

from discmd.edit_tracker import EditTracker
from discmd.messages import Message, MessageUpdateEvent

tracker = EditTracker.for_timespan(timedelta(minutes=5))

invocation = Message(id=1, channel_id=10, content="~ping")
tracker.track_command(invocation, track_deletion=True)

result = tracker.process_message_update(
    MessageUpdateEvent(id=1, channel_id=10, content="~ping again"),
    ignore_edits_if_not_yet_responded=False,
)
if result is not None:
    message, was_tracked = result
    print(message.content, was_tracked)  # ~ping again True
```

## What the package does not do

The package does not do any of the following:

- connect to a chat service, or contain an HTTP or gateway client;
- read incoming messages or interactions and dispatch them to commands;
- enforce cooldowns, permissions, owner checks or command checks;
- send replies;
- provide ready-made commands such as a help command.

You supply the client objects yourself. The dispatch logic is up to the code
that uses these building blocks.

## Running the tests

```
pip install -e ".[test]"
pytest
```