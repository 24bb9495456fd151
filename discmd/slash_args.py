"""Extraction of typed values from the raw arguments of a slash command invocation."""

from __future__ import annotations

import enum
import types
from collections.abc import AsyncIterator, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

from .messages import Attachment

# Largest integer that survives a round trip through a JSON double.
_MAX_SAFE_INTEGER = 9007199254740991
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

FLAG = object()
"""Parameter spec marker for a boolean flag that defaults to ``False`` when absent."""


class SlashArgError(Exception):
    """Base class for failures while reading slash command arguments."""


class CommandStructureMismatch(SlashArgError):
    """An argument had an unexpected shape, usually because command registration is stale."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Bot author did not register their commands correctly ({self.detail})"


class SlashArgParseError(SlashArgError):
    """A string argument was received but could not be parsed into the target type."""

    def __init__(self, error: BaseException, input: str) -> None:
        super().__init__(error, input)
        self.error = error
        self.input = input
        self.__cause__ = error

    def __str__(self) -> str:
        return f"Failed to parse `{self.input}` as argument: {self.error}"


class OptionType(enum.IntEnum):
    """Kinds of application command options."""

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


@dataclass
class CommandDataOption:
    """One received argument: its name and its raw JSON value, if any."""

    name: str
    value: Any = None


def _has_protocol(target: Any) -> bool:
    return callable(getattr(target, "extract_slash", None))


def extract_slash_argument(
    target: Any, value: Any, attachments: Mapping[int, Attachment] | None = None
) -> Any:
    """Convert a raw JSON argument value into an instance of ``target``.

    Supported targets are ``bool``, ``int``, ``float``, ``str``, :class:`Attachment`,
    classes providing ``extract_slash(value, attachments)``, and any other callable
    that parses a string.
    """
    if _has_protocol(target):
        return target.extract_slash(value, attachments)
    if target is bool:
        if not isinstance(value, bool):
            raise CommandStructureMismatch("expected bool")
        return value
    if target is int:
        if isinstance(value, bool) or not isinstance(value, int) or not (
            _I64_MIN <= value <= _I64_MAX
        ):
            raise CommandStructureMismatch("expected integer")
        return value
    if target is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CommandStructureMismatch("expected float")
        return float(value)
    if target is Attachment:
        return _extract_attachment(value, attachments)
    if not isinstance(value, str):
        raise CommandStructureMismatch("expected string")
    if target is str:
        return value
    try:
        return target(value)
    except Exception as error:
        raise SlashArgParseError(error, value) from error


def _extract_attachment(
    value: Any, attachments: Mapping[int, Attachment] | None
) -> Attachment:
    if not isinstance(value, str):
        raise CommandStructureMismatch("expected attachment id")
    try:
        attachment_id = int(value)
    except ValueError:
        raise CommandStructureMismatch("improper attachment id passed") from None
    if attachment_id < 0:
        raise CommandStructureMismatch("improper attachment id passed")
    attachment = (attachments or {}).get(attachment_id)
    if attachment is None:
        raise CommandStructureMismatch("attachment id with no attachment")
    return attachment


def create_slash_argument(target: Any) -> dict[str, Any]:
    """Return the option settings (type and bounds) describing ``target``."""
    creator = getattr(target, "create_slash", None)
    if callable(creator):
        return dict(creator())
    if target is bool:
        return {"type": OptionType.BOOLEAN}
    if target is int:
        return {
            "type": OptionType.INTEGER,
            "min_value": max(_I64_MIN, -_MAX_SAFE_INTEGER),
            "max_value": min(_I64_MAX, _MAX_SAFE_INTEGER),
        }
    if target is float:
        return {"type": OptionType.NUMBER}
    if target is Attachment:
        return {"type": OptionType.ATTACHMENT}
    return {"type": OptionType.STRING}


def slash_argument_choices(target: Any) -> list[Any]:
    """Return the fixed choices of a choice parameter type, or an empty list."""
    choices = getattr(target, "slash_choices", None)
    if callable(choices):
        return list(choices())
    return []


def _split_spec(spec: Any) -> tuple[str, Any]:
    if spec is FLAG:
        return "flag", bool
    origin = get_origin(spec)
    if origin in (Union, types.UnionType):
        inner = [arg for arg in get_args(spec) if arg is not type(None)]
        if len(inner) == 1 and len(inner) < len(get_args(spec)):
            return "optional", inner[0]
    if origin is list:
        (inner,) = get_args(spec) or (str,)
        return "list", inner
    return "required", spec


def parse_slash_args(
    args: Sequence[CommandDataOption],
    spec: Iterable[tuple[str, Any]],
    attachments: Mapping[int, Attachment] | None = None,
) -> tuple[Any, ...]:
    """Extract the named parameters in ``spec`` from ``args``.

    Each spec entry is ``(name, type)``, where the type may be a plain target
    (required), ``T | None`` (optional), ``list[T]`` (zero or one values) or
    :data:`FLAG` (a boolean defaulting to ``False``).
    """
    results = []
    for name, type_spec in spec:
        mode, target = _split_spec(type_spec)
        arg = next((option for option in args if option.name == name), None)
        if arg is None:
            value = None
        else:
            if arg.value is None:
                raise CommandStructureMismatch("expected argument value")
            value = extract_slash_argument(target, arg.value, attachments)

        if mode == "optional":
            results.append(value)
        elif mode == "list":
            results.append([] if arg is None else [value])
        elif mode == "flag":
            results.append(False if arg is None else value)
        else:
            if arg is None:
                raise CommandStructureMismatch("a required argument is missing")
            results.append(value)
    return tuple(results)


async def _iterate(items: Iterable[Any]) -> AsyncIterator[Any]:
    for item in items:
        yield item


def into_async_iter(value: Any) -> AsyncIterator[Any]:
    """Return ``value`` as an async iterator, whether it is async-iterable or a plain iterable."""
    if hasattr(value, "__aiter__"):
        return value.__aiter__()
    if isinstance(value, Iterable):
        return _iterate(value)
    raise TypeError(f"cannot iterate over {type(value).__name__!r}")