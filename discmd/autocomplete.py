"""Autocomplete choices shown to users while typing a slash command argument."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class AutocompleteChoice(Generic[T]):
    """A single autocomplete suggestion: a display name and the value sent back."""

    name: str
    value: T

    @classmethod
    def from_value(cls, value: T) -> AutocompleteChoice[T]:
        """Build a choice whose display name is the value's text form."""
        name = ("true" if value else "false") if isinstance(value, bool) else str(value)
        return cls(name=name, value=value)