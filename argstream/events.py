"""
Argstream events: the values a classifier yields, one per logical argument.

Variants
- Key(name): a registered switch matched exactly.
- KeyWithValue(name, value): a registered value option and its value.
- Command(name): a registered subcommand in first positional slot.
- Other(value): an unmatched token that decodes as UTF-8.
- InvalidUtf8(value): an unmatched token that does not; the original bytes.
- Path(value): an Other-eligible token naming an existing filesystem entry
  (only with path probing enabled).

All variants are frozen dataclasses deriving from Argument; equality considers
the variant type and the payload, so Other("-h") never equals Key("-h").

Example:
    >>> match event:
    ...     case KeyWithValue("-j", value):
    ...         jobs = int(value)
    ...     case Other(value):
    ...         files.append(value)
"""
import pathlib
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Argument(ABC):
    """Base of every classification event."""

    @property
    @abstractmethod
    def raw(self):
        """The event as bytes, the way it appeared on the command line."""


@dataclass(frozen=True)
class Key(Argument):
    name: str

    @property
    def raw(self):
        return self.name.encode()


@dataclass(frozen=True)
class KeyWithValue(Argument):
    name: str
    value: str

    @property
    def raw(self):
        # the attached spelling; the value may have come from a separate token
        return ("%s=%s" % (self.name, self.value)).encode()


@dataclass(frozen=True)
class Command(Argument):
    name: str

    @property
    def raw(self):
        return self.name.encode()


@dataclass(frozen=True)
class Other(Argument):
    value: str

    @property
    def raw(self):
        return self.value.encode()


@dataclass(frozen=True)
class InvalidUtf8(Argument):
    value: bytes

    @property
    def raw(self):
        return self.value


@dataclass(frozen=True)
class Path(Argument):
    value: str

    @property
    def raw(self):
        return self.value.encode()

    @property
    def path(self):
        return pathlib.Path(self.value)


__all__ = (
    "Argument",
    "Key",
    "KeyWithValue",
    "Command",
    "Other",
    "InvalidUtf8",
    "Path",
)
