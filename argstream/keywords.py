r"""
Argstream keywords: validated descriptors of recognized switches, value options
and subcommands.

Overview
- KeyKind: what a keyword does once matched.
  • SWITCH: presence-only key (e.g., -v, --verbose), classified as Key(name).
  • OPTION: value-bearing key (e.g., -j, --threads), classified as KeyWithValue(name, value).
  • COMMAND: subcommand word (e.g., build), classified as Command(name).
- KeyForm: the literal's shape (SHORT "-x", LONG "--name", WORD "name").
- KeyWord: immutable descriptor; equality and hashing only consider the literal
  text, so a registry can never hold the same literal twice regardless of kind.

Factories
- key(text): a switch.
- key_with_value(text): a value option.
- command(text): a subcommand.

Validation (checked on construction, InvalidKeyError otherwise)
- Short keys: exactly one dash and one ASCII alphanumeric character:  r"-[A-Za-z0-9]"
- Long keys: two dashes, an ASCII alphanumeric character, then ASCII alphanumerics
  or hyphens:  r"--[A-Za-z0-9][A-Za-z0-9-]*"
- Commands: an ASCII alphanumeric character, then ASCII alphanumerics, hyphens
  or underscores:  r"[A-Za-z0-9][A-Za-z0-9_-]*"
- Consequently no keyword may be empty, a bare "-"/"--", or contain "=",
  whitespace, control or non-ASCII characters.

Quick example:
    >>> from argstream.keywords import key, key_with_value
    >>> key("--help").kind
    <KeyKind.SWITCH: 'switch'>
    >>> key_with_value("-j").form
    <KeyForm.SHORT: 'short'>
"""
import re
from enum import Enum

from .faults import InvalidKeyError, FaultCode, getdoc
from .utils import *


class KeyKind(Enum):
    SWITCH = "switch"
    OPTION = "option"
    COMMAND = "command"


class KeyForm(Enum):
    SHORT = "short"
    LONG = "long"
    WORD = "word"


_SHORT = re.compile(r"-[A-Za-z0-9]")
_LONG = re.compile(r"--[A-Za-z0-9][A-Za-z0-9-]*")
_WORD = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")


def _sanitize_text(kind, text, /):
    """
    Internal: validate a keyword literal for the given kind and detect its form.

    Returns
    - KeyForm of the literal.

    Raises
    - TypeError: when text is not a string or kind is not a KeyKind.
    - InvalidKeyError: when the literal violates the shape constraints. The
      hint is tailored to the most common mistakes (empty, '=value' attached,
      whitespace, wrong dash count).
    """
    if not isinstance(kind, KeyKind):
        raise TypeError("keyword 'kind' must be a KeyKind")
    if not isinstance(text, str):
        raise TypeError("keyword text must be a string")

    if kind is KeyKind.COMMAND:
        if _WORD.fullmatch(text):
            return KeyForm.WORD
        hint = "commands start with an ascii letter or digit, followed by letters, digits, '-' or '_'"
    else:
        if _SHORT.fullmatch(text):
            return KeyForm.SHORT
        if _LONG.fullmatch(text):
            return KeyForm.LONG
        if not text.startswith("-"):
            hint = "keys start with '-' (short, e.g. -v) or '--' (long, e.g. --verbose)"
        elif "=" in text:
            hint = "declare the key alone (e.g. %s); values are attached by the user at run time" % text.partition("=")[0]
        elif text.startswith("-") and not text.startswith("--") and len(text) > 2:
            hint = "short keys are a single dash and a single letter or digit (did you mean -%s?)" % text
        else:
            hint = "long keys are '--' followed by ascii letters, digits and '-' (e.g. --dry-run)"

    if not text:
        message = "empty %s literal" % kind.value
    elif text.isspace() or any(char.isspace() for char in text):
        message = "%s %r cannot contain whitespace" % (kind.value, text)
    else:
        message = "invalid %s %r" % (kind.value, text)

    raise InvalidKeyError(
        message,
        title="invalid key",
        code=FaultCode.INVALID_KEY,
        hint=hint,
        input=text,
        kind=kind,
        docs=getdoc(FaultCode.INVALID_KEY),
    )


class KeyWord(StorageGuard):
    """
    Immutable descriptor of one recognized keyword.

    A KeyWord is validated on construction (see module docs) and cannot be
    modified afterwards: its public attributes are read-only views over
    write-once backing storage.

    Attributes
    - text: the literal exactly as the user must type it (e.g., "--threads").
    - kind: KeyKind.SWITCH | KeyKind.OPTION | KeyKind.COMMAND.
    - form: KeyForm.SHORT | KeyForm.LONG | KeyForm.WORD.
    - expects_value: True for value options only.

    Equality
    - Two keywords are equal when their literal text is equal; the kind is
      deliberately ignored so that "--help" as a switch and "--help" as an
      option collide inside a registry.
    """

    __sealed__ = True

    __introspectable__ = (
        "text",
        "kind",
        "form",
    )

    text = view("text")
    kind = view("kind")
    form = view("form")

    def __new__(cls, text, /, kind=KeyKind.SWITCH):
        form = _sanitize_text(kind, text)
        with super().__new__(cls) as self:
            setattr(self, "-text", text)
            setattr(self, "-kind", kind)
            setattr(self, "-form", form)
        return self

    @property
    def expects_value(self):
        return self.kind is KeyKind.OPTION

    def __delattr__(self, name, /):
        raise AttributeError("key-word attributes are read-only")

    def __eq__(self, other, /):
        if not isinstance(other, KeyWord):
            return NotImplemented
        return self.text == other.text

    def __hash__(self):
        return hash(self.text)

    def __str__(self):
        return self.text

    def __repr__(self):
        return "key-word(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __init_subclass__(cls, **options):
        raise TypeError(f"type {KeyWord.__name__!r} is not an acceptable base type")


def key(text, /):
    """
    Build a switch (presence-only) keyword.

    Raises InvalidKeyError when text is not a valid short or long key.
    """
    return KeyWord(text, KeyKind.SWITCH)


def key_with_value(text, /):
    """
    Build a value option keyword; its value comes from '=', gluing (short form)
    or the following token.

    Raises InvalidKeyError when text is not a valid short or long key.
    """
    return KeyWord(text, KeyKind.OPTION)


def command(text, /):
    """
    Build a subcommand keyword.

    Raises InvalidKeyError when text is not a valid command word.
    """
    return KeyWord(text, KeyKind.COMMAND)


__all__ = (
    # Types
    "KeyKind",
    "KeyForm",
    "KeyWord",

    # Factories
    "key",
    "key_with_value",
    "command",
)
