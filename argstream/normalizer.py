"""
Argstream normalizer: pure functions turning one token into a registry match.

Nothing here keeps state or performs I/O; the classifier drives these helpers
and owns every cross-token decision (lookahead, end-of-options, commands).

Rule priority (first match wins, see resolve())
1. SWITCH     the whole token is a registered switch
2. OPTION     the whole token is a registered value option (value = next token)
3. ATTACHED   "-k=value" / "--key=value" where the prefix is a value option
4. GLUED      "-kvalue" where "-k" is a registered short value option
5. POSITIONAL nothing matched (resolve() returns None)

Rules 3 and 4 only apply to tokens starting with '-'.
"""
from enum import IntEnum
from typing import NamedTuple

from .keywords import KeyKind, KeyForm

END_OF_OPTIONS = "--"


class Rule(IntEnum):
    SWITCH = 1
    OPTION = 2
    ATTACHED = 3
    GLUED = 4
    POSITIONAL = 5


class Resolution(NamedTuple):
    keyword: object
    value: str | None
    rule: Rule


def decode(raw, /):
    """
    Decode a raw token as strict UTF-8.

    Returns the text, or None when the bytes are not valid UTF-8.
    """
    if not isinstance(raw, bytes | bytearray | memoryview):
        raise TypeError("decode() argument must be a bytes-like object")
    try:
        return bytes(raw).decode("utf-8")
    except UnicodeDecodeError:
        return None


def split_attached(text, /):
    """
    Split "-k=value" at the first '='.

    Returns (prefix, value) with a possibly empty value, or None when the token
    does not start with '-' or has no '='.
    """
    if not text.startswith("-"):
        return None
    prefix, separator, value = text.partition("=")
    if not separator:
        return None
    return prefix, value


def split_glued(text, /):
    """
    Split "-kvalue" after the short key.

    Returns ("-k", "value"), or None when the token is not a single-dash token
    with at least one character after the key.
    """
    if len(text) < 3 or text[0] != "-" or text[1] == "-":
        return None
    return text[:2], text[2:]


def resolve(text, registry, /):
    """
    Apply rules 1 to 4 to a decoded token.

    Returns a Resolution, or None for a positional token (rule 5). For rule 2
    the value is None: the caller supplies the following raw token.
    """
    if (keyword := registry.lookup(text, KeyKind.SWITCH)) is not None:
        return Resolution(keyword, None, Rule.SWITCH)
    if (keyword := registry.lookup(text, KeyKind.OPTION)) is not None:
        return Resolution(keyword, None, Rule.OPTION)

    if (parts := split_attached(text)) is not None:
        prefix, value = parts
        # a switch carrying "=value" is malformed usage and falls through
        if (keyword := registry.lookup(prefix, KeyKind.OPTION)) is not None:
            return Resolution(keyword, value, Rule.ATTACHED)

    if (parts := split_glued(text)) is not None:
        prefix, value = parts
        keyword = registry.lookup(prefix, KeyKind.OPTION)
        if keyword is not None and keyword.form is KeyForm.SHORT:
            return Resolution(keyword, value, Rule.GLUED)

    return None


__all__ = (
    "END_OF_OPTIONS",
    "Rule",
    "Resolution",
    "decode",
    "split_attached",
    "split_glued",
    "resolve",
)
