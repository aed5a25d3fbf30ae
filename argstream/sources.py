"""
Argstream sources: producers of raw tokens (bytes), one per argument.

A source is any iterator of bytes; the classifier pulls from it one token at a
time and calls its close() method (when it has one) on close(). The helpers
below cover the three usual origins:

- from_argv(): the live process arguments, restored to their original bytes.
- from_list(): an in-memory list, or a single shell-like string.
- from_file(): one token per non-blank line of a file ("-" means stdin),
  read incrementally.
"""
import logging
import os
import shlex
import sys

from .utils import Unset

logger = logging.getLogger(__name__)


def encode(token, /):
    """
    Return the raw bytes of a token.

    Strings are encoded with os.fsencode, which restores the exact bytes the
    interpreter received for process arguments. Strings holding surrogates that
    fsencode rejects are encoded with "surrogatepass" so they surface as
    invalid UTF-8 instead of failing.
    """
    if isinstance(token, bytes):
        return token
    if isinstance(token, bytearray | memoryview):
        return bytes(token)
    if not isinstance(token, str):
        raise TypeError("tokens must be str or bytes, not %s" % type(token).__name__)
    try:
        return os.fsencode(token)
    except UnicodeEncodeError:
        return token.encode("utf-8", "surrogatepass")


def from_argv(argv=Unset, /):
    """Raw tokens of sys.argv[1:] (or of the given argument list)."""
    if argv is Unset:
        argv = sys.argv[1:]
    return iter(tuple(map(encode, argv)))


def from_list(tokens, /):
    """
    Raw tokens of an in-memory list of str/bytes items.

    A single string is split with shlex.split first:
        from_list("-j 4 'two words'") -> b"-j", b"4", b"two words"
    """
    if isinstance(tokens, str):
        tokens = shlex.split(tokens)
    elif isinstance(tokens, bytes | bytearray):
        raise TypeError("from_list() argument must be a string or a list of tokens, not bytes")
    return iter(tuple(map(encode, tokens)))


class LineSource:
    """
    Incremental token reader over a binary stream, one token per line.

    Closing it closes the stream unless the stream is borrowed (stdin).
    """

    __slots__ = ("_stream", "_name", "_owned", "_count")

    def __init__(self, stream, name, /, owned=True):
        self._stream = stream
        self._name = name
        self._owned = owned
        self._count = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._stream is None:
            raise StopIteration
        for line in self._stream:
            if token := line.strip():
                self._count += 1
                return token
        self.close()
        raise StopIteration

    def __repr__(self):
        return "line-source(%s)" % self._name

    def close(self):
        if self._stream is None:
            return
        logger.debug("read %d token(s) from %s", self._count, self._name)
        if self._owned:
            self._stream.close()
        self._stream = None


def from_file(path, /):
    """
    Raw tokens of a file, one per line.

    Lines are stripped of surrounding ASCII whitespace and blank lines are
    skipped. "-" reads standard input, which is never closed. The file is
    opened immediately (OSError surfaces here) and read lazily.
    """
    if isinstance(path, str) and path == "-":
        return LineSource(sys.stdin.buffer, "<stdin>", owned=False)
    if not isinstance(path, str | bytes | os.PathLike):
        raise TypeError("from_file() argument must be a path")
    return LineSource(open(path, "rb"), os.fsdecode(path))


__all__ = (
    "LineSource",
    "encode",
    "from_argv",
    "from_list",
    "from_file",
)
