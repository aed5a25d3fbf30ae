"""
Argstream classifier: the streaming iterator turning raw tokens into events.

Model
- A Classifier pulls raw tokens (bytes) from one or more sources, one at a
  time, and yields exactly one event per logical argument. Value options given
  as a separate token consume two raw tokens; the end-of-options marker "--"
  consumes one and yields nothing.
- The only cross-token state lives in ClassifierState: the end-of-options
  flag, a one-token lookahead, the open/closed subcommand slot, the count of
  consumed tokens (for position-first messages) and the finished flag.
- Single pass: once StopIteration (or MissingValueError) has been raised,
  every later next() raises StopIteration.

Classification of one token
- not valid UTF-8                → InvalidUtf8(raw bytes), before any rule
- "--" (first occurrence)        → consumed, end-of-options mode from now on
- end-of-options mode            → positional only (Other / Path / InvalidUtf8)
- otherwise                      → normalizer.resolve() rules 1 to 4, then positional
- positional, slot open          → Command(name) when it names a registered command
- positional, paths enabled      → Path(value) when the filesystem entry exists
- positional                     → Other(value)

Entry points
- args(registry, paths=...): over the live process arguments.
- classify(tokens, registry, paths=...): over an in-memory list or string.
- Classifier(source, registry, paths=...): over any iterable of raw tokens.

Quick example:
    >>> registry = Registry().with_switches(["-h", "--help"]).with_options(["-j"])
    >>> list(classify(["-h", "-j", "4", "extra"], registry))
    [Key(name='-h'), KeyWithValue(name='-j', value='4'), Other(value='extra')]
"""
import dataclasses
import logging
import os
from collections import deque
from dataclasses import dataclass

from .events import Key, KeyWithValue, Command, Other, InvalidUtf8, Path
from .faults import MissingValueError, FaultCode, getdoc
from .keywords import KeyKind, KeyForm
from .normalizer import END_OF_OPTIONS, Rule, decode, resolve
from .registry import Registry
from .sources import encode, from_argv, from_list
from .utils import Unset, coalesce, ordinal

logger = logging.getLogger(__name__)


@dataclass
class ClassifierState:
    end_of_options: bool = False
    lookahead: bytes | None = None
    expecting_command: bool = True
    index: int = 0
    finished: bool = False


class Classifier:
    """
    Lazy, single-pass iterator of classification events.

    parameters
    - source: any iterable of raw tokens (bytes; str items are encoded with
      os.fsencode).
    - registry: a Registry (frozen on adoption); an empty one when omitted.
    - paths: when true, positional tokens naming an existing filesystem entry
      become Path events instead of Other.

    extras
    - peek(): look at the next raw token without consuming it.
    - remainder(): take every remaining raw token unclassified.
    - extend(source): queue another source behind the current ones.
    - use(registry): swap the active registry (nested subcommand grammars).
    - close() / with-block: release the sources and the lookahead token.
    """

    __slots__ = ("_sources", "_registry", "_paths", "_state")

    def __init__(self, source, registry=Unset, /, *, paths=False):
        if isinstance(source, str | bytes):
            raise TypeError("Classifier() source must be an iterable of tokens, not a single token")
        if not isinstance(paths, bool):
            raise TypeError("Classifier() 'paths' must be a boolean")
        self._sources = deque([iter(source)])
        self._registry = _adopt(coalesce(registry, Registry()), "Classifier")
        self._paths = paths
        self._state = ClassifierState()

    def __repr__(self):
        return "classifier(registry=%r, paths=%r, index=%d)" % (self._registry, self._paths, self._state.index)

    @property
    def registry(self):
        return self._registry

    @property
    def paths(self):
        return self._paths

    @property
    def state(self):
        """A snapshot of the cross-token state."""
        return dataclasses.replace(self._state)

    # sources

    def _fetch(self):
        while self._sources:
            try:
                return encode(next(self._sources[0]))
            except StopIteration:
                _close(self._sources.popleft())
        return None

    def _pull(self):
        state = self._state
        if state.lookahead is not None:
            raw, state.lookahead = state.lookahead, None
        else:
            raw = self._fetch()
        if raw is not None:
            state.index += 1
        return raw

    def _finish(self):
        self._state.finished = True
        self._state.lookahead = None
        while self._sources:
            _close(self._sources.popleft())

    def peek(self):
        """Return the next raw token without consuming it, or None at the end."""
        state = self._state
        if state.finished:
            return None
        if state.lookahead is None:
            state.lookahead = self._fetch()
        return state.lookahead

    def remainder(self):
        """
        Consume every remaining raw token without classifying it.

        Returns a list of bytes (the lookahead token first, if any) and
        finishes the stream.
        """
        tokens = []
        if not self._state.finished:
            while (raw := self._pull()) is not None:
                tokens.append(raw)
        self._finish()
        logger.debug("remainder took %d raw token(s)", len(tokens))
        return tokens

    def extend(self, source, /):
        """
        Queue another source of raw tokens behind the current ones.

        Typical use is an argument list file:
            for event in classifier:
                match event:
                    case KeyWithValue("-l", path):
                        classifier.extend(from_file(path))
        """
        if isinstance(source, str | bytes):
            raise TypeError("extend() argument must be an iterable of tokens, not a single token")
        if self._state.finished:
            raise ValueError("cannot extend a finished classifier")
        self._sources.append(iter(source))
        return self

    def use(self, registry, /):
        """
        Make registry the active one from the next token on and re-arm
        subcommand recognition for the next positional token.
        """
        self._registry = _adopt(registry, "use")
        self._state.expecting_command = True
        logger.debug("registry swapped after token %d", self._state.index)
        return self

    def close(self):
        self._finish()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False

    # iteration

    def __iter__(self):
        return self

    def __next__(self):
        state = self._state
        while not state.finished:
            raw = self._pull()
            if raw is None:
                self._finish()
                break

            text = decode(raw)
            if text is None:
                return InvalidUtf8(raw)

            if state.end_of_options:
                return self._positional(text)

            if text == END_OF_OPTIONS:
                state.end_of_options = True
                logger.debug("end of options at token %d", state.index)
                continue

            resolution = resolve(text, self._registry)
            if resolution is None:
                return self._positional(text)

            keyword, value, rule = resolution
            logger.debug("%r at token %d matched %s by rule %d", text, state.index, keyword.text, rule)
            match rule:
                case Rule.SWITCH:
                    return Key(keyword.text)
                case Rule.OPTION:
                    return self._following(keyword)
                case _:
                    return KeyWithValue(keyword.text, value)

        raise StopIteration

    def _following(self, keyword):
        index = self._state.index
        raw = self._pull()
        if raw is None:
            self._finish()
            if keyword.form is KeyForm.SHORT:
                hint = "provide a value (e.g., %s <value>, %s=<value> or %s<value>)" % ((keyword.text,) * 3)
            else:
                hint = "provide a value (e.g., %s <value> or %s=<value>)" % ((keyword.text,) * 2)
            raise MissingValueError(
                "option %r at %s position requires a value" % (keyword.text, ordinal(index)),
                title="missing option value",
                code=FaultCode.MISSING_VALUE,
                hint=hint,
                input=keyword.text,
                index=index,
                docs=getdoc(FaultCode.MISSING_VALUE),
            )

        value = decode(raw)
        if value is None:
            return InvalidUtf8(keyword.text.encode() + b"=" + raw)
        return KeyWithValue(keyword.text, value)

    def _positional(self, text):
        state = self._state
        if state.expecting_command and not state.end_of_options:
            state.expecting_command = False
            if self._registry.lookup(text, KeyKind.COMMAND) is not None:
                logger.debug("command %r at token %d", text, state.index)
                return Command(text)
        if self._paths and text and os.path.exists(text):
            return Path(text)
        return Other(text)


def _adopt(registry, name, /):
    if not isinstance(registry, Registry):
        raise TypeError("%s() registry must be a Registry" % name)
    return registry.freeze()


def _close(source):
    if callable(close := getattr(source, "close", None)):
        close()


def args(registry=Unset, /, *, paths=False):
    """Classifier over the process arguments (sys.argv[1:])."""
    return Classifier(from_argv(), registry, paths=paths)


def classify(tokens, registry=Unset, /, *, paths=False):
    """Classifier over an in-memory token list, or a shell-like string."""
    return Classifier(from_list(tokens), registry, paths=paths)


__all__ = (
    "ClassifierState",
    "Classifier",
    "args",
    "classify",
)
