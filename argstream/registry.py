"""
Argstream registry: the insertion-ordered, duplicate-free set of keywords a
classifier recognizes.

Lifecycle
- Built incrementally by the caller through chainable with_* builders.
- Frozen (read-only) by the classifier as soon as it adopts the registry;
  any later addition raises FrozenRegistryError.

Atomicity
- Every builder validates its whole batch (shape, duplicates against the
  registry and within the batch, frozen state) before adding anything, so a
  failed call leaves the registry exactly as it was.

Quick example:
    >>> registry = Registry().with_switches(["-h", "--help"]).with_options(["-j"])
    >>> [keyword.text for keyword in registry.options]
    ['-j']
"""
import logging
from collections.abc import Mapping, Iterable

from .faults import DuplicateKeyError, FrozenRegistryError, FaultCode, getdoc
from .keywords import KeyWord, KeyKind, key, key_with_value, command

logger = logging.getLogger(__name__)


def _iterable(object, name, /):
    # a lone string would otherwise be iterated character by character
    if isinstance(object, str | bytes) or not isinstance(object, Iterable):
        raise TypeError("%s() argument must be an iterable of literals" % name)
    return object


class Registry(Mapping):
    """
    Ordered mapping literal text -> KeyWord.

    Views
    - switches / options / commands: tuples of KeyWords by kind, in insertion order.
    - frozen: whether further additions are rejected.

    Errors
    - InvalidKeyError: a literal failed KeyWord validation.
    - DuplicateKeyError: a literal is already registered (as any kind) or
      appears twice in the same batch.
    - FrozenRegistryError: the registry was frozen by a classifier.
    """

    __slots__ = ("_keywords", "_frozen")

    def __init__(self, *keywords):
        self._keywords = {}
        self._frozen = False
        if keywords:
            self.with_keywords(keywords)

    # Mapping protocol

    def __getitem__(self, text, /):
        return self._keywords[text]

    def __iter__(self):
        return iter(self._keywords)

    def __len__(self):
        return len(self._keywords)

    def __contains__(self, text, /):
        if isinstance(text, KeyWord):
            text = text.text
        return text in self._keywords

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._keywords))

    # views

    def _select(self, kind):
        return tuple(keyword for keyword in self._keywords.values() if keyword.kind is kind)

    @property
    def switches(self):
        return self._select(KeyKind.SWITCH)

    @property
    def options(self):
        return self._select(KeyKind.OPTION)

    @property
    def commands(self):
        return self._select(KeyKind.COMMAND)

    @property
    def frozen(self):
        return self._frozen

    def lookup(self, text, /, kind=None):
        """
        Return the KeyWord registered under text, or None.

        When kind is given, a keyword of any other kind counts as no match.
        """
        keyword = self._keywords.get(text)
        if keyword is None or (kind is not None and keyword.kind is not kind):
            return None
        return keyword

    def freeze(self):
        """Make the registry read-only; idempotent. Returns the registry."""
        if not self._frozen:
            logger.debug("registry frozen with %d keyword(s)", len(self._keywords))
        self._frozen = True
        return self

    # builders

    def _install(self, keywords):
        if self._frozen:
            raise FrozenRegistryError(
                "cannot add keywords to a frozen registry",
                title="frozen registry",
                code=FaultCode.FROZEN_REGISTRY,
                hint="build the registry completely before classification starts, or pass a fresh one to use()",
                input=", ".join(map(str, keywords)),
                docs=getdoc(FaultCode.FROZEN_REGISTRY),
            )

        batch = {}
        for keyword in keywords:
            if not isinstance(keyword, KeyWord):
                raise TypeError("registry entries must be KeyWord instances")
            previous = self._keywords.get(keyword.text, batch.get(keyword.text))
            if previous is not None:
                raise DuplicateKeyError(
                    "duplicate key %r (already registered as %s)" % (keyword.text, previous.kind.value),
                    title="duplicate key",
                    code=FaultCode.DUPLICATE_KEY,
                    hint="every literal may be registered once, regardless of its kind",
                    input=keyword.text,
                    docs=getdoc(FaultCode.DUPLICATE_KEY),
                )
            batch[keyword.text] = keyword

        self._keywords.update(batch)
        for keyword in batch.values():
            logger.debug("registered %s %r", keyword.kind.value, keyword.text)
        return self

    def with_keyword(self, keyword, /):
        return self._install((keyword,))

    def with_keywords(self, keywords, /):
        return self._install(tuple(_iterable(keywords, "with_keywords")))

    def with_key(self, text, /, value=False):
        """Add a switch, or a value option when value is true."""
        return self._install(((key_with_value if value else key)(text),))

    def with_keys(self, pairs, /):
        """
        Add (text, expects_value) pairs in order.

        Example
        - registry.with_keys([("-h", False), ("-j", True)])
        """
        keywords = []
        for pair in _iterable(pairs, "with_keys"):
            if isinstance(pair, str | bytes):
                raise TypeError("with_keys() entries must be (text, expects_value) pairs")
            try:
                text, value = pair
            except (TypeError, ValueError):
                raise TypeError("with_keys() entries must be (text, expects_value) pairs") from None
            keywords.append((key_with_value if value else key)(text))
        return self._install(keywords)

    def with_switches(self, texts, /):
        return self._install([key(text) for text in _iterable(texts, "with_switches")])

    def with_options(self, texts, /):
        return self._install([key_with_value(text) for text in _iterable(texts, "with_options")])

    def with_command(self, name, /):
        return self._install((command(name),))

    def with_commands(self, names, /):
        return self._install([command(name) for name in _iterable(names, "with_commands")])


__all__ = (
    "Registry",
)
