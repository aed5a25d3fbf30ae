"""
Argstream faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every reported issue.
  Codes are grouped by domain (keyword building, classification) to keep
  logs/searches predictable.
- ArgumentException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Error model
- Build-time faults (InvalidKeyError, DuplicateKeyError, FrozenRegistryError) are
  raised before any classification happens and are always recoverable: fix the
  literal and retry.
- Classification-time faults (MissingValueError) end the event stream; there is
  no partial recovery since the option/value boundary is lost.
- Non-fatal conditions never become faults: undecodable tokens are InvalidUtf8
  events and unmatched tokens are Other/Path events.

Integration
- Library code raises faults directly. Applications that want friendly output
  call trigger(fault, shell=True, ...) which renders via rich and exits.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across argstream (stable identifiers).

    grouping (by high-level domain)
    - keywords and registry (111xx)
      • INVALID_KEY, DUPLICATE_KEY, FROZEN_REGISTRY
    - classification (112xx)
      • MISSING_VALUE

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- keyword/registry errors (111xx) ---
    INVALID_KEY                 = 11101
    DUPLICATE_KEY               = 11102
    FROZEN_REGISTRY             = 11103

    # --- classification errors (112xx) ---
    MISSING_VALUE               = 11201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentException(Exception):
    """
    base class for every argstream fault.

    options
    - code: FaultCode, title: str, hint: str (always present on library faults)
    - input/index/...: context about the offending literal or token
    - shell/fancy/colorful/prog: rendering switches, usually merged by trigger()
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __getattr__(self, name, /):
        # context options double as attributes (fault.code, fault.input, ...)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "argstream")), styler("prog-name"))

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", "error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidKeyError(ArgumentException): ...
class DuplicateKeyError(ArgumentException): ...
class FrozenRegistryError(ArgumentException): ...
class MissingValueError(ArgumentException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich stderr console followed by exit
      status 1; otherwise the (merged) exception is raised.

    typical options
    - shell, fancy, colorful, prog, and any context the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentException",
    "InvalidKeyError",
    "DuplicateKeyError",
    "FrozenRegistryError",
    "MissingValueError",
    "FaultCode",
    "trigger",
    "getdoc",
)
