"""
Debug front-end: classify arbitrary tokens and print the resulting events.

    python -m argstream [-s KEY]... [-o KEY]... [-c NAME]... [-l FILE]... [-p] [--] TOKEN...

The command line of this tool is itself read with a Classifier; the first
positional token (or everything after "--") starts the sample tokens, which
are then classified against the keywords declared with -s/-o/-c.
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from . import __version__
from .classifier import Classifier
from .events import Key, KeyWithValue, Command, Other, InvalidUtf8, Path
from . import faults
from .faults import ArgumentException, InvalidKeyError, FaultCode, getdoc, trigger
from .keywords import KeyKind
from .registry import Registry
from .sources import from_argv, from_file
from .utils import Unset

__prog__ = "argstream"

console = Console()

USAGE = """\
usage: %s [options] [--] TOKEN...

declare keywords, then classify TOKEN... against them.

options:
  -s, --switch KEY    register KEY as a switch (repeatable)
  -o, --option KEY    register KEY as a value option (repeatable)
  -c, --command NAME  register NAME as a subcommand (repeatable)
  -l, --list FILE     append the tokens of FILE, one per line ('-' for stdin)
  -p, --paths         report existing filesystem entries as paths
      --plain         disable colors
      --verbose       log classification steps to stderr
  -h, --help          show this message and exit
  -V, --version       show the version and exit
""" % __prog__

OWN = (
    Registry()
    .with_switches(["-h", "--help", "-V", "--version", "-p", "--paths", "--plain", "--verbose"])
    .with_options(["-s", "--switch", "-o", "--option", "-c", "--command", "-l", "--list"])
)


def describe(event, /):
    """Return (variant name, payload text) for one event."""
    match event:
        case Key(name) | Command(name):
            return type(event).__name__, name
        case KeyWithValue(name, value):
            return "KeyWithValue", "%s = %r" % (name, value)
        case Other(value) | Path(value):
            return type(event).__name__, repr(value)
        case InvalidUtf8(value):
            return "InvalidUtf8", repr(value)
    raise TypeError("unknown event %r" % (event,))


def main(argv=Unset, /):
    switches, options, commands, lists = [], [], [], []
    tokens = []
    paths = plain = False

    with Classifier(from_argv(argv), OWN) as stream:
        try:
            for event in stream:
                match event:
                    case Key("-h" | "--help"):
                        console.print(USAGE, end="", highlight=False)
                        return 0
                    case Key("-V" | "--version"):
                        console.print("%s %s" % (__prog__, __version__), highlight=False)
                        return 0
                    case Key("-p" | "--paths"):
                        paths = True
                    case Key("--plain"):
                        plain = True
                    case Key("--verbose"):
                        logging.basicConfig(
                            level=logging.DEBUG,
                            format="%(message)s",
                            handlers=[RichHandler(console=faults.console, show_path=False)],
                            force=True,
                        )
                    case KeyWithValue("-s" | "--switch", text):
                        switches.append(text)
                    case KeyWithValue("-o" | "--option", text):
                        options.append(text)
                    case KeyWithValue("-c" | "--command", text):
                        commands.append(text)
                    case KeyWithValue("-l" | "--list", path):
                        lists.append(path)
                    case InvalidUtf8(value) if OWN.lookup(value.partition(b"=")[0].decode("utf-8", "replace"), KeyKind.OPTION) is not None:
                        # a value of this tool's own options that is not text
                        name = value.partition(b"=")[0].decode()
                        raise InvalidKeyError(
                            "value of %r is not valid utf-8" % name,
                            title="invalid key",
                            code=FaultCode.INVALID_KEY,
                            hint="keywords, command names and list paths given to %s must be utf-8 text" % name,
                            input=value,
                            docs=getdoc(FaultCode.INVALID_KEY),
                        )
                    case _:
                        tokens.append(event.raw)
                        tokens.extend(stream.remainder())
        except ArgumentException as exc:
            trigger(exc, shell=True, colorful=not plain)

    try:
        registry = (
            Registry()
            .with_switches(switches)
            .with_options(options)
            .with_commands(commands)
        )
    except ArgumentException as exc:
        trigger(exc, shell=True, colorful=not plain)

    table = Table("#", "event", "payload")
    fault = None
    with Classifier(tokens, registry, paths=paths) as classifier:
        try:
            for path in lists:
                classifier.extend(from_file(path))
        except OSError as exc:
            faults.console.print(Text("cannot read list %r: %s" % (path, exc.strerror or exc), "" if plain else "bold red"))
            return 1

        try:
            for number, event in enumerate(classifier, 1):
                name, payload = describe(event)
                table.add_row(str(number), name, payload)
        except ArgumentException as exc:
            fault = exc

    Console(file=console.file, width=console.width, no_color=plain, highlight=not plain).print(table)
    if fault is not None:
        trigger(fault, shell=True, colorful=not plain)
    return 0


if __name__ == "__main__":
    sys.exit(main())
