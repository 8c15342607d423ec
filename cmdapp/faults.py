"""
cmdapp faults (scan errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every scan error kind.
- ScanError: base type carrying a message plus options (token, name, index,
  hint, ...) that knows how to render itself in a short, lowercased and
  actionable way.
- UnrecognizedOptionError / MissingArgumentError / UnexpectedArgumentError /
  ConflictingOptionsError: the concrete kinds raised by the scanner.
- trigger(): central entry point to surface a fault (raise, or print in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The scanner raises the concrete kinds directly; it never prints or exits.
- The application glue merges render options (tool, shell, fancy, colorful)
  into the fault via copy.replace() and calls trigger(fault).
- In non-shell mode the fault is raised; in shell mode it is rendered via rich.
"""
import copy
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
    canonical fault codes raised by the scanner (stable identifiers).

    - UNRECOGNIZED_OPTION: a token names no registered short/long option.
    - UNEXPECTED_ARGUMENT: a value was given to an option that takes none.
    - MISSING_ARGUMENT: an argument-taking option had no value available.
    - CONFLICTING_OPTIONS: two options declared as conflicting were both seen.

    normalize() allows host remapping to custom labels while keeping the
    numeric codes stable.
    """
    UNRECOGNIZED_OPTION         = 11112
    UNEXPECTED_ARGUMENT         = 11113
    MISSING_ARGUMENT            = 11117
    CONFLICTING_OPTIONS         = 11126

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ScanError(Exception):
    """
    base class of every scan-time fault.

    the message is positional; everything else (token, name, index, title,
    hint, and render flags merged later) travels in a read-only options mapping.
    subclasses pin their FaultCode on the class attribute `code`.
    """
    code = Unset
    title = "scan error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def kind(self):
        """the FaultCode identifying this error kind."""
        return self.options.get("code", type(self).code)

    @property
    def token(self):
        """the offending argv token, literally as given."""
        return self.options.get("token")

    @property
    def name(self):
        """the option as spelled by the user (e.g. '-x' or '--bogus')."""
        return self.options.get("name")

    @property
    def index(self):
        """argv position of the offending token (argv[0] is the program)."""
        return self.options.get("index")

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

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

        prog = text(getattr(main, "__prog__", self.options.get("program", "cmdapp")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.kind.normalize(), styler("code")),
            " | ",
            text(self.options.get("title", type(self).title).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionError(ScanError):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"


class MissingArgumentError(ScanError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"


class UnexpectedArgumentError(ScanError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"


class ConflictingOptionsError(ScanError):
    code = FaultCode.CONFLICTING_OPTIONS
    title = "conflicting options"

    @property
    def other(self):
        """the earlier option (as spelled) this one conflicts with."""
        return self.options.get("other")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ScanError).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.
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

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ScanError",
    "UnrecognizedOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "ConflictingOptionsError",
    "trigger",
    "getdoc",
)
