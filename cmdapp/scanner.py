"""
cmdapp argument scanner: one left-to-right pass over argv.

What this module provides
- ScanMode: how single-dash tokens are read, fixed at construction.
  • SHORTARG (clustered): one option per dash token; '-ofile' or '-o file'
    bind a value, boolean options must appear alone.
  • MULTIFLAG: boolean options may be bundled ('-abc' is '-a -b -c'); an
    argument-taking option ends the bundle and takes the rest of the token
    or the next token as its value.
- ParseResult: positional arguments and seen options of one scan, plus the
  built-in terminator that ended it early, if any.
- Scanner: binds a Registry, a mode and the help/version collaborators.

Classification (per token, in order)
- '--' switches to positional-only mode and is dropped.
- positional-only mode: token is kept verbatim.
- '--name[=value]': long option; built-in --help/--version short-circuit
  when not registered.
- '-x...': short option(s) according to the mode.
- anything else (a bare '-' included): positional argument.

Faults
- The first fault aborts the scan: runtime fields are reset, nothing is
  returned, and the ScanError propagates to the caller.
- After a complete pass, declared conflicts are checked in encounter order.
"""
import enum
import logging
from typing import NamedTuple

from .faults import *
from .registry import Registry
from .render import AppInfo, render_help, render_version, resolve_program
from .utils import *

logger = logging.getLogger(__name__)


class ScanMode(enum.Enum):
    """short-option reading mode."""
    SHORTARG = "shortarg"
    MULTIFLAG = "multiflag"


class ParseResult(NamedTuple):
    """outcome of one successful scan."""
    arguments: tuple[str, ...] = ()
    options: tuple = ()
    terminator: str | None = None


class Scanner:
    """
    Argument scanner bound to one registry.

    Parameters
    - registry: Registry holding every option; registration must be complete
      before the first scan.
    - mode: ScanMode for single-dash tokens (default SHORTARG).
    - info: AppInfo handed to the help/version collaborators.
    - helper / versioner: callables invoked as helper(registry, info, program)
      and versioner(info, program) on unshadowed --help / --version.
      Default to the rich renderers.
    """

    def __init__(self, registry, mode=ScanMode.SHORTARG, info=Unset, /, *, helper=Unset, versioner=Unset):
        if not isinstance(registry, Registry):
            raise TypeError("scanner 'registry' must be a registry")
        if not isinstance(mode, ScanMode):
            raise TypeError("scanner 'mode' must be a scan-mode")
        if not isinstance(info, AppInfo | Unset):
            raise TypeError("scanner 'info' must be an app-info")
        if not callable(helper := coalesce(helper, _default_helper)):
            raise TypeError("scanner 'helper' must be callable")
        if not callable(versioner := coalesce(versioner, _default_versioner)):
            raise TypeError("scanner 'versioner' must be callable")

        self._registry = registry
        self._mode = mode
        self._info = coalesce(info, AppInfo())
        self._helper = helper
        self._versioner = versioner
        self._result = None

        # per-scan state
        self._arguments = []
        self._encounters = []
        self._tokens = ()
        self._index = 0

    @property
    def registry(self):
        return self._registry

    @property
    def mode(self):
        return self._mode

    @property
    def info(self):
        return self._info

    @property
    def result(self):
        """the latest ParseResult, None before the first successful scan."""
        return self._result

    def scan(self, argv, /):
        """
        Scan argv (argv[0] being the program name) and return a ParseResult.

        Raises
        - UnrecognizedOptionError, MissingArgumentError, UnexpectedArgumentError,
          ConflictingOptionsError: on the first fault; no partial result survives.
        """
        if isinstance(argv, str):
            raise TypeError("scan() argument must be a sequence of strings, not a string")
        argv = tuple(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("scan() argument must be a sequence of strings")

        self._registry.reset()
        self._arguments.clear()
        self._encounters.clear()
        self._tokens = argv
        self._index = 1

        logger.debug("scanning %d token(s) in %s mode", max(len(argv) - 1, 0), self._mode.value)
        try:
            terminator = self._loop()
            if terminator is None:
                self._check_conflicts()
        except ScanError as error:
            logger.debug("scan aborted at position %s: %s", error.index, error)
            self._registry.reset()
            raise

        self._result = ParseResult(tuple(self._arguments), tuple(option for option, _, _ in self._encounters), terminator)
        return self._result

    def _loop(self):
        positionals = False
        while self._index < len(self._tokens):
            token = self._tokens[self._index]

            if positionals:
                self._arguments.append(token)
            elif token == "--":
                positionals = True
            elif token.startswith("--"):
                if terminator := self._scan_long(token):
                    return terminator
            elif token.startswith("-") and len(token) > 1:
                match self._mode:
                    case ScanMode.SHORTARG:
                        self._scan_shortarg(token)
                    case ScanMode.MULTIFLAG:
                        self._scan_multiflag(token)
            else:
                self._arguments.append(token)

            self._index += 1
        return None

    @property
    def program(self):
        """program name shown in help, version and fault output."""
        return resolve_program(self._info, Unset, self._tokens)

    def _next(self):
        # the following token, when it can serve as a value (a bare "-" can)
        try:
            following = self._tokens[self._index + 1]
        except IndexError:
            return None
        return None if following.startswith("-") and following != "-" else following

    def _seen(self, option, token, value=Unset):
        option._mark(value)
        self._encounters.append((option, token, self._index))
        if value is not Unset:
            logger.debug("bound %r to %s", value, "/".join(option.names))

    def _scan_long(self, token):
        name, separator, value = token[2:].partition("=")
        value = value if separator else None
        input = "--" + name

        option = self._registry.lookup(long=name)
        if option is None:
            if name in ("help", "version"):
                # an inline value on a built-in is ignored
                logger.debug("short-circuit on %s", input)
                if name == "help":
                    self._helper(self._registry, self._info, self.program)
                else:
                    self._versioner(self._info, self.program)
                return input
            raise UnrecognizedOptionError(
                "unrecognized command line option %s" % input,
                title="unrecognized option",
                hint="try '%s --help' to see all available options" % self.program,
                token=token,
                name=input,
                index=self._index,
                docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
            )

        if option.takes_argument:
            if value is None:
                raise MissingArgumentError(
                    "%s expects an argument" % input,
                    title="missing argument",
                    hint="pass the value inline (for example: %s=<value>)" % input,
                    token=token,
                    name=input,
                    index=self._index,
                    docs=getdoc(FaultCode.MISSING_ARGUMENT),
                )
            self._seen(option, token, value)
        else:
            if value is not None:
                raise UnexpectedArgumentError(
                    "%s does not take arguments" % input,
                    title="unexpected argument",
                    hint="remove everything from '=' (for example: %s)" % input,
                    token=token,
                    name=input,
                    index=self._index,
                    docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
                )
            self._seen(option, token)
        return None

    def _resolve_short(self, token, char):
        if (option := self._registry.lookup(short=char)) is None:
            raise UnrecognizedOptionError(
                "unrecognized command line option -%s" % char,
                title="unrecognized option",
                hint="try '%s --help' to see all available options" % self.program,
                token=token,
                name="-" + char,
                index=self._index,
                docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
            )
        return option

    def _take_value(self, option, token, rest):
        # inline remainder first, then a following non-flag token
        if rest:
            return self._seen(option, token, rest)
        if (following := self._next()) is not None:
            self._seen(option, token, following)
            self._index += 1
            return
        raise MissingArgumentError(
            "-%s expects an argument" % option.short,
            title="missing argument",
            hint="pass a value right after it (for example: -%s <value>)" % option.short,
            token=token,
            name="-" + option.short,
            index=self._index,
            docs=getdoc(FaultCode.MISSING_ARGUMENT),
        )

    def _scan_shortarg(self, token):
        option = self._resolve_short(token, token[1])
        if option.takes_argument:
            return self._take_value(option, token, token[2:])
        if len(token) > 2 or self._next() is not None:
            raise UnexpectedArgumentError(
                "-%s does not take arguments" % option.short,
                title="unexpected argument",
                hint="boolean options must appear alone (for example: -%s)" % option.short,
                token=token,
                name="-" + option.short,
                index=self._index,
                docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
            )
        self._seen(option, token)

    def _scan_multiflag(self, token):
        for position in range(1, len(token)):
            option = self._resolve_short(token, token[position])
            if option.takes_argument:
                return self._take_value(option, token, token[position + 1:])
            self._seen(option, token)

    def _check_conflicts(self):
        for position, (option, token, index) in enumerate(self._encounters):
            for earlier, previous, _ in self._encounters[:position]:
                if earlier is option or not option.conflicts_with(earlier):
                    continue
                name = _spelled(option, token)
                other = _spelled(earlier, previous)
                raise ConflictingOptionsError(
                    "%s cannot be used together with %s" % (name, other),
                    title="conflicting options",
                    hint="drop either %s or %s" % (other, name),
                    token=token,
                    name=name,
                    other=other,
                    index=index,
                    docs=getdoc(FaultCode.CONFLICTING_OPTIONS),
                )


def _spelled(option, token):
    # the form the user typed: long when the token is long, short otherwise
    if token.startswith("--") and option.long is not None:
        return "--" + option.long
    return option.names[0]


def _default_helper(registry, info, program):
    render_help(registry, info, program=program)


def _default_versioner(info, program):
    render_version(info, program=program)


__all__ = (
    "ScanMode",
    "ParseResult",
    "Scanner",
)
