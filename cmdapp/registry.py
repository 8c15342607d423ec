r"""
cmdapp option registry.

Overview
- OptionFlag: bit-flag attributes of a registered option.
  • TAKESARG: the option requires a value.
  • EXISTS: the option was seen during the current scan.
  Attribute checks are membership tests (OptionFlag.TAKESARG in flags).

- OptionSpec: one registered option (short/long name, flags, conflicts,
  description) plus its runtime fields (seen, value). Public fields are
  read-only; the registry and the scanner own the runtime fields.

- Registry: insertion-ordered, append-only sequence of OptionSpec handles.
  • register(...) validates and appends a new option, returning its handle.
  • lookup(short=...) / lookup(long=...) resolve a name, None when absent.
  • registry[index] / registry["-v"] / registry["--verbose"] for direct access.
  • reset() clears every runtime field before a scan.

Validation highlights
- Short names are one character other than '-', '=' or whitespace.
- Long names are non-empty, contain no '=' or whitespace, and do not start with '-'.
- At least one name is required; explicit None is rejected (omit instead).
- Duplicate short or long names are rejected.
- Conflicts must be handles already registered in the same registry.

Quick example:
    >>> registry = Registry()
    >>> verbose = registry.register("v", "verbose", descr="talk more")
    >>> output = registry.register("o", "out", takes_argument=True, conflicts=(verbose,))
    >>> registry["--out"] is output
    True
"""
import enum
import functools
import logging
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .utils import *

logger = logging.getLogger(__name__)


class OptionFlag(enum.IntFlag):
    """attribute bits of a registered option."""
    NONE = 0
    TAKESARG = enum.auto()
    EXISTS = enum.auto()


class OptionSpec:
    """
    A single registered option and its per-scan state.

    Instances are created by Registry.register() only; the object itself is
    the stable handle callers keep to read `seen` and `value` after a scan.

    Introspection
    - short, long, names, flags, takes_argument, conflicts, descr, index
    - seen, value (runtime, reset at the start of each scan)
    """

    __displayable__ = ("short", "long", "takes_argument", "descr", "seen", "value")

    short = mirror("short")
    long = mirror("long")
    flags = mirror("flags")
    descr = mirror("descr")
    index = mirror("index")
    value = mirror("value")
    conflicts = mirror("conflicts")

    def __init__(self, short, long, flags, conflicts, descr, index, /):
        self._short = short
        self._long = long
        self._flags = flags
        self._conflicts = frozenset(conflicts)
        self._descr = descr
        self._index = index
        self._value = None

    @property
    def names(self):
        """spelled forms, short first (e.g. ('-v', '--verbose'))."""
        names = []
        if self._short is not None:
            names.append("-" + self._short)
        if self._long is not None:
            names.append("--" + self._long)
        return tuple(names)

    @property
    def takes_argument(self):
        return OptionFlag.TAKESARG in self._flags

    @property
    def seen(self):
        return OptionFlag.EXISTS in self._flags

    def conflicts_with(self, other, /):
        """whether this option and `other` were declared as mutually exclusive (either side)."""
        return other in self._conflicts or self in other.conflicts

    def _mark(self, value=Unset, /):
        # runtime update used by the scanner; Unset keeps the bound value
        self._flags |= OptionFlag.EXISTS
        if value is not Unset:
            self._value = value

    def _reset(self):
        self._flags &= ~OptionFlag.EXISTS
        self._value = None

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"option({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


def _sanitize_short(short, /):
    if not isinstance(short, str | Unset):
        raise TypeError("option 'short' must be a string")
    if isinstance(short, str) and not re.fullmatch(r"[^\s=-]", short):
        raise ValueError("option 'short' must be a single character other than '-', '=' or whitespace")
    return coalesce(short)


def _sanitize_long(long, /):
    if not isinstance(long, str | Unset):
        raise TypeError("option 'long' must be a string")
    if isinstance(long, str) and not re.fullmatch(r"[^\s=-][^\s=]*", long):
        raise ValueError("option 'long' must be non-empty, not start with '-' and contain no '=' or whitespace")
    return coalesce(long)


def _sanitize_descr(descr, /):
    if not isinstance(descr, str | Text | Unset):
        raise TypeError("option 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError("option 'descr' cannot be empty")
    return coalesce(descr)


class Registry:
    """
    Insertion-ordered collection of OptionSpec handles.

    The registry is append-only: options are registered once at startup and
    only their runtime fields change afterwards (see reset()). Lookups are
    linear scans in registration order, since registries hold tens of options.
    """

    def __init__(self):
        self._options = []

    def register(
            self,
            short=Unset,
            long=Unset,
            takes_argument=False,
            conflicts=(),
            descr=Unset,
    ):
        """
        Validate and append a new option, returning its handle.

        Parameters
        - short: str (one character), optional.
        - long: str, optional. At least one of short/long is required.
        - takes_argument: bool, whether a value must follow the option.
        - conflicts: Iterable[OptionSpec] of handles from this registry.
        - descr: str | Text, description for help rendering.

        Raises
        - TypeError: no name given, explicit None, or non-handle conflicts.
        - ValueError: malformed or duplicated names, foreign conflict handles,
          empty description.
        """
        short = _sanitize_short(short)
        long = _sanitize_long(long)
        if short is None and long is None:
            raise TypeError("option must specify at least one of 'short' or 'long'")

        if not isinstance(takes_argument, bool):
            raise TypeError("option 'takes_argument' must be a boolean")

        if not isinstance(conflicts, Iterable) or isinstance(conflicts, (str, Text)):
            raise TypeError("option 'conflicts' must be an iterable of options")
        conflicts = tuple(conflicts)
        for conflict in conflicts:
            if not isinstance(conflict, OptionSpec):
                raise TypeError("option 'conflicts' must be an iterable of options")
            if not any(conflict is option for option in self._options):
                raise ValueError(f"option {"/".join(conflict.names)!r} is not registered in this registry")

        descr = _sanitize_descr(descr)

        if short is not None and self.lookup(short=short) is not None:
            raise ValueError(f"option short name '-{short}' is already in use")
        if long is not None and self.lookup(long=long) is not None:
            raise ValueError(f"option long name '--{long}' is already in use")

        flags = OptionFlag.TAKESARG if takes_argument else OptionFlag.NONE
        option = OptionSpec(short, long, flags, conflicts, descr, len(self._options))
        self._options.append(option)
        logger.debug("registered %s at index %d", "/".join(option.names), option.index)
        return option

    def lookup(self, *, short=Unset, long=Unset):
        """
        Resolve a short or a long name (exactly one of them) to its handle.

        Returns None when nothing matches; callers decide whether that is an error.
        """
        if (short is Unset) == (long is Unset):
            raise TypeError("lookup() requires exactly one of 'short' or 'long'")
        if short is not Unset:
            return next((option for option in self._options if option.short == short), None)
        return next((option for option in self._options if option.long == long), None)

    def reset(self):
        """clear seen/value on every option."""
        for option in self._options:
            option._reset()

    def __getitem__(self, key):
        match key:
            case int():
                return self._options[key]
            case str() if key.startswith("--") and len(key) > 2:
                option = self.lookup(long=key[2:])
            case str() if key.startswith("-") and len(key) == 2:
                option = self.lookup(short=key[1])
            case str():
                raise KeyError(key)
            case _:
                raise TypeError("registry indices must be integers or option names")
        if option is None:
            raise KeyError(key)
        return option

    def __contains__(self, name):
        try:
            self[name]
        except (KeyError, IndexError, TypeError):
            return False
        return True

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return f"registry({", ".join("/".join(option.names) for option in self._options)})"


__all__ = (
    "OptionFlag",
    "OptionSpec",
    "Registry",
)
