r"""
cmdtree flag descriptors.

Overview
- FlagKind: the three shapes a flag can take.
  • BOOLEAN: presence only (`-v`), value is True once seen.
  • VALUE: exactly one following token (`-o out.txt`), value is a str.
  • MULTI: every following token up to the next flag (`-i a b c`), value is a tuple of str.
- Flag: a named descriptor (short + long name, kind, description) that also
  holds the value written by the last parse pass.

Value slot
- A flag starts Unset. The parser is the only writer; a later parse simply
  overwrites it, reset() clears it.
- is_set()/get() only report a value whose shape matches the flag's kind
  (see FlagKind.accepts); anything else reads as "not set".

Quick example:
    >>> verbose = Flag(FlagKind.BOOLEAN, "v", "verbose", "Talk more.")
    >>> verbose.is_set()
    False
    >>> parse(["-v"], [verbose])
    ParseResult(remaining=(), unknown=())
    >>> verbose.get()
    (True, True)
"""
from enum import Enum

from .utils import *


class FlagKind(Enum):
    """
    Tagged shape of a flag value.

    Each member carries the Python type its values are stored as and the
    placeholder shown after the names in help output.
    """
    BOOLEAN = (bool, "")
    VALUE = (str, " <arg>")
    MULTI = (tuple, " <arg ...>")

    def __init__(self, type, placeholder):
        self.type = type
        self.placeholder = placeholder

    def accepts(self, value, /):
        """
        Return True when `value` has the shape this kind stores.

        MULTI values must be tuples made of strings only; bool is checked
        exactly so that 1/0 are never taken for booleans.
        """
        if self is FlagKind.BOOLEAN:
            return type(value) is bool
        if self is FlagKind.MULTI:
            return isinstance(value, tuple) and all(isinstance(item, str) for item in value)
        return isinstance(value, self.type)


def _sanitize_name(name, typeof, /):
    if not isinstance(name, str):
        raise TypeError(f"flag {typeof} name must be a string")
    if not name:
        raise ValueError(f"flag {typeof} name cannot be empty")
    if name.startswith("-"):
        raise ValueError(f"flag {typeof} name {name!r} must be given without leading dashes")
    return name


class Flag:
    """
    Named, typed parameter descriptor plus its currently parsed value.

    Matching rules
    - "-<short>" matches `short`, "--<long>" matches `long`. Names are compared
      verbatim, so "-verbose" only matches a flag whose short name is "verbose".

    Properties
    - kind, short, long, descr are fixed at construction and read-only.
    - value mirrors the raw slot (None while unset); prefer get()/is_set().
    """

    __slots__ = ("_kind", "_short", "_long", "_descr", "_value")

    def __init__(self, kind, short, long, descr="", /):
        if not isinstance(kind, FlagKind):
            raise TypeError("flag kind must be a FlagKind member")
        if not isinstance(descr, str):
            raise TypeError("flag description must be a string")
        self._kind = kind
        self._short = _sanitize_name(short, "short")
        self._long = _sanitize_name(long, "long")
        self._descr = descr
        self._value = Unset

    kind = mirror("kind")
    short = mirror("short")
    long = mirror("long")
    descr = mirror("descr")
    value = mirror("value")

    @property
    def label(self):
        """
        Left column of the help table: "-s/--long" plus the kind placeholder.
        """
        return f"-{self._short}/--{self._long}{self._kind.placeholder}"

    def is_set(self):
        """
        True only when a value is present and shaped like the flag's kind.
        """
        return self._value is not Unset and self._kind.accepts(self._value)

    def get(self):
        """
        Return (value, True) when set, else (None, False).

        The returned value is always of the kind's type:
            BOOLEAN -> bool
            VALUE   -> str
            MULTI   -> tuple[str, ...]
        """
        if self.is_set():
            return self._value, True
        return None, False

    def reset(self):
        """
        Forget the value written by the last parse pass.
        """
        self._value = Unset

    def _assign(self, value, /):
        # Only the parser writes here; it always hands over a well-shaped value.
        self._value = value

    def __repr__(self):
        return f"flag(kind={self._kind.name.lower()}, short={self._short!r}, long={self._long!r}, value={self._value!r})"


__all__ = (
    "FlagKind",
    "Flag",
)
