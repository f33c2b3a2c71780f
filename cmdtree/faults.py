"""
cmdtree faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

Propagation
- Parsing and dispatch never recover from a fault: they raise, and the error
  travels unchanged to whoever called Command.run() / parse().
- Only the CLI wiring (invoke) calls trigger(); in shell mode the fault is printed
  to stderr with rich and the process exits with status 1, otherwise it is re-raised.

Host customization (looked up in __main__)
- __prog__: program name shown in fault headers.
- __styles__: palette overrides for the rendering below.
- __codes__: mapping FaultCode -> label used instead of the numeric code.
"""
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
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND, NO_OPERATION
    - flags (1111x)
      • MISSING_FLAG_VALUE, UNKNOWN_FLAGS
    - environment (1113x)
      • ENVIRONMENT_ACCESS
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND     = 11101
    NO_OPERATION        = 11102

    # --- flag errors (11xxx) ---
    MISSING_FLAG_VALUE  = 11111
    UNKNOWN_FLAGS       = 11112

    # --- environment errors (11xxx) ---
    ENVIRONMENT_ACCESS  = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base class of every fault raised by the parser, the dispatcher or a context.

    - message: one-sentence, lowercased description.
    - options: read-only mapping with the structured details of the fault
      (tokens, names, ...) plus rendering options merged in by trigger().
    """
    code = Unset
    title = "command error"
    hint = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

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

        tool = self.options.get("tool")
        prog = text(getattr(main, "__prog__", getattr(tool, "name", "cmdtree")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "-", styler("code")),
            " | ",
            text(self.options.get("title", self.title).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint", self.hint):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class MissingFlagValueError(CommandException):
    """
    a value-bearing flag was not followed by any usable token.

    options
    - token: the flag token as typed (e.g. "-v" or "--value").
    - remaining / unknown: parser state at the failure point.
    """
    code = FaultCode.MISSING_FLAG_VALUE
    title = "missing flag value"
    hint = "give the value right after the flag; values cannot start with '-'"

    @property
    def token(self):
        return self.options.get("token")

    @property
    def remaining(self):
        return tuple(self.options.get("remaining", ()))

    @property
    def unknown(self):
        return tuple(self.options.get("unknown", ()))


class UnknownFlagsError(CommandException):
    code = FaultCode.UNKNOWN_FLAGS
    title = "unknown flags"
    hint = "use --help to list the flags this command accepts"

    @property
    def tokens(self):
        return tuple(self.options.get("tokens", ()))


class UnknownCommandError(CommandException):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"

    @property
    def name(self):
        return self.options.get("name")


class NoOperationError(CommandException):
    code = FaultCode.NO_OPERATION
    title = "nothing to do"

    @property
    def name(self):
        return self.options.get("name")


class EnvironmentAccessError(CommandException):
    """
    the executable path or the working directory could not be read.

    This is a broken precondition of the running environment, not a usage error;
    callers are not expected to handle it.
    """
    code = FaultCode.ENVIRONMENT_ACCESS
    title = "environment failure"

    @property
    def subject(self):
        return self.options.get("subject")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits;
      otherwise the fault is raised.

    typical options
    - tool, shell, fancy, colorful, title, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "MissingFlagValueError",
    "UnknownFlagsError",
    "UnknownCommandError",
    "NoOperationError",
    "EnvironmentAccessError",
    "FaultCode",
    "trigger",
)
