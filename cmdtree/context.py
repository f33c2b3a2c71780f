"""
cmdtree request context.

A Context is what an action receives: a read-only view over the flags of the
command being dispatched, plus the two facts a program usually wants from its
environment (where the executable lives, where it was started from).

Both environment lookups are preconditions rather than inputs: when they fail
an EnvironmentAccessError is raised and is expected to abort the action.
"""
import os
import sys

from .faults import EnvironmentAccessError


def _executable():
    # sys.executable is "" or None when the interpreter cannot resolve its own path.
    if not sys.executable:
        raise OSError("interpreter did not report an executable path")
    return sys.executable


class Context:
    """
    Read-only facade handed to flag actions and default actions.

    Parameters
    - flags: Iterable[Flag], the parsed flag set of the current command.
    - executable / working: zero-argument callables returning a path; they may
      raise OSError. Defaults read the real process state.
    """

    __slots__ = ("_flags", "_executable", "_working")

    def __init__(self, flags, /, *, executable=_executable, working=os.getcwd):
        self._flags = tuple(flags)
        self._executable = executable
        self._working = working

    @property
    def flags(self):
        return self._flags

    def short(self, name, /):
        """
        Look up a flag by short name; return its (value, present) pair.
        """
        for flag in self._flags:
            if flag.short == name:
                return flag.get()
        return None, False

    def long(self, name, /):
        """
        Look up a flag by long name; return its (value, present) pair.
        """
        for flag in self._flags:
            if flag.long == name:
                return flag.get()
        return None, False

    def executable(self):
        """
        Path of the running executable.

        Raises EnvironmentAccessError when it cannot be determined.
        """
        try:
            return self._executable()
        except OSError as error:
            raise EnvironmentAccessError(
                f"unable to read the executable path: {error}", subject="executable"
            ) from error

    def working(self):
        """
        Current working directory.

        Raises EnvironmentAccessError when it cannot be determined
        (e.g. the directory was removed under the process).
        """
        try:
            return self._working()
        except OSError as error:
            raise EnvironmentAccessError(
                f"unable to read the working directory: {error}", subject="working"
            ) from error

    def __repr__(self):
        return f"context(flags={[flag.long for flag in self._flags]!r})"


__all__ = (
    "Context",
)
