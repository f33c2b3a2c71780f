"""
cmdtree command layer: build, compose, and run CLI commands.

What this module provides
- Command: a named node of a command tree with
  • ordered flags, each optionally bound to an action run when the flag is set;
  • ordered subcommands, selected by the first positional token;
  • an optional default action (service);
  • plain-text help for the node and all of its descendants.
- invoke(command, prompt): CLI wiring that runs a command and surfaces faults
  the shell way (rendered on stderr, exit status 1).

Quick start
    from cmdtree import Command, FlagKind, invoke

    def start(context, values):
        print("starting with", values, "from", context.working())

    app = (
        Command("example-app", "An example command line app.")
        .flag(FlagKind.BOOLEAN, "a", "aflag", "This is bool flag.")
        .flag(FlagKind.MULTI, "s", "start", "Start this service.", action=start)
        .sub(Command("sub", "A sub command."))
    )

    if __name__ == "__main__":
        invoke(app)

Dispatch (Command.run)
1. parse the node's own flags off the front of the tokens;
2. any unknown flag token → UnknownFlagsError;
3. the first binding (registration order) whose flag is set and has an action runs;
4. otherwise the first remaining token selects a child, which runs on the rest;
   no such child → UnknownCommandError;
5. otherwise the default action runs;
6. otherwise NoOperationError.

Flag values are written in place by the parser, so a tree must not be run from
several threads at once; use clone() to get an independent copy per invocation.
"""
import copy
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from rich.console import Console

from .context import Context
from .faults import *
from .flags import Flag, FlagKind
from .formatting import DEFAULT_WIDTH, render
from .parsing import parse
from .utils import *

logger = logging.getLogger(__name__)


class Binding(NamedTuple):
    flag: Flag
    action: object = Unset


class Command:
    """
    High-level command node.

    Responsibilities
    - Composition: owns its flags and children exclusively (a tree, no sharing).
    - Invocation: run(tokens) dispatches as described in the module docstring.
    - Rendering: help()/print_help() lay out the node and its whole subtree.

    Construction
    - Command(name, usage) registers a "-h/--help" BOOLEAN flag printing the help
      text, and uses the same printing as default action.
    - Command(name, usage, helper=False) registers neither; with nothing else to
      do, running it raises NoOperationError.

    Builder methods (flag, sub, service) return the node itself for chaining.
    """

    name = mirror("name")
    usage = mirror("usage")
    parent = mirror("parent")
    children = mirror("children")
    bindings = mirror("bindings")
    width = mirror("width")

    def __init__(self, name, usage="", /, *, helper=True, width=DEFAULT_WIDTH):
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        elif not name or name.startswith("-") or name != name.strip():
            raise ValueError(f"command name {name!r} must be a non-empty token not starting with '-'")
        if not isinstance(usage, str):
            raise TypeError("command usage must be a string")
        if not isinstance(width, int) or isinstance(width, bool) or width < 1:
            raise ValueError("command help width must be a positive integer")

        self._name = name
        self._usage = usage
        self._width = width
        self._parent = Unset
        self._bindings = []
        self._children = []
        self._service = Unset

        if helper:
            self.flag(
                FlagKind.BOOLEAN,
                "h", "help",
                f"Print help message for command '{name}'.",
                action=self._helper,
            )
            self._service = self._helper

    @property
    def flags(self):
        """
        The node's own flags, in registration order.
        """
        return tuple(binding.flag for binding in self._bindings)

    @property
    def root(self):
        command = self
        while command._parent:
            command = command._parent
        return command

    @property
    def path(self):
        """
        Return the ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command._parent:
            path.append(command := command._parent)
        return tuple(reversed(path))

    def _helper(self, context, value=Unset, /):
        self.print_help()

    def flag(self, kind, short, long, descr="", /, action=Unset):
        """
        Add a flag to the command.

        Parameters
        - kind, short, long, descr: see Flag.
        - action: optional callable(context, value) run by dispatch when this
          flag is set after parsing. `value` always has the kind's type:
              BOOLEAN -> bool
              VALUE   -> str
              MULTI   -> tuple[str, ...]

        Returns
        - the command itself.
        """
        if action is not Unset and not callable(action):
            raise TypeError(f"flag action for {long!r} must be callable")
        self._bindings.append(Binding(Flag(kind, short, long, descr), action))
        return self

    def handle(self, kind, short, long, descr="", /):
        """
        Decorator form of flag(..., action=callback).

            @app.handle(FlagKind.VALUE, "o", "output", "Write the report there.")
            def output(context, path): ...

        The decorated callable is returned unchanged.
        """
        @rename("handle")
        def wrapper(action, /):
            if not callable(action):
                raise TypeError("@handle() must be applied to a callable")
            self.flag(kind, short, long, descr, action=action)
            return action
        return wrapper

    def sub(self, command, /):
        """
        Attach `command` as the last child of this command.

        Raises
        - TypeError: not a Command.
        - ValueError: already attached elsewhere or would create a cycle.

        Sibling names may repeat; dispatch runs the first child with a matching name.
        """
        if not isinstance(command, Command):
            raise TypeError("sub() argument must be a command")
        if command._parent:
            raise ValueError(f"command {command.name!r} is already attached to {command._parent.name!r}")
        if command in self.path:
            raise ValueError(f"command {command.name!r} cannot be attached under itself")
        command._parent = self
        self._children.append(command)
        return self

    def service(self, action, /):
        """
        Set the default action, a callable(context), replacing the previous one.
        """
        if not callable(action):
            raise TypeError("service() argument must be callable")
        self._service = action
        return self

    def run(self, tokens=(), /):
        """
        Dispatch `tokens` through this command (program name already stripped).

        Returns whatever the selected action returns; every fault propagates
        unchanged (MissingFlagValueError, UnknownFlagsError, UnknownCommandError,
        NoOperationError, and anything raised by the action itself).
        """
        flags = self.flags
        remaining, unknown = parse(tokens, flags)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s: parsed flags %r, remaining %r", self.name, [flag for flag in flags if flag.is_set()], remaining)

        if unknown:
            route = " ".join(command.name for command in self.path)
            raise UnknownFlagsError(
                f"unknown flag(s) for {self.name!r}: {' '.join(unknown)}",
                tokens=unknown,
                name=self.name,
                hint=f"try '{route} --help' to list the accepted flags" if self._has_helper() else None,
            )

        for flag, action in self._bindings:
            if action is not Unset and flag.is_set():
                logger.debug("%s: running action of flag --%s", self.name, flag.long)
                value, _ = flag.get()
                return action(Context(flags), value)

        if remaining:
            name, *rest = remaining
            for child in self._children:
                if child.name == name:
                    logger.debug("%s: delegating %r to subcommand %r", self.name, rest, name)
                    return child.run(rest)
            raise UnknownCommandError(
                f"unknown command {name!r} for {self.name!r}",
                name=name,
                hint=self._suggest(name),
            )

        if self._service is not Unset:
            logger.debug("%s: running default action", self.name)
            return self._service(Context(flags))

        raise NoOperationError(f"no defined operation for {self.name!r}", name=self.name)

    def run_with_args(self):
        """
        Shortcut for run(sys.argv[1:]).
        """
        return self.run(sys.argv[1:])

    def _has_helper(self):
        return any(flag.long == "help" for flag in self.flags)

    def _suggest(self, name):
        names = [child.name for child in self._children]
        if not names:
            return f"{self.name!r} has no subcommands"
        suggestions = difflib.get_close_matches(name, names, 1)
        if suggestions:
            return f"did you mean {suggestions[0]!r}?"
        return "available subcommands: " + ", ".join(names)

    def help(self):
        """
        Return the help text of this command and all of its descendants.
        """
        return render(self, self._width)

    def print_help(self, console=None):
        """
        Write help() to standard output (or `console`) as raw text.
        """
        if console is None:
            console = Console()
        console.out(self.help(), end="", highlight=False)

    def reset(self):
        """
        Clear every flag value in this subtree.
        """
        for flag in self.flags:
            flag.reset()
        for child in self._children:
            child.reset()
        return self

    def clone(self):
        """
        Deep copy of this subtree, detached from any parent.

        Flag values are copied too; the built-in help actions print the clone.
        """
        return copy.deepcopy(self, {id(self._parent): Unset})

    def __invoke__(self, prompt=Unset):
        """
        Run this command with a prompt.

        - Unset: read tokens from sys.argv[1:].
        - str: shell-like string, split via shlex.split.
        - Iterable[str]: pre-tokenized sequence.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        return self.run(tokens)

    def __rich_repr__(self):
        yield "name", self.name
        yield "usage", self.usage
        yield "flags", self.flags
        yield "children", self.children

    def __repr__(self):
        return f"command(name={self.name!r}, flags={len(self._bindings)}, children={[child.name for child in self._children]!r})"


def invoke(object, prompt=Unset, /, *, shell=True, colorful=True, fancy=False):
    """
    Convenience runner for commands.

    Parameters
    - object: an instance providing __invoke__(prompt), usually a Command.
    - prompt: Unset (sys.argv[1:]), a shell-like string, or an iterable of tokens.
    - shell: when True, a fault is printed to stderr and the process exits with
      status 1; when False the fault is raised.
    - colorful / fancy: rendering options for printed faults.

    Returns
    - whatever the selected action returned.
    """
    if not hasattr(object, "__invoke__") or not callable(object.__invoke__):
        target = "argument" if prompt is Unset else "first argument"
        raise TypeError(f"invoke() {target} must implement __invoke__ method")
    try:
        return object.__invoke__(prompt)
    except CommandException as fault:
        trigger(fault, tool=getattr(object, "root", object), shell=shell, colorful=colorful, fancy=fancy)


__all__ = (
    "Binding",
    "Command",
    "invoke",
)
