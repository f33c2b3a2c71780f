"""
cmdtree flag parser.

parse(tokens, candidates) walks the tokens once, left to right:

- a token starting with "--" names a long flag, one starting with "-" a short flag;
- a flag token that matches no candidate is collected verbatim in `unknown`;
- a matched BOOLEAN flag becomes True;
- a matched VALUE flag takes the next token, which must not start with "-";
- a matched MULTI flag takes every following token up to the next "-" token
  (at least one);
- the first token that does not start with "-" stops the walk; it and everything
  after it are returned untouched in `remaining`.

Examples (f has short name "f"):
    BOOLEAN  '-f foo'                   -> f is True, remaining ('foo',)
    VALUE    '-f value1 value2'         -> f is 'value1', remaining ('value2',)
    MULTI    '-f value1 value2 --foo'   -> f is ('value1', 'value2'), '--foo' parsed next

A VALUE/MULTI flag without data aborts the walk with MissingFlagValueError; the
error carries the `remaining` and `unknown` tokens accumulated up to that point.
"""
from collections import deque
from typing import NamedTuple

from .faults import MissingFlagValueError
from .flags import FlagKind


class ParseResult(NamedTuple):
    remaining: tuple
    unknown: tuple


def _classify(token, /):
    """
    Split a flag-shaped token into (is_long, name); None for plain tokens.
    """
    if token.startswith("--"):
        return True, token[2:]
    if token.startswith("-"):
        return False, token[1:]
    return None


def _match(name, is_long, candidates, /):
    # First registered match wins, duplicated names included.
    for flag in candidates:
        if (flag.long if is_long else flag.short) == name:
            return flag
    return None


def parse(tokens, candidates, /):
    """
    Parse flag tokens off the front of `tokens` into the `candidates` flags.

    Parameters
    - tokens: Iterable[str], the raw arguments (program name already stripped).
    - candidates: Iterable[Flag], searched in order for each flag token.

    Returns
    - ParseResult(remaining, unknown), both tuples of str.

    Raises
    - MissingFlagValueError: a VALUE/MULTI flag got no value.

    Side effects
    - Writes the value of every matched flag; unmatched flags are left alone.
    """
    remaining = deque(tokens)
    candidates = tuple(candidates)
    unknown = []

    def fail(token):
        raise MissingFlagValueError(
            f"no value given for flag {token!r}",
            token=token,
            remaining=tuple(remaining),
            unknown=tuple(unknown),
        )

    while remaining:
        token = remaining[0]
        if (classified := _classify(token)) is None:
            break
        remaining.popleft()
        is_long, name = classified

        if (flag := _match(name, is_long, candidates)) is None:
            unknown.append(token)
            continue

        match flag.kind:
            case FlagKind.BOOLEAN:
                flag._assign(True)
            case FlagKind.VALUE:
                if not remaining or remaining[0].startswith("-"):
                    fail(token)
                flag._assign(remaining.popleft())
            case FlagKind.MULTI:
                values = []
                while remaining and not remaining[0].startswith("-"):
                    values.append(remaining.popleft())
                if not values:
                    fail(token)
                flag._assign(tuple(values))

    return ParseResult(tuple(remaining), tuple(unknown))


__all__ = (
    "ParseResult",
    "parse",
)
