"""
cmdtree help formatter.

render(command, width) lays a command tree out as plain text:

    example-app
      An example command line app.

      -h/--help             Print help message for command 'example-app'.
      -c/--cflag <arg ...>  This is multi-value flag whose description is long
                            enough to be wrapped under its own column.

      sub
        A sub command.

        -h/--help  Print help message for command 'sub'.

Layout rules
- widths are counted in terminal cells, so wide (CJK) characters count twice;
- every nesting level indents by two spaces and shrinks the usable width by two;
- text is soft-wrapped: lines break on whitespace only, an over-long word is kept
  whole and overflows the width;
- the flag table is two columns, the left one sized to the longest label of the
  command plus two spaces; wrapped descriptions stay aligned to the right column.
"""
import io

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

DEFAULT_WIDTH = 75
INDENT = "  "

console = Console()


def wrap(text, width, /):
    """
    Soft-wrap `text` to `width` terminal cells and return its physical lines.

    Explicit newlines are kept as line breaks; an empty paragraph gives one empty
    line. Widths under one column are treated as one (one word per line).
    """
    lines = Text(text).wrap(console, max(width, 1), overflow="ignore", no_wrap=False)
    return [line.plain.rstrip() for line in lines] or [""]


class HelpBuilder:
    """
    Accumulates help text at one nesting level.

    Builders for deeper levels (see nest()) share the same buffer, so the whole
    tree ends up in one string.
    """

    __slots__ = ("level", "width", "buffer")

    def __init__(self, width=DEFAULT_WIDTH, /, level=0, buffer=None):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("help width must be an integer")
        if width < 1:
            raise ValueError("help width must be a positive integer")
        self.level = level
        self.width = width
        self.buffer = buffer if buffer is not None else io.StringIO()

    @property
    def available(self):
        # Each level eats two columns of indentation.
        return self.width - len(INDENT) * self.level

    def nest(self):
        return type(self)(self.width, self.level + 1, self.buffer)

    def out(self, *texts):
        """
        Write each text soft-wrapped and indented; with no texts, a blank line.
        """
        if not texts:
            self.buffer.write("\n")
            return
        for text in texts:
            for line in wrap(text, self.available):
                self.buffer.write(INDENT * self.level + line + "\n")

    def row(self, left, leftwidth, right):
        """
        Write a two-column row.

        example with level 0 and width 10:
            row("xxx:", 6, "yyyy yyyyyyyy")
            =>
            "xxx:  yyyy
                   yyyyyyyy
            "
        """
        rights = wrap(right, self.available - leftwidth)
        self.buffer.write(INDENT * self.level + left + " " * (leftwidth - cell_len(left)) + rights[0] + "\n")
        for line in rights[1:]:
            self.buffer.write(" " * (len(INDENT) * self.level + leftwidth) + line + "\n")

    def __str__(self):
        return self.buffer.getvalue()


def _layout(command, builder, /):
    builder.out(command.name)
    builder = builder.nest()
    builder.out(command.usage)
    builder.out()

    labels = [flag.label for flag in command.flags]
    leftwidth = max(map(cell_len, labels), default=0) + 2  # two spaces between the columns
    for label, flag in zip(labels, command.flags):
        builder.row(label, leftwidth, flag.descr)

    for child in command.children:
        builder.out()
        _layout(child, builder)


def render(command, /, width=DEFAULT_WIDTH):
    """
    Return the help text of `command` and all of its descendants.

    Flag values are never read, so the output only depends on the tree shape.
    """
    builder = HelpBuilder(width)
    _layout(command, builder)
    return str(builder)


__all__ = (
    "DEFAULT_WIDTH",
    "HelpBuilder",
    "render",
    "wrap",
)
