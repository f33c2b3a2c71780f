import logging

from rich.logging import RichHandler
from rich.pretty import pprint

from cmdtree import *


def start(context, values):
    print(list(values))

    if (b := context.short("b"))[1]:
        print("b is set, its value is:", b[0])
    else:
        print("b is not set")

    print(context.executable())
    print(context.working())


def service(context):
    print("This is a service for the example app.")


app = Command(
    "example-app",
    "An example command line app.",
).flag(
    FlagKind.BOOLEAN, "a", "aflag", "This is bool flag.",
).flag(
    FlagKind.VALUE, "b", "bflag", "This is value flag.",
).flag(
    FlagKind.MULTI, "c", "cflag", "This is multi-value flag.",
).flag(
    FlagKind.MULTI, "s", "start",
    "Start this service. You can give a value as your start arg. "
    "The usage may be very long, but the package will wrap lines properly "
    "when printing the help message.",
    action=start,
).service(
    service,
).sub(
    Command("sub", "A sub command."),
)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])
    pprint(app)
    invoke(app)
