import sys

COLORS = {
    "GRAY": "\033[0;37m",
    "WHITE": "\033[1;37m",
    "RESET": "\033[0m",
}

PREFIX = "[lc] "


def print_stream(msg, stream, prefix=None, print_ws="\n", color=None):
    """
    Print message to a stream

    @ msg      : str    message to print
    @ prefix   : str    prefix for the message
    @ print_ws : str    whitespace printed after the message
    @ color    : str    color to use when printing, default None
    """

    # no colors when the output is redirected to a file
    if not stream.isatty():
        color = None

    if msg == "":
        return

    if color is not None:
        stream.write(COLORS[color])

    if prefix is not None:
        stream.write(prefix)

    stream.write(msg)

    if color is not None:
        stream.write(COLORS["RESET"])

    if print_ws:
        stream.write(print_ws)

    stream.flush()


def print_stderr(msg, prefix=None, print_ws="\n", color=None):
    print_stream(msg, sys.stderr, prefix, print_ws, color)


_is_debugging = 0


def set_debugging(verbose=False):
    global _is_debugging
    _is_debugging = 2 if verbose else 1


def unset_debugging():
    global _is_debugging
    _is_debugging = 0


def is_debugging():
    return _is_debugging > 0


def dbg(msg, print_ws="\n", color="WHITE", fn=print_stderr):
    if _is_debugging < 1:
        return

    fn(msg, PREFIX, print_ws, color)


def dbgv(msg, print_ws="\n", color="GRAY", fn=print_stderr):
    if _is_debugging < 2:
        return

    fn(msg, PREFIX, print_ws, color)


def ldbgv(fmt, args, print_ws="\n", color="GRAY", fn=print_stderr):
    """Like dbgv, but formats the message only when it is going to be printed"""
    if _is_debugging < 2:
        return

    dbgv(fmt.format(*args), print_ws, color, fn)
