"""
Shell quoting for the few places where a tool takes one command *string*
(ssh remote commands, RSYNC_RSH). Everything else is passed as argv lists.
"""
import shlex
from typing import Sequence


def quote(arg: str) -> str:
    return shlex.quote(str(arg))


def quote_path(path: str) -> str:
    """
    Quote a path for the remote shell, leaving a leading "~" or "~/"
    unquoted so the remote side still expands it to $HOME.
    """
    path = str(path)
    if path == "~":
        return "~"
    if path.startswith("~/"):
        rest = path[2:]
        return "~/" + quote(rest) if rest else "~/"
    return quote(path)


def shell_join(argv: Sequence[str], expand_home: bool = False) -> str:
    """Join argv into a single POSIX-shell-safe command line."""
    q = quote_path if expand_home else quote
    return " ".join(q(a) for a in argv)
