"""
Direction resolution for job source/dest pairs marked with "remote:"
"""
from typing import NamedTuple

from ..config import REMOTE_MARKER


class Resolved(NamedTuple):
    from_remote: bool
    source: str
    dest: str
    # dest carried the marker too; source wins and dest is treated as local
    both_marked: bool = False


def is_remote(path: str) -> bool:
    return path.startswith(REMOTE_MARKER)


def strip_marker(path: str) -> str:
    return path[len(REMOTE_MARKER):] if is_remote(path) else path


def resolve_direction(source: str, dest: str) -> Resolved:
    """
    Strip the marker from both paths.
    from_remote is True only when the source was marked (pull); anything
    else, including two unmarked paths, is a push from the local side.
    """
    from_remote = is_remote(source)
    return Resolved(
        from_remote=from_remote,
        source=strip_marker(source),
        dest=strip_marker(dest),
        both_marked=from_remote and is_remote(dest),
    )
