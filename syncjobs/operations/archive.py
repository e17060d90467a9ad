"""
Archive job execution: compress (locally or over ssh), then scp the archive
"""
from typing import Sequence

from ..core.commands import ArchiveCommands
from ..models import Verbosity
from ..utils import process
from ..utils.logging import log_command
from ..utils.process import EchoSink


def run_step(idx: int, argv: Sequence[str], verbosity: Verbosity) -> int:
    """Run one command, streaming its output only when verbosity asks for it."""
    log_command(idx, argv, verbosity)
    sink = EchoSink() if verbosity.stream_output else None
    return process.run(argv, sink=sink)


def run_archive(idx: int, cmds: ArchiveCommands, verbosity: Verbosity) -> int:
    """
    Compress then copy. Returns the first non-zero exit status, or 0.
    The copy step is skipped when compression failed or when there is no
    copy command (dry run).
    """
    rc = run_step(idx, cmds.compress, verbosity)
    if rc != 0:
        return rc
    if cmds.copy is None:
        return 0
    return run_step(idx, cmds.copy, verbosity)
