"""
Logging utilities for syncjobs
"""
import sys
from datetime import datetime
from typing import Sequence

from ..models import Verbosity
from .quoting import shell_join


def log(msg: str):
    """Log a message with timestamp"""
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def vlog(msg: str, verbosity: Verbosity):
    """Log a message only if *verbosity* asks for command echoing"""
    if verbosity.echo_commands:
        log(msg)


def warn(msg: str):
    """Log a warning message"""
    log(f"⚠  {msg}")


def job_line(idx: int, msg: str):
    """Per-job status line, e.g. '>> [2] DONE!'"""
    print(f">> [{idx}] {msg}", flush=True)


def log_command(idx: int, argv: Sequence[str], verbosity: Verbosity, env_note: str = ""):
    """Echo a synthesized command when verbosity requests it."""
    if not verbosity.echo_commands:
        return
    prefix = f"{env_note} " if env_note else ""
    job_line(idx, f"RUN: {prefix}{shell_join(argv)}")


def echo_raw(data: bytes):
    """Write raw tool output straight to the terminal."""
    sys.stdout.write(data.decode("utf-8", errors="replace"))
    sys.stdout.flush()
