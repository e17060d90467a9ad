"""Utilities (logging, quoting, process execution)"""
from .logging import log, vlog, warn, job_line, log_command
from .quoting import quote, shell_join
from .process import run, Tee, EchoSink

__all__ = [
    "log", "vlog", "warn", "job_line", "log_command",
    "quote", "shell_join",
    "run", "Tee", "EchoSink",
]
