"""Core functionality (direction, command synthesis, liveness)"""
from .direction import resolve_direction, Resolved
from .commands import build_archive_commands, build_mirror_args, ArchiveCommands
from .ssh_manager import SSHManager, probe_host

__all__ = [
    "resolve_direction", "Resolved",
    "build_archive_commands", "build_mirror_args", "ArchiveCommands",
    "SSHManager", "probe_host",
]
