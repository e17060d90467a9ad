"""
Command synthesis for tar / ssh / scp / rsync.

Every builder here is pure: it returns argv lists and never runs anything.
Paths reaching these builders are already stripped of the remote marker
(see core.direction).
"""
from typing import NamedTuple, Optional, Sequence

from .. import config as _cfg
from ..models import ArchiveJob, MirrorJob, ServerProfile
from ..utils.quoting import shell_join
from .direction import Resolved


class ArchiveCommands(NamedTuple):
    archive: str
    compress: list[str]
    # None on dry run: nothing to copy
    copy: Optional[list[str]]


def exclude_args(patterns: Sequence[str]) -> list[str]:
    """One --exclude=PATTERN token per pattern."""
    return [f"--exclude={p}" for p in patterns]


def archive_path(filename: str, timestamp: int, dry_run: bool) -> str:
    if dry_run:
        return _cfg.DRY_RUN_SINK
    return f"{_cfg.ARCHIVE_TMP}/{filename}_{timestamp}{_cfg.ARCHIVE_EXT}"


def remote_path(profile: ServerProfile, path: str) -> str:
    return f"{profile.connect_string}:{path}"


def _key_args(profile: ServerProfile) -> list[str]:
    return ["-i", profile.private_key] if profile.private_key else []


def ssh_args(profile: ServerProfile) -> list[str]:
    return ["ssh", *_key_args(profile), "-p", str(profile.port)]


def scp_args(profile: ServerProfile) -> list[str]:
    # scp spells the port flag -P
    return ["scp", *_key_args(profile), "-P", str(profile.port)]


def remote_shell(profile: ServerProfile) -> str:
    """Value for RSYNC_RSH: ssh with identity file and port, shell-quoted."""
    return shell_join(ssh_args(profile))


def rsync_env(profile: ServerProfile, base_env: dict) -> dict:
    """Copy of *base_env* with the remote-shell override added."""
    env = dict(base_env)
    env[_cfg.RSYNC_RSH_VAR] = remote_shell(profile)
    return env


# ── archive (tar + scp) ──────────────────────────────────────────────────────

def tar_args(job: ArchiveJob, archive: str, source: str) -> list[str]:
    return ["tar", *exclude_args(job.exclude), "-zcvf", archive, source]


def build_archive_commands(job: ArchiveJob, profile: ServerProfile,
                           resolved: Resolved, timestamp: int) -> ArchiveCommands:
    """
    Pull (remote source): tar runs on the server through ssh, then scp fetches
    the archive. Push: tar runs locally, then scp uploads it.
    """
    archive = archive_path(job.filename, timestamp, job.dry_run)
    tar = tar_args(job, archive, resolved.source)

    if resolved.from_remote:
        compress = [*ssh_args(profile), profile.connect_string,
                    shell_join(tar, expand_home=True)]
        copy = [*scp_args(profile), remote_path(profile, archive), resolved.dest]
    else:
        compress = tar
        copy = [*scp_args(profile), archive, remote_path(profile, resolved.dest)]

    return ArchiveCommands(archive=archive, compress=compress,
                           copy=None if job.dry_run else copy)


# ── mirror (rsync) ───────────────────────────────────────────────────────────

def mirror_endpoints(profile: ServerProfile, resolved: Resolved) -> tuple[str, str]:
    if resolved.from_remote:
        return remote_path(profile, resolved.source), resolved.dest
    return resolved.source, remote_path(profile, resolved.dest)


def build_mirror_args(job: MirrorJob, profile: ServerProfile, resolved: Resolved,
                      track_progress: bool = True, stats: bool = False) -> list[str]:
    """rsync arguments (without the program name) for a mirror job."""
    args = ["-avz", "--progress"]
    if track_progress:
        args.append(f"--out-format={_cfg.PROGRESS_FORMAT}")
    if job.dry_run:
        args.append("--dry-run")
    if stats:
        args.append("--stats")
    if job.delete_extraneous:
        args.append("--delete")
    args += exclude_args(job.exclude)
    args += mirror_endpoints(profile, resolved)
    return args


def prediction_args(args: Sequence[str]) -> list[str]:
    """The live args run in simulation mode."""
    if "--dry-run" in args:
        return list(args)
    return ["--dry-run", *args]
