"""
Job engine - runs every configured archive job, then every mirror job
"""
import os
import time
from typing import Optional

from ..models import ArchiveJob, Config, JobResult, JobStatus, MirrorJob, ServerProfile, Verbosity
from ..operations.archive import run_archive
from ..operations.mirror import run_mirror
from ..utils.logging import job_line, log, warn
from .commands import build_archive_commands, build_mirror_args, remote_path, rsync_env
from .direction import Resolved, resolve_direction
from .ssh_manager import probe_host


def _describe(profile: ServerProfile, resolved: Resolved) -> tuple[str, str]:
    if resolved.from_remote:
        return remote_path(profile, resolved.source), resolved.dest
    return resolved.source, remote_path(profile, resolved.dest)


def _finish(kind: str, idx: int, job, rc: int) -> JobResult:
    if rc == 0:
        job_line(idx, "DONE!")
        return JobResult(kind, idx, job.server, JobStatus.DONE, rc)
    job_line(idx, f"FAILED (exit {rc})")
    return JobResult(kind, idx, job.server, JobStatus.FAILED, rc)


def _preflight(kind: str, idx: int, job, profile: ServerProfile,
               verbosity: Verbosity) -> Optional[JobResult]:
    """Liveness probe; returns a SKIPPED result when the server is down."""
    if probe_host(profile, verbosity):
        return None
    job_line(idx, f"SKIPPED: server '{job.server}' ({profile.describe()}) is unreachable")
    return JobResult(kind, idx, job.server, JobStatus.SKIPPED)


def _resolve(idx: int, job) -> Resolved:
    resolved = resolve_direction(job.source, job.dest)
    if resolved.both_marked:
        warn(f"[{idx}] both source and destination are marked remote; "
             f"treating destination {resolved.dest!r} as local")
    return resolved


# ── archive jobs ─────────────────────────────────────────────────────────────

def process_archive_job(cfg: Config, idx: int, job: ArchiveJob, timestamp: int) -> JobResult:
    profile = cfg.servers[job.server]
    verbosity = Verbosity.effective(cfg.verbosity, job.verbosity)
    resolved = _resolve(idx, job)

    skipped = _preflight("archive", idx, job, profile, verbosity)
    if skipped:
        return skipped

    src, dst = _describe(profile, resolved)
    if job.log:
        print(f">> [Tar and Copy {idx}] {job.log}:", flush=True)
    else:
        print(f">> [Tar and Copy {idx}] Copying {src} into {dst}:", flush=True)

    cmds = build_archive_commands(job, profile, resolved, timestamp)
    rc = run_archive(idx, cmds, verbosity)
    return _finish("archive", idx, job, rc)


# ── mirror jobs ──────────────────────────────────────────────────────────────

def process_mirror_job(cfg: Config, idx: int, job: MirrorJob) -> JobResult:
    profile = cfg.servers[job.server]
    verbosity = Verbosity.effective(cfg.verbosity, job.verbosity)
    resolved = _resolve(idx, job)

    skipped = _preflight("mirror", idx, job, profile, verbosity)
    if skipped:
        return skipped

    src, dst = _describe(profile, resolved)
    if job.log:
        job_line(idx, f"{job.log}:")
    else:
        job_line(idx, f"Copying {src} into {dst}:")

    args = build_mirror_args(job, profile, resolved,
                             track_progress=cfg.progress,
                             stats=verbosity.stream_output)
    env = rsync_env(profile, os.environ)
    rc = run_mirror(idx, args, env, verbosity, track_progress=cfg.progress)
    return _finish("mirror", idx, job, rc)


# ── run ──────────────────────────────────────────────────────────────────────

def run_jobs(cfg: Config) -> list[JobResult]:
    """
    Strictly sequential: archive jobs in declaration order, then mirror jobs.
    A failing or skipped job never stops the run.
    """
    results: list[JobResult] = []

    # one timestamp for every archive produced by this run
    timestamp = int(time.time())
    for idx, job in enumerate(cfg.archive_jobs, start=1):
        results.append(process_archive_job(cfg, idx, job, timestamp))

    for idx, job in enumerate(cfg.mirror_jobs, start=1):
        results.append(process_mirror_job(cfg, idx, job))

    counts = {s: sum(1 for r in results if r.status is s) for s in JobStatus}
    log(f"[summary] done={counts[JobStatus.DONE]} "
        f"failed={counts[JobStatus.FAILED]} skipped={counts[JobStatus.SKIPPED]}")
    return results
