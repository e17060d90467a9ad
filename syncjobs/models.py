"""
Data model: server profiles, job descriptors, verbosity and job results.
All descriptors are frozen; they are built once by config.load_config().
"""
import enum
from dataclasses import dataclass, field
from typing import Optional


class Verbosity(enum.IntEnum):
    SILENT = 0
    ECHO_COMMANDS = 1
    ECHO_COMMANDS_AND_STREAM = 2

    @classmethod
    def effective(cls, global_level: "Verbosity", job_level: "Verbosity") -> "Verbosity":
        """The louder of the global and per-job settings."""
        return cls(max(global_level, job_level))

    @property
    def echo_commands(self) -> bool:
        return self >= Verbosity.ECHO_COMMANDS

    @property
    def stream_output(self) -> bool:
        return self >= Verbosity.ECHO_COMMANDS_AND_STREAM


@dataclass(frozen=True)
class ServerProfile:
    name: str
    user: str
    host: str
    port: int = 22
    # None -> ssh-agent / ~/.ssh/id_*
    private_key: Optional[str] = None

    @property
    def connect_string(self) -> str:
        return f"{self.user}@{self.host}"

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}"


@dataclass(frozen=True)
class ArchiveJob:
    server: str
    filename: str
    source: str
    dest: str
    log: str = ""
    verbosity: Verbosity = Verbosity.SILENT
    dry_run: bool = False
    exclude: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MirrorJob:
    server: str
    source: str
    dest: str
    log: str = ""
    verbosity: Verbosity = Verbosity.SILENT
    dry_run: bool = False
    delete_extraneous: bool = False
    exclude: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Config:
    servers: dict[str, ServerProfile]
    archive_jobs: list[ArchiveJob]
    mirror_jobs: list[MirrorJob]
    verbosity: Verbosity = Verbosity.SILENT
    progress: bool = True


class JobStatus(str, enum.Enum):
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class JobResult:
    kind: str  # "archive" | "mirror"
    index: int
    server: str
    status: JobStatus
    returncode: Optional[int] = None
