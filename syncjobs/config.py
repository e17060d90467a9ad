"""
Configuration constants and YAML config loading for syncjobs
"""
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .models import ArchiveJob, Config, MirrorJob, ServerProfile, Verbosity

# ══════════════════════════════════════════════════════════════════════════════
#  DEFAULTS
# ══════════════════════════════════════════════════════════════════════════════

DEFAULT_CONFIG_PATH = "./config.yml"

# Literal prefix marking the remote side of a job's source/dest
REMOTE_MARKER = "remote:"

# Scratch dir for archives (on whichever side runs tar)
ARCHIVE_TMP = "/tmp"
ARCHIVE_EXT = ".tar.gz"
DRY_RUN_SINK = "/dev/null"

# Liveness probe connect/exec timeout (seconds)
PROBE_TIMEOUT = 5

# OpenSSH client config; ssh/scp/rsync read it, so the liveness check does too
SSH_CONFIG_PATH = "~/.ssh/config"

# Progress total used when the prediction pass reports nothing
NOMINAL_TOTAL = 100

# rsync per-file line: "<bytes>###<name>"
PROGRESS_FORMAT = "%l###%n"
RSYNC_RSH_VAR = "RSYNC_RSH"


class ConfigError(Exception):
    """Missing, unreadable or invalid configuration (fatal)."""


# ══════════════════════════════════════════════════════════════════════════════
#  CONFIG FILE LOCATION
# ══════════════════════════════════════════════════════════════════════════════

def get_global_config_dir() -> Path:
    """Return the global config directory for syncjobs."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "syncjobs"
    return Path.home() / ".config" / "syncjobs"


def validate_config_path(path: Path) -> Path:
    """Make sure *path* exists and is a regular file."""
    if not path.exists():
        raise ConfigError(f"config file does not exist: {path}")
    if path.is_dir():
        raise ConfigError(f"'{path}' is a directory, not a normal file")
    return path


def find_config(path_arg: Optional[str] = None) -> Path:
    """
    Pick the config file to load.
    An explicit path must exist. Otherwise ./config.yml is tried first,
    then config.yml in the global config directory.
    """
    if path_arg:
        return validate_config_path(Path(path_arg).expanduser())

    local = Path(DEFAULT_CONFIG_PATH)
    if local.exists():
        return validate_config_path(local)
    fallback = get_global_config_dir() / "config.yml"
    if fallback.exists():
        return validate_config_path(fallback)
    raise ConfigError(f"no config file found at {local} or {fallback}")


def load_config_file(path: Path) -> dict:
    """Parse a YAML config file and return its contents as a dict."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


# ══════════════════════════════════════════════════════════════════════════════
#  SCHEMA
# ══════════════════════════════════════════════════════════════════════════════

def _verbosity(value: Any, where: str) -> Verbosity:
    if value is None:
        return Verbosity.SILENT
    try:
        return Verbosity(int(value))
    except (TypeError, ValueError):
        raise ConfigError(f"{where}: verbose must be 0, 1 or 2 (got {value!r})")


def _required(item: dict, key: str, where: str) -> str:
    value = item.get(key)
    if value is None or str(value) == "":
        raise ConfigError(f"{where}: '{key}' is required")
    return str(value)


def _excludes(item: dict, where: str) -> tuple[str, ...]:
    raw = item.get("exclude") or []
    if not isinstance(raw, list):
        raise ConfigError(f"{where}: 'exclude' must be a list")
    return tuple(str(p) for p in raw)


def _port(value: Any, where: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{where}: port must be a number (got {value!r})")
    if not 1 <= port <= 65535:
        raise ConfigError(f"{where}: port must be between 1 and 65535 (got {port})")
    return port


def _flag(item: dict, key: str, where: str, default: bool) -> bool:
    # YAML booleans only; "false" in quotes would otherwise be truthy
    value = item.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"{where}: '{key}' must be true or false (got {value!r})")
    return value


def parse_servers(raw: Any) -> dict[str, ServerProfile]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("'servers' must be a mapping of name -> server")
    servers = {}
    for name, item in raw.items():
        where = f"servers.{name}"
        if not isinstance(item, dict):
            raise ConfigError(f"{where}: must be a mapping")
        key = item.get("private_key")
        servers[str(name)] = ServerProfile(
            name=str(name),
            user=_required(item, "user", where),
            host=_required(item, "host", where),
            port=_port(item.get("port", 22), where),
            private_key=str(key) if key else None,
        )
    return servers


def _job_items(data: dict, section: str) -> list[tuple[str, dict]]:
    raw = data.get(section) or []
    if not isinstance(raw, list):
        raise ConfigError(f"'{section}' must be a list")
    items = []
    for i, item in enumerate(raw, start=1):
        where = f"{section}[{i}]"
        if not isinstance(item, dict):
            raise ConfigError(f"{where}: must be a mapping")
        items.append((where, item))
    return items


def _check_server(name: str, servers: dict, where: str) -> str:
    if name not in servers:
        raise ConfigError(f"{where}: unknown server '{name}'")
    return name


def parse_config(data: dict) -> Config:
    """Turn the raw YAML dict into a validated Config."""
    servers = parse_servers(data.get("servers"))

    archive_jobs = [
        ArchiveJob(
            server=_check_server(_required(item, "server", where), servers, where),
            filename=_required(item, "filename", where),
            source=_required(item, "source", where),
            dest=_required(item, "dest", where),
            log=str(item.get("log") or ""),
            verbosity=_verbosity(item.get("verbose"), where),
            dry_run=_flag(item, "dry_run", where, False),
            exclude=_excludes(item, where),
        )
        for where, item in _job_items(data, "compress_and_copy")
    ]

    mirror_jobs = [
        MirrorJob(
            server=_check_server(_required(item, "server", where), servers, where),
            source=_required(item, "source", where),
            dest=_required(item, "dest", where),
            log=str(item.get("log") or ""),
            verbosity=_verbosity(item.get("verbose"), where),
            dry_run=_flag(item, "dry_run", where, False),
            delete_extraneous=_flag(item, "delete_extraneous_from_dest", where, False),
            exclude=_excludes(item, where),
        )
        for where, item in _job_items(data, "sync")
    ]

    return Config(
        servers=servers,
        archive_jobs=archive_jobs,
        mirror_jobs=mirror_jobs,
        verbosity=_verbosity(data.get("verbose"), "verbose"),
        progress=_flag(data, "progress", "progress", True),
    )


def load_config(path: Path) -> Config:
    return parse_config(load_config_file(path))
