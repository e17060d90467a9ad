"""
SSH liveness probing for configured servers
"""
import os
from typing import Optional

import paramiko

from .. import config as _cfg
from ..models import ServerProfile, Verbosity
from ..utils.logging import vlog

# exits immediately, no side effects
PROBE_COMMAND = "true"


class SSHManager:
    """
    Wraps a paramiko SSHClient for one server profile.
    Non-interactive: unknown host keys are accepted, no password prompts.
    """

    def __init__(self, profile: ServerProfile, timeout: float = _cfg.PROBE_TIMEOUT):
        self.profile = profile
        self.timeout = timeout
        self._ssh: Optional[paramiko.SSHClient] = None

    # ── connection ─────────────────────────────────────────────────────────

    def _host_options(self) -> dict:
        """Settings for this host from the user's ssh_config, if any."""
        path = os.path.expanduser(_cfg.SSH_CONFIG_PATH)
        if not os.path.isfile(path):
            return {}
        return paramiko.SSHConfig.from_path(path).lookup(self.profile.host)

    def connect(self):
        opts = self._host_options()
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        # port and user from the profile win, as they do on the ssh command line
        kw: dict = dict(hostname=opts.get("hostname", self.profile.host),
                        port=self.profile.port, username=self.profile.user,
                        timeout=self.timeout, banner_timeout=self.timeout,
                        auth_timeout=self.timeout)
        if self.profile.private_key:
            kw["key_filename"] = os.path.expanduser(self.profile.private_key)
        elif opts.get("identityfile"):
            kw["key_filename"] = [os.path.expanduser(k) for k in opts["identityfile"]]
        proxy = opts.get("proxycommand")
        if proxy and proxy.lower() != "none":
            kw["sock"] = paramiko.ProxyCommand(proxy)
        try:
            client.connect(**kw)
        except BaseException:
            client.close()
            raise
        self._ssh = client

    def close(self):
        if self._ssh:
            self._ssh.close()
        self._ssh = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *exc):
        self.close()

    # ── raw exec ────────────────────────────────────────────────────────────

    def exec(self, cmd: str) -> int:
        """Run a command and return its exit status."""
        _, stdout, _ = self._ssh.exec_command(cmd, timeout=self.timeout)
        return stdout.channel.recv_exit_status()


def probe_host(profile: ServerProfile, verbosity: Verbosity = Verbosity.SILENT,
               timeout: float = _cfg.PROBE_TIMEOUT) -> bool:
    """True if *profile* accepts a connection and runs a no-op command."""
    vlog(f"[SSH] probing {profile.describe()} (timeout {timeout}s) …", verbosity)
    try:
        with SSHManager(profile, timeout=timeout) as mgr:
            rc = mgr.exec(PROBE_COMMAND)
    except (paramiko.SSHException, OSError) as exc:
        vlog(f"[SSH] {profile.describe()} unreachable: {exc}", verbosity)
        return False
    if rc != 0:
        vlog(f"[SSH] {profile.describe()} probe exited {rc}", verbosity)
        return False
    vlog(f"[SSH] {profile.describe()} reachable ✓", verbosity)
    return True
