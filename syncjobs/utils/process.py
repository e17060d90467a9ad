"""
Process execution: launch an external tool and feed its combined
stdout/stderr to a writer sink as data arrives.
"""
import subprocess
from typing import Mapping, Optional, Protocol, Sequence

from .logging import echo_raw, warn

CHUNK_SIZE = 64 * 1024
EXIT_NOT_FOUND = 127


class Sink(Protocol):
    def write(self, data: bytes) -> int: ...


class Tee:
    """Fan one output stream out to several sinks."""

    def __init__(self, *sinks: Sink):
        self.sinks = [s for s in sinks if s is not None]

    def write(self, data: bytes) -> int:
        for s in self.sinks:
            s.write(data)
        return len(data)


class EchoSink:
    def write(self, data: bytes) -> int:
        echo_raw(data)
        return len(data)


def run(argv: Sequence[str], env: Optional[Mapping[str, str]] = None,
        sink: Optional[Sink] = None) -> int:
    """
    Run *argv* to completion and return its exit status.
    Output is discarded when no sink is given. Blocks until the process exits;
    there is no timeout.
    """
    try:
        proc = subprocess.Popen(
            list(argv),
            stdout=subprocess.PIPE if sink is not None else subprocess.DEVNULL,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            env=dict(env) if env is not None else None,
            bufsize=0,
        )
    except FileNotFoundError:
        warn(f"command not found: {argv[0]}")
        return EXIT_NOT_FOUND

    with proc:
        if sink is not None:
            # unbuffered pipe: read() returns whatever is available
            for chunk in iter(lambda: proc.stdout.read(CHUNK_SIZE), b""):
                sink.write(chunk)
        return proc.wait()
