"""
Mirror job execution: optional prediction pass, then the live rsync run
"""
from typing import Mapping, Sequence

from .. import config as _cfg
from ..models import Verbosity
from ..state.estimator import predict_total
from ..state.progress import ProgressWriter, create_progress_bar
from ..utils import process
from ..utils.logging import log_command
from ..utils.process import EchoSink, Tee


def run_mirror(idx: int, args: Sequence[str], env: Mapping[str, str],
               verbosity: Verbosity, track_progress: bool = True) -> int:
    """Run rsync with *args*; drive a progress bar when *track_progress*."""
    argv = ["rsync", *args]
    log_command(idx, argv, verbosity,
                env_note=f"{_cfg.RSYNC_RSH_VAR}={env.get(_cfg.RSYNC_RSH_VAR, '')!r}")
    echo = EchoSink() if verbosity.stream_output else None

    if not track_progress:
        return process.run(argv, env=env, sink=echo)

    total = predict_total(args, env)
    bar = create_progress_bar(total, "syncing")
    writer = ProgressWriter(bar)
    try:
        return process.run(argv, env=env, sink=Tee(writer, echo))
    finally:
        bar.close()
