"""
Total-work prediction: run the mirror in simulation mode and count units
"""
from typing import Mapping, Sequence

from .. import config as _cfg
from ..core.commands import prediction_args
from ..utils import process
from .progress import ProgressWriter


def predict_total(args: Sequence[str], env: Mapping[str, str]) -> int:
    """
    Advisory total for the progress bar. The exit status of the simulation
    is ignored; zero units falls back to NOMINAL_TOTAL.
    """
    writer = ProgressWriter(bar=None)
    process.run(["rsync", *prediction_args(args)], env=env, sink=writer)
    return writer.total or _cfg.NOMINAL_TOTAL
