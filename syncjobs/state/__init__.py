"""Progress state (streaming parser, bar factory, estimator)"""
from .progress import ProgressWriter, create_progress_bar, parse_units
from .estimator import predict_total

__all__ = [
    "ProgressWriter", "create_progress_bar", "parse_units",
    "predict_total",
]
