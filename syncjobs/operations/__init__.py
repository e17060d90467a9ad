"""Operations (archive and mirror job execution)"""
from .archive import run_archive, run_step
from .mirror import run_mirror

__all__ = [
    "run_archive", "run_step",
    "run_mirror",
]
