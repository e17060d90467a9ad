"""
Streaming progress parsing for rsync --out-format="%l###%n" output
"""
import re
import sys
from typing import Optional

from tqdm import tqdm

# "<work units>###<description>" at the start of a line
RECORD_RE = re.compile(r"^(\d+)###(.*)$", re.MULTILINE)


def parse_units(text: str) -> int:
    """Sum of the work units of every progress record in *text*."""
    return sum(int(m.group(1)) for m in RECORD_RE.finditer(text))


class ProgressWriter:
    """
    Writer sink for one job's output stream.

    Each write() is scanned on its own; records split across two chunks are
    not reassembled. `total` is the running sum for the job.
    """

    def __init__(self, bar: Optional[tqdm] = None):
        self.bar = bar
        self.total = 0

    def write(self, data: bytes) -> int:
        units = parse_units(data.decode("utf-8", errors="replace"))
        if self.bar is not None:
            if units:
                self.bar.update(units)
            if self.total < 1:
                # make the bar visible before the first real increment
                self.bar.refresh()
        self.total += units
        return len(data)


def create_progress_bar(total: int, description: str = "syncing") -> tqdm:
    """Byte-scaled bar on stderr so it never fights streamed stdout."""
    bar = tqdm(
        total=total,
        desc=description,
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        dynamic_ncols=True,
        leave=True,
        file=sys.stderr,
    )
    bar.refresh()
    return bar
