"""Tab-separated timing output, easy to paste into a spreadsheet."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


@dataclass(slots=True)
class TimingPrinter:
    """Streams ``name:\\t\\t<t1>\\t<t2>...`` one value at a time."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    sync: bool = True

    def start(self, name: str) -> None:
        self._write(f"{name}:\t")

    def sample(self, elapsed: float) -> None:
        self._write("\t%9.6f" % elapsed)

    def finish(self) -> None:
        self._write("\n")

    def _write(self, text: str) -> None:
        self.stream.write(text)
        if self.sync:
            self.stream.flush()
