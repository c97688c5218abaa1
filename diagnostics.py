"""Trace sinks for the rational search.

The search reports its intermediate bounds to whatever Diagnostics object it
was built with. The base class discards everything; PrintDiagnostics writes a
line per event, RecordingDiagnostics keeps them for later inspection. None of
them can influence the result.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List
import sys

from arithmetic import FractionValue


@dataclass(frozen=True)
class SearchStep:
    """Bounds at the top of one search iteration, before the convergence test."""
    iteration: int         # 0-based
    low: FractionValue     # low <= remainder
    high: FractionValue    # remainder <= high
    test_low: float        # low.den·r - low.num
    test_high: float       # high.num - high.den·r


class Diagnostics:
    """No-op sink. Subclass and override the hooks of interest."""

    def start(self, value: float, precision: float, integer_part: int) -> None:
        pass

    def step(self, step: SearchStep) -> None:
        pass

    def note(self, message: str) -> None:
        pass

    def finish(self, result) -> None:
        pass


class PrintDiagnostics(Diagnostics):
    def __init__(self, stream=None):
        self.stream = stream

    def _print(self, msg: str) -> None:
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def start(self, value, precision, integer_part):
        self._print(f"Fraction: val = {value}, precision = {precision}, intpart = {integer_part}")

    def step(self, step):
        self._print(f"Fraction: [{step.iteration}] testlow = {step.test_low} (fraction: {step.low}), "
                    f"testhigh = {step.test_high} (fraction: {step.high})")

    def note(self, message):
        self._print(f"Fraction: {message}")

    def finish(self, result):
        self._print(f"Fraction: DONE for {result.value} at precision {result.precision}: "
                    f"answer = {result.fraction} ({result.outcome.value}, {result.iterations} iterations)")


class RecordingDiagnostics(Diagnostics):
    def __init__(self):
        self.starts: List[tuple] = []
        self.steps: List[SearchStep] = []
        self.notes: List[str] = []
        self.results: list = []

    def start(self, value, precision, integer_part):
        self.starts.append((value, precision, integer_part))

    def step(self, step):
        self.steps.append(step)

    def note(self, message):
        self.notes.append(message)

    def finish(self, result):
        self.results.append(result)
