"""Best rational approximation of a float within an integer width.

The search brackets the fractional part r of the input between two fractions
low = a/b <= r <= high = c/d, starting from 0/1 and 1/1, and narrows the
bracket Stern-Brocot style. Instead of one mediant per iteration it takes the
whole run of mediants toward one side at once: with

    test_low  = b·r - a        (= b·(r - low)  >= 0)
    test_high = c - d·r        (= d·(high - r) >= 0)

the mediant (k·a + c)/(k·b + d) stays >= r exactly while
k <= test_high / test_low = x1, so n = floor(x1) steps can be taken in one go
(symmetrically x2 = test_low / test_high steps from the high side). Picking the
larger of x1, x2 follows the larger partial quotient of r's continued fraction.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
import math

from arithmetic import FractionValue
from diagnostics import Diagnostics, SearchStep
from formats import IntFormat, get_int_format, default_precision, PRACTICAL_PRECISION_FLOOR, DEFAULT_INT_FORMAT
from overflow import StepOverflowCheck, check_step_overflow, denominator_limit

# Worst case seen for int64 at precision 1e-13 is 21 iterations.
MAX_ITERATIONS = 64


class RangeError(ValueError):
    """The value's integer part does not fit the integer width."""

    def __init__(self, value, max_value: int):
        self.value = value
        self.max_value = max_value
        super().__init__(f"fraction cannot be larger than +/-{max_value} (got {value})")


class PrecisionError(ValueError):
    """Precision is not a positive finite number."""

    def __init__(self, precision):
        self.precision = precision
        super().__init__(f"precision must be a positive finite number, got {precision}")


class Outcome(Enum):
    CONVERGED = "converged"
    OVERFLOW_STOPPED = "overflow-stopped"
    ITERATION_LIMIT = "iteration-limit"


@dataclass(frozen=True)
class SearchResult:
    value: float              # input, as float64
    precision: float          # absolute tolerance used
    fraction: FractionValue   # answer, integer part and sign included
    outcome: Outcome
    iterations: int           # bound updates performed
    residual: float           # |fraction - value|

    @property
    def within_precision(self) -> bool:
        return self.residual <= self.precision


class RationalSearch:
    """Mediant-descent engine for one integer width.

    Holds no per-call state, so one instance can serve concurrent callers as
    long as its diagnostics sink can.
    """

    def __init__(
        self,
        int_format: Union[str, IntFormat] = DEFAULT_INT_FORMAT,
        diagnostics: Optional[Diagnostics] = None,
        max_iterations: int = MAX_ITERATIONS,
    ):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        self.fmt = get_int_format(int_format)
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.max_iterations = max_iterations

    def approximate(self, value, precision: Optional[float] = None) -> FractionValue:
        return self.search(value, precision).fraction

    def search(self, value, precision: Optional[float] = None) -> SearchResult:
        if precision is None:
            precision = default_precision(value)
        precision = float(precision)
        if not math.isfinite(precision) or precision <= 0:
            raise PrecisionError(precision)

        x = float(value)
        if not math.isfinite(x):
            raise RangeError(value, self.fmt.max_value)
        negative = x < 0
        magnitude = -x if negative else x

        integer_part = math.trunc(magnitude)
        if integer_part >= self.fmt.max_value:
            raise RangeError(value, self.fmt.max_value)
        remainder = magnitude - integer_part
        if not 0 <= remainder <= 1:
            raise RangeError(value, self.fmt.max_value)

        self.diagnostics.start(x, precision, -integer_part if negative else integer_part)
        if precision < PRACTICAL_PRECISION_FLOOR:
            self.diagnostics.note(
                f"precision {precision} is below {PRACTICAL_PRECISION_FLOOR}; "
                "expect the overflow guard to stop the search")

        fraction, outcome, iterations = self._descend(remainder, precision, denominator_limit(self.fmt, integer_part))

        fraction = fraction.plus_integer(integer_part)
        if negative:
            fraction = fraction.negated()
        result = SearchResult(
            value=x,
            precision=precision,
            fraction=fraction,
            outcome=outcome,
            iterations=iterations,
            residual=abs(fraction.to_float() - x),
        )
        self.diagnostics.finish(result)
        return result

    def _descend(self, r: float, precision: float, limit: int):
        """Narrow 0/1 <= r <= 1/1 until a bound is within precision.

        Returns (fraction, outcome, iterations) for the fractional part only.
        """
        low = FractionValue(0, 1, self.fmt)
        high = FractionValue(1, 1, self.fmt)
        iterations = 0

        while True:
            test_low = -low.offset(r)
            test_high = high.offset(r)
            self.diagnostics.step(SearchStep(iterations, low, high, test_low, test_high))

            # |bound - r| < precision / den, which is within precision
            if test_high < precision:
                return high, Outcome.CONVERGED, iterations
            if test_low < precision:
                return low, Outcome.CONVERGED, iterations

            if iterations >= self.max_iterations:
                self.diagnostics.note(f"no convergence after {iterations} iterations; answer = {high}")
                return high, Outcome.ITERATION_LIMIT, iterations

            x1 = test_high / test_low
            x2 = test_low / test_high
            if x1 > x2:
                check = check_step_overflow(low, high, x1, "low", limit)
            else:
                check = check_step_overflow(low, high, x2, "high", limit)
            if not check.ok:
                self.diagnostics.note(
                    f"{check.stepped} step with quotient {check.quotient} would exceed {check.limit} "
                    f"(slack {check.slack}); answer = {high}")
                return high, Outcome.OVERFLOW_STOPPED, iterations

            low, high = self._step(low, high, check)
            iterations += 1

    def _step(self, low: FractionValue, high: FractionValue, check: StepOverflowCheck):
        """Apply an accepted step; returns the new (low, high)."""
        fmt = self.fmt
        n = int(check.quotient)
        outer = FractionValue(check.outer_numerator, check.outer_denominator, fmt)
        if check.stepped == "low":
            # n·low + high is still >= r, one more low crosses below it
            inner = FractionValue(fmt.add(fmt.mul(n, low.numerator), high.numerator),
                                  fmt.add(fmt.mul(n, low.denominator), high.denominator), fmt)
            return outer, inner
        inner = FractionValue(fmt.add(low.numerator, fmt.mul(n, high.numerator)),
                              fmt.add(low.denominator, fmt.mul(n, high.denominator)), fmt)
        return inner, outer


def approximate(
    value,
    precision: Optional[float] = None,
    int_format: Union[str, IntFormat] = DEFAULT_INT_FORMAT,
    diagnostics: Optional[Diagnostics] = None,
) -> FractionValue:
    """Best fraction within int_format that is within precision of value.

    precision defaults to the machine epsilon of value's float width. Raises
    RangeError when |trunc(value)| >= int_format's maximum and PrecisionError
    for a non-positive or non-finite precision. Running out of integer range
    before reaching precision is not an error; use RationalSearch.search to see
    the outcome and residual.
    """
    return RationalSearch(int_format, diagnostics).search(value, precision).fraction
