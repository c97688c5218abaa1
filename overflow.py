from dataclasses import dataclass
from arithmetic import FractionValue
from formats import IntFormat

@dataclass(frozen=True)
class StepOverflowCheck:
    """Overflow check for one candidate step of the mediant descent.

    A step replaces (low, high) by the pair
        inner = n·s + t,   outer = inner + s = (n+1)·s + t
    where s is the bound being repeated ("stepped" side), t the other bound and
    n = floor(quotient). The outer pair has the larger terms, so it alone
    decides whether the step fits.
    """
    stepped: str               # "low" | "high": which bound is repeated n times
    quotient: float            # x1 or x2, partial quotient estimate
    limit: int                 # largest allowed numerator/denominator
    numerator_estimate: float  # (quotient+1)·s.num + t.num
    denominator_estimate: float  # (quotient+1)·s.den + t.den
    outer_numerator: int       # exact (n+1)·s.num + t.num (0 if rejected early)
    outer_denominator: int     # exact (n+1)·s.den + t.den (0 if rejected early)
    slack: float               # limit - max(estimates) (>0 means the estimate fits)
    ok: bool

def denominator_limit(fmt: IntFormat, integer_part: int) -> int:
    """Largest bound denominator whose fraction still fits fmt after adding integer_part.

    The search runs on the fractional remainder, so every bound has
    numerator <= denominator and
        numerator + k·denominator <= (k+1)·denominator.
    Keeping denominators <= max_value // (k+1) makes plus_integer(k) safe.
    For k = 0 this is max_value itself.
    """
    k = abs(int(integer_part))
    return fmt.max_value // (k + 1)

def check_step_overflow(
    low: FractionValue,
    high: FractionValue,
    quotient: float,
    stepped: str,
    limit: int,
) -> StepOverflowCheck:
    """Check that the step built from quotient stays inside limit.

    The float estimates are the fast test (they are what decides in the common
    case, >= limit fails). Because float(limit) can round up past the width's
    maximum, the exact integers are then checked as well before the step is
    allowed.
    """
    if stepped == "low":
        s, t = low, high
    elif stepped == "high":
        s, t = high, low
    else:
        raise ValueError(f"stepped must be 'low' or 'high', got {stepped!r}")

    num_est = (quotient + 1) * s.numerator + t.numerator
    den_est = (quotient + 1) * s.denominator + t.denominator
    slack = float(limit) - max(num_est, den_est)

    outer_num = outer_den = 0
    ok = slack > 0
    if ok:
        n = int(quotient)
        outer_num = (n + 1) * s.numerator + t.numerator
        outer_den = (n + 1) * s.denominator + t.denominator
        ok = outer_num <= limit and outer_den <= limit

    return StepOverflowCheck(
        stepped=stepped,
        quotient=quotient,
        limit=limit,
        numerator_estimate=num_est,
        denominator_estimate=den_est,
        outer_numerator=outer_num,
        outer_denominator=outer_den,
        slack=slack,
        ok=ok,
    )
