from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction

from formats import IntFormat, INT64

Q = Fraction  # exact rational type alias

DECIMAL_DIGITS = 40

def decimal_expansion(numerator: int, denominator: int, max_digits: int = DECIMAL_DIGITS) -> str:
    """
    Exact decimal expansion of numerator/denominator without float rounding.
    - If it terminates, returns all digits.
    - If it repeats, the repeating part is in parentheses, e.g. "0.(3)".
    - If neither shows up within max_digits, the digits found so far end in "...".
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    if numerator == 0:
        return "0"

    sign = '-' if numerator < 0 else ''
    n = abs(numerator)
    d = denominator

    int_part = n // d
    rem = n % d
    if rem == 0:
        return f"{sign}{int_part}"

    # Long division with cycle detection
    digits = []
    seen = {}  # remainder -> index in digits
    while rem != 0 and rem not in seen and len(digits) < max_digits:
        seen[rem] = len(digits)
        rem *= 10
        digits.append(str(rem // d))
        rem = rem % d

    if rem == 0:
        return f"{sign}{int_part}.{''.join(digits)}"
    if rem not in seen:
        return f"{sign}{int_part}.{''.join(digits)}..."
    start = seen[rem]
    nonrep = ''.join(digits[:start])
    rep = ''.join(digits[start:])
    return f"{sign}{int_part}.{nonrep}({rep})"

@dataclass(frozen=True)
class FractionValue:
    """A numerator/denominator pair held in a fixed integer width.

    The denominator is strictly positive. Lowest terms are not enforced; the
    mediants built by rational_search always come out reduced.
    """
    numerator: int
    denominator: int
    fmt: IntFormat = field(default=INT64, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "numerator", self.fmt.check(self.numerator))
        object.__setattr__(self, "denominator", self.fmt.check(self.denominator))
        if self.denominator <= 0:
            raise ValueError(f"denominator must be positive, got {self.denominator}")

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def to_float(self) -> float:
        # int / int is correctly rounded in Python, even beyond 2^53
        return self.numerator / self.denominator

    def to_fraction(self) -> Q:
        return Q(self.numerator, self.denominator)

    def plus_integer(self, k: int) -> FractionValue:
        """(numerator + k*denominator)/denominator, in this fraction's width."""
        num = self.fmt.add(self.numerator, self.fmt.mul(k, self.denominator))
        return FractionValue(num, self.denominator, self.fmt)

    def negated(self) -> FractionValue:
        return FractionValue(self.fmt.check(-self.numerator), self.denominator, self.fmt)

    def offset(self, target: float) -> float:
        """numerator - denominator*target.

        Equals denominator * (value - target): same sign as the difference, no
        division needed.
        """
        return self.numerator - self.denominator * target

    def compare(self, target: float) -> int:
        off = self.offset(target)
        return (off > 0) - (off < 0)

    def equals_value(self, other: FractionValue) -> bool:
        """Equality of value by cross multiplication (2/4 equals 1/2)."""
        return self.numerator * other.denominator == other.numerator * self.denominator

    def decimal(self, max_digits: int = DECIMAL_DIGITS) -> str:
        return decimal_expansion(self.numerator, self.denominator, max_digits)
