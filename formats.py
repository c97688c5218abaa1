from dataclasses import dataclass
from typing import Union
import numpy as np

# Requested precisions finer than this make numerators/denominators grow until
# the overflow guard trips. Not enforced; see rational_search.RationalSearch.
PRACTICAL_PRECISION_FLOOR = 1e-13

@dataclass(frozen=True)
class IntFormat:
    name: str
    bits: int           # width incl. sign bit
    max_value: int      # largest representable value (2^(bits-1) - 1)
    min_value: int      # smallest representable value (-2^(bits-1))

    def check(self, v: int) -> int:
        """Return v as an exact int, or raise OverflowError if it does not fit."""
        v = int(v)
        if v > self.max_value or v < self.min_value:
            raise OverflowError(
                f"{v} does not fit in {self.name} [{self.min_value}, {self.max_value}]"
            )
        return v

    def add(self, a: int, b: int) -> int:
        return self.check(int(a) + int(b))

    def mul(self, a: int, b: int) -> int:
        return self.check(int(a) * int(b))

@dataclass(frozen=True)
class FloatFormat:
    name: str
    p: int              # precision in bits (incl. implicit 1)
    eps: float          # machine epsilon (nextafter(1,2) - 1) = 2^(1-p)
    Fmax: float         # largest finite positive
    dtype: np.dtype

def _derive_int(name: str, dtype) -> IntFormat:
    info = np.iinfo(dtype)
    return IntFormat(name=name, bits=info.bits, max_value=int(info.max), min_value=int(info.min))

def _derive_float(name: str, dtype) -> FloatFormat:
    info = np.finfo(dtype)
    # finfo reports nmant without the implicit leading 1
    return FloatFormat(name=name, p=int(info.nmant) + 1, eps=float(info.eps),
                       Fmax=float(info.max), dtype=np.dtype(dtype))

# Signed two's complement widths; C names follow the LP64 data model.
_INT_REGISTRY = {
    "int8":   np.int8,
    "i8":     np.int8,
    "byte":   np.int8,

    "int16":  np.int16,
    "i16":    np.int16,
    "short":  np.int16,

    "int32":  np.int32,
    "i32":    np.int32,
    "int":    np.int32,

    "int64":  np.int64,
    "i64":    np.int64,
    "long":   np.int64,
}

_FLOAT_REGISTRY = {
    "float16":  np.float16,
    "fp16":     np.float16,
    "binary16": np.float16,
    "half":     np.float16,

    "float32":  np.float32,
    "fp32":     np.float32,
    "binary32": np.float32,
    "single":   np.float32,
    "float":    np.float32,

    "float64":  np.float64,
    "fp64":     np.float64,
    "binary64": np.float64,
    "double":   np.float64,
}

INT32 = _derive_int("int32", np.int32)
INT64 = _derive_int("int64", np.int64)
DEFAULT_INT_FORMAT = "int64"

def get_int_format(name: Union[str, IntFormat, None]) -> IntFormat:
    if isinstance(name, IntFormat):
        return name
    key = (name or DEFAULT_INT_FORMAT).lower()
    try:
        dtype = _INT_REGISTRY[key]
    except KeyError:
        raise NotImplementedError(f"Integer format '{name}' not implemented. Supported formats {sorted(_INT_REGISTRY.keys())}")
    return _derive_int(np.dtype(dtype).name, dtype)

def get_float_format(name: Union[str, FloatFormat, None]) -> FloatFormat:
    if isinstance(name, FloatFormat):
        return name
    key = (name or "float64").lower()
    try:
        dtype = _FLOAT_REGISTRY[key]
    except KeyError:
        raise NotImplementedError(f"Float format '{name}' not implemented. Supported formats {sorted(_FLOAT_REGISTRY.keys())}")
    return _derive_float(np.dtype(dtype).name, dtype)

def float_format_of(value) -> FloatFormat:
    """Floating format a value was produced in.

    numpy floating scalars, arrays and dtypes carry their own width; plain
    Python floats and ints are binary64.
    """
    if isinstance(value, (FloatFormat, str)):
        return get_float_format(value)
    if isinstance(value, np.dtype) or (isinstance(value, type) and issubclass(value, np.generic)):
        dtype = np.dtype(value)
    else:
        dtype = getattr(value, "dtype", None)
    if dtype is None or dtype.kind != 'f':
        return get_float_format("float64")
    return get_float_format(dtype.name)

def default_precision(value_or_format) -> float:
    """Default absolute tolerance: machine epsilon of the caller's float width.

    float32 input gets FLT_EPSILON (~1.19e-7), float64 input DBL_EPSILON
    (~2.22e-16). DBL_EPSILON is below PRACTICAL_PRECISION_FLOOR, so searches at
    the float64 default usually end on the overflow guard rather than converge.
    """
    return float_format_of(value_or_format).eps
