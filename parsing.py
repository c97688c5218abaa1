import numpy as np

ALLOWED_CHARS = set("0123456789.,[]-+eE")

class ParseError(ValueError):
    pass

def check_text_strict(s: str) -> str:
    s = s.strip()
    if not s:
        raise ParseError("Empty input.")
    if any(c not in ALLOWED_CHARS for c in s):
        bad = sorted(set(c for c in s if c not in ALLOWED_CHARS))
        raise ParseError(f"Illegal character(s) found: {bad}. Allowed are only 0-9 . , [ ] - + e E")
    return s

def _digits(s: str, i: int, what: str) -> int:
    if i >= len(s) or not s[i].isdigit():
        raise ParseError(f"Expected digit(s) {what} at position {i}")
    while i < len(s) and s[i].isdigit():
        i += 1
    return i

def parse_number(s: str, i: int):
    """Parse [-]digits[.digits][(e|E)[+|-]digits] starting at i; returns (float, next index)."""
    n = len(s)
    start = i
    if i < n and s[i] == '-':
        i += 1
    i = _digits(s, i, "in number")
    if i < n and s[i] == '.':
        i = _digits(s, i + 1, "after '.'")
    if i < n and s[i] in 'eE':
        i += 1
        if i < n and s[i] in '+-':
            i += 1
        i = _digits(s, i, "in exponent")
    return float(s[start:i]), i

def expect_char(s: str, i: int, ch: str):
    if i >= len(s) or s[i] != ch:
        raise ParseError(f"Expected '{ch}' at position {i}")
    return i + 1

def parse_list(s: str, i: int):
    i = expect_char(s, i, '[')
    vals = []
    x, i = parse_number(s, i)
    vals.append(x)
    while i < len(s) and s[i] == ',':
        i += 1
        x, i = parse_number(s, i)
        vals.append(x)
    i = expect_char(s, i, ']')
    return vals, i

def parse_value(text: str) -> float:
    s = check_text_strict(text)
    x, i = parse_number(s, 0)
    if i != len(s):
        raise ParseError(f"Unexpected trailing content at position {i}: {s[i:]}")
    return x

def parse_values(text: str):
    """A single number, or a bracketed comma separated list of numbers."""
    s = check_text_strict(text)
    if s[0] != '[':
        return [parse_value(s)]
    vals, i = parse_list(s, 0)
    if i != len(s):
        raise ParseError(f"Unexpected trailing content at position {i}: {s[i:]}")
    return vals

def parse_fraction_text(text: str):
    """'p/q' -> (p, q), the inverse of str(FractionValue)."""
    s = text.strip()
    num, sep, den = s.partition('/')
    if not sep:
        raise ParseError(f"Expected 'numerator/denominator', got {text!r}")
    try:
        p, q = int(num), int(den)
    except ValueError:
        raise ParseError(f"Numerator and denominator must be integers, got {text!r}")
    if q <= 0:
        raise ParseError(f"Denominator must be positive, got {q}")
    return p, q

def load_values_from_npy_file(path: str):
    """Values of a float16/32/64 .npy array, flattened.

    Elements stay numpy scalars of the file's dtype so that the default
    precision follows the width they were stored in.
    """
    arr = np.load(path, allow_pickle=False).ravel()
    if arr.dtype.kind != 'f':
        raise TypeError(f"Unsupported dtype: {arr.dtype!r}")
    if not np.isfinite(arr).all():
        raise ValueError("NaN/Inf encountered; cannot convert to a fraction.")
    return [arr[i] for i in range(arr.shape[0])]
