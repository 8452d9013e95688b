# propfeed/domain/parsing.py
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

# plain ASCII decimal, optional exponent; no digit separators or non-ASCII digits
_NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")

# 2**256 - 1 has 78 digits, so anything at 1e78 or above cannot be a uint256
_MAX_ADJUSTED_EXPONENT = 77


def to_uint(x: Any) -> int:
    """
    Strict numeric coercion for on-chain integers.

    Accepts int, float or a numeric string; drops the fractional part.
    Raises ValueError for anything that is not a finite, non-negative number
    or whose magnitude is far beyond 256 bits.
    """
    if x is None:
        raise ValueError("value is null")
    if isinstance(x, bool):
        raise ValueError(f"boolean is not a number: {x!r}")

    if isinstance(x, int):
        d = Decimal(x)
    elif isinstance(x, float):
        d = Decimal(x)
    elif isinstance(x, str):
        s = x.strip()
        if not s:
            raise ValueError("value is empty")
        if not _NUMBER_RE.match(s):
            raise ValueError(f"not a number: {x!r}")
        try:
            d = Decimal(s)
        except InvalidOperation:
            raise ValueError(f"not a number: {x!r}") from None
    else:
        raise ValueError(f"unsupported type {type(x).__name__}")

    if not d.is_finite():
        raise ValueError(f"not a finite number: {x!r}")
    if d < 0:
        raise ValueError(f"negative value: {x!r}")
    if d.is_zero() or d.adjusted() < 0:
        return 0
    # checked before int() so huge exponents never get expanded
    if d.adjusted() > _MAX_ADJUSTED_EXPONENT:
        raise ValueError(f"exceeds uint256: {x!r}")

    # int(Decimal) truncates toward zero
    return int(d)


def require_str(x: Any) -> str:
    if not isinstance(x, str):
        raise ValueError("absent" if x is None else f"expected string, got {type(x).__name__}")
    if not x.strip():
        raise ValueError("empty string")
    return x
