"""Fail-fast input checks.

Every helper raises ``InputValidationError`` (or the error class passed in)
with the stable code supplied by the caller. Nothing is coerced to a default.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Sequence

from threeium.errors import InputValidationError, ThreeiumError


def ensure(
    condition: Any,
    code: str,
    message: str,
    *,
    error_cls: type[ThreeiumError] = InputValidationError,
    **details: Any,
) -> None:
    if not condition:
        raise error_cls(code=code, message=message, details=details)


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def ensure_non_empty_string(value: Any, code: str, message: str, **details: Any) -> str:
    ensure(isinstance(value, str) and len(value) > 0, code, message, **details)
    return value


def ensure_finite_number(value: Any, code: str, message: str, **details: Any) -> float | int:
    ensure(is_finite_number(value), code, message, value=repr(value), **details)
    return value


def ensure_int(value: Any, code: str, message: str, **details: Any) -> int:
    # bool is an int subclass but never a valid amount.
    ensure(isinstance(value, int) and not isinstance(value, bool), code, message, value=repr(value), **details)
    return value


def ensure_sequence(value: Any, code: str, message: str, **details: Any) -> Sequence[Any]:
    ensure(isinstance(value, (list, tuple)), code, message, received=type(value).__name__, **details)
    return value
