from .async_utils import guarded_call
from .logging import log_event, sanitize_text, sanitize_value
from .validation import (
    ensure,
    ensure_finite_number,
    ensure_int,
    ensure_non_empty_string,
    ensure_sequence,
    is_finite_number,
)

__all__ = [
    "ensure",
    "ensure_finite_number",
    "ensure_int",
    "ensure_non_empty_string",
    "ensure_sequence",
    "guarded_call",
    "is_finite_number",
    "log_event",
    "sanitize_text",
    "sanitize_value",
]
