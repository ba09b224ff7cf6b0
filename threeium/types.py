from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from solders.pubkey import Pubkey

from threeium.common.validation import ensure_non_empty_string
from threeium.errors import InputValidationError


def parse_pubkey(value: Any, code: str, message: str, **details: Any) -> Pubkey:
    """Decode a base58 address, raising ``InputValidationError`` with ``code`` on failure."""
    text = ensure_non_empty_string(value, code, message, **details)
    try:
        return Pubkey.from_string(text.strip())
    except ValueError as error:
        raise InputValidationError(code=code, message=message, details={"value": text, **details}) from error


@dataclass(slots=True, frozen=True)
class AccountInfo:
    """One entry of an account batch as returned by a chain accessor."""

    lamports: int
    executable: bool
    owner: Pubkey
    data_length: int
