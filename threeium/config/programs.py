from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from solders.pubkey import Pubkey

from threeium.common import ensure, ensure_non_empty_string, ensure_sequence
from threeium.errors import ReferentialIntegrityError


@dataclass(slots=True, frozen=True)
class ProgramAddress:
    # Logical name the integrator uses to look the program up.
    name: str
    program_id: Pubkey


class ProgramRegistry:
    """Name -> program id map. Program ids are always injected, never built in."""

    def __init__(self, entries: Sequence[ProgramAddress]) -> None:
        ensure_sequence(entries, "E_PROGRAM_REGISTRY_INVALID", "program registry entries must be a list or tuple")
        by_name: dict[str, Pubkey] = {}
        for entry in entries:
            ensure_non_empty_string(getattr(entry, "name", None), "E_PROGRAM_NAME_REQUIRED", "program name is required")
            ensure(
                isinstance(entry.program_id, Pubkey),
                "E_PROGRAM_ID_REQUIRED",
                "programId is required",
                name=entry.name,
            )
            ensure(
                entry.name not in by_name,
                "E_PROGRAM_NAME_DUPLICATE",
                "duplicate program name in registry",
                error_cls=ReferentialIntegrityError,
                name=entry.name,
            )
            by_name[entry.name] = entry.program_id
        self._by_name = by_name

    def get(self, name: str) -> Pubkey:
        ensure_non_empty_string(name, "E_PROGRAM_NAME_REQUIRED", "program name is required")
        program_id = self._by_name.get(name)
        ensure(
            program_id is not None,
            "E_PROGRAM_NOT_FOUND",
            "program not found in registry",
            error_cls=ReferentialIntegrityError,
            name=name,
        )
        return program_id

    def has(self, name: str) -> bool:
        ensure_non_empty_string(name, "E_PROGRAM_NAME_REQUIRED", "program name is required")
        return name in self._by_name

    def list(self) -> list[ProgramAddress]:
        return [ProgramAddress(name=name, program_id=self._by_name[name]) for name in sorted(self._by_name)]

    def __len__(self) -> int:
        return len(self._by_name)
