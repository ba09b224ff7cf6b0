from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from solders.pubkey import Pubkey


@dataclass(slots=True, frozen=True)
class ExecutionFeeEvent:
    slot: int
    # Verifiable transaction signature backing the amount.
    signature: str
    # Lamports paid; signed, exact.
    lamports: int
    description: str
    program_id: Pubkey | None = None


@dataclass(slots=True, frozen=True)
class ProtocolRevenueEvent:
    slot: int
    signature: str
    lamports: int
    description: str
    program_id: Pubkey | None = None


@dataclass(slots=True, frozen=True)
class SlotWindow:
    start_slot: int
    end_slot: int


@dataclass(slots=True, frozen=True)
class YieldInputs:
    window: SlotWindow
    execution_fees: Sequence[ExecutionFeeEvent]
    protocol_revenue: Sequence[ProtocolRevenueEvent]
    # Report generation timestamp, unix milliseconds.
    generated_at_unix_ms: int


@dataclass(slots=True, frozen=True)
class YieldTotals:
    execution_fees_lamports: int
    protocol_revenue_lamports: int
    net_lamports: int


@dataclass(slots=True, frozen=True)
class YieldReference:
    slot: int
    signature: str
    description: str
    program_id: Pubkey | None = None


@dataclass(slots=True, frozen=True)
class YieldReport:
    generated_at_unix_ms: int
    window: SlotWindow
    totals: YieldTotals
    references: tuple[YieldReference, ...]

    def to_dict(self) -> dict[str, Any]:
        # Lamport totals are rendered as strings so JSON consumers keep full precision.
        return {
            "generatedAtUnixMs": self.generated_at_unix_ms,
            "window": {"startSlot": self.window.start_slot, "endSlot": self.window.end_slot},
            "totals": {
                "executionFeesLamports": str(self.totals.execution_fees_lamports),
                "protocolRevenueLamports": str(self.totals.protocol_revenue_lamports),
                "netLamports": str(self.totals.net_lamports),
            },
            "references": [
                {
                    "slot": reference.slot,
                    "signature": reference.signature,
                    "description": reference.description,
                    **({"programId": str(reference.program_id)} if reference.program_id is not None else {}),
                }
                for reference in self.references
            ],
        }
