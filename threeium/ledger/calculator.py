from __future__ import annotations

import logging
import math
from typing import Sequence

from solders.pubkey import Pubkey

from threeium.common import (
    ensure,
    ensure_finite_number,
    ensure_int,
    ensure_non_empty_string,
    ensure_sequence,
    log_event,
)

from .types import (
    ExecutionFeeEvent,
    ProtocolRevenueEvent,
    SlotWindow,
    YieldInputs,
    YieldReference,
    YieldReport,
    YieldTotals,
)

LedgerEvent = ExecutionFeeEvent | ProtocolRevenueEvent


def _sum_events(events: Sequence[LedgerEvent], *, stream: str, event_cls: type) -> int:
    ensure_sequence(events, "E_EVENT_INVALID", f"{stream} must be a list or tuple", stream=stream)
    total = 0
    for index, event in enumerate(events):
        ensure(
            isinstance(event, event_cls),
            "E_EVENT_INVALID",
            f"{stream} events must be {event_cls.__name__} values",
            stream=stream,
            index=index,
            received=type(event).__name__,
        )
        ensure_finite_number(
            event.slot,
            "E_EVENT_INVALID",
            f"{stream} slot must be a number",
            stream=stream,
            index=index,
        )
        ensure_non_empty_string(
            event.signature,
            "E_EVENT_INVALID",
            f"{stream} signature required",
            stream=stream,
            index=index,
        )
        ensure_int(
            event.lamports,
            "E_EVENT_INVALID",
            f"{stream} lamports must be an integer",
            stream=stream,
            index=index,
        )
        ensure_non_empty_string(
            event.description,
            "E_EVENT_INVALID",
            f"{stream} description required",
            stream=stream,
            index=index,
        )
        ensure(
            event.program_id is None or isinstance(event.program_id, Pubkey),
            "E_EVENT_INVALID",
            f"{stream} programId must be a Pubkey",
            stream=stream,
            index=index,
        )
        total += event.lamports
    return total


def _references(events: Sequence[LedgerEvent]) -> list[YieldReference]:
    return [
        YieldReference(
            slot=event.slot,
            signature=event.signature,
            description=event.description,
            program_id=event.program_id,
        )
        for event in events
    ]


def compute_yield(inputs: YieldInputs) -> YieldReport:
    """Net yield over a slot window: protocol revenue minus execution fees.

    Absolute lamport totals only; no rate metrics. All sums are exact ``int``
    arithmetic.
    """
    ensure(isinstance(inputs, YieldInputs), "E_YIELD_INPUT_REQUIRED", "Yield inputs are required")
    ensure(isinstance(inputs.window, SlotWindow), "E_SLOT_INVALID", "window is required")

    start_slot = ensure_finite_number(inputs.window.start_slot, "E_SLOT_INVALID", "startSlot must be a finite number")
    end_slot = ensure_finite_number(inputs.window.end_slot, "E_SLOT_INVALID", "endSlot must be a finite number")
    ensure(end_slot >= start_slot, "E_SLOT_INVALID", "endSlot must be >= startSlot", start_slot=start_slot, end_slot=end_slot)
    generated_at = ensure_finite_number(
        inputs.generated_at_unix_ms,
        "E_TIMESTAMP_INVALID",
        "generatedAtUnixMs must be a finite number",
    )

    execution_fees_lamports = _sum_events(
        inputs.execution_fees,
        stream="execution fee",
        event_cls=ExecutionFeeEvent,
    )
    protocol_revenue_lamports = _sum_events(
        inputs.protocol_revenue,
        stream="protocol revenue",
        event_cls=ProtocolRevenueEvent,
    )

    return YieldReport(
        generated_at_unix_ms=math.trunc(generated_at),
        window=SlotWindow(start_slot=math.trunc(start_slot), end_slot=math.trunc(end_slot)),
        totals=YieldTotals(
            execution_fees_lamports=execution_fees_lamports,
            protocol_revenue_lamports=protocol_revenue_lamports,
            net_lamports=protocol_revenue_lamports - execution_fees_lamports,
        ),
        references=tuple(_references(inputs.execution_fees) + _references(inputs.protocol_revenue)),
    )


class YieldCalculator:
    def __init__(self, *, logger: logging.Logger) -> None:
        self._logger = logger

    def compute(self, inputs: YieldInputs) -> YieldReport:
        report = compute_yield(inputs)
        log_event(
            self._logger,
            level="info",
            event="yield_report_computed",
            message="Computed yield report",
            start_slot=report.window.start_slot,
            end_slot=report.window.end_slot,
            reference_count=len(report.references),
            net_lamports=str(report.totals.net_lamports),
        )
        return report
