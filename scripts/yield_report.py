#!/usr/bin/env python3
"""Build a yield report from a JSON evidence file.

Expected input shape::

    {
      "window": {"startSlot": 10, "endSlot": 20},
      "executionFees": [{"slot": 11, "signature": "...", "lamports": "5000", "description": "..."}],
      "protocolRevenue": [{"slot": 12, "signature": "...", "lamports": "9000", "description": "..."}]
    }

``lamports`` may be a JSON integer or a decimal string (for values beyond 2**53).
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from threeium.common import log_event
from threeium.errors import InputValidationError, ThreeiumError
from threeium.ledger import ExecutionFeeEvent, ProtocolRevenueEvent, SlotWindow, YieldCalculator, YieldInputs
from threeium.runtime import setup_logger
from threeium.types import parse_pubkey


def parse_lamports(value: Any, *, where: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InputValidationError(
        code="E_EVENT_INVALID",
        message=f"{where}.lamports must be an integer or integer string",
        details={"value": repr(value)},
    )


def parse_events(raw: Any, *, key: str, event_cls: type) -> list[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InputValidationError(code="E_EVENT_INVALID", message=f"{key} must be an array")

    events = []
    for index, item in enumerate(raw):
        where = f"{key}[{index}]"
        if not isinstance(item, dict):
            raise InputValidationError(code="E_EVENT_INVALID", message=f"{where} must be an object")
        program_id = item.get("programId")
        events.append(
            event_cls(
                slot=item.get("slot"),
                signature=item.get("signature"),
                lamports=parse_lamports(item.get("lamports"), where=where),
                description=item.get("description"),
                program_id=(
                    parse_pubkey(program_id, "E_EVENT_INVALID", f"{where}.programId must be a base58 address")
                    if program_id
                    else None
                ),
            )
        )
    return events


def load_inputs(path: Path, *, generated_at_unix_ms: int) -> YieldInputs:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise InputValidationError(code="E_YIELD_INPUT_REQUIRED", message="evidence file must hold a JSON object")
    window = payload.get("window")
    if not isinstance(window, dict):
        raise InputValidationError(code="E_SLOT_INVALID", message="window is required")

    return YieldInputs(
        window=SlotWindow(start_slot=window.get("startSlot"), end_slot=window.get("endSlot")),
        execution_fees=parse_events(payload.get("executionFees"), key="executionFees", event_cls=ExecutionFeeEvent),
        protocol_revenue=parse_events(
            payload.get("protocolRevenue"),
            key="protocolRevenue",
            event_cls=ProtocolRevenueEvent,
        ),
        generated_at_unix_ms=generated_at_unix_ms,
    )


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Compute a net yield report from fee and revenue evidence.")
    parser.add_argument("evidence", type=Path, help="path to the JSON evidence file")
    parser.add_argument(
        "--generated-at-ms",
        type=int,
        default=None,
        help="report timestamp in unix milliseconds (defaults to now)",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logger = setup_logger(args.log_level.upper())
    generated_at = args.generated_at_ms
    if generated_at is None:
        generated_at = int(datetime.now(timezone.utc).timestamp() * 1000)

    try:
        inputs = load_inputs(args.evidence, generated_at_unix_ms=generated_at)
        report = YieldCalculator(logger=logger).compute(inputs)
    except ThreeiumError as error:
        log_event(
            logger,
            level="error",
            event="yield_report_failed",
            message=f"Yield report failed: {error.message}",
            code=error.code,
            kind=error.kind,
            details=error.details,
        )
        return 1

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
