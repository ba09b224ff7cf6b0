from __future__ import annotations

import json
import logging
import math
import unittest

from solders.pubkey import Pubkey

from threeium.errors import InputValidationError
from threeium.ledger import (
    ExecutionFeeEvent,
    ProtocolRevenueEvent,
    SlotWindow,
    YieldCalculator,
    YieldInputs,
    compute_yield,
)

from tests.helpers import TOKEN_PROGRAM

GENERATED_AT_MS = 1_760_000_000_000


def _fee(slot: int, lamports: int, *, signature: str = "sig-fee", description: str = "priority fee") -> ExecutionFeeEvent:
    return ExecutionFeeEvent(slot=slot, signature=signature, lamports=lamports, description=description)


def _revenue(
    slot: int,
    lamports: int,
    *,
    signature: str = "sig-rev",
    description: str = "protocol fee",
) -> ProtocolRevenueEvent:
    return ProtocolRevenueEvent(slot=slot, signature=signature, lamports=lamports, description=description)


def _inputs(
    *,
    fees: list[ExecutionFeeEvent] | None = None,
    revenue: list[ProtocolRevenueEvent] | None = None,
    start: float = 10,
    end: float = 20,
    generated_at: float = GENERATED_AT_MS,
) -> YieldInputs:
    return YieldInputs(
        window=SlotWindow(start_slot=start, end_slot=end),  # type: ignore[arg-type]
        execution_fees=fees or [],
        protocol_revenue=revenue or [],
        generated_at_unix_ms=generated_at,  # type: ignore[arg-type]
    )


class ComputeYieldTests(unittest.TestCase):
    def test_net_is_revenue_minus_fees(self) -> None:
        report = compute_yield(
            _inputs(
                fees=[_fee(12, 200, signature="f1"), _fee(15, 300, signature="f2")],
                revenue=[_revenue(18, 300, signature="r1")],
            )
        )

        self.assertEqual(report.totals.execution_fees_lamports, 500)
        self.assertEqual(report.totals.protocol_revenue_lamports, 300)
        self.assertEqual(report.totals.net_lamports, -200)
        self.assertEqual((report.window.start_slot, report.window.end_slot), (10, 20))
        self.assertEqual(report.generated_at_unix_ms, GENERATED_AT_MS)
        self.assertEqual([reference.signature for reference in report.references], ["f1", "f2", "r1"])

    def test_empty_ledger_reports_zero(self) -> None:
        report = compute_yield(_inputs())

        self.assertEqual(report.totals.execution_fees_lamports, 0)
        self.assertEqual(report.totals.protocol_revenue_lamports, 0)
        self.assertEqual(report.totals.net_lamports, 0)
        self.assertEqual(report.references, ())

    def test_sums_beyond_float_precision_are_exact(self) -> None:
        huge = 2**80 + 1
        report = compute_yield(_inputs(revenue=[_revenue(11, huge), _revenue(12, huge, signature="r2")], fees=[_fee(11, 1)]))

        self.assertEqual(report.totals.protocol_revenue_lamports, 2 * huge)
        self.assertEqual(report.totals.net_lamports, 2 * huge - 1)
        self.assertEqual(report.to_dict()["totals"]["netLamports"], str(2 * huge - 1))

    def test_negative_amounts_are_summed_as_given(self) -> None:
        report = compute_yield(_inputs(fees=[_fee(11, 100), _fee(12, -40, signature="refund")]))

        self.assertEqual(report.totals.execution_fees_lamports, 60)
        self.assertEqual(report.totals.net_lamports, -60)

    def test_references_keep_event_slots_outside_the_window(self) -> None:
        # Events are not filtered by the window; their slots are reported verbatim.
        report = compute_yield(_inputs(fees=[_fee(5, 10)], revenue=[_revenue(99, 20)]))

        self.assertEqual([reference.slot for reference in report.references], [5, 99])
        self.assertEqual(report.totals.net_lamports, 10)

    def test_references_carry_program_id_when_present(self) -> None:
        program_id = Pubkey.from_string(TOKEN_PROGRAM)
        event = ProtocolRevenueEvent(slot=11, signature="r1", lamports=5, description="swap fee", program_id=program_id)

        report = compute_yield(_inputs(revenue=[event], fees=[_fee(11, 1)]))

        rendered = report.to_dict()["references"]
        self.assertNotIn("programId", rendered[0])
        self.assertEqual(rendered[1]["programId"], TOKEN_PROGRAM)
        self.assertEqual(report.references[1].program_id, program_id)

    def test_window_and_timestamp_are_truncated(self) -> None:
        report = compute_yield(_inputs(start=10.9, end=20.2, generated_at=1_700_000_000_123.7))

        self.assertEqual(report.window.start_slot, 10)
        self.assertEqual(report.window.end_slot, 20)
        self.assertEqual(report.generated_at_unix_ms, 1_700_000_000_123)
        self.assertIsInstance(report.window.start_slot, int)

    def test_single_slot_window_is_allowed(self) -> None:
        report = compute_yield(_inputs(start=7, end=7))

        self.assertEqual((report.window.start_slot, report.window.end_slot), (7, 7))

    def test_to_dict_is_json_serializable(self) -> None:
        report = compute_yield(_inputs(fees=[_fee(12, 500)], revenue=[_revenue(13, 300)]))

        payload = json.loads(json.dumps(report.to_dict()))

        self.assertEqual(
            payload,
            {
                "generatedAtUnixMs": GENERATED_AT_MS,
                "window": {"startSlot": 10, "endSlot": 20},
                "totals": {
                    "executionFeesLamports": "500",
                    "protocolRevenueLamports": "300",
                    "netLamports": "-200",
                },
                "references": [
                    {"slot": 12, "signature": "sig-fee", "description": "priority fee"},
                    {"slot": 13, "signature": "sig-rev", "description": "protocol fee"},
                ],
            },
        )


class ComputeYieldValidationTests(unittest.TestCase):
    def assertRejected(self, inputs: object, code: str) -> InputValidationError:
        with self.assertRaises(InputValidationError) as ctx:
            compute_yield(inputs)  # type: ignore[arg-type]
        self.assertEqual(ctx.exception.code, code)
        return ctx.exception

    def test_rejects_missing_inputs(self) -> None:
        self.assertRejected(None, "E_YIELD_INPUT_REQUIRED")

    def test_rejects_inverted_window(self) -> None:
        self.assertRejected(_inputs(start=20, end=10), "E_SLOT_INVALID")

    def test_rejects_non_finite_window(self) -> None:
        self.assertRejected(_inputs(start=math.nan), "E_SLOT_INVALID")
        self.assertRejected(_inputs(end=math.inf), "E_SLOT_INVALID")

    def test_rejects_missing_window(self) -> None:
        inputs = YieldInputs(
            window=None,  # type: ignore[arg-type]
            execution_fees=[],
            protocol_revenue=[],
            generated_at_unix_ms=GENERATED_AT_MS,
        )
        self.assertRejected(inputs, "E_SLOT_INVALID")

    def test_rejects_invalid_timestamp(self) -> None:
        self.assertRejected(_inputs(generated_at=math.nan), "E_TIMESTAMP_INVALID")
        self.assertRejected(_inputs(generated_at="now"), "E_TIMESTAMP_INVALID")  # type: ignore[arg-type]

    def test_rejects_fractional_lamports(self) -> None:
        error = self.assertRejected(_inputs(fees=[_fee(11, 1.5)]), "E_EVENT_INVALID")  # type: ignore[arg-type]

        self.assertEqual(error.details["stream"], "execution fee")
        self.assertEqual(error.details["index"], 0)

    def test_rejects_boolean_lamports(self) -> None:
        error = self.assertRejected(_inputs(revenue=[_revenue(11, True)]), "E_EVENT_INVALID")  # type: ignore[arg-type]

        self.assertEqual(error.details["stream"], "protocol revenue")

    def test_rejects_empty_signature(self) -> None:
        self.assertRejected(_inputs(fees=[_fee(11, 1), _fee(12, 1, signature="")]), "E_EVENT_INVALID")

    def test_rejects_empty_description(self) -> None:
        self.assertRejected(_inputs(revenue=[_revenue(11, 1, description="")]), "E_EVENT_INVALID")

    def test_rejects_non_numeric_event_slot(self) -> None:
        self.assertRejected(_inputs(fees=[_fee("11", 1)]), "E_EVENT_INVALID")  # type: ignore[arg-type]

    def test_rejects_event_in_the_wrong_stream(self) -> None:
        error = self.assertRejected(_inputs(fees=[_fee(11, 1), _revenue(12, 5)]), "E_EVENT_INVALID")  # type: ignore[list-item]

        self.assertEqual(error.details["stream"], "execution fee")
        self.assertEqual(error.details["index"], 1)
        self.assertEqual(error.details["received"], "ProtocolRevenueEvent")

        error = self.assertRejected(_inputs(revenue=[_fee(11, 1)]), "E_EVENT_INVALID")  # type: ignore[list-item]
        self.assertEqual(error.details["stream"], "protocol revenue")

    def test_rejects_string_program_id(self) -> None:
        event = ProtocolRevenueEvent(slot=11, signature="r1", lamports=5, description="swap fee", program_id=TOKEN_PROGRAM)  # type: ignore[arg-type]

        error = self.assertRejected(_inputs(revenue=[event]), "E_EVENT_INVALID")

        self.assertEqual(error.details["index"], 0)

    def test_rejects_non_sequence_streams(self) -> None:
        inputs = YieldInputs(
            window=SlotWindow(start_slot=1, end_slot=2),
            execution_fees=None,  # type: ignore[arg-type]
            protocol_revenue=[],
            generated_at_unix_ms=GENERATED_AT_MS,
        )
        self.assertRejected(inputs, "E_EVENT_INVALID")


class YieldCalculatorTests(unittest.TestCase):
    def test_compute_logs_report_summary(self) -> None:
        calculator = YieldCalculator(logger=logging.getLogger("test.ledger"))

        with self.assertLogs("test.ledger", level="INFO") as captured:
            report = calculator.compute(_inputs(fees=[_fee(12, 500)], revenue=[_revenue(13, 300)]))

        self.assertEqual(report.totals.net_lamports, -200)
        record = captured.records[0]
        self.assertEqual(record.event, "yield_report_computed")
        self.assertEqual(record.reference_count, 2)
        self.assertEqual(record.net_lamports, "-200")

    def test_compute_does_not_log_on_failure(self) -> None:
        calculator = YieldCalculator(logger=logging.getLogger("test.ledger.failure"))

        with self.assertRaises(InputValidationError):
            calculator.compute(_inputs(start=5, end=1))


if __name__ == "__main__":
    unittest.main()
