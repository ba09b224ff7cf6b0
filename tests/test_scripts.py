from __future__ import annotations

import importlib.util
import json
import tempfile
import unittest
from pathlib import Path
from types import ModuleType

from solders.pubkey import Pubkey

from threeium.errors import InputValidationError
from threeium.ledger import compute_yield
from threeium.liquidity import AccountSnapshot, LiquidityObservation

from tests.helpers import SYSTEM_PROGRAM, TOKEN_PROGRAM, make_key

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def _load_script(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"threeium_scripts_{name}", SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


yield_report = _load_script("yield_report")
observe_routes = _load_script("observe_routes")


class YieldReportScriptTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def _write(self, payload: object) -> Path:
        path = self.root / "evidence.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_parse_lamports_accepts_int_and_decimal_string(self) -> None:
        self.assertEqual(yield_report.parse_lamports(5000, where="x"), 5000)
        self.assertEqual(yield_report.parse_lamports(" 18446744073709551616 ", where="x"), 2**64)
        self.assertEqual(yield_report.parse_lamports("-7", where="x"), -7)

    def test_parse_lamports_rejects_other_values(self) -> None:
        for value in (1.5, True, "1e3", None):
            with self.subTest(value=value):
                with self.assertRaises(InputValidationError) as ctx:
                    yield_report.parse_lamports(value, where="executionFees[0]")
                self.assertEqual(ctx.exception.code, "E_EVENT_INVALID")

    def test_load_inputs_builds_both_streams(self) -> None:
        path = self._write(
            {
                "window": {"startSlot": 10, "endSlot": 20},
                "executionFees": [{"slot": 11, "signature": "f1", "lamports": "500", "description": "fee"}],
                "protocolRevenue": [
                    {
                        "slot": 12,
                        "signature": "r1",
                        "lamports": 300,
                        "description": "swap fee",
                        "programId": TOKEN_PROGRAM,
                    }
                ],
            }
        )

        inputs = yield_report.load_inputs(path, generated_at_unix_ms=1)
        report = compute_yield(inputs)

        self.assertEqual(report.totals.net_lamports, -200)
        self.assertEqual(inputs.protocol_revenue[0].program_id, Pubkey.from_string(TOKEN_PROGRAM))
        self.assertIsNone(inputs.execution_fees[0].program_id)

    def test_load_inputs_treats_missing_streams_as_empty(self) -> None:
        inputs = yield_report.load_inputs(self._write({"window": {"startSlot": 1, "endSlot": 1}}), generated_at_unix_ms=1)

        self.assertEqual(inputs.execution_fees, [])
        self.assertEqual(inputs.protocol_revenue, [])

    def test_load_inputs_requires_window(self) -> None:
        with self.assertRaises(InputValidationError) as ctx:
            yield_report.load_inputs(self._write({"executionFees": []}), generated_at_unix_ms=1)

        self.assertEqual(ctx.exception.code, "E_SLOT_INVALID")


class ObserveRoutesScriptTests(unittest.TestCase):
    def test_load_routes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "routes.json"
            path.write_text(
                json.dumps({"routes": [{"routeId": "route-a", "accounts": [SYSTEM_PROGRAM, TOKEN_PROGRAM]}]}),
                encoding="utf-8",
            )

            routes = observe_routes.load_routes(path)

        self.assertEqual(routes[0].route_id, "route-a")
        self.assertEqual([str(address) for address in routes[0].observed_accounts], [SYSTEM_PROGRAM, TOKEN_PROGRAM])

    def test_load_routes_requires_routes_array(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "routes.json"
            path.write_text(json.dumps({"routes": {}}), encoding="utf-8")

            with self.assertRaises(InputValidationError) as ctx:
                observe_routes.load_routes(path)

        self.assertEqual(ctx.exception.code, "E_ROUTES_REQUIRED")

    def test_load_routes_rejects_undecodable_address(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "routes.json"
            path.write_text(json.dumps({"routes": [{"routeId": "route-a", "accounts": ["0OIl"]}]}), encoding="utf-8")

            with self.assertRaises(InputValidationError) as ctx:
                observe_routes.load_routes(path)

        self.assertEqual(ctx.exception.code, "E_ROUTE_ACCOUNTS_REQUIRED")

    def test_lamport_metrics(self) -> None:
        owner = Pubkey.from_string(SYSTEM_PROGRAM)
        observation = LiquidityObservation(
            route_id="route-a",
            slot=9,
            accounts=(
                AccountSnapshot(address=make_key(1), lamports=2_000_000, executable=False, owner=owner, data_length=0),
                AccountSnapshot(address=make_key(2), lamports=1_234_567, executable=False, owner=owner, data_length=0),
            ),
        )

        metrics = observe_routes.lamport_metrics(observation)

        self.assertEqual(metrics.route_id, "route-a")
        self.assertEqual(metrics.execution_cost, 234_567.0)
        self.assertEqual(metrics.fee_efficiency, 3_234.0)
        self.assertEqual(metrics.liquidity_depth, 3.0)


if __name__ == "__main__":
    unittest.main()
