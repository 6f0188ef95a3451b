from __future__ import annotations

import contextlib
import io
import json
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = REPO_ROOT / "tools" / "binding_codegen_core" / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from binding_codegen_core import cli

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.model = self.root / "model.json"
        shutil.copyfile(FIXTURES / "pass_objects_as_param.model.json", self.model)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_generate_writes_header_and_check_detects_drift(self) -> None:
        header = self.root / "out" / "bindings.h"
        code, out, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header))
        self.assertEqual(code, 0)
        self.assertIn("[TestPassObjectsAsParams] generate: methods=6", out)
        content = header.read_text(encoding="utf-8")
        self.assertIn("#ifndef BINDINGS_H", content)
        self.assertIn("TestPassObjectsAsParams_f2(this->self_, a_0.release());", content)

        code, _, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header), "--check")
        self.assertEqual(code, 0)

        header.write_text("stale\n", encoding="utf-8")
        code, out, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header), "--check")
        self.assertEqual(code, 1)
        self.assertIn(f"{header.resolve()}: generated output is out of date", out)
        self.assertIn("-stale", out)
        self.assertEqual(header.read_text(encoding="utf-8"), "stale\n")

    def test_dry_run_does_not_write(self) -> None:
        header = self.root / "bindings.h"
        code, out, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header), "--dry-run")
        self.assertEqual(code, 0)
        self.assertFalse(header.exists())
        self.assertIn("would write", out)

    def test_check_reports_missing_output(self) -> None:
        header = self.root / "bindings.h"
        code, out, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header), "--check")
        self.assertEqual(code, 1)
        self.assertIn(f"{header.resolve()}: generated output is missing", out)
        self.assertFalse(header.exists())

    def test_render_overrides_apply(self) -> None:
        header = self.root / "bindings.h"
        code, _, _ = self.run_cli(
            "generate", "--model", str(self.model), "--out", str(header), "--opaque-suffix", "Handle"
        )
        self.assertEqual(code, 0)
        self.assertIn("typedef struct FooHandle FooHandle;", header.read_text(encoding="utf-8"))

    def test_fixture_round_trips_through_verify(self) -> None:
        fixture = self.root / "expected.cpp"
        code, _, _ = self.run_cli("fixture", "--model", str(self.model), "--out", str(fixture))
        self.assertEqual(code, 0)
        code, out, _ = self.run_cli("verify-fixture", "--model", str(self.model), "--fixture", str(fixture))
        self.assertEqual(code, 0)
        self.assertIn("missing=0", out)

    def test_verify_fixture_against_checked_in_expectations(self) -> None:
        expected = FIXTURES / "pass_objects_as_param.expected.cpp"
        code, out, _ = self.run_cli("verify-fixture", "--model", str(self.model), "--fixture", str(expected))
        self.assertEqual(code, 0, out)

    def test_verify_fixture_reports_missing_entries(self) -> None:
        fixture = self.root / "expected.cpp"
        fixture.write_text('"void TestPassObjectsAsParams_f9(void);";\n', encoding="utf-8")
        code, out, _ = self.run_cli("verify-fixture", "--model", str(self.model), "--fixture", str(fixture))
        self.assertEqual(code, 1)
        self.assertIn("void TestPassObjectsAsParams_f9(void);", out)

    def test_method_failures_are_all_reported(self) -> None:
        payload = json.loads(self.model.read_text(encoding="utf-8"))
        methods = payload["classes"][0]["methods"]
        methods.append({"name": "finish", "receiver": "mut self"})
        methods.append({"name": "ghost", "receiver": "&self", "parameters": ["&Ghost"]})
        self.model.write_text(json.dumps(payload), encoding="utf-8")

        header = self.root / "bindings.h"
        code, out, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header))
        self.assertEqual(code, 0)
        self.assertIn("generate: 2 failure(s)", out)
        self.assertIn("may not consume its own receiver", out)
        self.assertIn("'Ghost'", out)
        self.assertIn("[TestPassObjectsAsParams] generate: methods=6", out)
        content = header.read_text(encoding="utf-8")
        self.assertIn("TestPassObjectsAsParams_f2(this->self_, a_0.release());", content)
        self.assertNotIn("ghost", content)
        self.assertNotIn("finish", content)

        code, _, _ = self.run_cli("generate", "--model", str(self.model), "--out", str(header), "--fail-on-errors")
        self.assertEqual(code, 1)
        self.assertEqual(header.read_text(encoding="utf-8"), content)

    def test_framework_errors_exit_with_two(self) -> None:
        code, _, err = self.run_cli("generate", "--model", str(self.root / "missing.json"), "--out", "x.h")
        self.assertEqual(code, 2)
        self.assertIn("binding_codegen error:", err)


if __name__ == "__main__":
    unittest.main()
