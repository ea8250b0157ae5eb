from __future__ import annotations

import io
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from doxmd import commands  # noqa: E402

BROKEN_COMMENT = "Sets the gain.\n@param[in gain"


class TestProcessComment(unittest.TestCase):
    def test_success_returns_markdown(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            result = commands.process_comment("@b bold")
        self.assertEqual(result, "**bold**")
        self.assertEqual(stderr.getvalue(), "")

    def test_failure_warns_and_drops(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            result = commands.process_comment(BROKEN_COMMENT)
        self.assertIsNone(result)
        warning = stderr.getvalue()
        self.assertTrue(warning.startswith("warning: Problem processing doxygen comment: Sets the gain."))
        self.assertIn(BROKEN_COMMENT, warning)
        self.assertIn("Expected closing ']' inside attribute list", warning)

    def test_failure_can_keep_original(self):
        with redirect_stderr(io.StringIO()):
            result = commands.process_comment(BROKEN_COMMENT, fallback="keep")
        self.assertEqual(result, BROKEN_COMMENT)

    def test_unknown_fallback_mode(self):
        with self.assertRaises(ValueError):
            commands.process_comment("text", fallback="retry")

    def test_reference_style_is_forwarded(self):
        with mock.patch("doxmd.commands.converter.transform") as transform:
            transform.return_value = "ok"
            self.assertEqual(commands.process_comment("@see x", reference_style="intra-doc"), "ok")
        transform.assert_called_once_with("@see x", reference_style="intra-doc")


class TestProcessComments(unittest.TestCase):
    def test_results_keep_input_order_and_count_failures(self):
        with redirect_stderr(io.StringIO()):
            report = commands.process_comments(["@c a", BROKEN_COMMENT, "@e b"])
        self.assertEqual(report.results, ["`a`", None, "_b_"])
        self.assertEqual(report.failures, 1)
        self.assertEqual(report.total, 3)

    def test_empty_batch(self):
        report = commands.process_comments([])
        self.assertEqual(report.results, [])
        self.assertEqual(report.failures, 0)


class TestRunTransform(unittest.TestCase):
    def setUp(self):
        self.case_dir = Path(tempfile.mkdtemp(prefix="doxmd-run-"))

    def write(self, name: str, text: str) -> Path:
        path = self.case_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_files_to_output_file(self):
        first = self.write("first.txt", "@param a first")
        second = self.write("second.txt", "@see b")
        out = self.case_dir / "out.md"
        code = commands.run_transform([first, second], out)
        self.assertEqual(code, 0)
        self.assertEqual(
            out.read_text(encoding="utf-8"),
            "# Arguments\n\n* `a` - first\n# See also\n\n> `b`\n",
        )

    def test_stdin_to_stdout(self):
        stdout = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO("@b x")), redirect_stdout(stdout):
            code = commands.run_transform([])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue(), "**x**\n")

    def test_failures_are_reported_and_strict_fails(self):
        broken = self.write("broken.txt", BROKEN_COMMENT)
        good = self.write("good.txt", "@c ok")
        out = self.case_dir / "out.md"
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            lenient = commands.run_transform([broken, good], out)
            strict = commands.run_transform([broken, good], out, strict=True)
        self.assertEqual(lenient, 0)
        self.assertEqual(strict, 1)
        self.assertEqual(out.read_text(encoding="utf-8"), "`ok`\n")
        self.assertIn("1/2 comments could not be converted", stderr.getvalue())

    def test_keep_fallback_writes_original(self):
        broken = self.write("broken.txt", BROKEN_COMMENT)
        out = self.case_dir / "out.md"
        with redirect_stderr(io.StringIO()):
            code = commands.run_transform([broken], out, fallback="keep")
        self.assertEqual(code, 0)
        self.assertEqual(out.read_text(encoding="utf-8"), BROKEN_COMMENT + "\n")


if __name__ == "__main__":
    unittest.main()
