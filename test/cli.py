# python
"""
Debug front-end behavioral tests (python -m argstream).

Conventions
- Test method names follow CamelCase per project convention.
- Output consoles are swapped for in-memory ones; faults exit with status 1.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argstream import __main__ as cli
from argstream import __version__, faults


class TestDebugFrontEnd(TestCase):
    """Behavioral tests for argstream.__main__.main()."""

    def setUp(self):
        self.output = io.StringIO()
        self.errors = io.StringIO()
        patches = (
            mock.patch.object(cli, "console", Console(file=self.output, width=200, color_system=None)),
            mock.patch.object(faults, "console", Console(file=self.errors, width=200, color_system=None)),
        )
        for patch in patches:
            patch.start()
            self.addCleanup(patch.stop)

    def testHelp(self):
        self.assertEqual(cli.main(["--help"]), 0)
        self.assertIn("usage: argstream", self.output.getvalue())

    def testVersion(self):
        self.assertEqual(cli.main(["-V"]), 0)
        self.assertIn(__version__, self.output.getvalue())

    def testClassifiesSampleTokens(self):
        status = cli.main(["-s", "-v", "-o", "-j", "-c", "build", "--", "-v", "build", "-j", "4", "-j5", "x"])
        self.assertEqual(status, 0)
        output = self.output.getvalue()
        self.assertIn("Key", output)
        self.assertIn("Command", output)
        self.assertIn("-j = '4'", output)
        self.assertIn("-j = '5'", output)
        self.assertIn("'x'", output)

    def testFirstPositionalStartsSampleTokens(self):
        self.assertEqual(cli.main(["-s", "-q", "data", "-q"]), 0)
        output = self.output.getvalue()
        self.assertIn("'data'", output)
        self.assertIn("Key", output)

    def testListFileIsAppended(self):
        handle, path = tempfile.mkstemp()
        self.addCleanup(os.remove, path)
        with os.fdopen(handle, "wb") as stream:
            stream.write(b"-q\nsecond\n")
        self.assertEqual(cli.main(["-l", path, "-s", "-q", "first"]), 0)
        output = self.output.getvalue()
        self.assertLess(output.index("'first'"), output.index("'second'"))

    def testMissingListFile(self):
        self.assertEqual(cli.main(["--plain", "-l", os.path.join(tempfile.gettempdir(), "missing", "list.txt"), "x"]), 1)

    def testInvalidKeywordExits(self):
        with self.assertRaises(SystemExit) as context:
            cli.main(["-s", "bad", "x"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("11101", self.errors.getvalue())

    def testNonTextOwnOptionValueExits(self):
        with self.assertRaises(SystemExit) as context:
            cli.main([b"-s", b"\xff", "x"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("11101", self.errors.getvalue())
        self.assertIn("'-s'", self.errors.getvalue())
        self.assertEqual(self.output.getvalue(), "")

    def testDuplicateKeywordExits(self):
        with self.assertRaises(SystemExit):
            cli.main(["-s", "-v", "-o", "-v", "x"])
        self.assertIn("11102", self.errors.getvalue())

    def testMissingValuePrintsTableThenExits(self):
        with self.assertRaises(SystemExit) as context:
            cli.main(["-o", "-j", "--", "x", "-j"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("'x'", self.output.getvalue())
        self.assertIn("11201", self.errors.getvalue())

    def testOwnMissingValueExits(self):
        with self.assertRaises(SystemExit):
            cli.main(["-o"])
        self.assertIn("11201", self.errors.getvalue())


if __name__ == "__main__":
    unittest.main()
