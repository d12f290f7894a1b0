"""
Test suite for the Sigma command line, REPL and configuration.

Tests cover:
- Running files through the click command
- Exit status and error output
- The interactive loop, its output and completion
- Configuration directory and import lookup order
"""

import io
import os
import sys
import tempfile
import unittest
from pathlib import Path

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import click
from click.testing import CliRunner
from rich.console import Console

from sigma import __version__
from sigma.cli import main
from sigma.config import SigmaConfig, CONFIG_DIR_ENV, DEFAULT_HISTORY_SIZE
from sigma.interpreter import FileReader
from sigma.repl import Repl


class CliTestCase(unittest.TestCase):
    """Gives each test its own configuration directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name)
        self.runner = CliRunner()
        self.env = {CONFIG_DIR_ENV: str(self.config_dir)}

    def tearDown(self):
        self._tmp.cleanup()

    def _invoke(self, args, files=None, input=None):
        with self.runner.isolated_filesystem():
            for name, contents in (files or {}).items():
                Path(name).write_text(contents, encoding="utf-8")
            return self.runner.invoke(main, args, env=self.env, input=input)


class TestCommandLine(CliTestCase):
    """Test cases for `sigma FILE`."""

    def test_runs_file(self):
        result = self._invoke(["calc.sigma"], {"calc.sigma": "x = 3 [m]\nx\nx * 2\n"})
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "6 [m]\n")

    def test_runs_example_circuit(self):
        with open(os.path.join(project_root, "examples", "circuit.sigma"), encoding="utf-8") as f:
            source = f.read()
        result = self._invoke(["circuit.sigma"], {"circuit.sigma": source})
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.splitlines(), ["0.01034 [s]", "0.001064 [A]", "0.005319 [W]"])

    def test_error_exit_status(self):
        result = self._invoke(["bad.sigma"], {"bad.sigma": "1 + 1\n2 / 0\n"})
        self.assertEqual(result.exit_code, 1)
        self.assertIn("2\n", result.output)
        self.assertIn("Division by zero!", result.output)
        self.assertIn("   2 | 2 / 0", result.output)

    def test_missing_file(self):
        result = self._invoke(["nope.sigma"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to read file 'nope.sigma'", result.output)

    def test_constants_from_config_dir(self):
        (self.config_dir / "constants.sigma").write_text("c = 3 [m/s]\n", encoding="utf-8")
        result = self._invoke(["calc.sigma"], {"calc.sigma": "c * 2\n"})
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "6 [m s^-1]\n")

    def test_no_constants(self):
        (self.config_dir / "constants.sigma").write_text("c = 3 [m/s]\n", encoding="utf-8")
        result = self._invoke(["--no-constants", "calc.sigma"], {"calc.sigma": "c * 2\n"})
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Undefined variable", result.output)

    def test_import_from_working_directory(self):
        files = {"lib.sigma": "k = 4\n", "calc.sigma": 'import "lib.sigma"\nk^2\n'}
        result = self._invoke(["calc.sigma"], files)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "16\n")

    def test_version(self):
        result = self._invoke(["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_repl_without_file(self):
        result = self._invoke([], input="x = 2\n\nx * 21\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(f"Sigma {__version__}", result.output)
        self.assertIn("2\n", result.output)
        self.assertIn("42\n", result.output)


class TestRepl(unittest.TestCase):
    """Test cases for the interactive loop."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config = SigmaConfig(config_dir=Path(self._tmp.name))
        self.printed = []
        self.errors = io.StringIO()
        self.repl = Repl(
            self.config,
            reader=FileReader([self.config.config_dir]),
            load_constants=False,
            output=self.printed.append,
            console=Console(file=self.errors, width=120, color_system=None),
        )

    def tearDown(self):
        self._tmp.cleanup()

    def _feed(self, lines):
        pending = list(lines)

        def input_fn(prompt):
            if not pending:
                raise EOFError
            return pending.pop(0)

        self.repl.input_fn = input_fn

    def test_environment_carries_over(self):
        self.assertTrue(self.repl.evaluate("x = 2 [m]"))
        self.assertTrue(self.repl.evaluate("x * 3"))
        self.assertEqual(self.printed, ["2 [m]", "6 [m]"])

    def test_error_keeps_session(self):
        self.repl.evaluate("x = 2")
        self.assertFalse(self.repl.evaluate("x = 1 / 0"))
        self.assertIn("Division by zero!", self.errors.getvalue())
        self.assertEqual(self.repl.environment["x"].number, 2)
        self.assertTrue(self.repl.evaluate("x + 1"))
        self.assertEqual(self.printed[-1], "3")

    def test_loop_until_eof(self):
        self._feed(["1 + 1", "   ", "y", "2 ^ 10"])
        self.repl.loop()
        self.assertEqual(self.printed[0], f"Sigma {__version__}")
        self.assertEqual(self.printed[1:], ["2", "1024", ""])
        self.assertIn("Undefined variable", self.errors.getvalue())

    def test_interrupt_ends_loop(self):
        def input_fn(prompt):
            raise KeyboardInterrupt

        self.repl.input_fn = input_fn
        self.repl.loop()
        self.assertEqual(self.printed, [f"Sigma {__version__}", ""])

    def test_completion(self):
        self.repl.evaluate("speed = 3")
        self.assertEqual(self.repl.complete("sq", 0), "sqrt")
        self.assertEqual(self.repl.complete("sp", 0), "speed")
        self.assertEqual(self.repl.complete("s", 0), "sin")
        self.assertIsNone(self.repl.complete("zz", 0))


class TestConfiguration(unittest.TestCase):
    """Test cases for configuration and import lookup."""

    def test_config_dir_from_environment(self):
        config = SigmaConfig.from_env({CONFIG_DIR_ENV: "/tmp/sigma-test"})
        self.assertEqual(config.config_dir, Path("/tmp/sigma-test"))
        self.assertEqual(config.history_path, Path("/tmp/sigma-test/history.txt"))
        self.assertEqual(config.constants_path, Path("/tmp/sigma-test/constants.sigma"))
        self.assertEqual(config.history_size, DEFAULT_HISTORY_SIZE)
        self.assertEqual(DEFAULT_HISTORY_SIZE, 69)

    def test_default_config_dir(self):
        config = SigmaConfig.from_env({})
        self.assertEqual(config.config_dir, Path(click.get_app_dir("sigma")).expanduser())

    def test_reader_search_order(self):
        with tempfile.TemporaryDirectory() as first, tempfile.TemporaryDirectory() as second:
            Path(first, "a.sigma").write_text("first", encoding="utf-8")
            Path(second, "a.sigma").write_text("second", encoding="utf-8")
            Path(second, "b.sigma").write_text("only second", encoding="utf-8")

            reader = FileReader([first, second])
            self.assertEqual(reader.read("a.sigma"), "first")
            self.assertEqual(reader.read("b.sigma"), "only second")
            self.assertIsNone(reader.read("c.sigma"))

    def test_reader_from_config(self):
        config = SigmaConfig(config_dir=Path("/tmp/sigma-test"))
        reader = FileReader.from_config(config)
        self.assertEqual(reader.search_paths, [Path(), Path("/tmp/sigma-test")])


if __name__ == "__main__":
    unittest.main()
