"""
Interactive prompt for Sigma.

Each line is evaluated as its own batch in REPL mode; the environment is
carried from one line to the next. Errors are rendered and the session goes
on. Line history is kept in the user configuration directory when the
platform provides `readline`.
"""

import logging
from typing import Callable, List, Optional

import click
from rich.console import Console

try:
    import readline
except ImportError:  # Windows without pyreadline
    readline = None

from . import __version__
from .config import SigmaConfig
from .diagnostics import SigmaError, render_error
from .interpreter import FUNCTIONS, Environment, FileReader, run

logger = logging.getLogger(__name__)

PROMPT = "Σ ❯❯ "


class Repl:
    """Read-eval-print loop over `run(..., is_repl=True)`."""

    def __init__(
        self,
        config: SigmaConfig,
        reader: Optional[FileReader] = None,
        load_constants: bool = True,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = click.echo,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.reader = reader if reader is not None else FileReader.from_config(config)
        self.load_constants = load_constants
        self.input_fn = input_fn
        self.output = output
        self.console = console
        self.environment: Environment = {}

    def evaluate(self, line: str) -> bool:
        """
        Evaluate one line, printing its results or its error.

        Returns:
            True if the line evaluated without error
        """
        try:
            self.environment = run(
                line,
                self.environment,
                is_repl=True,
                reader=self.reader,
                output=self.output,
                config=self.config,
                load_constants=self.load_constants,
            )
        except SigmaError as error:
            render_error(error, line, self.console)
            return False
        return True

    def loop(self):
        """Prompt until EOF or Ctrl-C."""
        self.output(f"Sigma {__version__}")
        self._load_history()
        try:
            while True:
                try:
                    line = self.input_fn(PROMPT)
                except (EOFError, KeyboardInterrupt):
                    self.output("")
                    break

                if not line.strip():
                    continue
                self.evaluate(line)
        finally:
            self._save_history()

    def complete(self, text: str, state: int) -> Optional[str]:
        """readline completer over function and variable names."""
        candidates: List[str] = sorted(
            name for name in list(FUNCTIONS) + list(self.environment)
            if name.startswith(text)
        )
        return candidates[state] if state < len(candidates) else None

    def _load_history(self):
        if readline is None:
            return
        readline.set_history_length(self.config.history_size)
        readline.set_completer(self.complete)
        readline.parse_and_bind("tab: complete")
        try:
            readline.read_history_file(str(self.config.history_path))
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Cannot read history from %s: %s", self.config.history_path, exc)

    def _save_history(self):
        if readline is None:
            return
        try:
            self.config.config_dir.mkdir(parents=True, exist_ok=True)
            readline.write_history_file(str(self.config.history_path))
        except OSError as exc:
            logger.warning("Cannot save history to %s: %s", self.config.history_path, exc)
