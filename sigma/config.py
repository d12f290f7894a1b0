"""
User configuration for Sigma.

Everything the calculator keeps between sessions lives in one per-user
directory: the constants file imported at startup and the REPL history.
The directory defaults to the platform's application directory and can be
moved with the SIGMA_CONFIG_DIR environment variable.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import click


APP_NAME = "sigma"
CONFIG_DIR_ENV = "SIGMA_CONFIG_DIR"

DEFAULT_CONSTANTS_FILE = "constants.sigma"
DEFAULT_HISTORY_FILE = "history.txt"
DEFAULT_HISTORY_SIZE = 69


@dataclass(frozen=True)
class SigmaConfig:
    """Locations and limits of the per-user files."""
    config_dir: Path
    constants_file: str = DEFAULT_CONSTANTS_FILE
    history_file: str = DEFAULT_HISTORY_FILE
    history_size: int = DEFAULT_HISTORY_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SigmaConfig':
        """Build the configuration from the process environment."""
        environ = os.environ if environ is None else environ
        config_dir = environ.get(CONFIG_DIR_ENV) or click.get_app_dir(APP_NAME)
        return cls(config_dir=Path(config_dir).expanduser())

    @property
    def history_path(self) -> Path:
        return self.config_dir / self.history_file

    @property
    def constants_path(self) -> Path:
        return self.config_dir / self.constants_file
