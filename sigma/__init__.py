"""
Sigma Calculator Package

A unit-aware calculator: arithmetic expressions typed interactively or read
from files are evaluated to numbers that may carry physical dimensions.

Architecture:
    sigma/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and expression trees
    ├── units/           # Dimension algebra over SI base units
    ├── interpreter/     # Tree-walking evaluation and built-in functions
    ├── diagnostics.py   # Error taxonomy and rendering
    ├── config.py        # User configuration directory and files
    ├── repl.py          # Interactive prompt
    └── cli.py           # Command line entry point

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Scanner
from .parser import Parser
from .interpreter import Interpreter, run
from .units import Dimension, Unit
from .diagnostics import SigmaError, ErrorKind

__all__ = [
    # Core classes
    "Scanner",
    "Parser",
    "Interpreter",
    "Dimension",
    "Unit",

    # Entry point
    "run",

    # Errors
    "SigmaError",
    "ErrorKind",

    # Version info
    "__version__",
    "__license__",
]
