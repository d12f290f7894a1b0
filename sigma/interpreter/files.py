"""
Import file lookup.

Files named by `import` are looked up in the working directory first and in
the user configuration directory second.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..config import SigmaConfig

logger = logging.getLogger(__name__)


class FileReader:
    """Reads calculator sources from an ordered list of directories."""

    def __init__(self, search_paths: Sequence[Union[str, Path]]):
        self.search_paths: List[Path] = [Path(path) for path in search_paths]

    @classmethod
    def from_config(cls, config: SigmaConfig) -> 'FileReader':
        # Path() stays relative, so the working directory is resolved per read
        return cls([Path(), config.config_dir])

    def read(self, name: str) -> Optional[str]:
        """
        Return the contents of the first file called `name`, or None.

        Raises:
            OSError: If a matching file exists but cannot be read
        """
        for directory in self.search_paths:
            path = directory / name
            if path.is_file():
                logger.debug("Reading %s", path)
                return path.read_text(encoding="utf-8")

        logger.debug("%s not found in %s", name, ", ".join(str(p) for p in self.search_paths))
        return None
