"""
Annotated Ledger Module

Append-only record of image identifiers that have a saved GT mask, and
the naming convention that derives those identifiers from file names.
"""

import re
from pathlib import Path
from typing import Iterator, Set, Union

from common.constants import DEFAULT_ID_PATTERN, DEFAULT_LEDGER_NAME
from common.logger import get_logger

logger = get_logger(__name__)


class ImageIdentifier:
    """
    Derives image identifiers from file names.

    The pattern is searched in the file stem and must define a named
    group ``id``. With the default pattern the identifier is the last
    six characters of the stem ("scan_004711.png" -> "004711"). Stems
    the pattern does not match are used whole.
    """

    def __init__(self, pattern: str = DEFAULT_ID_PATTERN):
        self.pattern = re.compile(pattern)

    def __call__(self, path: Union[str, Path]) -> str:
        stem = Path(path).stem
        match = self.pattern.search(stem)
        if match is None or not match.group("id"):
            return stem
        return match.group("id")


class AnnotatedLedger:
    """
    Set of annotated image identifiers persisted as one line each.

    The file is read once on construction and only ever appended to.
    A missing file is an empty ledger.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._entries: Set[str] = set()
        self._load()

    @classmethod
    def in_dir(cls, output_dir: Union[str, Path], name: str = DEFAULT_LEDGER_NAME) -> "AnnotatedLedger":
        return cls(Path(output_dir) / name)

    def _load(self) -> None:
        if not self.path.is_file():
            logger.debug(f"No ledger at {self.path}, starting empty")
            return

        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                entry = line.strip()
                if entry:
                    self._entries.add(entry)

        logger.info(f"Loaded {len(self._entries)} annotated entries from {self.path}")

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def add(self, identifier: str) -> bool:
        """
        Record an identifier, appending it to the file once.

        Returns:
            True if the identifier was new and has been written
        """
        if identifier in self._entries:
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(f"{identifier}\n")

        self._entries.add(identifier)
        logger.debug(f"Ledger: added {identifier}")
        return True
