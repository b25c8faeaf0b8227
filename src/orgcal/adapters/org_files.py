"""File-based Org source adapter."""

import logging
from pathlib import Path

from orgcal.core.outline import Document
from orgcal.ports.outline_parser import OutlineParser

from .org_parser import OrgParseError, OrgParser, OrgSourceError

logger = logging.getLogger(__name__)


class SourceNotFoundError(OrgSourceError):
    """Raised when an Org file or directory does not exist."""


class SourceNotReadableError(OrgSourceError):
    """Raised when an Org file exists but cannot be read."""


class OrgFileSource:
    """
    Reads and parses Org files from disk.

    Each file is parsed independently; nothing is shared between files.
    """

    def __init__(self, parser: OutlineParser | None = None, encoding: str = "utf-8"):
        self.parser = parser or OrgParser()
        self.encoding = encoding

    def list_files(self, directory: Path | str) -> list[Path]:
        """List ``*.org`` files in a directory, sorted by name."""
        path = Path(directory).expanduser()
        if not path.is_dir():
            raise SourceNotFoundError(f"Directory not found: {path}")
        return sorted(p for p in path.glob("*.org") if p.is_file())

    def read(self, file: Path | str) -> tuple[Path, str]:
        """Resolve and read a file. Returns the canonical path and its text."""
        try:
            path = Path(file).expanduser().resolve(strict=True)
        except (FileNotFoundError, RuntimeError) as e:
            raise SourceNotFoundError(f"File not found: {file}") from e
        if not path.is_file():
            raise SourceNotFoundError(f"Not a file: {path}")
        try:
            return path, path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceNotReadableError(f"Cannot read {path}: {e}") from e

    def load(self, file: Path | str) -> Document:
        """Read and parse a single file."""
        path, text = self.read(file)
        logger.info(f"Parsing {path}")
        try:
            return self.parser.parse(text)
        except OrgParseError as e:
            raise OrgParseError(f"{path}: {e}") from e
