"""Outline parser interface."""

from typing import Protocol

from orgcal.core.outline import Document


class OutlineParser(Protocol):
    """Interface for turning document text into a parsed outline."""

    def parse(self, text: str) -> Document:
        """Parse document text. Raises OrgParseError on malformed input."""
        ...
