"""Adapters - I/O implementations of ports."""

from .org_parser import OrgParser, OrgParseError, OrgSourceError
from .org_files import OrgFileSource, SourceNotFoundError, SourceNotReadableError

__all__ = [
    "OrgParser",
    "OrgParseError",
    "OrgSourceError",
    "OrgFileSource",
    "SourceNotFoundError",
    "SourceNotReadableError",
]
