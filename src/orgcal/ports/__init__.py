"""Ports - interfaces/protocols for external dependencies."""

from .outline_parser import OutlineParser

__all__ = [
    "OutlineParser",
]
