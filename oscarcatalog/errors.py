"""
Exceptions raised by oscarcatalog.

Parsing failures derive from ParseError (also a ValueError), transport
failures of the fetch layer from FetchError.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(CatalogError, ValueError):
    """
    The catalog document does not have the expected shape.

    `block_index` is the 0-based position of the course block that failed,
    or None when the failure is not tied to a block.
    """

    def __init__(self, message: str, block_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.block_index = block_index

    def __str__(self) -> str:
        if self.block_index is None:
            return self.message
        return f"block {self.block_index}: {self.message}"


class BoundaryNotFound(ParseError):
    pass


class HeaderNotFound(ParseError):
    pass


class MalformedHeader(ParseError):
    pass


class CreditsNotFound(ParseError):
    pass


class MalformedMeetingRow(ParseError):
    pass


class FetchError(CatalogError):
    """Network or HTTP failure while retrieving a page."""
