"""Conversion error hierarchy."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for errors raised while converting tests."""


class SheetConversionError(ConversionError):
    """Raised when one sheet cannot be converted.

    ``row_number`` is the 1-based sheet row that caused the failure, when the
    failure can be pinned to a row.
    """

    def __init__(self, message: str, row_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.row_number = row_number


class UnsupportedCellError(SheetConversionError):
    """Raised when a cell holds a kind of value tests cannot contain."""


class SheetWriteError(SheetConversionError):
    """Raised when a test model cannot be laid out as a sheet."""
