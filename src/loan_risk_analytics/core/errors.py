"""
Exception types raised by the loan risk analytics package.
"""


class LoanAnalyticsError(Exception):
    """Base class for all package errors."""


class ParseError(LoanAnalyticsError):
    """A loan row (or the file header) could not be parsed.

    Parameters
    ----------
    message : str
        Description of the problem
    row_number : int | None, optional
        1-based line number in the source file (the header is line 1).
        None for file-level problems such as a missing column.
    column : str | None, optional
        Normalized name of the offending column, if known
    """

    def __init__(
        self,
        message: str,
        row_number: int | None = None,
        column: str | None = None,
    ) -> None:
        self.message = message
        self.row_number = row_number
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        location = []
        if self.row_number is not None:
            location.append(f"line {self.row_number}")
        if self.column is not None:
            location.append(f"column '{self.column}'")
        if location:
            return f"{', '.join(location)}: {self.message}"
        return self.message


class EmptyGroupError(LoanAnalyticsError):
    """Aggregation was requested on a group with no records."""


class InvalidThresholdError(LoanAnalyticsError, ValueError):
    """A classifier was misconfigured or cannot place a value."""


__all__ = [
    "LoanAnalyticsError",
    "ParseError",
    "EmptyGroupError",
    "InvalidThresholdError",
]
