from __future__ import annotations


class LineIndexError(Exception):
    """Base class for errors raised by csvigo."""


class LineIndexIntegrityError(LineIndexError, RuntimeError):
    """
    The counting pass and the extraction pass disagree on the number of lines.

    Raised instead of returning a truncated or overflowing table. A bare
    carriage return (one not followed by LF) is the usual trigger: the
    extractor ends a line on it, the counter does not.
    """
    def __init__(self, expected: int, actual: int, detail: str = "") -> None:
        self.expected = int(expected)
        self.actual = int(actual)
        msg = f"line count mismatch: counted {self.expected}, extracted {self.actual}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class LookupFileError(LineIndexError, ValueError):
    """A persisted lookup table is malformed or does not match its source."""
