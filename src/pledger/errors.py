# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Exception hierarchy for pledger.

Every failure raised by the library derives from ``PledgerError`` so that
the CLI can report it uniformly. Date, parse and configuration errors also
derive from ``ValueError``.

- DateError:          a period token could not be resolved.
- DirectoryError:     the ledger directory or a ledger file is unusable.
- EntryParseError:    a ledger line is malformed (one subclass per failure).
- ConfigurationError: conflicting options or invalid configuration.
"""

from typing import Optional


class PledgerError(Exception):
    """Base class for all pledger errors."""


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class DateError(PledgerError, ValueError):
    """A period token could not be turned into a period label."""


class MonthOutOfRangeError(DateError):
    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"month out of range: {value}")


class UnparsableDateError(DateError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"failed to parse supplied date: {token}")


# ---------------------------------------------------------------------------
# Directories and files
# ---------------------------------------------------------------------------


class DirectoryError(PledgerError):
    """The ledger directory or one of its files cannot be used."""

    def __init__(self, message: str, path) -> None:
        self.path = path
        super().__init__(message)


class InvalidDirectoryError(DirectoryError):
    def __init__(self, path) -> None:
        super().__init__(f"invalid ledger directory: {path}", path)


class MissingLedgerError(DirectoryError):
    def __init__(self, path) -> None:
        super().__init__(f"missing requested ledger file: {path}", path)


class LedgerReadError(DirectoryError):
    def __init__(self, path, reason: str) -> None:
        self.reason = reason
        super().__init__(f"ledger read failed: {path}: {reason}", path)


# ---------------------------------------------------------------------------
# Entry parsing
# ---------------------------------------------------------------------------


class EntryParseError(PledgerError, ValueError):
    """
    A single ledger line could not be parsed.

    ``offset`` is the character offset within the line where parsing
    stopped (``None`` when the line ended too early). ``line_number`` and
    ``source`` are filled in by the ledger builder once the line's origin
    is known.
    """

    reason = "malformed entry"

    def __init__(self, offset: Optional[int] = None) -> None:
        self.offset = offset
        self.line_number: Optional[int] = None
        self.source: Optional[str] = None
        super().__init__(self.describe())

    def describe(self) -> str:
        """Return the per-line message, without line context."""
        if self.offset is None:
            return self.reason
        return f"offset {self.offset}: {self.reason}"

    def with_location(self, line_number: int, source: Optional[str] = None):
        """Attach the line origin and return ``self`` for re-raising."""
        self.line_number = line_number
        self.source = source
        self.args = (str(self),)
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return self.describe()
        where = f"line {self.line_number}"
        if self.source:
            where += f" of {self.source}"
        return f"parse error on {where}: {self.describe()}"


class _CharacterError(EntryParseError):
    """Parse error that also reports the offending character."""

    def __init__(self, offset: int, char: str) -> None:
        self.char = char
        super().__init__(offset)


class UnexpectedEntryKindError(_CharacterError):
    @property
    def reason(self) -> str:
        return f"unexpected entry kind {self.char}"


class ExpectedWhitespaceError(_CharacterError):
    @property
    def reason(self) -> str:
        return f"expected whitespace, got {self.char}"


class ExpectedDigitError(_CharacterError):
    @property
    def reason(self) -> str:
        return f"expected digit, got {self.char}"


class ExpectedDigitOrWhitespaceError(_CharacterError):
    @property
    def reason(self) -> str:
        return f"expected digit or whitespace, got {self.char}"


class InvalidTagCharacterError(_CharacterError):
    @property
    def reason(self) -> str:
        return f"invalid tag character: {self.char}"


class TooManyDecimalPlacesError(EntryParseError):
    reason = "more than two decimal places in value"


class MultipleDecimalPointsError(EntryParseError):
    reason = "more than one decimal supplied in value"


class IncompleteDecimalError(EntryParseError):
    reason = "one or more decimals missing from decimal place"


class AmountOverflowError(EntryParseError):
    reason = "amount exceeds the maximum representable value"


class PrematureTagEndError(EntryParseError):
    reason = "premature tag ending"


class MissingCommentError(EntryParseError):
    reason = "unexpected EOL; missing comment?"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(PledgerError, ValueError):
    """Invalid or conflicting configuration (CLI options or TOML file)."""
