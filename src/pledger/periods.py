# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Period helpers for pledger.

Every ledger file covers one calendar month and is named after a canonical
period label ``YYYY-MM``. This module turns what the user types on the
command line into such a label:

- an already canonical label (``2024-05``) is returned unchanged,
- a month name or abbreviation (``may``, ``September``) or a month number
  (``5``, ``05``) is placed in the current year,
- the previous month is derived at month granularity, rolling the year
  over in January.
"""

from dataclasses import dataclass
from datetime import date, datetime
from types import MappingProxyType
from typing import Mapping, Optional

from .errors import MonthOutOfRangeError, UnparsableDateError

_MONTH_NAMES = (
    ("jan", "january"),
    ("feb", "february"),
    ("mar", "march"),
    ("apr", "april"),
    ("may", "may"),
    ("jun", "june"),
    ("jul", "july"),
    ("aug", "august"),
    ("sep", "september"),
    ("oct", "october"),
    ("nov", "november"),
    ("dec", "december"),
)

# Lowercase month name or abbreviation -> month number (1-12).
MONTHS: Mapping[str, int] = MappingProxyType(
    {
        name: number
        for number, names in enumerate(_MONTH_NAMES, start=1)
        for name in names
    }
)

_ASCII_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class Period:
    """A calendar month identified by its year and month number."""

    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @classmethod
    def from_label(cls, label: str) -> "Period":
        """Build a Period from a canonical ``YYYY-MM`` label."""
        if not is_period_label(label):
            raise UnparsableDateError(label)
        return cls(year=int(label[:4]), month=int(label[5:]))

    @classmethod
    def containing(cls, day: date) -> "Period":
        """Period that contains the given day (the day itself is ignored)."""
        return cls(year=day.year, month=day.month)

    def previous(self) -> "Period":
        """Period immediately preceding this one."""
        if self.month == 1:
            return Period(year=self.year - 1, month=12)
        return Period(year=self.year, month=self.month - 1)


def _today() -> date:
    """Return today's date as a date object (isolated for easier testing)."""
    return datetime.today().date()


def _is_ascii_digits(value: str) -> bool:
    return bool(value) and all(c in _ASCII_DIGITS for c in value)


def is_year_label(value: str) -> bool:
    """True when ``value`` is exactly four ASCII digits."""
    return len(value) == 4 and _is_ascii_digits(value)


def is_period_label(value: str) -> bool:
    """
    True when ``value`` is a canonical period label.

    The accepted shape is four digits, a hyphen and a two-digit month
    between ``01`` and ``12``.
    """
    if len(value) != 7 or value[4] != "-":
        return False
    year, month = value[:4], value[5:]
    if not is_year_label(year) or not _is_ascii_digits(month):
        return False
    return 1 <= int(month) <= 12


def _parse_integer(token: str) -> Optional[int]:
    """Parse an optionally signed decimal integer, or return None."""
    digits = token[1:] if token[:1] in ("+", "-") else token
    if not _is_ascii_digits(digits):
        return None
    return int(token)


def current_period(today: Optional[date] = None) -> str:
    """Label of the month containing ``today``."""
    return Period.containing(today or _today()).label


def previous_period(today: Optional[date] = None) -> str:
    """Label of the month preceding the one containing ``today``."""
    return Period.containing(today or _today()).previous().label


def resolve_period(
    token: str,
    today: Optional[date] = None,
    months: Mapping[str, int] = MONTHS,
) -> str:
    """
    Resolve a user-supplied period token into a canonical ``YYYY-MM`` label.

    Resolution order:

        1. a canonical label is returned unchanged,
        2. a month name or abbreviation (case-insensitive) in the current year,
        3. an integer month number 1-12 in the current year.

    Raises
    ------
    MonthOutOfRangeError
        If the token is an integer outside 1-12.
    UnparsableDateError
        If the token is none of the above.
    """
    if is_period_label(token):
        return token

    year = (today or _today()).year

    month = months.get(token.lower())
    if month is not None:
        return Period(year=year, month=month).label

    number = _parse_integer(token)
    if number is None:
        raise UnparsableDateError(token)
    if not 1 <= number <= 12:
        raise MonthOutOfRangeError(number)
    return Period(year=year, month=number).label
