# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Entry parser for pledger ledger files.

Ledger files are line oriented. Each line is one of:

- blank (ignored),
- a comment: optional leading whitespace, then ``#`` (ignored),
- an entry: ``<K> <amount> <comment>``.

Entry grammar
-------------

    K        ::= "C" | "D"                      (credit / debit)
    amount   ::= digit { digit | "," } [ "." digit digit ]
    comment  ::= free text, where every "#word" token is also a tag

Digits are accumulated exactly as typed: ``100`` and ``1.00`` both yield an
amount of 100 minor units, ``1,000.00`` yields 100000. Commas are ignored
without any grouping check. When a decimal point is present it must be
followed by exactly two digits.

Tags are extracted from the comment, not removed from it: the comment keeps
every character after the amount's terminating whitespace. An entry's tags
are sorted and deduplicated once the whole line has been consumed.

The parser is a character-driven state machine without backtracking. Each
state has a handler that consumes one character and returns the next state
or raises an ``EntryParseError`` subclass carrying the character offset.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

from .errors import (
    AmountOverflowError,
    EntryParseError,
    ExpectedDigitError,
    ExpectedDigitOrWhitespaceError,
    ExpectedWhitespaceError,
    IncompleteDecimalError,
    InvalidTagCharacterError,
    MissingCommentError,
    MultipleDecimalPointsError,
    PrematureTagEndError,
    TooManyDecimalPlacesError,
    UnexpectedEntryKindError,
)
from .io import LedgerLine

log = logging.getLogger(__name__)

# Amounts are unsigned 64-bit integers in minor units.
MAX_AMOUNT = 2**64 - 1

_ASCII_WHITESPACE = frozenset(" \t\n\x0c\r")
_ASCII_DIGITS = frozenset("0123456789")


class EntryKind(Enum):
    CREDIT = "Credit"
    DEBIT = "Debit"


_ENTRY_KINDS = {"C": EntryKind.CREDIT, "D": EntryKind.DEBIT}


@dataclass(frozen=True)
class Entry:
    """
    One parsed ledger line.

    Attributes
    ----------
    kind :
        Credit or debit.
    amount :
        Non-negative amount in minor currency units (e.g. cents).
    comment :
        Free-text tail of the line, verbatim, tags included.
    tags :
        Tags found in the comment, each starting with ``#``, sorted and
        deduplicated.
    """

    kind: EntryKind
    amount: int
    comment: str
    tags: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Parse outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parsed:
    entry: Entry


@dataclass(frozen=True)
class Skipped:
    """The line is blank or a comment."""


@dataclass(frozen=True)
class Failed:
    error: EntryParseError


ParseOutcome = Union[Parsed, Skipped, Failed]

SKIPPED = Skipped()


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class ParseState(Enum):
    ENTRY_KIND = "entry_kind"
    WHITESPACE = "whitespace"
    AMOUNT_START = "amount_start"
    AMOUNT = "amount"
    COMMENT = "comment"
    TAG_START = "tag_start"
    TAG = "tag"


# States in which the line may end.
_FINAL_STATES = frozenset({ParseState.COMMENT, ParseState.TAG})


def _is_tag_character(char: str) -> bool:
    # Printable, non-whitespace ASCII.
    return "!" <= char <= "~"


class _EntryMachine:
    """Accumulates the fields of one entry while its line is consumed."""

    def __init__(self) -> None:
        self.state = ParseState.ENTRY_KIND
        self.kind = None
        self.amount = 0
        self.in_decimal_place = False
        self.decimal_place = 0
        self.comment: list[str] = []
        self.tags: list[list[str]] = []

    def feed(self, offset: int, char: str) -> None:
        handler = self._HANDLERS[self.state]
        self.state = handler(self, offset, char)

    def finish(self) -> Entry:
        if self.state not in _FINAL_STATES:
            raise MissingCommentError()

        tags = sorted({"".join(tag) for tag in self.tags})
        return Entry(
            kind=self.kind,
            amount=self.amount,
            comment="".join(self.comment),
            tags=tuple(tags),
        )

    # -- handlers ---------------------------------------------------------

    def _on_entry_kind(self, offset: int, char: str) -> ParseState:
        kind = _ENTRY_KINDS.get(char)
        if kind is None:
            raise UnexpectedEntryKindError(offset, char)
        self.kind = kind
        return ParseState.WHITESPACE

    def _on_whitespace(self, offset: int, char: str) -> ParseState:
        if char not in _ASCII_WHITESPACE:
            raise ExpectedWhitespaceError(offset, char)
        return ParseState.AMOUNT_START

    def _on_amount_start(self, offset: int, char: str) -> ParseState:
        if char not in _ASCII_DIGITS:
            raise ExpectedDigitError(offset, char)
        self._push_digit(offset, char)
        return ParseState.AMOUNT

    def _on_amount(self, offset: int, char: str) -> ParseState:
        if char in _ASCII_DIGITS:
            if self.in_decimal_place:
                self.decimal_place += 1
            if self.decimal_place > 2:
                raise TooManyDecimalPlacesError(offset)
            self._push_digit(offset, char)
            return ParseState.AMOUNT

        if char == ".":
            if self.in_decimal_place:
                raise MultipleDecimalPointsError(offset)
            self.in_decimal_place = True
            return ParseState.AMOUNT

        if char == ",":
            # Thousands separator, placement is not checked.
            return ParseState.AMOUNT

        if char in _ASCII_WHITESPACE:
            if self.in_decimal_place and self.decimal_place < 2:
                raise IncompleteDecimalError(offset)
            # The terminating whitespace is not part of the comment.
            return ParseState.COMMENT

        raise ExpectedDigitOrWhitespaceError(offset, char)

    def _on_comment(self, offset: int, char: str) -> ParseState:
        self.comment.append(char)
        if char == "#":
            self.tags.append(["#"])
            return ParseState.TAG_START
        return ParseState.COMMENT

    def _on_tag_start(self, offset: int, char: str) -> ParseState:
        if char in _ASCII_WHITESPACE:
            raise PrematureTagEndError(offset)
        return self._on_tag(offset, char)

    def _on_tag(self, offset: int, char: str) -> ParseState:
        if char in _ASCII_WHITESPACE:
            self.comment.append(char)
            return ParseState.COMMENT
        if not _is_tag_character(char):
            raise InvalidTagCharacterError(offset, char)
        self.comment.append(char)
        self.tags[-1].append(char)
        return ParseState.TAG

    def _push_digit(self, offset: int, char: str) -> None:
        self.amount = self.amount * 10 + (ord(char) - ord("0"))
        if self.amount > MAX_AMOUNT:
            raise AmountOverflowError(offset)

    _HANDLERS = {
        ParseState.ENTRY_KIND: _on_entry_kind,
        ParseState.WHITESPACE: _on_whitespace,
        ParseState.AMOUNT_START: _on_amount_start,
        ParseState.AMOUNT: _on_amount,
        ParseState.COMMENT: _on_comment,
        ParseState.TAG_START: _on_tag_start,
        ParseState.TAG: _on_tag,
    }


def is_skippable(line: str) -> bool:
    """True for blank lines and comment lines (optional whitespace, then ``#``)."""
    return line == "" or line.lstrip().startswith("#")


def parse_entry(line: str) -> ParseOutcome:
    """
    Parse a single ledger line.

    Returns
    -------
    Parsed
        The line holds a valid entry.
    Skipped
        The line is blank or a comment.
    Failed
        The line is malformed; ``error`` tells where and why.
    """
    if is_skippable(line):
        log.debug("comment or blank: %r", line)
        return SKIPPED

    machine = _EntryMachine()
    try:
        for offset, char in enumerate(line):
            machine.feed(offset, char)
        entry = machine.finish()
    except EntryParseError as exc:
        return Failed(exc)

    log.debug("entry: %r", entry)
    return Parsed(entry)


def parse_lines(lines: Iterable[LedgerLine]) -> Iterator[Entry]:
    """
    Parse a stream of ledger lines into entries, in order.

    Blank and comment lines are dropped. The first malformed line raises its
    ``EntryParseError`` with the line number and source file attached, which
    aborts the whole stream.
    """
    for source, line_number, text in lines:
        outcome = parse_entry(text)
        if isinstance(outcome, Failed):
            raise outcome.error.with_location(line_number, source)
        if isinstance(outcome, Parsed):
            yield outcome.entry
