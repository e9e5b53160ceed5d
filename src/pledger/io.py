# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for pledger.

This module locates ledger files inside a ledger directory and exposes their
content as one lazy stream of lines, ready for the entry parser.

Ledger directory layout
-----------------------

One UTF-8 text file per calendar month, named after its period label:

    ledgers/
        2024-11.ledger
        2024-12.ledger
        2025-01.ledger
        notes.txt          <- ignored by directory-wide scans

Selections
----------

Exactly one selection is active per run:

- ``single``:   one period (``2025-01``), the file must exist,
- ``all``:      every ledger file in the directory, label ``*``,
- ``year``:     every ledger file of one year, label ``2025``,
- ``previous``: the month before the current one.

Directory-wide scans visit files in sorted filename order, which is also
chronological order for canonical names. Files whose name is not a
canonical ``YYYY-MM.ledger`` are skipped silently.

Output
------

``LedgerSource.lines()`` yields ``LedgerLine(source, line_number, text)``
tuples, where ``source`` is the file name, ``line_number`` starts at 1 and
``text`` has its line terminator removed. Read or decoding failures raise
``LedgerReadError``; nothing is returned for a partially read ledger.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Iterator, NamedTuple, Optional, Union

from .errors import (
    ConfigurationError,
    InvalidDirectoryError,
    LedgerReadError,
    MissingLedgerError,
    UnparsableDateError,
)
from .periods import (
    Period,
    is_period_label,
    is_year_label,
    previous_period,
    resolve_period,
)

log = logging.getLogger(__name__)

LEDGER_SUFFIX = ".ledger"

# Label used for the combination of every ledger.
ALL_LABEL = "*"


class LedgerLine(NamedTuple):
    source: str
    line_number: int
    text: str


class SelectionMode(Enum):
    SINGLE = "single"
    ALL = "all"
    YEAR = "year"
    PREVIOUS = "previous"


@dataclass(frozen=True)
class Selection:
    """Which ledger(s) to read. ``value`` holds the period token or the year."""

    mode: SelectionMode
    value: Optional[str] = None

    @classmethod
    def single(cls, token: str) -> "Selection":
        return cls(SelectionMode.SINGLE, token)

    @classmethod
    def all(cls) -> "Selection":
        return cls(SelectionMode.ALL)

    @classmethod
    def year(cls, year: str) -> "Selection":
        if not is_year_label(year):
            raise UnparsableDateError(year)
        return cls(SelectionMode.YEAR, year)

    @classmethod
    def previous(cls) -> "Selection":
        return cls(SelectionMode.PREVIOUS)

    def resolve_label(self, today: Optional[date] = None) -> str:
        """Return the label of the ledger this selection produces."""
        if self.mode is SelectionMode.SINGLE:
            return resolve_period(self.value, today)
        if self.mode is SelectionMode.PREVIOUS:
            return previous_period(today)
        if self.mode is SelectionMode.YEAR:
            return self.value
        return ALL_LABEL


def selection_from_options(
    date_token: Optional[str] = None,
    all_ledgers: bool = False,
    year: Optional[str] = None,
    previous: bool = False,
    default_token: Optional[str] = None,
) -> Selection:
    """
    Build the Selection matching a set of front-end options.

    At most one of ``date_token``, ``all_ledgers``, ``year`` and
    ``previous`` may be set. When none is, ``default_token`` (usually the
    current period) selects a single ledger.

    Raises
    ------
    ConfigurationError
        If more than one selection is requested, or none is and no default
        is available.
    """
    requested = []
    if date_token is not None:
        requested.append(Selection.single(date_token))
    if all_ledgers:
        requested.append(Selection.all())
    if year is not None:
        requested.append(Selection.year(year))
    if previous:
        requested.append(Selection.previous())

    if len(requested) > 1:
        names = ", ".join(s.mode.value for s in requested)
        raise ConfigurationError(f"conflicting ledger selections: {names}")
    if requested:
        return requested[0]
    if default_token is None:
        raise ConfigurationError("no ledger selection given")
    return Selection.single(default_token)


def ledger_path(directory: Union[str, "os.PathLike[str]"], period: str) -> Path:
    """Path of the ledger file for a canonical period label."""
    return Path(directory) / f"{period}{LEDGER_SUFFIX}"


def period_of(path: Path) -> Optional[str]:
    """Period label encoded in a ledger file name, or None if not canonical."""
    name = path.name
    if not name.endswith(LEDGER_SUFFIX):
        return None
    stem = name[: -len(LEDGER_SUFFIX)]
    return stem if is_period_label(stem) else None


@dataclass
class LedgerSource:
    """The ledger files behind one selection, in reading order."""

    label: str
    paths: list[Path] = field(default_factory=list)

    def lines(self) -> Iterator[LedgerLine]:
        """Lazily yield every line of every file, file after file."""
        for path in self.paths:
            yield from _read_lines(path)


def _strip_line_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def _read_lines(path: Path) -> Iterator[LedgerLine]:
    log.debug("reading ledger file %s", path)
    try:
        with path.open(encoding="utf-8", newline="\n") as handle:
            for number, raw in enumerate(handle, start=1):
                yield LedgerLine(path.name, number, _strip_line_terminator(raw))
    except (OSError, UnicodeDecodeError) as exc:
        raise LedgerReadError(path, str(exc)) from exc


def _list_ledgers(directory: Path, year: Optional[str]) -> list[Path]:
    try:
        children = sorted(directory.iterdir())
    except OSError as exc:
        raise LedgerReadError(directory, str(exc)) from exc

    selected = []
    for child in children:
        period = period_of(child)
        if period is None:
            log.debug("skipping non-ledger entry %s", child.name)
            continue
        if year is not None and Period.from_label(period).year != int(year):
            continue
        if not child.is_file():
            log.debug("skipping non-file ledger entry %s", child.name)
            continue
        selected.append(child)

    log.debug("selected %d ledger file(s) in %s", len(selected), directory)
    return selected


def locate_ledgers(
    directory: Union[str, "os.PathLike[str]"],
    selection: Selection,
    today: Optional[date] = None,
) -> LedgerSource:
    """
    Find the ledger files matching ``selection`` under ``directory``.

    Validation and directory listing happen here, eagerly. File content is
    only read when ``LedgerSource.lines()`` is iterated.

    Raises
    ------
    InvalidDirectoryError
        If ``directory`` is not a directory.
    MissingLedgerError
        If a single-period ledger file does not exist.
    LedgerReadError
        If the directory cannot be listed.
    DateError
        If the selection's period token cannot be resolved.
    """
    root = Path(directory)
    if not root.is_dir():
        raise InvalidDirectoryError(root)

    label = selection.resolve_label(today)

    if selection.mode in (SelectionMode.SINGLE, SelectionMode.PREVIOUS):
        path = ledger_path(root, label)
        if not path.is_file():
            raise MissingLedgerError(path)
        return LedgerSource(label=label, paths=[path])

    year = selection.value if selection.mode is SelectionMode.YEAR else None
    return LedgerSource(label=label, paths=_list_ledgers(root, year))
