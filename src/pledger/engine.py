# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Ledger aggregation engine for pledger.

A ``Ledger`` is the in-memory result of one run: a label (a period, a year
or ``*`` for every ledger combined) and the entries parsed from the
selected files, in file-then-line order.

The engine provides two operations on it:

1. Tag filtering
   -------------
   ``Ledger.filter_tags(tags)`` keeps only the entries sharing at least one
   tag with ``tags``. Untagged entries never match. Filtering only removes
   entries; the remaining ones keep their order.

2. Summary
   -------
   ``summarize(ledger)`` computes:
   - total credits and total debits,
   - the net amount and whether it is a "credit" or a "debit" net,
   - per kind, the total amount carried by each tag, ranked by descending
     amount (ties ordered by tag name).

   An entry with several tags counts in full towards each of them: amounts
   are not split across tags.

Per-tag rollups are computed on a long-format DataFrame (one row per entry
and tag) grouped by kind and tag.
"""

from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from .io import LedgerLine
from .parser import Entry, EntryKind, parse_lines

_COLUMNS = ["kind", "amount", "tags"]


@dataclass
class Ledger:
    label: str
    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def from_lines(cls, label: str, lines: Iterable[LedgerLine]) -> "Ledger":
        """
        Build a ledger by consuming a stream of lines completely.

        Raises the first ``EntryParseError`` met, in which case no ledger is
        returned.
        """
        return cls(label=label, entries=list(parse_lines(lines)))

    def filter_tags(self, tags: Iterable[str]) -> None:
        """Keep only the entries that carry at least one of ``tags``, in place."""
        wanted = frozenset(tags)
        self.entries[:] = [e for e in self.entries if wanted.intersection(e.tags)]


@dataclass(frozen=True)
class LedgerSummary:
    """
    Summary statistics of a ledger.

    Attributes
    ----------
    entry_count :
        Number of entries summarized.
    total_credits, total_debits :
        Sum of the amounts of each kind, in minor units.
    net :
        Absolute difference between credits and debits.
    net_kind :
        "credit" when credits >= debits, otherwise "debit".
    credit_tags, debit_tags :
        ``(tag, amount)`` pairs for each kind, largest amount first.
    """

    entry_count: int
    total_credits: int
    total_debits: int
    net: int
    net_kind: str
    credit_tags: list[tuple[str, int]]
    debit_tags: list[tuple[str, int]]


def entries_to_dataframe(entries: Iterable[Entry]) -> pd.DataFrame:
    """Return one row per entry with columns kind, amount and tags."""
    rows = [(e.kind.value, e.amount, list(e.tags)) for e in entries]
    df = pd.DataFrame(rows, columns=_COLUMNS)
    # Python ints: sums may exceed the 64-bit range of a single amount.
    df["amount"] = df["amount"].astype(object)
    return df


def _exact_sum(amounts: pd.Series) -> int:
    return sum(int(a) for a in amounts)


def rank_tags(df: pd.DataFrame, kind: EntryKind) -> list[tuple[str, int]]:
    """
    Total amount per tag for one entry kind, largest first.

    ``df`` is the frame produced by ``entries_to_dataframe``. Ties are
    ordered by ascending tag name.
    """
    subset = df.loc[df["kind"] == kind.value, ["tags", "amount"]]
    long = subset.explode("tags").dropna(subset=["tags"])
    if long.empty:
        return []

    totals = long.groupby("tags", sort=False)["amount"].agg(_exact_sum)
    ranked = [(str(tag), int(amount)) for tag, amount in totals.items()]
    ranked.sort(key=lambda pair: (-pair[1], pair[0]))
    return ranked


def summarize(ledger: Ledger) -> LedgerSummary:
    """Compute totals, net and per-tag rankings for ``ledger``."""
    df = entries_to_dataframe(ledger.entries)

    total_credits = sum(e.amount for e in ledger.entries if e.kind is EntryKind.CREDIT)
    total_debits = sum(e.amount for e in ledger.entries if e.kind is EntryKind.DEBIT)

    if total_credits >= total_debits:
        net, net_kind = total_credits - total_debits, "credit"
    else:
        net, net_kind = total_debits - total_credits, "debit"

    return LedgerSummary(
        entry_count=len(ledger.entries),
        total_credits=total_credits,
        total_debits=total_debits,
        net=net,
        net_kind=net_kind,
        credit_tags=rank_tags(df, EntryKind.CREDIT),
        debit_tags=rank_tags(df, EntryKind.DEBIT),
    )
