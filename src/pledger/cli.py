# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for pledger.

This module wires together the main building blocks of pledger:

- configuration (optional ``pledger.toml``),
- period resolution and ledger selection,
- ledger file discovery and parsing,
- tag filtering and summary computation,
- rendering (human-readable summary or JSON).

The CLI is intentionally thin: it does not parse entries or compute totals
itself. It orchestrates the underlying modules based on command-line
arguments and configuration.


High-level pipeline
-------------------

1) Load the configuration (``--config PATH`` or ``pledger.toml`` in the
   current directory when present).

2) Resolve the ledger directory: positional argument, then the
   ``PLEDGER_DIR`` environment variable, then ``[ledger].directory``.

3) Build the ledger selection. Exactly one of ``--date``, ``--previous``,
   ``--all`` and ``--year`` may be given; without any, the current month
   is used.

4) With ``--edit``, open the selected ledger file in the editor and stop.

5) Read and parse the selected ledger files. The first malformed line
   aborts the run with its file, line number and offset.

6) Apply the ``--tag`` filter, if any.

7) Render the ledger as JSON (``--json`` or ``display.mode = "json"``) or
   as a human-readable summary.


Exit status
-----------

0 on success, 1 when any pledger error occurs (reported on stderr as
``Fatal: <message>``).
"""

import argparse
import json
import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import AppConfig, load_app_config
from .engine import Ledger, summarize
from .errors import ConfigurationError, InvalidDirectoryError, PledgerError
from .io import SelectionMode, ledger_path, locate_ledgers, selection_from_options
from .logging_config import configure_logging
from .periods import current_period
from .views import ledger_to_dict, render_summary

log = logging.getLogger(__name__)

LEDGER_DIR_ENV = "PLEDGER_DIR"


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="pledger",
        description=(
            "pledger - a personal ledger tracker. Reads monthly plain-text "
            "ledger files and prints a summary of credits, debits and tags."
        ),
    )

    ap.add_argument(
        "directory",
        nargs="?",
        help=(
            "Ledger directory. Defaults to $PLEDGER_DIR, then to "
            "[ledger].directory in the configuration file."
        ),
    )

    # Generic options
    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of pledger and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the TOML configuration file. "
            "If omitted, 'pledger.toml' in the current directory is used when present."
        ),
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debugging information to stderr.",
    )

    # Ledger selection
    ap.add_argument(
        "-d",
        "--date",
        help=(
            "Use the ledger of the given month: YYYY-MM, a month name "
            "(jan, january) or a month number (1-12) in the current year. "
            "Defaults to the current month."
        ),
    )
    ap.add_argument(
        "-p",
        "--previous",
        action="store_true",
        help="Use the ledger of the previous month.",
    )
    ap.add_argument(
        "-a",
        "--all",
        dest="all_ledgers",
        action="store_true",
        help="Combine all ledgers.",
    )
    ap.add_argument(
        "-y",
        "--year",
        help="Combine all ledgers of the given year (YYYY).",
    )

    # Filtering and output
    ap.add_argument(
        "-t",
        "--tag",
        dest="tags",
        action="append",
        default=[],
        metavar="TAG",
        help=(
            "Only keep entries carrying this tag (repeatable). "
            "The leading '#' is optional."
        ),
    )
    ap.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output in JSON format.",
    )
    ap.add_argument(
        "-e",
        "--edit",
        action="store_true",
        help="Edit the selected ledger with $EDITOR instead of summarizing it.",
    )

    return ap


def _normalize_tag(tag: str) -> str:
    return tag if tag.startswith("#") else f"#{tag}"


def _resolve_directory(args: argparse.Namespace, config: AppConfig) -> Path:
    """Ledger directory from the CLI, the environment or the configuration."""
    raw = args.directory or os.environ.get(LEDGER_DIR_ENV)
    if raw:
        return Path(raw)
    if config.ledger_directory is not None:
        return config.ledger_directory
    raise ConfigurationError(
        f"No ledger directory given. Pass it as an argument, set {LEDGER_DIR_ENV} "
        "or configure [ledger].directory."
    )


def _edit_ledger(path: Path, config: AppConfig) -> None:
    """
    Open a ledger file in the configured editor and wait for it to exit.

    The editor comes from ``[editor].command`` or the ``EDITOR`` environment
    variable and may include arguments (``"code --wait"``).

    Raises
    ------
    ConfigurationError
        If no editor is configured, it cannot be executed, or it exits with
        a non-zero status.
    """
    editor = config.editor or os.environ.get("EDITOR")
    if not editor:
        raise ConfigurationError("EDITOR lookup failed: no editor configured")

    command = [*shlex.split(editor), str(path)]
    log.debug("running editor: %s", command)
    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise ConfigurationError(f"failed to execute EDITOR: {editor}") from exc

    if completed.returncode != 0:
        raise ConfigurationError(f"EDITOR exited with: {completed.returncode}")


def run(args: argparse.Namespace) -> None:
    """Execute the pipeline described in the module docstring."""
    # 1) Configuration
    config = load_app_config(args.config_path)

    # 2) Ledger directory
    directory = _resolve_directory(args, config)

    # 3) Selection
    selection = selection_from_options(
        date_token=args.date,
        all_ledgers=args.all_ledgers,
        year=args.year,
        previous=args.previous,
        default_token=current_period(),
    )

    # 4) Edit mode
    if args.edit:
        if selection.mode not in (SelectionMode.SINGLE, SelectionMode.PREVIOUS):
            raise ConfigurationError("--edit requires a single ledger selection")
        if not directory.is_dir():
            raise InvalidDirectoryError(directory)
        _edit_ledger(ledger_path(directory, selection.resolve_label()), config)
        return

    # 5) Read and parse
    source = locate_ledgers(directory, selection)
    ledger = Ledger.from_lines(source.label, source.lines())
    log.debug("parsed %d entries for %s", len(ledger.entries), ledger.label)

    # 6) Tag filter
    if args.tags:
        ledger.filter_tags(_normalize_tag(t) for t in args.tags)

    # 7) Render
    mode = "json" if args.json else config.display.mode
    if mode == "json":
        print(json.dumps(ledger_to_dict(ledger)))
    else:
        print(
            render_summary(
                ledger,
                summarize(ledger),
                tag_width=config.display.tag_width,
                amount_width=config.display.amount_width,
            )
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the pledger CLI. Returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"pledger version {__version__}")
        return 0

    configure_logging(args.verbose)

    try:
        run(args)
    except PledgerError as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
