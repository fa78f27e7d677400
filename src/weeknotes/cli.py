"""CLI for weeknotes - daily and weekly notes in a Markdown vault."""

import argparse
import json
import logging
import platform
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.memory_storage import MemoryStorage
from .core.calendar import week_info
from .core.dates import format_date
from .core.model import Resolution
from .core.resolver import resolve_note, target_date
from .runtime import build_runtime


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def _version_string() -> str:
    return (
        f"weeknotes {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def _print_resolution(args: argparse.Namespace, res: Resolution, body: str | None = None) -> None:
    if args.json:
        data = {
            "path": res.path,
            "created": res.created,
            "kind": res.kind,
            "date": res.day.isoformat(),
            "week": res.week.week_number,
            "week_start": res.week.week_start.isoformat(),
        }
        if args.dry_run:
            data["body"] = body
        print(json.dumps(data, indent=2))
    elif not args.quiet:
        print(res.path)
        if body is not None:
            print(body)


def _cmd_note(args: argparse.Namespace, rt: Any, kind: str, tomorrow: bool = False) -> int:
    # dry run: read from the vault, keep every write in memory
    storage = MemoryStorage(base=rt.storage) if args.dry_run else rt.storage
    res = resolve_note(
        storage,
        rt.config.notes,
        kind,
        getattr(args, "date", None),
        tomorrow=tomorrow,
        open_note=args.edit and not args.dry_run,
    )
    body = storage.files.get(res.path) if args.dry_run else None
    _print_resolution(args, res, body)
    return 0


def cmd_weekly(args: argparse.Namespace, rt: Any) -> int:
    """Create or open the weekly note."""
    return _cmd_note(args, rt, "weekly")


def cmd_daily(args: argparse.Namespace, rt: Any) -> int:
    """Create or open the daily note."""
    return _cmd_note(args, rt, "daily")


def cmd_tomorrow(args: argparse.Namespace, rt: Any) -> int:
    """Create or open tomorrow's daily note."""
    return _cmd_note(args, rt, "daily", tomorrow=True)


def cmd_week(args: argparse.Namespace, rt: Any) -> int:
    """Print ISO week number and week start for a date."""
    day = target_date(args.date)
    week = week_info(day)
    start = format_date(week.week_start, rt.config.notes.weekly.start_date_format)

    if args.json:
        print(json.dumps({
            "date": day.isoformat(),
            "week": week.week_number,
            "week_start": week.week_start.isoformat(),
        }, indent=2))
    else:
        print(f"{week.week_number}\t{start}")
    return 0


def cmd_config(args: argparse.Namespace, rt: Any) -> int:
    """Print the effective configuration."""
    print(json.dumps(asdict(rt.config), indent=2, default=str))
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="weeknotes", description="Daily and weekly notes for a Markdown vault"
    )
    parser.add_argument(
        "--version", action="version", version=_version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/weeknotes.toml, vault/weeknotes.toml)",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to vault directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log what is created or opened"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # weekly / daily commands
    for name, help_text in (
        ("weekly", "Create or open the weekly note"),
        ("daily", "Create or open the daily note"),
    ):
        parser_note = subparsers.add_parser(name, help=help_text)
        parser_note.add_argument(
            "--date", type=_parse_date, default=None,
            help="Date of the note, YYYY-MM-DD (default: today)",
        )
        parser_note.add_argument(
            "--edit", action="store_true", help="Open in $EDITOR afterwards"
        )
        parser_note.add_argument(
            "--dry-run", action="store_true",
            help="Print the path and new note body without writing anything",
        )

    # tomorrow command
    parser_tomorrow = subparsers.add_parser(
        "tomorrow", help="Create or open tomorrow's daily note"
    )
    parser_tomorrow.add_argument(
        "--edit", action="store_true", help="Open in $EDITOR afterwards"
    )
    parser_tomorrow.add_argument(
        "--dry-run", action="store_true",
        help="Print the path and new note body without writing anything",
    )

    # week command
    parser_week = subparsers.add_parser("week", help="Show ISO week for a date")
    parser_week.add_argument(
        "--date", type=_parse_date, default=None,
        help="Date, YYYY-MM-DD (default: today)",
    )

    # config command
    subparsers.add_parser("config", help="Print the effective configuration")

    args = parser.parse_args()

    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=level)

    handlers = {
        "weekly": cmd_weekly,
        "daily": cmd_daily,
        "tomorrow": cmd_tomorrow,
        "week": cmd_week,
        "config": cmd_config,
    }
    handler = handlers.get(args.cmd)

    if handler:
        try:
            # Build runtime
            rt = build_runtime(
                vault_path=args.vault,
                config_path=args.config,
            )
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
