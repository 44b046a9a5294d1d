"""Command-line interface for the roster PDF import engine."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from roster_import.config import DEFAULT_DB_URL, load_config
from roster_import.domain.db import get_session, init_database
from roster_import.domain.registry import StaffRegistry
from roster_import.engine.orchestrator import import_roster
from roster_import.exceptions import ConfigError, FragmentSourceError, NoEntriesFoundError
from roster_import.io.export_csv import export_diagnostics_csv, export_entries_csv, export_roster_entries_csv
from roster_import.io.import_csv import import_staff_csv, load_registry_csv
from roster_import.io.pdf_source import read_pages


def _parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        year, month = (int(part) for part in value.split("-"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month out of range in {value!r}")
    return year, month


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = args.db or DEFAULT_DB_URL
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_load_staff(args: argparse.Namespace) -> None:
    """Load staff members from CSV into the database."""
    db_url = args.db or DEFAULT_DB_URL
    session = get_session(db_url)

    try:
        count = import_staff_csv(session, args.csv, generate_reserve_variants=not args.no_reserve)
        session.close()
        print(f"[OK] Imported {count} staff members")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Staff import failed: {e}")
        raise


def _cmd_import_pdf(args: argparse.Namespace) -> None:
    """Import a roster PDF (or JSON fragment dump)."""
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"[ERROR] {e}")
        raise
    if args.db:
        cfg.db_url = args.db
    if args.editor:
        cfg.editor_name = args.editor

    try:
        pages = read_pages(args.path)
    except FragmentSourceError as e:
        print(f"[ERROR] {e}")
        raise
    print(f"[INFO] Read {len(pages)} pages from {Path(args.path).name}")

    session = None
    if args.persist or not args.staff_csv:
        session = get_session(cfg.db_url)

    try:
        if args.staff_csv:
            registry = load_registry_csv(args.staff_csv, cfg.generate_reserve_variants)
        else:
            registry = StaffRegistry.from_session(session, cfg.generate_reserve_variants)
        print(f"[INFO] {len(registry)} known staff names")

        result = import_roster(pages, registry, cfg, session=session, persist=args.persist)

        for warning in result.warnings:
            print(f"[WARN] {warning}")
        if args.diagnostics:
            count = export_diagnostics_csv(result.trace, args.diagnostics)
            print(f"[OK] Wrote {count} dropped rows to {args.diagnostics}")

        result.raise_if_empty()

        if args.out:
            export_entries_csv(result.entries, args.out)
            print(f"[OK] Exported entries to {args.out}")
        if args.verbose:
            print(result.trace.summary())

        print(f"[OK] Imported {len(result.entries)} roster entries")

    except NoEntriesFoundError:
        print("[ERROR] No roster entries found")
        raise SystemExit(1)
    except Exception as e:
        if session is not None:
            session.rollback()
        print(f"[ERROR] Import failed: {e}")
        raise
    finally:
        if session is not None:
            session.close()


def _cmd_export(args: argparse.Namespace) -> None:
    """Export stored roster entries to CSV."""
    db_url = args.db or DEFAULT_DB_URL
    session = get_session(db_url)

    try:
        year, month = args.month if args.month else (None, None)
        count = export_roster_entries_csv(session, args.out, year=year, month=month)
        session.close()
        print(f"[OK] Exported {count} roster entries to {args.out}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="roster-import",
        description="Hospital duty roster PDF import",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log import decisions")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # load-staff command
    staff = sub.add_parser("load-staff", help="Load staff names from CSV")
    staff.add_argument("--csv", required=True, help="Path to staff CSV (needs a 'name' column)")
    staff.add_argument("--no-reserve", action="store_true", help="Do not create NAME(R) variants")
    staff.set_defaults(func=_cmd_load_staff)

    # import-pdf command
    imp = sub.add_parser("import-pdf", help="Import a roster PDF")
    imp.add_argument("path", help="Roster PDF, or a JSON dump of text fragments")
    imp.add_argument("--config", help="Path to config YAML/JSON")
    imp.add_argument("--staff-csv", help="Read staff names from CSV instead of the database")
    imp.add_argument("--persist", action="store_true", help="Store accepted entries in the database")
    imp.add_argument("--out", help="Optional: export accepted entries to CSV")
    imp.add_argument("--diagnostics", help="Optional: export dropped rows to CSV")
    imp.add_argument("--editor", help="Name recorded as last editor (default: PDF Import)")
    imp.set_defaults(func=_cmd_import_pdf)

    # export command
    exp = sub.add_parser("export", help="Export stored roster entries to CSV")
    exp.add_argument("--out", required=True, help="Path to export CSV")
    exp.add_argument("--month", type=_parse_month, help="Month to export as YYYY-MM (optional)")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
