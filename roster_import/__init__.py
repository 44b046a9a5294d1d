"""Roster import package: rebuilds structured shift assignments from roster PDFs.

Modules:
- config: layout thresholds and import options (JSON or YAML)
- exceptions: error types raised by adapters and the CLI surface
- domain: roster types, staff registry, SQLAlchemy models and repositories
- services: date, shift and staff recognizers plus row clustering
- engine: list and box interpreters, strategy selection and reconciliation
- io: PDF fragment source and CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "exceptions",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
