"""I/O utilities: fragment sources and CSV import/export."""

from .export_csv import export_diagnostics_csv, export_entries_csv, export_roster_entries_csv
from .import_csv import import_staff_csv, load_registry_csv, read_staff_csv
from .pdf_source import read_fragment_json, read_pages, read_pdf_pages

__all__ = [
    "export_diagnostics_csv",
    "export_entries_csv",
    "export_roster_entries_csv",
    "import_staff_csv",
    "load_registry_csv",
    "read_fragment_json",
    "read_pages",
    "read_pdf_pages",
    "read_staff_csv",
]
