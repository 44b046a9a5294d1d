"""Exception types raised by the roster import package."""


class RosterImportError(Exception):
    """Base class for all roster import errors."""


class ConfigError(RosterImportError):
    """Raised when an import configuration file is malformed."""


class FragmentSourceError(RosterImportError):
    """Raised when text fragments cannot be extracted from a document."""


class NoEntriesFoundError(RosterImportError):
    """Raised when an import run produced no accepted roster entries.

    This is a business outcome (the document held nothing usable), not a
    parser defect.
    """
