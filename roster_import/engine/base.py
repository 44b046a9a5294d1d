"""Base interpreter interface that all page-parsing strategies implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from roster_import.config import LayoutConfig
from roster_import.domain.roster import Page, RosterDraft
from roster_import.services.recognizers import FieldRecognizers


class BaseInterpreter(ABC):
    """
    Abstract base class for page interpretation strategies.

    A strategy turns the fragments of one page into roster drafts. It must not
    keep state between calls; the selector may run several strategies over
    the same page and keep only one result.
    """

    name: str | None = None  # Override in subclasses (e.g., "list", "box")

    def __init__(self, recognizers: FieldRecognizers, layout: LayoutConfig | None = None):
        self.recognizers = recognizers
        self.layout = layout or LayoutConfig()

    @abstractmethod
    def parse(self, page: Page) -> List[RosterDraft]:
        """
        Interpret one page.

        Args:
            page: Fragments of a single page

        Returns:
            Drafts in page order; incomplete drafts are allowed and are
            filtered (with a recorded reason) by the reconciler.
        """
        pass

    def get_name(self) -> str:
        """Get the strategy name."""
        return self.name or "unknown"
