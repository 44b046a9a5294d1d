"""Orchestrator - runs every strategy per page, keeps the best, reconciles all pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple, Type, Union

from sqlalchemy.orm import Session

from roster_import.config import ImportConfig
from roster_import.domain.registry import StaffRegistry
from roster_import.domain.repositories import RosterEntryRepository
from roster_import.domain.roster import AcceptedEntry, Page, RosterDraft, TextFragment
from roster_import.exceptions import ConfigError, NoEntriesFoundError
from roster_import.services.dates import DateContext
from roster_import.services.recognizers import FieldRecognizers

from .base import BaseInterpreter
from .box_interpreter import BoxInterpreter
from .list_interpreter import ListInterpreter
from .reconciler import Reconciler
from .trace import ImportTrace, PageDecision

logger = logging.getLogger(__name__)

STRATEGIES: Dict[str, Type[BaseInterpreter]] = {
    ListInterpreter.name: ListInterpreter,
    BoxInterpreter.name: BoxInterpreter,
}

PageInput = Union[Page, Sequence[TextFragment]]


@dataclass
class ImportResult:
    entries: List[AcceptedEntry] = field(default_factory=list)
    trace: ImportTrace = field(default_factory=ImportTrace)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def raise_if_empty(self) -> None:
        """Surface an import that found nothing usable as a business error."""
        if self.is_empty:
            raise NoEntriesFoundError("No roster entries found in document")


def as_pages(pages: Iterable[PageInput]) -> List[Page]:
    """Accept Page objects or bare fragment lists; index pages in order."""
    result = []
    for index, page in enumerate(pages):
        if isinstance(page, Page):
            result.append(page)
        else:
            result.append(Page(index=index, fragments=list(page)))
    return result


def count_valid(drafts: Iterable[RosterDraft]) -> int:
    return sum(1 for d in drafts if d.is_complete)


class ImportOrchestrator:
    """
    Orchestrator coordinates the page interpretation strategies.

    Each strategy reads a page independently; the one with strictly more
    complete drafts wins (ties keep the earlier strategy in
    ``cfg.strategy_order``). Kept drafts from all pages go to one Reconciler.
    """

    def __init__(self, registry: StaffRegistry, cfg: ImportConfig | None = None):
        self.registry = registry
        self.cfg = cfg or ImportConfig()

    def date_context(self) -> DateContext | None:
        if self.cfg.target_year is None or self.cfg.target_month is None:
            return None
        return DateContext(year=int(self.cfg.target_year), month=int(self.cfg.target_month))

    def build_interpreters(self) -> List[BaseInterpreter]:
        """Create fresh interpreters in configured order."""
        recognizers = FieldRecognizers(registry=self.registry, date_context=self.date_context())
        interpreters: List[BaseInterpreter] = []
        for name in self.cfg.strategy_order:
            strategy = STRATEGIES.get(name)
            if strategy is None:
                logger.warning("Unknown strategy %r in strategy_order, skipping", name)
                continue
            if strategy is ListInterpreter:
                interpreters.append(
                    ListInterpreter(recognizers, self.cfg.layout, merge_remarks=self.cfg.merge_multiline_remarks)
                )
            else:
                interpreters.append(strategy(recognizers, self.cfg.layout))
        if not interpreters:
            raise ConfigError(f"No usable strategy in {self.cfg.strategy_order}")
        return interpreters

    def select(self, page: Page, interpreters: Sequence[BaseInterpreter]) -> Tuple[List[RosterDraft], PageDecision]:
        """Run every strategy on one page and keep the highest-yield output."""
        best_drafts: List[RosterDraft] = []
        best_name = interpreters[0].get_name()
        best_count = -1
        counts: Dict[str, int] = {}

        for interpreter in interpreters:
            drafts = interpreter.parse(page)
            valid = count_valid(drafts)
            counts[interpreter.get_name()] = valid
            if valid > best_count:
                best_drafts, best_name, best_count = drafts, interpreter.get_name(), valid

        decision = PageDecision(
            page_index=page.index,
            chosen=best_name,
            valid_counts=counts,
            fragment_count=len(page),
        )
        logger.info("Page %d: using %s interpreter %s", page.index + 1, best_name, counts)
        return best_drafts, decision

    def run(self, pages: Iterable[PageInput]) -> ImportResult:
        """
        Import a whole document.

        Args:
            pages: Pages in document order

        Returns:
            ImportResult with accepted entries and the structured trace
        """
        result = ImportResult()
        interpreters = self.build_interpreters()
        reconciler = Reconciler(result.trace)

        for page in as_pages(pages):
            if not page.fragments:
                result.warnings.append(f"Page {page.index + 1} has no text")
            drafts, decision = self.select(page, interpreters)
            result.trace.pages.append(decision)
            reconciler.add(drafts)

        result.entries = reconciler.finalize()

        if result.trace.dropped:
            result.warnings.append(f"{len(result.trace.dropped)} incomplete rows were skipped")
        if result.is_empty:
            result.warnings.append("No roster entries found")
        logger.info("Import finished: %d entries", len(result.entries))
        return result


def import_roster(
    pages: Iterable[PageInput],
    registry: StaffRegistry,
    cfg: ImportConfig | None = None,
    session: Session | None = None,
    persist: bool = False,
) -> ImportResult:
    """
    Convenience function to import a roster document using the orchestrator.

    Args:
        pages: Pages of text fragments
        registry: Known staff identities
        cfg: ImportConfig
        session: Database session, required when persist is True
        persist: If True, store accepted entries in roster_entries

    Returns:
        ImportResult
    """
    cfg = cfg or ImportConfig()
    result = ImportOrchestrator(registry, cfg).run(pages)

    if persist and not result.is_empty:
        if session is None:
            raise ValueError("persist=True requires a database session")
        created, skipped = RosterEntryRepository.import_entries(session, result.entries, cfg.editor_name)
        logger.info("Persisted %d entries (%d already stored)", created, skipped)
        if skipped:
            result.warnings.append(f"{skipped} entries were already stored and were skipped")

    return result
