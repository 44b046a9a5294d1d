"""Page interpretation strategies and the import orchestrator."""

from .base import BaseInterpreter
from .box_interpreter import BoxInterpreter
from .list_interpreter import ListInterpreter
from .orchestrator import ImportOrchestrator, ImportResult, import_roster
from .reconciler import Reconciler, apply_saturday_rule, reconcile
from .trace import DroppedDraft, ImportTrace, PageDecision

__all__ = [
    "BaseInterpreter",
    "BoxInterpreter",
    "DroppedDraft",
    "ImportOrchestrator",
    "ImportResult",
    "ImportTrace",
    "ListInterpreter",
    "PageDecision",
    "Reconciler",
    "apply_saturday_rule",
    "import_roster",
    "reconcile",
]
