"""Application services of Wirescout."""

from .extraction import ExtractionEngine
from .orchestrator import SiteOrchestrator, SiteOutcome
from .run_controller import RunController, RunResult

__all__ = [
    "ExtractionEngine",
    "RunController",
    "RunResult",
    "SiteOrchestrator",
    "SiteOutcome",
]
