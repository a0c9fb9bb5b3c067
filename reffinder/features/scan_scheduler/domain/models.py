from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from reffinder.core.enums import ScanState
from reffinder.features.reference_detection.domain.interfaces import IReferenceDetector
from reffinder.features.reference_detection.domain.models import ReferenceRecord

@dataclass(frozen=True)
class ProgressUpdate:
    """
    Emitted once per batch.
    """
    processed: int
    total: int
    current_path: str = ""

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 1.0
        return self.processed / self.total

    @property
    def title(self) -> str:
        return f"Finding References... ({self.processed}/{self.total})"


# Receives a progress update, returns True to request cancellation
ProgressSink = Callable[[ProgressUpdate], bool]

# Receives the records, or None when the scan was cancelled or never started
CompletionCallback = Callable[[Optional[List[ReferenceRecord]]], None]


@dataclass
class ScanSession:
    """
    Transient state of the one running scan. Owned by the scheduler.
    """
    candidates: Tuple[str, ...]
    target_path: str
    detector: IReferenceDetector
    on_complete: Optional[CompletionCallback] = None
    on_progress: Optional[ProgressSink] = None
    cursor: int = 0
    results: List[ReferenceRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    cancel_requested: bool = False

    @property
    def total(self) -> int:
        return len(self.candidates)

    @property
    def exhausted(self) -> bool:
        return self.cursor >= self.total


@dataclass
class ScanSummary:
    """
    Report of the last finished scan.
    """
    state: ScanState
    candidates_processed: int = 0
    candidates_total: int = 0
    records_found: int = 0
    errors: List[str] = field(default_factory=list)
