import logging
from typing import Iterable, Optional

from reffinder.core.config.settings import settings
from reffinder.core.enums import ScanState
from reffinder.features.reference_detection.domain.interfaces import IReferenceDetector

from ..domain.models import (
    CompletionCallback, ProgressSink, ProgressUpdate, ScanSession, ScanSummary,
)

logger = logging.getLogger(__name__)

class ScanScheduler:
    """
    Cooperative batch scanner.

    Idle -> Running -> {Completed, Cancelled} -> Idle

    Nothing happens on its own: the host calls tick() from its main loop
    (per frame, per idle callback, ...) and every tick processes one batch.
    Only one scan can run at a time; start() rejects a second one.

    A candidate whose detection raises is skipped: the error is logged and
    kept in the summary, the scan goes on.
    """

    def __init__(self, batch_size: Optional[int] = None):
        self.batch_size = settings.SCAN_BATCH_SIZE if batch_size is None else batch_size
        if self.batch_size < 1:
            raise ValueError(f"Batch size must be positive, got {self.batch_size}")

        self.state = ScanState.IDLE
        self.last_summary: Optional[ScanSummary] = None
        self._session: Optional[ScanSession] = None

    @property
    def is_running(self) -> bool:
        return self.state == ScanState.RUNNING

    def start(self,
              candidates: Iterable[str],
              detector: IReferenceDetector,
              target_path: str,
              on_complete: Optional[CompletionCallback] = None,
              on_progress: Optional[ProgressSink] = None) -> bool:
        """
        Opens a new session. Returns False if a scan is already running.
        """
        if self.is_running:
            logger.warning(f"Scan for {target_path} rejected: another scan is running")
            return False

        self._session = ScanSession(
            candidates=tuple(candidates),
            target_path=target_path,
            detector=detector,
            on_complete=on_complete,
            on_progress=on_progress
        )
        self.state = ScanState.RUNNING
        logger.info(f"Scan started for {target_path}: {self._session.total} candidate(s)")
        return True

    def cancel(self):
        """Requests cancellation. Takes effect at the next batch boundary."""
        if self._session is not None:
            self._session.cancel_requested = True

    def tick(self) -> bool:
        """
        Processes one batch. Returns True while the scan is still running.
        """
        if not self.is_running:
            return False

        session = self._session
        batch = session.candidates[session.cursor:session.cursor + self.batch_size]

        current_path = ""
        for candidate in batch:
            session.cursor += 1
            current_path = candidate

            # No self-matches
            if candidate == session.target_path:
                continue

            try:
                record = session.detector.detect(candidate)
            except Exception as e:
                error_msg = f"Skipped {candidate}: {e}"
                logger.error(error_msg)
                session.errors.append(error_msg)
                continue

            if record is not None:
                session.results.append(record)

        # Checkpoint: progress + cancellation, once per batch
        update = ProgressUpdate(processed=session.cursor, total=session.total, current_path=current_path)
        if self._report_progress(session, update):
            session.cancel_requested = True

        if session.cancel_requested:
            self._finish(ScanState.CANCELLED)
            return False

        if session.exhausted:
            self._finish(ScanState.COMPLETED)
            return False

        return True

    def _report_progress(self, session: ScanSession, update: ProgressUpdate) -> bool:
        if session.on_progress is None:
            return False
        try:
            return bool(session.on_progress(update))
        except Exception as e:
            # A broken sink cannot be asked anymore; stop rather than scan blind
            logger.exception(f"Progress sink failed, cancelling scan: {e}")
            session.errors.append(f"Progress sink failed: {e}")
            return True

    def _finish(self, state: ScanState):
        session = self._session
        self._session = None

        # Copied exactly once, so nothing delivered can change afterwards
        results = list(session.results) if state == ScanState.COMPLETED else None

        self.last_summary = ScanSummary(
            state=state,
            candidates_processed=session.cursor,
            candidates_total=session.total,
            records_found=len(results) if results is not None else 0,
            errors=list(session.errors)
        )
        self.state = state

        if state == ScanState.COMPLETED:
            logger.info(f"Scan complete. Found {len(results)} reference(s) in {session.total} candidate(s)")
        else:
            logger.info(f"Scan cancelled at {session.cursor}/{session.total}")
        if session.errors:
            logger.warning(f"{len(session.errors)} candidate(s) could not be checked")

        try:
            if session.on_complete is not None:
                session.on_complete(results)
        except Exception as e:
            logger.exception(f"Completion callback failed: {e}")
        finally:
            # The callback may already have started the next scan
            if self.state == state:
                self.state = ScanState.IDLE


def run_until_idle(scheduler: ScanScheduler, max_ticks: Optional[int] = None) -> int:
    """
    Drives the scheduler from the calling thread until the running scan ends.
    For hosts without a main loop of their own (CLI, tests).
    Returns the number of ticks executed.
    """
    ticks = 0
    while scheduler.is_running:
        if max_ticks is not None and ticks >= max_ticks:
            break
        scheduler.tick()
        ticks += 1
    return ticks
