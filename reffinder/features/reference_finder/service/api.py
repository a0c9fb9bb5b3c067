import logging
from pathlib import Path
from typing import Iterable, List, Optional

from reffinder.core.enums import SearchMode
from reffinder.core.shared_types import ProjectLayout
from reffinder.features.artifact_catalog.domain.models import CatalogRequest
from reffinder.features.artifact_catalog.service.api import catalog
from reffinder.features.asset_index.domain.interfaces import IAssetIndex
from reffinder.features.asset_index.domain.models import AssetHandle, is_builtin_path
from reffinder.features.asset_index.service.api import AssetIndexService
from reffinder.features.reference_detection.data.dependency_resolver import TextDependencyResolver
from reffinder.features.reference_detection.data.text_reader import ProjectTextReader
from reffinder.features.reference_detection.domain.interfaces import IDependencyResolver
from reffinder.features.reference_detection.domain.models import ReferenceRecord
from reffinder.features.reference_detection.service.detectors import (
    DependencyMembershipDetector, PatternMatchDetector,
)
from reffinder.features.scan_scheduler.domain.models import CompletionCallback, ProgressSink
from reffinder.features.scan_scheduler.service.scheduler import ScanScheduler

from ..data.editor_settings import uses_text_serialization

logger = logging.getLogger(__name__)

class ReferenceFinder:
    """
    Public API of the engine.

    Every find* call returns immediately; the scan advances on tick() and the
    outcome arrives through on_complete: a list of records, or None when the
    target could not be resolved or the scan was cancelled.
    Without on_complete, results are written to the log.
    """

    def __init__(self,
                 project_root: Path,
                 index: Optional[IAssetIndex] = None,
                 dependency_resolver: Optional[IDependencyResolver] = None,
                 scheduler: Optional[ScanScheduler] = None,
                 extensions: Optional[Iterable[str]] = None):
        self.layout = ProjectLayout(root=Path(project_root))
        self.index = index or AssetIndexService(self.layout)
        self.scheduler = scheduler or ScanScheduler()
        self.extensions = tuple(extensions) if extensions is not None else None
        # When None, a fresh TextDependencyResolver is built per scan
        self._dependency_resolver = dependency_resolver

    @property
    def is_searching(self) -> bool:
        return self.scheduler.is_running

    def tick(self) -> bool:
        return self.scheduler.tick()

    def cancel(self):
        self.scheduler.cancel()

    def find_by_guid(self, guid: str,
                     on_complete: Optional[CompletionCallback] = None,
                     on_progress: Optional[ProgressSink] = None):
        """Dependency search for the asset with the given guid."""
        path = self.index.guid_to_path(guid) if guid else None
        if not path:
            logger.warning(f"No asset found for guid '{guid}'")
            self._deliver_nothing(on_complete)
            return
        self.find(path, on_complete, on_progress)

    def find(self, path: str,
             on_complete: Optional[CompletionCallback] = None,
             on_progress: Optional[ProgressSink] = None):
        """Dependency search: candidates whose dependency set contains `path`."""
        if not path:
            self._deliver_nothing(on_complete)
            return
        if self._reject_if_busy(path):
            return

        candidates = self._enumerate()
        if self.index.path_to_guid(path) is None and not self.layout.to_absolute(path).exists():
            logger.warning(f"No asset found at {path}")
            self._deliver_nothing(on_complete)
            return

        # Dependencies are followed through every text-serialized type, not only the scanned ones
        resolver = self._dependency_resolver or TextDependencyResolver(self.layout, self.index)
        detector = DependencyMembershipDetector(resolver, self.index, path)
        self.scheduler.start(candidates, detector, path, on_complete or self._log_results, on_progress)

    def find_by_pattern(self, handle: AssetHandle,
                        on_complete: Optional[CompletionCallback] = None,
                        on_progress: Optional[ProgressSink] = None):
        """Text search: counts serialized (fileID, guid) references to the handle's object."""
        if handle is None or not handle.path:
            self._deliver_nothing(on_complete)
            return

        key = self.index.resolve_key(handle)
        if key is None:
            logger.warning(f"Cannot resolve fileID/guid of {handle.path}")
            self._deliver_nothing(on_complete)
            return
        if self._reject_if_busy(handle.path):
            return

        if uses_text_serialization(self.layout) is False:
            logger.warning("Project assets are not serialized as text; binary assets will report no references")

        candidates = self._enumerate()
        detector = PatternMatchDetector(ProjectTextReader(self.layout), self.index, key)
        self.scheduler.start(candidates, detector, handle.path, on_complete or self._log_results, on_progress)

    def find_references(self, handle: AssetHandle,
                        mode: SearchMode = SearchMode.DEPENDENCY_API,
                        on_complete: Optional[CompletionCallback] = None,
                        on_progress: Optional[ProgressSink] = None):
        """
        Dispatches to the requested strategy. Built-in assets have no file to
        resolve dependencies against, so they always use the text pattern.
        """
        if handle is not None and (mode == SearchMode.TEXT_PATTERN or is_builtin_path(handle.path)):
            self.find_by_pattern(handle, on_complete, on_progress)
        else:
            self.find(handle.path if handle else "", on_complete, on_progress)

    def _enumerate(self) -> List[str]:
        # Raises CatalogError before any progress is reported
        if self.extensions is None:
            request = CatalogRequest(layout=self.layout)
        else:
            request = CatalogRequest(layout=self.layout, extensions=self.extensions)
        return catalog.enumerate(request)

    def _reject_if_busy(self, target: str) -> bool:
        if self.scheduler.is_running:
            logger.warning(f"Search for {target} ignored: a search is already running")
            return True
        return False

    @staticmethod
    def _deliver_nothing(on_complete: Optional[CompletionCallback]):
        if on_complete is not None:
            on_complete(None)

    @staticmethod
    def _log_results(records: Optional[List[ReferenceRecord]]):
        if records is None:
            return
        for i, record in enumerate(records):
            logger.info(f"References {i + 1}: {record.path}")
