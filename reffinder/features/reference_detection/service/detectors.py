import logging
import re
from typing import Optional

from reffinder.core.errors import DependencyResolutionError, DetectionError
from reffinder.features.asset_index.domain.interfaces import IAssetIndex
from reffinder.features.asset_index.domain.models import CompositeKey

from ..domain.interfaces import IDependencyResolver, IReferenceDetector, ITextReader
from ..domain.models import ReferenceRecord, UNKNOWN_REF_COUNT

logger = logging.getLogger(__name__)


def build_reference_pattern(key: CompositeKey) -> re.Pattern:
    """
    Pattern of a serialized reference to one object, e.g.
    - builtin asset: {fileID: 10303, guid: 0000000000000000f000000000000000, type: 0}
    - project asset: {fileID: 100100000, guid: 57d31b7d2a71b42858f8d031d9c6219b, type: 3}
    """
    return re.compile(f"fileID: {key.file_id}, guid: {re.escape(key.guid)}, type")


class DependencyMembershipDetector(IReferenceDetector):
    """
    A candidate references the target iff the target is in its dependency set.
    Presence only: every record carries UNKNOWN_REF_COUNT.
    """

    def __init__(self, resolver: IDependencyResolver, index: IAssetIndex, target_path: str):
        self.resolver = resolver
        self.index = index
        self.target_path = target_path

    def detect(self, candidate: str) -> Optional[ReferenceRecord]:
        try:
            dependencies = self.resolver.get_dependencies(candidate)
        except DependencyResolutionError as e:
            raise DetectionError(candidate, e.reason) from e

        if self.target_path not in dependencies:
            return None
        return ReferenceRecord(
            path=candidate,
            guid=self.index.path_to_guid(candidate) or "",
            ref_count=UNKNOWN_REF_COUNT
        )


class PatternMatchDetector(IReferenceDetector):
    """
    Counts occurrences of the target's (fileID, guid) pair in the candidate's text.
    """

    def __init__(self, reader: ITextReader, index: IAssetIndex, key: CompositeKey):
        self.reader = reader
        self.index = index
        self.key = key
        # Compiled once per scan
        self.pattern = build_reference_pattern(key)

    def detect(self, candidate: str) -> Optional[ReferenceRecord]:
        try:
            text = self.reader.read_text(candidate)
        except OSError as e:
            raise DetectionError(candidate, str(e)) from e

        count = len(self.pattern.findall(text))
        if count == 0:
            return None
        return ReferenceRecord(
            path=candidate,
            guid=self.index.path_to_guid(candidate) or "",
            ref_count=count
        )
