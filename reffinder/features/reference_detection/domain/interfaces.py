from abc import ABC, abstractmethod
from typing import List, Optional

from .models import ReferenceRecord

class IDependencyResolver(ABC):
    """
    Dependency-resolution collaborator.
    """
    @abstractmethod
    def get_dependencies(self, path: str) -> List[str]:
        """
        Returns every asset path the given asset depends on.
        Must be deterministic for a fixed filesystem state.
        Raises DependencyResolutionError if the asset cannot be resolved.
        """
        pass

class ITextReader(ABC):
    @abstractmethod
    def read_text(self, path: str) -> str:
        """Reads the whole serialized content of an asset."""
        pass

class IReferenceDetector(ABC):
    """
    One detection strategy, bound to a single target for the lifetime of a scan.
    """
    @abstractmethod
    def detect(self, candidate: str) -> Optional[ReferenceRecord]:
        """
        Returns a record if the candidate references the target, None otherwise.
        Raises DetectionError when the candidate cannot be checked.
        """
        pass
