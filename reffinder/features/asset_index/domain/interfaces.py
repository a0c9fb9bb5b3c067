from abc import ABC, abstractmethod
from typing import List, Optional

from .models import AssetHandle, CompositeKey, IndexedAsset

class IAssetIndexRepository(ABC):
    """
    Contract for persisting the guid <-> path index of a project.
    """

    @abstractmethod
    def replace_project(self, project_root: str, entries: List[IndexedAsset]) -> int:
        """
        Replaces every entry of the project in one transaction.
        Returns the number of rows written.
        """
        pass

    @abstractmethod
    def get_path(self, project_root: str, guid: str) -> Optional[str]:
        pass

    @abstractmethod
    def get_guid(self, project_root: str, path: str) -> Optional[str]:
        pass


class IAssetIndex(ABC):
    """
    Identifier-resolution collaborator used by the scanning engine.
    """

    @abstractmethod
    def guid_to_path(self, guid: str) -> Optional[str]:
        """Returns the asset path, or None if the guid is unknown (e.g. deleted asset)."""
        pass

    @abstractmethod
    def path_to_guid(self, path: str) -> Optional[str]:
        pass

    @abstractmethod
    def resolve_key(self, handle: AssetHandle) -> Optional[CompositeKey]:
        """
        Resolves a handle to the (guid, fileID) pair used in serialized references.
        Returns None when either half cannot be determined.
        """
        pass
