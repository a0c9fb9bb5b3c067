from typing import Dict, List, Optional

from reffinder.core.errors import DependencyResolutionError
from reffinder.features.asset_index.domain.interfaces import IAssetIndex
from reffinder.features.asset_index.domain.models import AssetHandle, CompositeKey
from reffinder.features.reference_detection.domain.interfaces import IDependencyResolver, ITextReader


class FakeIndex(IAssetIndex):
    def __init__(self, guids: Dict[str, str]):
        self.guids = guids  # path -> guid

    def guid_to_path(self, guid: str) -> Optional[str]:
        for path, known in self.guids.items():
            if known == guid:
                return path
        return None

    def path_to_guid(self, path: str) -> Optional[str]:
        return self.guids.get(path)

    def resolve_key(self, handle: AssetHandle) -> Optional[CompositeKey]:
        guid = self.guids.get(handle.path)
        if guid is None or handle.file_id is None:
            return None
        return CompositeKey(guid, handle.file_id)


class FakeResolver(IDependencyResolver):
    def __init__(self, graph: Dict[str, List[str]], broken=()):
        self.graph = graph
        self.broken = set(broken)
        self.calls = []

    def get_dependencies(self, path: str) -> List[str]:
        self.calls.append(path)
        if path in self.broken:
            raise DependencyResolutionError(path, "corrupt asset")
        return list(self.graph.get(path, []))


class FakeReader(ITextReader):
    def __init__(self, texts: Dict[str, str]):
        self.texts = texts

    def read_text(self, path: str) -> str:
        if path not in self.texts:
            raise FileNotFoundError(path)
        return self.texts[path]
