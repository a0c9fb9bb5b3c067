import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from reffinder.core.config.settings import settings
from reffinder.core.errors import DependencyResolutionError
from reffinder.core.shared_types import ProjectLayout
from reffinder.features.asset_index.domain.interfaces import IAssetIndex
from ..domain.interfaces import IDependencyResolver

logger = logging.getLogger(__name__)

# Any serialized reference, e.g. {fileID: 2100000, guid: 57d31b7d..., type: 2}
GUID_REFERENCE = re.compile(r"guid:\s*([0-9a-fA-F]{32})")


class TextDependencyResolver(IDependencyResolver):
    """
    Resolves dependencies by reading text-serialized assets and following
    every guid they mention, recursively.
    The result contains the asset itself, like the editor's own API.
    """

    def __init__(self, layout: ProjectLayout, index: IAssetIndex,
                 extensions: Optional[Iterable[str]] = None, recursive: bool = True):
        self.layout = layout
        self.index = index
        self.recursive = recursive
        self.extensions = {ext.lower() for ext in (extensions or settings.ASSET_EXTENSIONS)}

        # Both caches live as long as the resolver, i.e. one scan
        self._direct_cache: Dict[str, List[str]] = {}
        self._guid_cache: Dict[str, Optional[str]] = {}

    def get_dependencies(self, path: str) -> List[str]:
        # The root asset must be readable; nested ones degrade to leaves
        direct = self._direct_dependencies(path, strict=True)

        result: Set[str] = {path}
        pending = list(direct)
        while pending:
            dependency = pending.pop()
            if dependency in result:
                continue
            result.add(dependency)
            if self.recursive:
                pending.extend(self._direct_dependencies(dependency, strict=False))

        return sorted(result)

    def _direct_dependencies(self, path: str, strict: bool) -> List[str]:
        if path in self._direct_cache:
            return self._direct_cache[path]

        if Path(path).suffix.lower() not in self.extensions:
            # Imported assets (textures, models, ...) hold no references
            self._direct_cache[path] = []
            return []

        try:
            text = self.layout.to_absolute(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if strict:
                raise DependencyResolutionError(path, str(e)) from e
            logger.warning(f"Treating {path} as a leaf dependency: {e}")
            self._direct_cache[path] = []
            return []

        dependencies = []
        for guid in sorted(set(m.lower() for m in GUID_REFERENCE.findall(text))):
            dependency = self._lookup(guid)
            if dependency and dependency != path:
                dependencies.append(dependency)

        self._direct_cache[path] = dependencies
        return dependencies

    def _lookup(self, guid: str) -> Optional[str]:
        if guid not in self._guid_cache:
            self._guid_cache[guid] = self.index.guid_to_path(guid)
        return self._guid_cache[guid]
