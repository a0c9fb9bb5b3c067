import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from reffinder.core.errors import AssetIndexError
from reffinder.core.shared_types import ProjectLayout
from reffinder.features.artifact_catalog.data.file_walker import SortedFileWalker

from ..domain.interfaces import IAssetIndex, IAssetIndexRepository
from ..domain.models import (
    AssetHandle, CompositeKey, IndexedAsset, BUILTIN_ASSETS, MAIN_OBJECT_FILE_IDS, is_builtin_path,
)
from ..data.meta_parser import MetaFileReader, META_SUFFIX
from ..data.repository import SqlAssetIndexRepo

logger = logging.getLogger(__name__)

class AssetIndexService(IAssetIndex):
    """
    Facade for the Asset Index Feature.
    Builds the guid <-> path table from .meta sidecars and answers lookups.
    """

    def __init__(self, layout: ProjectLayout, repo: Optional[IAssetIndexRepository] = None):
        self.layout = layout
        self.repo = repo or SqlAssetIndexRepo()
        self.reader = MetaFileReader()
        self.walker = SortedFileWalker()

    @property
    def project_key(self) -> str:
        return str(self.layout.root.resolve())

    def rebuild(self) -> int:
        """
        Re-reads every .meta file under the asset root and replaces the stored index.
        Returns the number of indexed assets.
        """
        assets_dir = self.layout.assets_dir
        if not assets_dir.is_dir():
            raise AssetIndexError(f"Asset root not found: {assets_dir}")

        entries = self._collect_entries(assets_dir)

        try:
            count = self.repo.replace_project(self.project_key, entries)
        except SQLAlchemyError as e:
            raise AssetIndexError(f"Failed to store asset index: {e}") from e

        logger.info(f"Asset index rebuilt: {count} asset(s) in {self.layout.root}")
        return count

    def _collect_entries(self, assets_dir: Path) -> List[IndexedAsset]:
        entries = []
        for meta_path in self.walker.walk(assets_dir):
            if not meta_path.name.endswith(META_SUFFIX):
                continue
            guid = self.reader.read_guid(meta_path)
            if guid is None:
                continue
            asset_path = self.layout.to_relative(self.reader.asset_path_for(meta_path))
            entries.append(IndexedAsset(guid=guid, path=asset_path))
        return entries

    def guid_to_path(self, guid: str) -> Optional[str]:
        if not guid:
            return None
        guid = guid.lower()
        if guid in BUILTIN_ASSETS:
            return BUILTIN_ASSETS[guid]
        return self.repo.get_path(self.project_key, guid)

    def path_to_guid(self, path: str) -> Optional[str]:
        if not path:
            return None
        for guid, builtin_path in BUILTIN_ASSETS.items():
            if path == builtin_path:
                return guid
        return self.repo.get_guid(self.project_key, path)

    def resolve_key(self, handle: AssetHandle) -> Optional[CompositeKey]:
        guid = self.path_to_guid(handle.path)
        if guid is None:
            return None

        file_id = handle.file_id
        if file_id is None:
            # Built-in assets bundle many objects; the caller has to name one
            if is_builtin_path(handle.path):
                return None
            file_id = MAIN_OBJECT_FILE_IDS.get(Path(handle.path).suffix.lower())
            if file_id is None:
                logger.warning(f"Unknown main object fileID for {handle.path}")
                return None

        return CompositeKey(guid=guid, file_id=file_id)
