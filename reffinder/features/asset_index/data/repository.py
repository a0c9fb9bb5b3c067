import logging
from typing import List, Optional
from reffinder.core.database.connection import SessionLocal
from .sql_models import AssetModel
from ..domain.interfaces import IAssetIndexRepository
from ..domain.models import IndexedAsset

logger = logging.getLogger(__name__)

class SqlAssetIndexRepo(IAssetIndexRepository):

    def replace_project(self, project_root: str, entries: List[IndexedAsset]) -> int:
        """
        Transactional logic:
        1. Delete every row of this project.
        2. Insert the fresh entries (first occurrence wins on duplicate guids).
        """
        with SessionLocal() as db:
            try:
                db.query(AssetModel).filter(AssetModel.project_root == project_root).delete()

                seen_guids = set()
                for entry in entries:
                    if entry.guid in seen_guids:
                        logger.warning(f"Duplicate guid {entry.guid} at {entry.path}, keeping first occurrence")
                        continue
                    seen_guids.add(entry.guid)
                    db.add(AssetModel(project_root=project_root, guid=entry.guid, path=entry.path))

                db.commit()
                return len(seen_guids)
            except Exception:
                db.rollback()
                raise

    def get_path(self, project_root: str, guid: str) -> Optional[str]:
        with SessionLocal() as db:
            row = db.query(AssetModel).filter(
                AssetModel.project_root == project_root,
                AssetModel.guid == guid
            ).first()
            return row.path if row else None

    def get_guid(self, project_root: str, path: str) -> Optional[str]:
        with SessionLocal() as db:
            row = db.query(AssetModel).filter(
                AssetModel.project_root == project_root,
                AssetModel.path == path
            ).first()
            return row.guid if row else None

