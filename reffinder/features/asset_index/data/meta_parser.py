import logging
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"

# guid line of a .meta sidecar, e.g. "guid: 57d31b7d2a71b42858f8d031d9c6219b"
GUID_LINE = re.compile(r"^guid:\s*([0-9a-fA-F]{32})\s*$", re.MULTILINE)


class MetaFileReader:
    """
    Reads the stable identifier out of a .meta sidecar file.
    """

    def read_guid(self, meta_path: Path) -> Optional[str]:
        try:
            text = meta_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Cannot read {meta_path}: {e}")
            return None

        match = GUID_LINE.search(text)
        if not match:
            logger.warning(f"No guid found in {meta_path}")
            return None
        return match.group(1).lower()

    @staticmethod
    def asset_path_for(meta_path: Path) -> Path:
        """Assets/A.mat.meta -> Assets/A.mat"""
        return meta_path.with_name(meta_path.name[:-len(META_SUFFIX)])
