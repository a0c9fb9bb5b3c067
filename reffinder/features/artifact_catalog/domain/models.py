from dataclasses import dataclass
from typing import Tuple

from reffinder.core.config.settings import settings
from reffinder.core.errors import CatalogError
from reffinder.core.shared_types import ProjectLayout

@dataclass(frozen=True)
class CatalogRequest:
    """
    Intent to enumerate every candidate artifact of a project.
    """
    layout: ProjectLayout
    extensions: Tuple[str, ...] = settings.ASSET_EXTENSIONS

    def __post_init__(self):
        assets_dir = self.layout.assets_dir
        if not assets_dir.exists():
            raise CatalogError(f"Asset root not found: {assets_dir}")
        if not assets_dir.is_dir():
            raise CatalogError(f"Asset root is not a directory: {assets_dir}")
