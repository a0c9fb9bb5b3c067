import logging
from pathlib import Path
from typing import Iterable, List, Optional

from reffinder.core.shared_types import ProjectLayout

from ..domain.models import CatalogRequest
from ..data.file_walker import SortedFileWalker
from ..data.ignore_rules import IgnoreRules

logger = logging.getLogger(__name__)

class ArtifactCatalog:
    """
    Enumerates every candidate artifact under a project's asset root.
    """

    def __init__(self):
        self.walker = SortedFileWalker()

    def enumerate(self, request: CatalogRequest) -> List[str]:
        """
        Returns root-relative, forward-slash artifact paths whose extension is
        in the allow-list. Files with other extensions are skipped silently.
        """
        paths = [
            request.layout.to_relative(file_path)
            for file_path in self.walker.walk(request.layout.assets_dir)
            if IgnoreRules.has_allowed_extension(file_path, request.extensions)
        ]
        logger.debug(f"Catalog: {len(paths)} candidate(s) under {request.layout.assets_dir}")
        return paths


catalog = ArtifactCatalog()

def enumerate_artifacts(project_root: Path, extensions: Optional[Iterable[str]] = None) -> List[str]:
    """Convenience wrapper: builds the request and enumerates in one call."""
    layout = ProjectLayout(root=Path(project_root))
    if extensions is None:
        request = CatalogRequest(layout=layout)
    else:
        request = CatalogRequest(layout=layout, extensions=tuple(extensions))
    return catalog.enumerate(request)
