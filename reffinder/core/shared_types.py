from dataclasses import dataclass
from pathlib import Path

from reffinder.core.config.settings import settings


@dataclass(frozen=True)
class ProjectLayout:
    """
    Value Object describing where a project lives on disk.
    Artifact paths are relative to `root` and always start with the assets folder,
    e.g. "Assets/Materials/Floor.mat".
    """
    root: Path
    assets_dir_name: str = settings.ASSETS_DIR_NAME

    def __post_init__(self):
        if str(self.root).strip() == "." or str(self.root).strip() == "":
            raise ValueError("Project root cannot be empty.")
        if not self.assets_dir_name:
            raise ValueError("Assets directory name cannot be empty.")

    @property
    def assets_dir(self) -> Path:
        return self.root / self.assets_dir_name

    def to_relative(self, absolute_path: Path) -> str:
        """Converts an absolute path inside the project to a forward-slash artifact path."""
        return Path(absolute_path).relative_to(self.root).as_posix()

    def to_absolute(self, relative_path: str) -> Path:
        return self.root / relative_path
