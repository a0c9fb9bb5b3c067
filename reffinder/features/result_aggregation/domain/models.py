from dataclasses import dataclass
from pathlib import PurePosixPath

from reffinder.core.enums import AssetCategory

CATEGORY_BY_EXTENSION = {
    ".unity": AssetCategory.SCENE,
    ".prefab": AssetCategory.PREFAB,
    ".mat": AssetCategory.MATERIAL,
}

def categorize(path: str) -> AssetCategory:
    return CATEGORY_BY_EXTENSION.get(PurePosixPath(path).suffix, AssetCategory.OTHER)


@dataclass(frozen=True)
class ResultFilter:
    """
    Category toggles plus a free-text search over the case-folded path.
    """
    include_scenes: bool = True
    include_prefabs: bool = True
    include_materials: bool = True
    include_others: bool = True
    search: str = ""

    @property
    def is_active(self) -> bool:
        return not (self.include_scenes and self.include_prefabs
                    and self.include_materials and self.include_others) or bool(self.search)

    def includes(self, category: AssetCategory) -> bool:
        return {
            AssetCategory.SCENE: self.include_scenes,
            AssetCategory.PREFAB: self.include_prefabs,
            AssetCategory.MATERIAL: self.include_materials,
            AssetCategory.OTHER: self.include_others,
        }[category]

    def matches(self, path: str) -> bool:
        if not self.includes(categorize(path)):
            return False
        return self.search == "" or self.search.casefold() in path.casefold()
