# File: reffinder/core/enums.py

from enum import Enum, unique

@unique
class SearchMode(str, Enum):
    DEPENDENCY_API = "dependency_api"
    TEXT_PATTERN = "text_pattern"

@unique
class ScanState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

@unique
class SortKey(str, Enum):
    PATH = "path"
    REF_COUNT = "ref_count"

@unique
class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

@unique
class AssetCategory(str, Enum):
    SCENE = "scene"
    PREFAB = "prefab"
    MATERIAL = "material"
    OTHER = "other"
