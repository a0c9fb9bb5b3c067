from dataclasses import dataclass
from typing import Optional

# Assets shipped inside the editor itself. They have no file in the project and
# can only be located through their serialized (fileID, guid) pair.
BUILTIN_EXTRA_PATH = "Resources/unity_builtin_extra"
DEFAULT_RESOURCES_PATH = "Library/unity default resources"

BUILTIN_ASSETS = {
    "0000000000000000f000000000000000": BUILTIN_EXTRA_PATH,
    "0000000000000000e000000000000000": DEFAULT_RESOURCES_PATH,
}

# Local fileID of the main object for each asset type
MAIN_OBJECT_FILE_IDS = {
    ".unity": 102900000,
    ".scenetemplate": 11400000,
    ".mat": 2100000,
    ".prefab": 100100000,
    ".asset": 11400000,
    ".controller": 9100000,
    ".overridecontroller": 22100000,
    ".anim": 7400000,
    ".physicmaterial": 13400000,
    ".guiskin": 11400000,
    ".cubemap": 8900000,
    ".flare": 12100000,
    ".mask": 31900000,
    ".terrainlayer": 8574412962073106934,
    ".fontsettings": 12800000,
    ".shadervariants": 20000000,
    ".shader": 4800000,
    ".png": 2800000,
    ".jpg": 2800000,
    ".jpeg": 2800000,
    ".tga": 2800000,
    ".psd": 2800000,
    ".exr": 2800000,
    ".ttf": 12800000,
    ".otf": 12800000,
    ".wav": 8300000,
    ".mp3": 8300000,
    ".ogg": 8300000,
}


def is_builtin_path(path: str) -> bool:
    return path in BUILTIN_ASSETS.values()


@dataclass(frozen=True)
class AssetHandle:
    """
    Points at one addressable object: an asset path plus, optionally, the local
    fileID of a sub-object inside it. Without a fileID the main object is meant.
    """
    path: str
    file_id: Optional[int] = None


@dataclass(frozen=True)
class CompositeKey:
    """
    (guid, fileID) pair as it appears in serialized references, e.g.
    {fileID: 2100000, guid: 57d31b7d2a71b42858f8d031d9c6219b, type: 2}
    """
    guid: str
    file_id: int

    def __post_init__(self):
        if not self.guid:
            raise ValueError("Composite key requires a guid.")


@dataclass(frozen=True)
class IndexedAsset:
    """
    One row of the guid index.
    """
    guid: str
    path: str
