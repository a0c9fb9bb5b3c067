# File: reffinder/core/config/settings.py

import os
from pathlib import Path


class Settings:
    # --- Paths ---
    # reffinder/core/config/settings.py -> reffinder/core/config -> reffinder/core -> reffinder -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("REFFINDER_DATA_DIR", str(BASE_DIR / "data")))

    # --- Database ---
    # The asset index is a local cache, so SQLite is the default backend.
    @property
    def DATABASE_URL(self) -> str:
        url = os.getenv("REFFINDER_DATABASE_URL")
        if url:
            return url
        return f"sqlite:///{self.DATA_DIR / 'asset_index.db'}"

    # --- Project Layout ---
    ASSETS_DIR_NAME: str = os.getenv("REFFINDER_ASSETS_DIR", "Assets")
    EDITOR_SETTINGS_PATH: str = "ProjectSettings/EditorSettings.asset"

    # Text-serialized asset types that can hold references to other assets
    ASSET_EXTENSIONS: tuple = (
        ".unity", ".prefab", ".mat", ".asset",
        ".shadervariants", ".fontsettings", ".cubemap", ".flare",
        ".scenetemplate", ".mask", ".overrideController", ".terrainlayer", ".guiskin",
    )

    # --- Scanning ---
    SCAN_BATCH_SIZE: int = int(os.getenv("REFFINDER_BATCH_SIZE", "10"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("REFFINDER_LOG_LEVEL", "INFO")

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
