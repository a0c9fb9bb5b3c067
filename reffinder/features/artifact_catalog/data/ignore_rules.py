from pathlib import Path
from typing import Iterable

class IgnoreRules:
    """
    Central logic for what the catalog skips while walking the asset tree.
    """

    @classmethod
    def should_ignore(cls, path: Path) -> bool:
        """
        Returns True if the file/folder is hidden from the asset pipeline.
        """
        # 1. Dotfiles and dot-folders are never imported
        if path.name.startswith("."):
            return True

        # 2. Folders ending with "~" are hidden by convention (e.g. "Samples~")
        if path.name.endswith("~"):
            return True

        return False

    @staticmethod
    def has_allowed_extension(path: Path, extensions: Iterable[str]) -> bool:
        """
        Case-insensitive exact match of the file extension against the allow-list.
        """
        suffix = path.suffix.lower()
        if not suffix:
            return False
        return any(suffix == ext.lower() for ext in extensions)
