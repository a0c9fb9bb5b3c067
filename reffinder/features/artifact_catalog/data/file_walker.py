import os
from pathlib import Path
from typing import Iterator
from ..domain.interfaces import IFileWalker
from .ignore_rules import IgnoreRules

class SortedFileWalker(IFileWalker):
    """
    os.walk based walker that visits directories and files in sorted order,
    so repeated enumerations of the same tree return the same sequence.
    """

    def walk(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            # Filter and sort in-place; os.walk honours the new order
            dirnames[:] = sorted(
                d for d in dirnames
                if not IgnoreRules.should_ignore(Path(d))
            )

            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                if not IgnoreRules.should_ignore(file_path):
                    yield file_path
