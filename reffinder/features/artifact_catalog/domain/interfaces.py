from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

class IFileWalker(ABC):
    """
    Contract for traversing an asset tree.
    """
    @abstractmethod
    def walk(self, root: Path) -> Iterator[Path]:
        """
        Yields file paths one by one, in an order that is stable for an
        unchanged filesystem.
        Should handle skipping of hidden files internally.
        """
        pass
