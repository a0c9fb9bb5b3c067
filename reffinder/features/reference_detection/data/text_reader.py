from reffinder.core.shared_types import ProjectLayout
from ..domain.interfaces import ITextReader

class ProjectTextReader(ITextReader):
    def __init__(self, layout: ProjectLayout):
        self.layout = layout

    def read_text(self, path: str) -> str:
        """
        Full in-memory read. Undecodable bytes are replaced, so binary-serialized
        assets come back as text that simply contains no references.
        """
        return self.layout.to_absolute(path).read_text(encoding="utf-8", errors="replace")
