import re
from typing import Optional

from reffinder.core.config.settings import settings
from reffinder.core.shared_types import ProjectLayout


SERIALIZATION_MODE = re.compile(r"m_SerializationMode:\s*(\d+)")

# Editor serialization modes: 0 Mixed, 1 ForceBinary, 2 ForceText
FORCE_TEXT = 2


def uses_text_serialization(layout: ProjectLayout) -> Optional[bool]:
    """
    Reads the project's asset serialization mode.
    Returns None when the project settings are missing or unreadable.
    """
    settings_path = layout.to_absolute(settings.EDITOR_SETTINGS_PATH)
    try:
        text = settings_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None

    match = SERIALIZATION_MODE.search(text)
    if not match:
        return None
    return int(match.group(1)) == FORCE_TEXT
