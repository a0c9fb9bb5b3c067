from dataclasses import dataclass

# Reported by strategies that can only tell presence, not frequency
UNKNOWN_REF_COUNT = -1

@dataclass(frozen=True)
class ReferenceRecord:
    """
    One candidate's confirmed reference to the target.
    """
    path: str
    guid: str
    ref_count: int = UNKNOWN_REF_COUNT

    def __post_init__(self):
        if self.ref_count < UNKNOWN_REF_COUNT:
            raise ValueError(f"Invalid reference count: {self.ref_count}")

    @property
    def is_counted(self) -> bool:
        return self.ref_count != UNKNOWN_REF_COUNT
