# File: reffinder/core/errors.py


class ReferenceFinderError(Exception):
    """Base class for every error raised by the engine."""


class CatalogError(ReferenceFinderError):
    """The asset root cannot be enumerated. Fatal to a scan."""


class AssetIndexError(ReferenceFinderError):
    """The guid index could not be built or queried."""


class DependencyResolutionError(ReferenceFinderError):
    """The dependency collaborator could not resolve a candidate."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve dependencies of {path}: {reason}")


class DetectionError(ReferenceFinderError):
    """A single candidate could not be checked against the target."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Detection failed for {path}: {reason}")
