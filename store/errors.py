"""
Local store errors.

ArtifactNotFound is the one expected failure: a scheduled capture that has
not been mirrored yet. Everything else signals a store that cannot be
trusted for that entry.
"""


class StoreError(Exception):
    """Base class for local store failures."""


class InvalidStore(StoreError):
    """Store root is missing, not a directory, or not writable."""


class OutsideStore(StoreError):
    """A name resolves to a location outside the store root."""


class ArtifactNotFound(StoreError):
    """No file exists for the name."""

    def __init__(self, path, message: str = ""):
        self.path = path
        super().__init__(message or f"no such file: {path}")


class NotAFile(ArtifactNotFound):
    """Something exists at the name, but it is not a regular file."""

    def __init__(self, path):
        super().__init__(path, f"not a regular file: {path}")


class ArtifactUnreadable(StoreError):
    """The file exists but cannot be turned into a capture."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"unreadable capture {path}: {reason}")


class TargetExists(StoreError):
    """Refusing to overwrite an existing file or directory."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"target already exists: {path}")


class ArtifactUnwritable(StoreError):
    """The filesystem refused a write."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write {path}: {reason}")


__all__ = [
    'StoreError',
    'InvalidStore',
    'OutsideStore',
    'ArtifactNotFound',
    'NotAFile',
    'ArtifactUnreadable',
    'TargetExists',
    'ArtifactUnwritable',
]
