"""
Local storage for mirrored captures.

Classes:
    FileStore: Directory-backed capture store
    Capture, MissingCapture, CaptureList: Result of comparing a schedule to the store
"""
from store.errors import (
    StoreError,
    InvalidStore,
    OutsideStore,
    ArtifactNotFound,
    NotAFile,
    ArtifactUnreadable,
    TargetExists,
    ArtifactUnwritable,
)
from store.capture import Capture, MissingCapture, CaptureList, NoArtifactsExpected
from store.file_store import FileStore

__all__ = [
    'StoreError',
    'InvalidStore',
    'OutsideStore',
    'ArtifactNotFound',
    'NotAFile',
    'ArtifactUnreadable',
    'TargetExists',
    'ArtifactUnwritable',
    'Capture',
    'MissingCapture',
    'CaptureList',
    'NoArtifactsExpected',
    'FileStore',
]
