"""
File store: a local directory holding mirrored captures.

Names are paths relative to the store root, produced by a name codec (and
optionally flattened). A capture's timestamp always comes from decoding its
name, never from file metadata.
"""

import os
import tempfile
from typing import Optional

from naming.codec import NameCodec
from naming.errors import CodecError
from naming.flatten import flatten_identifier
from shared.log import create_logger
from store.capture import Capture, CaptureList, MissingCapture
from store.errors import (
    ArtifactNotFound,
    ArtifactUnreadable,
    ArtifactUnwritable,
    InvalidStore,
    NotAFile,
    OutsideStore,
    StoreError,
    TargetExists,
)
from timing.schedule import SampleSchedule

log_trace, log_debug, log_info, log_warn, log_error = create_logger("Store")


class FileStore:
    """Captures kept as files under a root directory.

    Args:
        root: Store directory (``~`` is expanded)
        codec: Codec mapping instants to names
        flatten: Store nested identifiers under their last path component
    """

    def __init__(self, root: str, codec: NameCodec, flatten: bool = False):
        self.root = os.path.abspath(os.path.expanduser(root))
        self.codec = codec
        self.flatten = flatten

    def validate(self) -> None:
        """Check the root is an existing, writable directory.

        Raises:
            InvalidStore: Describing the first problem found
        """
        if not os.path.exists(self.root):
            raise InvalidStore(f"store {self.root} does not exist")
        if not os.path.isdir(self.root):
            raise InvalidStore(f"store {self.root} is not a directory")
        if not os.access(self.root, os.W_OK):
            raise InvalidStore(f"store {self.root} is not writable")

    def local_name(self, identifier: str) -> str:
        """Name under which a remote identifier is stored locally."""
        return flatten_identifier(identifier) if self.flatten else identifier

    def path_for(self, name: str) -> str:
        """Absolute path for a store-relative name.

        Raises:
            OutsideStore: If the name is absolute or climbs out of the root
        """
        if not name or os.path.isabs(name):
            raise OutsideStore(f"{name!r} is not a relative name")
        path = os.path.normpath(os.path.join(self.root, name))
        if os.path.commonpath([self.root, path]) != self.root or path == self.root:
            raise OutsideStore(f"{name!r} resolves outside {self.root}")
        return path

    def resolve(self, name: str, identifier: Optional[str] = None) -> Capture:
        """Capture for a store-relative name.

        The timestamp is decoded from ``identifier`` when given (the remote
        identifier a flattened name was derived from), else from ``name``.

        Raises:
            ArtifactNotFound: Nothing is stored under the name
            NotAFile: Something other than a regular file is stored there
            ArtifactUnreadable: The file cannot be examined or its name decoded
            OutsideStore: The name escapes the store
        """
        path = self.path_for(name)
        try:
            if not os.path.lexists(path):
                raise ArtifactNotFound(path)
            if not os.path.isfile(path):
                raise NotAFile(path)
        except OSError as e:
            raise ArtifactUnreadable(path, str(e)) from e
        try:
            time = self.codec.decode(name if identifier is None else identifier)
        except CodecError as e:
            raise ArtifactUnreadable(path, f"incomprehensible name: {e}") from e
        return Capture(time=time, path=path)

    def identifiers(self, schedule: SampleSchedule) -> list[str]:
        """Local names for every instant in a schedule, in order."""
        return [self.local_name(self.codec.encode(t)) for t in schedule]

    def diff(self, schedule: SampleSchedule) -> CaptureList:
        """Split a schedule into captures present on disk and those missing.

        Every instant lands in exactly one of the two lists. A missing file is
        the normal case; any other failure is logged and counted as missing.
        """
        captures = CaptureList()
        for t in schedule:
            resource = self.codec.encode(t)
            name = self.local_name(resource)
            try:
                captures.present.append(self.resolve(name, resource))
                continue
            except NotAFile as e:
                log_warn(f"unexpected entry in store: {e}")
            except ArtifactNotFound:
                log_trace(f"missing {name}")
            except (StoreError, CodecError) as e:
                log_warn(f"unexpected error on capture '{name}': {e}")
            captures.missing.append(MissingCapture(time=t, path=name, resource=resource))
        log_debug(f"{self}: {captures}")
        return captures

    def write(self, name: str, content: bytes) -> str:
        """Materialize fetched content under ``name``.

        The content lands in a temporary file next to the target and is then
        hard-linked into place, so a concurrent writer or an existing entry
        is never overwritten.

        Returns:
            Absolute path of the written file

        Raises:
            TargetExists: Something already exists at the target
            ArtifactUnwritable: Any other filesystem failure
            OutsideStore: The name escapes the store
        """
        path = self.path_for(name)
        parent = os.path.dirname(path)
        tmp_path: Optional[str] = None
        try:
            os.makedirs(parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=parent, prefix=".reflect-", suffix=".tmp")
            with os.fdopen(fd, 'wb') as f:
                f.write(content)
            os.link(tmp_path, path)
        except FileExistsError as e:
            if e.filename is not None and os.path.abspath(e.filename) == parent:
                raise ArtifactUnwritable(path, f"{parent} is not a directory") from e
            raise TargetExists(path) from e
        except OSError as e:
            raise ArtifactUnwritable(path, str(e)) from e
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError as e:
                    log_debug(f"failed to remove {tmp_path}: {e}")
        log_debug(f"wrote {len(content)} bytes to {path}")
        return path

    def __str__(self) -> str:
        return f"file storage in dir {self.root}"

    def __repr__(self) -> str:
        return f"<FileStore root={self.root!r} codec={self.codec.kind!r} flatten={self.flatten}>"
