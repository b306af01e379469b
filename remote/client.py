"""
Remote client capability: how the mirror talks to an upstream source.

Every operation may block on the network. Clients never retry; the next
fill pass is the retry.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta

from remote.errors import OutputConflict


@dataclass(frozen=True)
class Gotten:
    """Result of fetching a resource.

    Attributes:
        resource: Identifier that was requested
        source: Full URL it was fetched from
        content: Payload bytes
        mimetype: Content type reported by the remote (or a default)
    """
    resource: str
    source: str
    content: bytes
    mimetype: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    def __str__(self) -> str:
        return f"<Gotten '{self.resource}' from {self.source}, {self.size} bytes of {self.mimetype}>"


class RemoteClient(ABC):
    """Abstract upstream source addressed by resource identifiers.

    Clients are context managers; leaving the block closes any connection.
    """

    #: URL schemes this client handles
    schemes: tuple[str, ...] = ()

    @abstractmethod
    def url(self, resource: str) -> str:
        """Full URL for a resource."""

    @abstractmethod
    def ping(self) -> timedelta:
        """Check the remote is reachable; returns the round trip time.

        Raises:
            RemoteError: If the remote cannot be reached
        """

    @abstractmethod
    def exists(self, resource: str) -> bool:
        """Whether the remote has the resource.

        Raises:
            RemoteError: For failures other than "not there"
        """

    @abstractmethod
    def get(self, resource: str) -> Gotten:
        """Fetch a resource.

        Raises:
            ResourceNotFound: The remote has no such resource
            RemoteError: Any other failure
        """

    def download(self, resource: str, output: str) -> Gotten:
        """Fetch a resource straight into a new local file.

        Raises:
            OutputConflict: ``output`` already exists
            RemoteError: The fetch failed
        """
        if os.path.lexists(output):
            raise OutputConflict(resource, f"{output} already exists")
        gotten = self.get(resource)
        try:
            with open(output, 'xb') as f:
                f.write(gotten.content)
        except FileExistsError as e:
            raise OutputConflict(resource, f"{output} already exists") from e
        return gotten

    def close(self) -> None:
        """Release any connection held by the client."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
