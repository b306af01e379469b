"""Choose a remote client from a source URL's scheme."""

from typing import Optional
from urllib.parse import urlsplit

from remote.client import RemoteClient
from remote.errors import UnsupportedScheme
from remote.ftp import FtpClient
from remote.http import HttpClient

CLIENTS: dict[str, type[RemoteClient]] = {
    scheme: cls for cls in (HttpClient, FtpClient) for scheme in cls.schemes
}


def from_url(
    url: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    timeout: Optional[float] = None,
) -> RemoteClient:
    """Build the client for ``url``. No connection is made.

    Args:
        url: http, https or ftp URL of the source directory
        username: Optional login
        password: Optional password
        timeout: Connect timeout in seconds (client default if None)

    Raises:
        UnsupportedScheme: If no client handles the scheme
    """
    scheme = urlsplit(url).scheme.lower()
    cls = CLIENTS.get(scheme)
    if cls is None:
        raise UnsupportedScheme(url, f"no handler for scheme {scheme!r} in {url}")
    if cls is HttpClient:
        if timeout is None:
            return HttpClient(url, username=username, password=password)
        return HttpClient(url, username=username, password=password, connect_timeout=timeout)
    if timeout is None:
        return FtpClient(url, username=username, password=password)
    return FtpClient(url, username=username, password=password, timeout=timeout)
