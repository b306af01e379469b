"""
HTTP(S) remote client.

Design notes:
- Synchronous httpx.Client, one per mirror. Caller closes it (or uses the
  client as a context manager).
- The base URL always ends in "/", so resources join beneath it instead of
  replacing its last path segment.
- HEAD is enough for ping and exists; only get transfers a body.
"""

import time
from datetime import timedelta
from typing import Optional
from urllib.parse import urljoin

import httpx

from remote.client import Gotten, RemoteClient
from remote.errors import ResourceNotFound, classify_exception
from shared.log import create_logger

log_trace, log_debug, log_info, log_warn, log_error = create_logger("Remote HTTP")

# Generous read timeout: daily movies run to hundreds of megabytes
CONNECT_TIMEOUT = 30.0
READ_TIMEOUT = 300.0


def normalize_base(url: str) -> str:
    """Base URL with exactly one trailing slash."""
    return url if url.endswith("/") else url + "/"


class HttpClient(RemoteClient):
    """
    Remote client for http:// and https:// sources.

    Usage::

        with HttpClient("https://sdo.gsfc.nasa.gov/assets/img/dailymov") as client:
            gotten = client.get("2023/10/13/20231013_1024_0193.mp4")
    """

    schemes = ("http", "https")

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ) -> None:
        """
        Create the HTTP client.

        Args:
            base_url:        URL resources are relative to. A trailing slash is added.
            username:        Optional basic auth user.
            password:        Optional basic auth password.
            connect_timeout: Seconds to wait for a connection (default 30).
            read_timeout:    Seconds to wait for data (default 300).
        """
        self.base = normalize_base(base_url)
        auth = httpx.BasicAuth(username, password or "") if username else None
        self._client = httpx.Client(
            auth=auth,
            follow_redirects=True,
            timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
        )
        log_debug(f"HttpClient initialised: base={self.base} auth={bool(auth)}")

    def close(self) -> None:
        """Close the underlying httpx client and release connections."""
        self._client.close()

    def url(self, resource: str) -> str:
        return urljoin(self.base, resource)

    def _request(self, method: str, url: str, resource: str) -> httpx.Response:
        try:
            resp = self._client.request(method, url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise classify_exception(exc, resource) from exc
        return resp

    def ping(self) -> timedelta:
        start = time.perf_counter()
        self._request("HEAD", self.base, self.base)
        elapsed = time.perf_counter() - start
        log_debug(f"ping {self.base} ok (latency: {elapsed * 1000.0:.1f}ms)")
        return timedelta(seconds=elapsed)

    def exists(self, resource: str) -> bool:
        try:
            self._request("HEAD", self.url(resource), resource)
        except ResourceNotFound:
            return False
        return True

    def get(self, resource: str) -> Gotten:
        source = self.url(resource)
        log_debug(f"GET {source}")
        resp = self._request("GET", source, resource)
        mimetype = resp.headers.get("content-type", "application/octet-stream")
        gotten = Gotten(resource=resource, source=source, content=resp.content, mimetype=mimetype)
        log_trace(f"got {gotten}")
        return gotten

    def __repr__(self) -> str:
        return f"<HttpClient {self.base}>"


__all__ = ["HttpClient", "normalize_base"]
