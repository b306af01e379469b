"""
FTP remote client built on ftplib.

The connection is opened on first use: constructing a mirror must not
require the network. Anonymous login unless credentials are configured.
After a transport failure the connection is dropped and the next call
reconnects.
"""

import ftplib
import time
from datetime import timedelta
from typing import Optional
from urllib.parse import unquote, urljoin, urlsplit

from remote.client import Gotten, RemoteClient
from remote.errors import RemoteUnreachable, classify_exception
from remote.http import normalize_base
from shared.log import create_logger

log_trace, log_debug, log_info, log_warn, log_error = create_logger("Remote FTP")

ANONYMOUS_USER = "ftp"
ANONYMOUS_PASSWORD = "anonymous@"
CONNECT_TIMEOUT = 10.0


class FtpClient(RemoteClient):
    """Remote client for ftp:// sources.

    Args:
        base_url: ftp://host[:port]/directory the resources live in
        username: Login user (anonymous "ftp" by default)
        password: Login password
        timeout: Socket timeout in seconds
    """

    schemes = ("ftp",)

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self.base = normalize_base(base_url)
        parts = urlsplit(self.base)
        self.host = parts.hostname or ""
        self.port = parts.port or 21
        self.directory = unquote(parts.path)
        self.username = username or parts.username or ANONYMOUS_USER
        self.password = password or parts.password or ANONYMOUS_PASSWORD
        self.timeout = timeout
        self._ftp: Optional[ftplib.FTP] = None

    def _connect(self) -> ftplib.FTP:
        if self._ftp is not None:
            return self._ftp
        ftp = ftplib.FTP(timeout=self.timeout)
        try:
            ftp.connect(self.host, self.port)
            ftp.login(self.username, self.password)
            if len(self.directory) > 1:
                ftp.cwd(self.directory)
        except ftplib.all_errors as exc:
            ftp.close()
            raise RemoteUnreachable(self.base, f"cannot open {self.base}: {exc}") from exc
        log_debug(f"connected to {self.host}:{self.port} as {self.username}, cwd {self.directory}")
        self._ftp = ftp
        return ftp

    def _fail(self, exc: BaseException, resource: str):
        """Translate a transport failure, dropping the connection unless the server just said no."""
        if not isinstance(exc, ftplib.error_perm):
            self.close()
        return classify_exception(exc, resource)

    def close(self) -> None:
        if self._ftp is None:
            return
        ftp, self._ftp = self._ftp, None
        try:
            ftp.quit()
        except ftplib.all_errors as exc:
            log_trace(f"quit failed, closing: {exc}")
            ftp.close()

    def url(self, resource: str) -> str:
        return urljoin(self.base, resource)

    def ping(self) -> timedelta:
        ftp = self._connect()
        start = time.perf_counter()
        try:
            ftp.voidcmd("NOOP")
        except ftplib.all_errors as exc:
            raise self._fail(exc, self.base) from exc
        elapsed = time.perf_counter() - start
        log_debug(f"ping {self.base} ok (latency: {elapsed * 1000.0:.1f}ms)")
        return timedelta(seconds=elapsed)

    def exists(self, resource: str) -> bool:
        ftp = self._connect()
        try:
            ftp.voidcmd("TYPE I")
            ftp.size(resource)
        except ftplib.error_perm as exc:
            if str(exc).startswith("550"):
                return False
            raise self._fail(exc, resource) from exc
        except ftplib.all_errors as exc:
            raise self._fail(exc, resource) from exc
        return True

    def get(self, resource: str) -> Gotten:
        ftp = self._connect()
        chunks: list[bytes] = []
        log_debug(f"RETR {resource}")
        try:
            ftp.retrbinary(f"RETR {resource}", chunks.append)
        except ftplib.all_errors as exc:
            raise self._fail(exc, resource) from exc
        gotten = Gotten(resource=resource, source=self.url(resource), content=b"".join(chunks))
        log_trace(f"got {gotten}")
        return gotten

    def listing(self) -> list[str]:
        """Names in the base directory (NLST)."""
        ftp = self._connect()
        try:
            return ftp.nlst()
        except ftplib.all_errors as exc:
            raise self._fail(exc, self.base) from exc

    def __repr__(self) -> str:
        return f"<FtpClient {self.base}>"
