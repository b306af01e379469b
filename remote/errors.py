"""
Centralized classification of remote failures.

Transport libraries raise their own exception types (httpx, ftplib, OSError).
Clients translate them here, in one place, so the reconciliation layer only
ever sees RemoteError subclasses.
"""

import ftplib
import logging
from typing import Optional, Type

import httpx


# HTTP status codes meaning the resource is simply not there
# 404: Not found
# 410: Gone - permanently removed
NOT_FOUND_CODES = frozenset({404, 410})

# Module logger
logger = logging.getLogger("reflector.remote")


class RemoteError(Exception):
    """Base class for remote failures. ``resource`` is what was being accessed."""

    def __init__(self, resource: str, message: str = ""):
        self.resource = resource
        super().__init__(message or resource)


class RemoteUnreachable(RemoteError):
    """Connection refused, DNS failure, timeout or login failure."""


class RequestFailed(RemoteError):
    """The remote answered, but not with success."""

    def __init__(self, resource: str, message: str = "", status: Optional[int] = None):
        self.status = status
        super().__init__(resource, message)


class ResourceNotFound(RemoteError):
    """The remote has no such resource (yet)."""


class OutputConflict(RemoteError):
    """A download target already exists locally."""


class UnsupportedScheme(RemoteError):
    """No client handles the URL's scheme."""


def classify_http_status(status_code: int) -> Type[RemoteError]:
    """
    Map an unsuccessful HTTP status onto the remote error hierarchy.

    Args:
        status_code: HTTP response status code

    Returns:
        ResourceNotFound for 404/410
        RemoteUnreachable for gateway failures (502, 503, 504)
        RequestFailed for everything else
    """
    if status_code in NOT_FOUND_CODES:
        logger.debug(f"HTTP {status_code} classified as not found")
        return ResourceNotFound

    if status_code in (502, 503, 504):
        logger.debug(f"HTTP {status_code} classified as unreachable")
        return RemoteUnreachable

    logger.debug(f"HTTP {status_code} classified as failed request")
    return RequestFailed


def classify_exception(exc: Exception, resource: str = "") -> RemoteError:
    """
    Translate a transport exception into a RemoteError instance.

    Handles:
    - Already classified: returned unchanged
    - HTTP status errors: classified by status code
    - Connection errors and timeouts (httpx, OSError, ftplib 4xx): unreachable
    - FTP permanent errors: 550 is "no such file", others fail the request
    - Unknown: failed request

    Args:
        exc: The exception raised by the transport
        resource: Resource being accessed when it was raised

    Returns:
        RemoteError subclass instance chained to ``exc`` by the caller
    """
    if isinstance(exc, RemoteError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        cls = classify_http_status(status)
        message = f"HTTP {status} for {exc.request.url}"
        if cls is RequestFailed:
            return RequestFailed(resource, message, status=status)
        return cls(resource, message)

    if isinstance(exc, (httpx.TransportError, ftplib.error_temp, ConnectionError, TimeoutError, EOFError)):
        logger.debug(f"Network error classified as unreachable: {type(exc).__name__}")
        return RemoteUnreachable(resource, f"{type(exc).__name__}: {exc}")

    if isinstance(exc, ftplib.error_perm):
        reply = str(exc)
        if reply.startswith("550"):
            return ResourceNotFound(resource, f"FTP {reply}")
        return RequestFailed(resource, f"FTP {reply}", status=_ftp_code(reply))

    if isinstance(exc, OSError):
        logger.debug(f"OS error classified as unreachable: {type(exc).__name__}")
        return RemoteUnreachable(resource, f"{type(exc).__name__}: {exc}")

    logger.debug(f"Unknown exception classified as failed request: {type(exc).__name__}")
    return RequestFailed(resource, f"{type(exc).__name__}: {exc}")


def _ftp_code(reply: str) -> Optional[int]:
    head = reply[:3]
    return int(head) if head.isdigit() else None


__all__ = [
    'RemoteError',
    'RemoteUnreachable',
    'RequestFailed',
    'ResourceNotFound',
    'OutputConflict',
    'UnsupportedScheme',
    'classify_http_status',
    'classify_exception',
]
