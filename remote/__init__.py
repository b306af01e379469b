"""
Remote clients: fetch artifacts from upstream sources.

Classes:
    RemoteClient: Abstract client capability
    HttpClient: http/https via httpx
    FtpClient: ftp via ftplib
    Gotten: A fetched resource

Functions:
    from_url: Pick a client by URL scheme
"""
from remote.errors import (
    RemoteError,
    RemoteUnreachable,
    RequestFailed,
    ResourceNotFound,
    OutputConflict,
    UnsupportedScheme,
    classify_http_status,
    classify_exception,
)
from remote.client import Gotten, RemoteClient
from remote.http import HttpClient
from remote.ftp import FtpClient
from remote.factory import from_url

__all__ = [
    'RemoteError',
    'RemoteUnreachable',
    'RequestFailed',
    'ResourceNotFound',
    'OutputConflict',
    'UnsupportedScheme',
    'classify_http_status',
    'classify_exception',
    'Gotten',
    'RemoteClient',
    'HttpClient',
    'FtpClient',
    'from_url',
]
