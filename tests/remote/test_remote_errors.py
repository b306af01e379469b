"""Tests for remote error classification."""

import ftplib
import socket

import httpx
import pytest

from remote.errors import (
    RemoteError,
    RemoteUnreachable,
    RequestFailed,
    ResourceNotFound,
    UnsupportedScheme,
    OutputConflict,
    classify_exception,
    classify_http_status,
)


class TestClassifyHttpStatus:

    @pytest.mark.parametrize("status", [404, 410])
    def test_not_found(self, status):
        assert classify_http_status(status) is ResourceNotFound

    @pytest.mark.parametrize("status", [502, 503, 504])
    def test_gateway_failures_unreachable(self, status):
        assert classify_http_status(status) is RemoteUnreachable

    @pytest.mark.parametrize("status", [400, 401, 403, 405, 429, 500])
    def test_other_failures(self, status):
        assert classify_http_status(status) is RequestFailed


class TestClassifyException:

    def _status_error(self, status):
        request = httpx.Request("GET", "https://example.com/a.png")
        response = httpx.Response(status, request=request)
        return httpx.HTTPStatusError("boom", request=request, response=response)

    def test_already_classified_returned_unchanged(self):
        err = ResourceNotFound("a.png")
        assert classify_exception(err) is err

    def test_http_404(self):
        err = classify_exception(self._status_error(404), "a.png")
        assert isinstance(err, ResourceNotFound)
        assert err.resource == "a.png"

    def test_http_500_keeps_status(self):
        err = classify_exception(self._status_error(500), "a.png")
        assert isinstance(err, RequestFailed)
        assert err.status == 500
        assert "HTTP 500" in str(err)

    @pytest.mark.parametrize("exc", [
        httpx.ConnectError("refused"),
        httpx.ReadTimeout("slow"),
        ConnectionRefusedError("refused"),
        TimeoutError("slow"),
        socket.gaierror("no such host"),
        ftplib.error_temp("421 Service not available"),
        EOFError(),
    ])
    def test_transport_failures_unreachable(self, exc):
        assert isinstance(classify_exception(exc, "a.png"), RemoteUnreachable)

    def test_ftp_550_not_found(self):
        err = classify_exception(ftplib.error_perm("550 No such file"), "a.png")
        assert isinstance(err, ResourceNotFound)

    def test_ftp_other_permanent_error(self):
        err = classify_exception(ftplib.error_perm("530 Login incorrect"), "a.png")
        assert isinstance(err, RequestFailed)
        assert err.status == 530

    def test_unknown_exception(self):
        err = classify_exception(RuntimeError("surprise"), "a.png")
        assert isinstance(err, RequestFailed)
        assert err.status is None


def test_every_remote_error_carries_resource():
    for cls in (RemoteUnreachable, RequestFailed, ResourceNotFound, OutputConflict, UnsupportedScheme):
        err = cls("thing")
        assert isinstance(err, RemoteError)
        assert err.resource == "thing"
