from __future__ import annotations

import socket
import ssl

import httpx

from param_harvester.errors import ErrorKind, ReadError, TransportError, categorize_exception


def _wrapped(cause: BaseException) -> httpx.ConnectError:
    try:
        try:
            raise cause
        except BaseException as exc:
            raise httpx.ConnectError("connect failed") from exc
    except httpx.ConnectError as outer:
        return outer


def test_categorize_timeouts_and_urls():
    assert categorize_exception(httpx.PoolTimeout("pool")) is ErrorKind.TIMEOUT
    assert categorize_exception(httpx.UnsupportedProtocol("ftp")) is ErrorKind.INVALID_URL
    assert categorize_exception(httpx.ReadError("reset")) is ErrorKind.READ_ERROR


def test_categorize_walks_cause_chain():
    assert categorize_exception(_wrapped(socket.gaierror(-2, "unknown"))) is ErrorKind.DNS_ERROR
    assert categorize_exception(_wrapped(ssl.SSLError("bad cert"))) is ErrorKind.TLS_ERROR
    assert categorize_exception(_wrapped(ConnectionRefusedError())) is ErrorKind.CONNECTION_ERROR


def test_categorize_unknown():
    assert categorize_exception(ValueError("odd")) is ErrorKind.UNKNOWN_ERROR


def test_read_error_is_a_transport_error():
    error = ReadError("body", status_line="200 OK")
    assert isinstance(error, TransportError)
    assert error.kind is ErrorKind.READ_ERROR
    assert error.status_line == "200 OK"
