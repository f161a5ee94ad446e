"""Error taxonomy shared by the probe pipeline and the CLI."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class ErrorKind(str, Enum):
    TIMEOUT = "TIMEOUT"
    DNS_ERROR = "DNS_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    TLS_ERROR = "TLS_ERROR"
    READ_ERROR = "READ_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class HarvesterError(Exception):
    """Base class for every error raised by param_harvester."""


class ConfigShapeError(HarvesterError):
    """Malformed header, unreadable target list or invalid settings."""


class SinkError(HarvesterError):
    """The output file cannot be created or written."""


class TransportError(HarvesterError):
    """A request never produced a response (DNS, connect, TLS, timeout)."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNKNOWN_ERROR) -> None:
        super().__init__(message)
        self.kind = kind


class ReadError(TransportError):
    """The response arrived but its body could not be read."""

    def __init__(
        self, message: str, status_line: str = "", kind: ErrorKind = ErrorKind.READ_ERROR
    ) -> None:
        super().__init__(message, kind)
        self.status_line = status_line


def _chain(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorKind:
    """Map httpx / socket / ssl exceptions to an ErrorKind."""

    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorKind.INVALID_URL
    if isinstance(exc, httpx.ReadError):
        return ErrorKind.READ_ERROR
    # httpx wraps the low level error; look at the cause chain for specifics
    for item in _chain(exc):
        if isinstance(item, (ssl.SSLError, ssl.CertificateError)):
            return ErrorKind.TLS_ERROR
        if isinstance(item, (socket.gaierror, socket.herror)):
            return ErrorKind.DNS_ERROR
    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError, httpx.RemoteProtocolError)):
        message = str(exc).lower()
        if "ssl" in message or "certificate" in message:
            return ErrorKind.TLS_ERROR
        if "name or service not known" in message or "nodename nor servname" in message:
            return ErrorKind.DNS_ERROR
        return ErrorKind.CONNECTION_ERROR
    if isinstance(exc, ConnectionError):
        return ErrorKind.CONNECTION_ERROR
    return ErrorKind.UNKNOWN_ERROR


__all__ = [
    "ConfigShapeError",
    "ErrorKind",
    "HarvesterError",
    "ReadError",
    "SinkError",
    "TransportError",
    "categorize_exception",
]
