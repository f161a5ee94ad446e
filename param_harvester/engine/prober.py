"""Single-target probe: request, read, extract, filter, emit."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import httpx
import structlog

from ..config import HeaderSpec, ProbeSettings
from ..errors import ConfigShapeError, ErrorKind, ReadError, TransportError, categorize_exception
from ..logging_conf import target_logger
from . import filters
from .extractor import Extractor


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """One harvested value, or the error that ended a probe."""

    target: str
    status_line: str
    value: str
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class ProbeOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABORTED = "aborted"


Emit = Callable[[ProbeResult], None]


def status_line(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


class Prober:
    """Run the per-target lifecycle against a shared HTTP client.

    ``probe`` never raises for fetch problems: malformed headers abort the
    target silently (logged), transport and read failures are reported as a
    single error result, and there is no retry.
    """

    def __init__(
        self,
        settings: ProbeSettings,
        client: httpx.Client | None = None,
        extractor: Extractor | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings
        self.extractor = extractor or Extractor()
        self._sleep = sleep
        self._clock = clock
        self._owns_client = client is None
        self._client = client or httpx.Client(
            # one connection per worker; waiting on the pool is not part of the target timeout
            timeout=httpx.Timeout(settings.timeout, pool=None),
            limits=httpx.Limits(max_connections=settings.max_workers, max_keepalive_connections=20),
            follow_redirects=settings.follow_redirects,
            verify=settings.verify_tls,
            headers={"User-Agent": settings.user_agent} if settings.user_agent else None,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "Prober":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    def probe(self, target: str, emit: Emit) -> ProbeOutcome:
        log = target_logger(target)
        log.debug("probe_start")

        headers = self._apply_headers(log)
        if headers is None:
            return ProbeOutcome.ABORTED

        delay = self.settings.delay_seconds
        if delay:
            log.debug("probe_delay", seconds=delay)
            self._sleep(delay)

        try:
            status, body = self._fetch(target, headers)
        except ReadError as exc:
            log.warning("probe_read_error", error=str(exc))
            emit(ProbeResult(target, exc.status_line, "", exc.kind, str(exc)))
            return ProbeOutcome.FAILED
        except TransportError as exc:
            log.warning("probe_transport_error", kind=exc.kind.value, error=str(exc))
            emit(ProbeResult(target, "", "", exc.kind, str(exc)))
            return ProbeOutcome.FAILED

        emitted = 0
        for candidate in self.extractor.extract(body):
            value = filters.accept(candidate)
            if value is None:
                continue
            emit(ProbeResult(target, status, value))
            emitted += 1
        log.info("probe_done", status=status, emitted=emitted)
        return ProbeOutcome.SUCCEEDED

    def _apply_headers(self, log: structlog.BoundLogger) -> dict[str, str] | None:
        headers: dict[str, str] = {}
        for raw in self.settings.headers:
            try:
                spec = HeaderSpec.parse(raw)
            except ConfigShapeError as exc:
                log.error("probe_header_malformed", header=raw, error=str(exc))
                return None
            headers[spec.name] = spec.value
        return headers

    def _fetch(self, target: str, headers: dict[str, str]) -> tuple[str, str]:
        """GET ``target`` and read the whole body within ``settings.timeout``.

        httpx applies its timeout per connect and per read; the deadline here
        covers the full request, body included.
        """
        deadline = self._clock() + self.settings.timeout
        try:
            with self._client.stream("GET", target, headers=headers) as response:
                status = status_line(response)
                parts: list[str] = []
                try:
                    self._check_deadline(deadline, status)
                    for chunk in response.iter_text():
                        parts.append(chunk)
                        self._check_deadline(deadline, status)
                except httpx.HTTPError as exc:
                    kind = categorize_exception(exc)
                    if kind is not ErrorKind.TIMEOUT:
                        kind = ErrorKind.READ_ERROR
                    raise ReadError(f"{type(exc).__name__}: {exc}", status, kind) from exc
                return status, "".join(parts)
        except ReadError:
            raise
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(
                f"{type(exc).__name__}: {exc}", categorize_exception(exc)
            ) from exc

    def _check_deadline(self, deadline: float, status: str) -> None:
        if self._clock() > deadline:
            raise ReadError(
                f"response not complete within {self.settings.timeout}s", status, ErrorKind.TIMEOUT
            )


__all__ = ["Emit", "ProbeOutcome", "ProbeResult", "Prober", "status_line"]
