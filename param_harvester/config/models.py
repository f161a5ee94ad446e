"""Pydantic models describing one harvesting run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..errors import ConfigShapeError


@dataclass(frozen=True, slots=True)
class HeaderSpec:
    """A single ``Name: Value`` header applied to every request."""

    name: str
    value: str

    @classmethod
    def parse(cls, raw: str) -> "HeaderSpec":
        parts = raw.split(":")
        if len(parts) != 2:
            raise ConfigShapeError(f"Header must contain exactly one ':' separator: {raw!r}")
        name, value = parts[0].strip(), parts[1].strip()
        if not name:
            raise ConfigShapeError(f"Header name cannot be empty: {raw!r}")
        return cls(name=name, value=value)


class ProbeSettings(BaseModel):
    """Knobs shared by every probe of a sweep."""

    timeout: float = Field(default=10.0, description="Per-request timeout in seconds.")
    delay: int = Field(default=-1, description="Seconds to wait before each request; used when > 1.")
    headers: list[str] = Field(default_factory=list)
    validate_headers: bool = False
    output: Path | None = None
    append: bool = False
    max_workers: int | None = None
    user_agent: str | None = None
    follow_redirects: bool = True
    verify_tls: bool = True

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be > 0")
        return value

    @field_validator("max_workers")
    @classmethod
    def _positive_workers(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("max_workers must be >= 1")
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> list[str]:
        if value in (None, ""):
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, dict):
            return [f"{key}: {val}" for key, val in value.items()]
        return [str(item) for item in value]

    @field_validator("output", mode="before")
    @classmethod
    def _coerce_output(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @model_validator(mode="after")
    def _check_headers_up_front(self) -> "ProbeSettings":
        if self.validate_headers:
            _, malformed = self.parsed_headers()
            if malformed:
                raise ValueError(f"Malformed header(s): {', '.join(malformed)}")
        return self

    @property
    def delay_seconds(self) -> int:
        """Effective pre-request delay; values of 1 or less disable it."""
        return self.delay if self.delay > 1 else 0

    def parsed_headers(self) -> tuple[list[HeaderSpec], list[str]]:
        valid: list[HeaderSpec] = []
        malformed: list[str] = []
        for raw in self.headers:
            try:
                valid.append(HeaderSpec.parse(raw))
            except ConfigShapeError:
                malformed.append(raw)
        return valid, malformed


__all__ = ["HeaderSpec", "ProbeSettings"]
