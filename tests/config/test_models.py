from __future__ import annotations

from pathlib import Path

import pytest

from param_harvester.config import HeaderSpec, ProbeSettings
from param_harvester.errors import ConfigShapeError


def test_header_spec_trims_key_and_value() -> None:
    spec = HeaderSpec.parse("  Cookie :  session=abc  ")
    assert (spec.name, spec.value) == ("Cookie", "session=abc")


@pytest.mark.parametrize("raw", ["Cookie session=abc", "Origin: https://a.test", ": value", ""])
def test_header_spec_rejects_bad_shapes(raw: str) -> None:
    with pytest.raises(ConfigShapeError):
        HeaderSpec.parse(raw)


def test_settings_defaults() -> None:
    settings = ProbeSettings()
    assert settings.timeout == 10.0
    assert settings.delay_seconds == 0
    assert settings.headers == []
    assert settings.output is None
    assert settings.max_workers is None


def test_delay_threshold() -> None:
    assert ProbeSettings(delay=1).delay_seconds == 0
    assert ProbeSettings(delay=2).delay_seconds == 2


def test_settings_validation() -> None:
    with pytest.raises(ValueError):
        ProbeSettings(timeout=0)
    with pytest.raises(ValueError):
        ProbeSettings(max_workers=0)


def test_headers_accept_mapping_and_string() -> None:
    assert ProbeSettings(headers={"Cookie": "a=1"}).headers == ["Cookie: a=1"]
    assert ProbeSettings(headers="Host: example.com").headers == ["Host: example.com"]


def test_parsed_headers_splits_valid_and_malformed() -> None:
    settings = ProbeSettings(headers=["Cookie: a=1", "broken"])
    valid, malformed = settings.parsed_headers()
    assert [spec.name for spec in valid] == ["Cookie"]
    assert malformed == ["broken"]


def test_strict_header_validation() -> None:
    with pytest.raises(ValueError):
        ProbeSettings(headers=["broken"], validate_headers=True)


def test_output_coerced_to_path() -> None:
    assert ProbeSettings(output="out/params.txt").output == Path("out/params.txt")
    assert ProbeSettings(output="").output is None
