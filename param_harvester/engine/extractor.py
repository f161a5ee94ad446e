"""Pattern based candidate extraction from raw response bodies.

The body is never parsed into a DOM. A composite regular expression made of
independent sub-patterns (one per HTML construct, plus JSON-style object keys)
is run over the text and every captured attribute value becomes a candidate.
Values that look like URLs additionally contribute their query-string keys.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence

QUERY_KEY_PATTERN = re.compile(r"[?&]([^=&]+)=([^&]*)")


@dataclass(frozen=True, slots=True)
class SubPattern:
    """One HTML construct recognised by the extractor."""

    name: str
    regex: str

    def compile(self) -> re.Pattern[str]:
        return re.compile(self.regex)


def _named_attr(tag: str, attr: str) -> str:
    return rf"<{tag}[^>]*\s{attr}\s*=\s*[\"']([^\"']*)[\"']"


# Order matters: at a given offset the first alternative that matches wins.
DEFAULT_SUB_PATTERNS: tuple[SubPattern, ...] = (
    SubPattern("input_name", _named_attr("input", "name")),
    SubPattern("a_href", r"<a\s[^>]*\bhref\s*=\s*[\"']([^\"']*)[\"'][^>]*>"),
    SubPattern("form_name", _named_attr("form", "name")),
    SubPattern("map_name", _named_attr("map", "name")),
    SubPattern("fieldset_name", _named_attr("fieldset", "name")),
    SubPattern("output_name", _named_attr("output", "name")),
    SubPattern("iframe_name", _named_attr("iframe", "name")),
    SubPattern("input_id", _named_attr("input", "id")),
    SubPattern("json_key", r"[\"']([^\"']+?)[\"']\s*:\s*"),
    SubPattern("object_name", _named_attr("object", "name")),
    SubPattern("param_name", _named_attr("param", "name")),
    SubPattern("textarea_name", _named_attr("textarea", "name")),
    SubPattern("select_name", _named_attr("select", "name")),
)


def _as_named_group(sub: SubPattern) -> str:
    # each sub-pattern has exactly one capture group; rename it after the sub-pattern
    return sub.regex.replace("(", f"(?P<{sub.name}>", 1)


def build_composite(sub_patterns: Sequence[SubPattern]) -> re.Pattern[str]:
    names = [sub.name for sub in sub_patterns]
    if len(set(names)) != len(names):
        raise ValueError("Sub-pattern names must be unique")
    for sub in sub_patterns:
        if sub.compile().groups != 1:
            raise ValueError(f"Sub-pattern {sub.name!r} must define exactly one capture group")
    return re.compile("|".join(_as_named_group(sub) for sub in sub_patterns))


def query_keys(value: str) -> list[str]:
    """Return the keys of every ``?key=value`` / ``&key=value`` pair in ``value``."""

    return [match.group(1) for match in QUERY_KEY_PATTERN.finditer(value)]


class CandidateSequence:
    """Lazy, restartable view over the candidates found in one body."""

    def __init__(self, extractor: "Extractor", body: str) -> None:
        self._extractor = extractor
        self._body = body

    def __iter__(self) -> Iterator[str]:
        for _, value in self._extractor.matches(self._body):
            yield from query_keys(value)
            yield value

    def __repr__(self) -> str:
        return f"CandidateSequence(body_length={len(self._body)})"


class Extractor:
    """Apply the composite pattern to response bodies."""

    def __init__(self, sub_patterns: Sequence[SubPattern] = DEFAULT_SUB_PATTERNS) -> None:
        self.sub_patterns = tuple(sub_patterns)
        self.pattern = build_composite(self.sub_patterns)

    def matches(self, body: str) -> Iterator[tuple[str, str]]:
        """Yield ``(sub_pattern_name, value)`` for every non-empty captured value."""
        for match in self.pattern.finditer(body):
            name = match.lastgroup
            if name is None:
                continue
            value = match.group(name)
            if value:
                yield name, value

    def extract(self, body: str) -> CandidateSequence:
        return CandidateSequence(self, body)


__all__ = [
    "CandidateSequence",
    "DEFAULT_SUB_PATTERNS",
    "Extractor",
    "SubPattern",
    "build_composite",
    "query_keys",
]
