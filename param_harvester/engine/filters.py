"""Noise classification and entity-artifact cleanup for candidates."""

from __future__ import annotations

import re

NOISE_PATTERN = re.compile(r"(http:?|tel:?|\"|\s|-|\.|@|\+|\$|#|'|/)")

# Full entities go before their bare tails so ``&amp;`` does not leave a stray ``&``.
ENTITY_ARTIFACTS: tuple[str, ...] = (
    "&nbsp;",
    "&quot;",
    "&apos;",
    "&amp;",
    "&lt;",
    "&gt;",
    "nbsp;",
    "quot;",
    "apos;",
    "amp;",
    "lt;",
    "gt",
)


def is_noise(candidate: str) -> bool:
    """True when the candidate looks like a URL, path or sentence fragment."""
    return NOISE_PATTERN.search(candidate) is not None


def clean(candidate: str) -> str:
    """Strip encoded-entity artifacts until none of them remain."""
    result = candidate
    while True:
        previous = result
        for artifact in ENTITY_ARTIFACTS:
            result = result.replace(artifact, "")
        if result == previous:
            return result


def accept(candidate: str) -> str | None:
    """Return the cleaned candidate, or None when it is noise or cleans to nothing."""
    if is_noise(candidate):
        return None
    cleaned = clean(candidate)
    return cleaned or None


__all__ = ["ENTITY_ARTIFACTS", "NOISE_PATTERN", "accept", "clean", "is_noise"]
