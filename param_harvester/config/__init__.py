"""Configuration package exports."""

from .loader import build_settings, load_settings, load_targets, merge_overrides, resolve_targets
from .models import HeaderSpec, ProbeSettings

__all__ = [
    "HeaderSpec",
    "ProbeSettings",
    "build_settings",
    "load_settings",
    "load_targets",
    "merge_overrides",
    "resolve_targets",
]
