"""Exporter SPI and implementations."""

from .base import BaseExporter
from .console_exporter import ConsoleExporter
from .line_exporter import LineExporter

__all__ = ["BaseExporter", "ConsoleExporter", "LineExporter"]
