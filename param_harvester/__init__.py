"""Param-Harvester: concurrent parameter-name discovery for web targets."""

__version__ = "0.3.0"
