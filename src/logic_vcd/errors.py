"""Exceptions raised by the VCD output core."""

from __future__ import annotations


class VCDError(Exception):
    """Base class for VCD output errors."""


class ConfigError(VCDError):
    """The session cannot be configured from the supplied probe list."""


class TooManyProbesError(ConfigError):
    """More probes than there are printable VCD identifiers."""

    def __init__(self, count: int, limit: int):
        super().__init__(f"VCD only supports {limit} probes, got {count}")
        self.count = count
        self.limit = limit


class SessionClosedError(VCDError):
    """Operation on a session that was never initialized or already cleaned up."""
