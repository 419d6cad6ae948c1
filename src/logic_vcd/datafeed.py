"""Acquisition metadata and datafeed packets delivered by the driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PacketType(Enum):
    """Kinds of packet on a datafeed."""

    HEADER = "header"
    END = "end"
    TRIGGER = "trigger"
    LOGIC = "logic"
    ANALOG = "analog"
    META = "meta"


@dataclass
class ProbeInfo:
    """A probe as reported by the acquisition driver."""

    name: str
    enabled: bool = True


@dataclass
class AcquisitionInfo:
    """Probe list and samplerate for one capture.

    The position of a probe in ``probes`` is its bit offset within a sample.
    """

    probes: list[ProbeInfo] = field(default_factory=list)
    samplerate: int | None = None  # Hz, None if the driver does not report it

    @classmethod
    def from_names(cls, names: list[str], samplerate: int | None = None) -> AcquisitionInfo:
        """Build from plain probe names, all enabled."""
        return cls(probes=[ProbeInfo(name) for name in names], samplerate=samplerate)

    @property
    def enabled_probes(self) -> list[tuple[str, int]]:
        """``(name, bit position)`` for every enabled probe."""
        return [(p.name, i) for i, p in enumerate(self.probes) if p.enabled]


@dataclass
class Logic:
    """Packed logic samples, ``unit_size`` bytes per sample."""

    data: bytes
    unit_size: int


@dataclass
class Packet:
    """One datafeed packet."""

    type: PacketType
    payload: Any = None

    @classmethod
    def logic(cls, data: bytes, unit_size: int) -> Packet:
        return cls(PacketType.LOGIC, Logic(data=data, unit_size=unit_size))
