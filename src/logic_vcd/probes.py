"""Logical probes built from the physical probe list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from logic_vcd.errors import TooManyProbesError
from logic_vcd.names import parse_vector_name

log = logging.getLogger(__name__)

FIRST_SYMBOL = ord("!")
LAST_SYMBOL = ord("~")
MAX_PROBES = LAST_SYMBOL - FIRST_SYMBOL + 1  # 94


def next_symbol(count: int) -> str:
    """Identifier for the probe created after ``count`` others."""
    if count < 0:
        raise ValueError(f"Probe count must not be negative, got {count}")
    if count >= MAX_PROBES:
        raise TooManyProbesError(count + 1, MAX_PROBES)
    return chr(FIRST_SYMBOL + count)


@dataclass(frozen=True)
class BitIndex:
    """One bit of a probe and where it lives in a packed sample."""

    bit: int  # position within the vector, 0 = LSB
    sample: int  # absolute bit offset in the sample


@dataclass
class Probe:
    """A scalar or vector signal declared in the VCD file."""

    name: str
    symbol: str = ""
    is_vector: bool = False
    bits: list[BitIndex] = field(default_factory=list)
    msb: int = field(default=0, init=False)  # highest declared bit
    # Sample bit offset per vector position, MSB first, None for gaps
    layout: tuple[int | None, ...] = field(default=(), init=False, repr=False)

    @property
    def width(self) -> int:
        """Declared width: the number of mapped bits."""
        return len(self.bits)

    def add_bit(self, bit_index: BitIndex) -> None:
        """Add a bit, ignoring repeats of an already mapped position."""
        if any(b.bit == bit_index.bit for b in self.bits):
            log.debug(f"Duplicate bit {bit_index.bit} for {self.name}, keeping first")
            return
        self.bits.append(bit_index)

    def sort_bits(self) -> None:
        """Order bits highest first and fix the output layout."""
        self.bits.sort(key=lambda b: b.bit, reverse=True)
        self.msb = self.bits[0].bit if self.bits else 0
        positions = {b.bit: b.sample for b in self.bits}
        self.layout = tuple(positions.get(bit) for bit in range(self.msb, -1, -1))


class ProbeRegistry:
    """Ordered set of probes, read-only once built."""

    def __init__(self, probes: list[Probe]):
        self._probes = probes

    @classmethod
    def build(cls, physical_bits: Iterable[tuple[str, int]]) -> ProbeRegistry:
        """Group ``(name, bit position)`` pairs into probes.

        Names of the form ``base<N>`` become bit N of vector ``base``; all
        other names become scalars. Symbols follow first appearance.
        """
        probes: list[Probe] = []
        vectors: dict[str, Probe] = {}

        for name, position in physical_bits:
            parsed = parse_vector_name(name)
            if parsed is not None:
                base, bit = parsed
                probe = vectors.get(base)
                if probe is None:
                    probe = Probe(name=base, is_vector=True)
                    vectors[base] = probe
                    probes.append(probe)
                probe.add_bit(BitIndex(bit=bit, sample=position))
            else:
                probe = Probe(name=name)
                probe.add_bit(BitIndex(bit=0, sample=position))
                probes.append(probe)

        if len(probes) > MAX_PROBES:
            log.error(f"VCD only supports {MAX_PROBES} probes.")
            raise TooManyProbesError(len(probes), MAX_PROBES)

        for count, probe in enumerate(probes):
            probe.symbol = next_symbol(count)
            probe.sort_bits()

        log.debug(f"Registered {len(probes)} probes")
        return cls(probes)

    @property
    def probes(self) -> list[Probe]:
        return list(self._probes)

    def __len__(self) -> int:
        return len(self._probes)

    def __iter__(self) -> Iterator[Probe]:
        return iter(self._probes)

    def get(self, name: str) -> Probe | None:
        """Look up a probe by declared name."""
        for probe in self._probes:
            if probe.name == name:
                return probe
        return None

