"""Samplerate and timescale helpers."""

from __future__ import annotations

import re
from decimal import Decimal

KHZ = 1_000
MHZ = 1_000_000
GHZ = 1_000_000_000

# Period constant -> VCD timescale string
PERIOD_NAMES = {
    GHZ: "1 ns",
    MHZ: "1 us",
    KHZ: "1 ms",
}

SUFFIX_MULTIPLIERS = {
    "": 1,
    "k": KHZ,
    "m": MHZ,
    "g": GHZ,
}

SAMPLERATE_PATTERN = re.compile(
    r"\s*(\d+(?:\.\d+)?)\s*([kmg]?)(?:hz)?\s*",
    re.IGNORECASE,
)


def select_period(samplerate: int | None) -> int:
    """Pick the timestamp period constant for a samplerate.

    VCD can only declare 1/10/100 of a unit, so the sample index is scaled
    up into the finest tier that the samplerate exceeds.
    """
    rate = samplerate or 0
    if rate > MHZ:
        return GHZ
    if rate > KHZ:
        return MHZ
    return KHZ


def period_string(period: int) -> str:
    """Timescale declaration for a period constant."""
    try:
        return PERIOD_NAMES[period]
    except KeyError:
        raise ValueError(f"Unsupported period constant: {period}") from None


def samplerate_string(samplerate: int) -> str:
    """Human readable samplerate, e.g. ``"24 MHz"``."""
    if samplerate >= GHZ and samplerate % GHZ == 0:
        return f"{samplerate // GHZ} GHz"
    if samplerate >= MHZ and samplerate % MHZ == 0:
        return f"{samplerate // MHZ} MHz"
    if samplerate >= KHZ and samplerate % KHZ == 0:
        return f"{samplerate // KHZ} kHz"
    return f"{samplerate} Hz"


def parse_samplerate(text: str) -> int:
    """Parse a samplerate such as ``"1MHz"``, ``"250 kHz"`` or ``"8000"``."""
    match = SAMPLERATE_PATTERN.fullmatch(text)
    if not match:
        raise ValueError(f"Invalid samplerate: {text!r}")

    value = Decimal(match.group(1)) * SUFFIX_MULTIPLIERS[match.group(2).lower()]
    if value != value.to_integral_value():
        raise ValueError(f"Samplerate is not a whole number of Hz: {text!r}")
    if value <= 0:
        raise ValueError(f"Samplerate must be positive: {text!r}")
    return int(value)


def sample_timestamp(sample_index: int, samplerate: int | None, period: int) -> int:
    """Timestamp of a sample in period ticks, ``floor(index / rate * period)``.

    Without a samplerate every sample is one tick.
    """
    if not samplerate:
        return sample_index
    return sample_index * period // samplerate
