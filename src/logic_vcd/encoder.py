"""Delta encoding of logic samples into the VCD body."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from logic_vcd.bits import get_bit
from logic_vcd.probes import Probe
from logic_vcd.units import sample_timestamp

log = logging.getLogger(__name__)


class EncoderPhase(Enum):
    """Whether the initial ``$dumpvars`` block has been written."""

    AWAITING_FIRST_FRAME = "awaiting_first_frame"
    STREAMING = "streaming"


@dataclass
class EncoderState:
    """Everything one capture session carries between frames."""

    probes: list[Probe]
    unit_size: int  # bytes of each sample compared and retained
    samplerate: int | None
    period: int
    header: str = ""
    header_pending: bool = True
    sample_count: int = 0
    phase: EncoderPhase = EncoderPhase.AWAITING_FIRST_FRAME
    previous_sample: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        if len(self.previous_sample) != self.unit_size:
            self.previous_sample = bytes(self.unit_size)


class DeltaEncoder:
    """Turns packed logic frames into VCD value changes."""

    def __init__(self, state: EncoderState):
        self.state = state

    def process_frame(self, frame: bytes | bytearray | memoryview, stride: int) -> str:
        """Encode every whole sample in ``frame`` and return the VCD text.

        The pending header is returned ahead of the first call's output.
        Bytes after the last whole sample are dropped.
        """
        if stride <= 0:
            raise ValueError(f"Sample stride must be positive, got {stride}")

        state = self.state
        out: list[str] = []

        if state.header_pending:
            out.append(state.header)
            state.header_pending = False

        with memoryview(frame) as view:
            for offset in range(0, len(view) - stride + 1, stride):
                self._encode_sample(self._snapshot(view[offset:offset + stride]), out)

        return "".join(out)

    def _snapshot(self, sample: memoryview) -> bytes:
        """Copy the compared prefix of a sample, zero padded to ``unit_size``."""
        unit_size = self.state.unit_size
        return bytes(sample[:unit_size]).ljust(unit_size, b"\0")

    def _encode_sample(self, sample: bytes, out: list[str]) -> None:
        state = self.state
        state.sample_count += 1

        first = state.phase is EncoderPhase.AWAITING_FIRST_FRAME
        if not first and sample == state.previous_sample:
            return

        timestamp = sample_timestamp(state.sample_count, state.samplerate, state.period)
        out.append(f"#{timestamp}\n")

        # Initial values of every probe
        if first:
            out.append("$dumpvars\n")

        for probe in state.probes:
            if first or self._changed(probe, sample):
                out.append(render_probe(probe, sample))

        if first:
            out.append("$end\n")
            state.phase = EncoderPhase.STREAMING
            log.debug("Wrote initial values")

        state.previous_sample = sample

    def _changed(self, probe: Probe, sample: bytes) -> bool:
        previous = self.state.previous_sample
        return any(
            get_bit(sample, b.sample) != get_bit(previous, b.sample) for b in probe.bits
        )


def render_probe(probe: Probe, sample: bytes) -> str:
    """Value change line for one probe.

    Vectors are written MSB first with ``x`` for positions that no probe
    bit maps to.
    """
    if not probe.is_vector:
        return f"{get_bit(sample, probe.bits[0].sample)}{probe.symbol}\n"

    digits = "".join(
        "x" if position is None else str(get_bit(sample, position))
        for position in probe.layout
    )
    return f"b{digits} {probe.symbol}\n"
