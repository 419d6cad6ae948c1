"""VCD output session: init, receive, cleanup."""

from __future__ import annotations

import logging
from datetime import datetime

from logic_vcd.config import OutputConfig
from logic_vcd.datafeed import AcquisitionInfo, Logic, Packet, PacketType
from logic_vcd.encoder import DeltaEncoder, EncoderState
from logic_vcd.errors import SessionClosedError
from logic_vcd.header import build_header
from logic_vcd.probes import ProbeRegistry
from logic_vcd.units import select_period

log = logging.getLogger(__name__)


class VCDOutput:
    """One capture's worth of VCD output.

    Create with :meth:`init`, feed packets through :meth:`receive` and
    release with :meth:`cleanup`. Not safe for concurrent use.
    """

    def __init__(self, registry: ProbeRegistry, state: EncoderState):
        self._registry: ProbeRegistry | None = registry
        self._encoder: DeltaEncoder | None = DeltaEncoder(state)

    @classmethod
    def init(
        cls,
        acquisition: AcquisitionInfo,
        config: OutputConfig | None = None,
        now: datetime | None = None,
    ) -> VCDOutput:
        """Build the probe registry and header for a capture."""
        enabled = acquisition.enabled_probes
        registry = ProbeRegistry.build(enabled)

        header = build_header(
            registry,
            now=now or datetime.now(),
            samplerate=acquisition.samplerate,
            enabled_probes=len(enabled),
            total_probes=len(acquisition.probes),
            config=config,
        )

        state = EncoderState(
            probes=registry.probes,
            unit_size=(len(acquisition.probes) + 7) // 8,
            samplerate=acquisition.samplerate,
            period=select_period(acquisition.samplerate),
            header=header,
        )

        log.info(f"VCD output: {len(registry)} probes from {len(enabled)} enabled bits")
        return cls(registry, state)

    def __enter__(self) -> VCDOutput:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._encoder is not None:
            self.cleanup()

    @property
    def closed(self) -> bool:
        return self._encoder is None

    @property
    def registry(self) -> ProbeRegistry:
        self._check_open()
        return self._registry

    @property
    def state(self) -> EncoderState:
        self._check_open()
        return self._encoder.state

    @property
    def header(self) -> str:
        return self.state.header

    def receive(self, packet: Packet) -> str | None:
        """Handle one datafeed packet.

        Returns the VCD text for logic packets, None for anything else.
        """
        self._check_open()
        if packet.type is not PacketType.LOGIC:
            return None

        logic: Logic = packet.payload
        return self._encoder.process_frame(logic.data, logic.unit_size)

    def process_frame(self, data: bytes | bytearray | memoryview, stride: int) -> str:
        """Encode raw packed samples of ``stride`` bytes each."""
        self._check_open()
        return self._encoder.process_frame(data, stride)

    def cleanup(self) -> None:
        """Release the session. No further calls are valid."""
        self._check_open()
        log.debug(f"VCD output done after {self._encoder.state.sample_count} samples")
        self._encoder = None
        self._registry = None

    def _check_open(self) -> None:
        if self._encoder is None:
            raise SessionClosedError("VCD output session is not initialized or was cleaned up")
