"""Value Change Dump output for logic analyzer captures."""

from logic_vcd.config import VERSION, OutputConfig
from logic_vcd.datafeed import AcquisitionInfo, Logic, Packet, PacketType, ProbeInfo
from logic_vcd.encoder import DeltaEncoder, EncoderPhase, EncoderState
from logic_vcd.errors import ConfigError, SessionClosedError, TooManyProbesError, VCDError
from logic_vcd.output import VCDOutput
from logic_vcd.probes import BitIndex, Probe, ProbeRegistry

__version__ = VERSION

__all__ = [
    "AcquisitionInfo",
    "BitIndex",
    "ConfigError",
    "DeltaEncoder",
    "EncoderPhase",
    "EncoderState",
    "Logic",
    "OutputConfig",
    "Packet",
    "PacketType",
    "Probe",
    "ProbeInfo",
    "ProbeRegistry",
    "SessionClosedError",
    "TooManyProbesError",
    "VCDError",
    "VCDOutput",
]
