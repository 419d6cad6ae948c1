"""VCD header rendering."""

from __future__ import annotations

import logging
from datetime import datetime

from logic_vcd.config import OutputConfig
from logic_vcd.probes import ProbeRegistry
from logic_vcd.units import period_string, samplerate_string, select_period

log = logging.getLogger(__name__)

HEADER_COMMENT = "$comment\n  Acquisition with {enabled}/{total} probes at {rate}\n$end\n"


def build_header(
    registry: ProbeRegistry,
    *,
    now: datetime,
    samplerate: int | None,
    enabled_probes: int,
    total_probes: int,
    config: OutputConfig | None = None,
) -> str:
    """Render everything up to and including ``$enddefinitions``.

    The comment block is only written when the samplerate is known.
    """
    config = config or OutputConfig()
    parts: list[str] = []

    parts.append(f"$date {now.strftime('%a %b %d %H:%M:%S %Y')} $end\n")
    parts.append(f"$version {config.package} {config.version} $end\n")

    if samplerate:
        parts.append(
            HEADER_COMMENT.format(
                enabled=enabled_probes,
                total=total_probes,
                rate=samplerate_string(samplerate),
            )
        )

    period = select_period(samplerate)
    parts.append(f"$timescale {period_string(period)} $end\n")

    parts.append(f"$scope module {config.scope} $end\n")
    for probe in registry:
        parts.append(f"$var wire {probe.width} {probe.symbol} {probe.name} $end\n")
    parts.append("$upscope $end\n")
    parts.append("$enddefinitions $end\n")

    log.debug(f"Header: {len(registry)} probes, timescale {period_string(period)}")
    return "".join(parts)
