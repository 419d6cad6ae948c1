"""Command-line interface for logic-vcd."""

import logging

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from logic_vcd.datafeed import AcquisitionInfo, Packet, ProbeInfo
from logic_vcd.errors import ConfigError
from logic_vcd.output import VCDOutput
from logic_vcd.units import parse_samplerate, samplerate_string

logger = logging.getLogger(__name__)
console = Console()


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def build_acquisition(probes: str, disabled: tuple[str, ...], samplerate: str | None) -> AcquisitionInfo:
    """Probe list from comma separated names, first name is bit 0."""
    names = [n.strip() for n in probes.split(",")]
    if not all(names):
        raise click.BadParameter("probe names must not be empty", param_hint="--probes")

    rate = None
    if samplerate:
        try:
            rate = parse_samplerate(samplerate)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--samplerate")

    return AcquisitionInfo(
        probes=[ProbeInfo(name, enabled=name not in disabled) for name in names],
        samplerate=rate,
    )


def open_session(acquisition: AcquisitionInfo) -> VCDOutput:
    try:
        return VCDOutput.init(acquisition)
    except ConfigError as e:
        raise click.ClickException(str(e))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx, verbose):
    """Convert raw logic analyzer captures to VCD."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("raw", type=click.File("rb"))
@click.option("-o", "--output", type=click.File("w"), default="-", help="Output VCD file (default: stdout)")
@click.option("-p", "--probes", required=True, help="Comma separated probe names, bit 0 first")
@click.option("-d", "--disable", multiple=True, help="Probe to leave out of the VCD")
@click.option("-s", "--samplerate", default=None, help="Samplerate, e.g. 1MHz")
@click.option("-u", "--unit-size", type=int, default=None, help="Bytes per sample (default: from probe count)")
@click.option("--chunk-size", default=4096, help="Bytes read per frame")
def convert(raw, output, probes: str, disable: tuple[str, ...], samplerate: str | None,
            unit_size: int | None, chunk_size: int):
    """Convert a packed raw logic capture to VCD.

    Example:
        logic-vcd convert capture.bin -p clk,data<0>,data<1> -s 1MHz -o capture.vcd
    """
    acquisition = build_acquisition(probes, disable, samplerate)

    with open_session(acquisition) as session:
        stride = unit_size if unit_size is not None else session.state.unit_size
        if stride <= 0:
            raise click.BadParameter("unit size must be positive", param_hint="--unit-size")

        # Keep frames aligned to whole samples
        frame_size = max(1, chunk_size // stride) * stride

        frames = 0
        while True:
            data = raw.read(frame_size)
            if not data:
                break
            output.write(session.receive(Packet.logic(data, stride)))
            frames += 1

        if session.state.header_pending:
            output.write(session.process_frame(b"", stride))

        logger.info(f"Converted {session.state.sample_count} samples in {frames} frames")


@main.command("probes")
@click.option("-p", "--probes", required=True, help="Comma separated probe names, bit 0 first")
@click.option("-d", "--disable", multiple=True, help="Probe to leave out of the VCD")
@click.option("-s", "--samplerate", default=None, help="Samplerate, e.g. 1MHz")
def show_probes(probes: str, disable: tuple[str, ...], samplerate: str | None):
    """Show the VCD symbol assigned to each probe."""
    acquisition = build_acquisition(probes, disable, samplerate)

    with open_session(acquisition) as session:
        table = Table(title="VCD probes")
        table.add_column("Symbol", style="cyan")
        table.add_column("Name")
        table.add_column("Width", justify="right")
        table.add_column("Bits")

        for probe in session.registry:
            bits = ", ".join(f"{b.bit}@{b.sample}" for b in probe.bits)
            table.add_row(Text(probe.symbol), Text(probe.name), str(probe.width), bits)

        console.print(table)
        if acquisition.samplerate:
            console.print(f"Samplerate: {samplerate_string(acquisition.samplerate)}")


if __name__ == "__main__":
    main()
