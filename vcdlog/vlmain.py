"""
File: vcdlog/vlmain.py

This file is a part of the VcdLog tool.
"""

import sys
import logging
from typing import Optional

from vcdlog.vlerrors import VcdLogError
from vcdlog.vlmanager import VLArgs, run_convert, run_check

import typer
from typer import Option
from typing_extensions import Annotated

logger = logging.getLogger(__name__)

DESCRIPTION = "VcdLog: convert textual signal change logs into VCD traces."
app = typer.Typer(help=DESCRIPTION)


def setup_logging(debuglog: str = "") -> None:
    """Log INFO to stderr (stdout may carry the VCD) and optionally DEBUG to a file."""
    h1 = logging.StreamHandler(sys.stderr)
    h1.setLevel(logging.INFO)
    h1.setFormatter(logging.Formatter("%(levelname)s::%(message)s"))
    handlers = [h1]

    if debuglog != "":
        h2 = logging.FileHandler(debuglog, mode="w")
        h2.setLevel(logging.DEBUG)
        h2.setFormatter(
            logging.Formatter("%(asctime)s::%(name)s::%(levelname)s::%(message)s")
        )
        handlers.append(h2)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)


@app.command("convert")
def convert_main(
    # Allow using -i or --input_file
    inpath: Annotated[
        str,
        Option(
            "-i",
            "--input_file",
            help="Log file to read from, stdin if not provided.",
        ),
    ] = "",
    # Allow using -o or --output_file
    outpath: Annotated[
        str,
        Option(
            "-o",
            "--output_file",
            help="File to write the VCD to, stdout if not provided.",
        ),
    ] = "",
    # Allow using -u or --unit
    unit: Annotated[
        str,
        Option(
            "-u",
            "--unit",
            help="Timescale unit, must be one of: { 'S', 'MS', 'US', 'NS', 'PS', 'FS' }",
        ),
    ] = "",
    # Allow using --step_size
    step: Annotated[
        Optional[int], Option("--step_size", "--step-size", help="Timescale step size")
    ] = None,
    # Allow using -c or --config
    cfgpath: Annotated[
        str, Option("-c", "--config", help="Path to the JSON configuration file")
    ] = "",
    scope: Annotated[str, Option(help="Name of the top-level scope.")] = "",
    strict: Annotated[
        Optional[bool],
        Option(
            "--strict/--no-strict",
            help="Reject signals whose type or width changes between lines.",
        ),
    ] = None,
    max_signals: Annotated[
        Optional[int],
        Option(help="Maximum number of distinct signals, 0 for unbounded."),
    ] = None,
    date: Annotated[
        Optional[bool], Option("--date/--no-date", help="Emit a $date section.")
    ] = None,
    version: Annotated[
        str, Option("--version-string", help="Contents of the $version section.")
    ] = "",
    comment: Annotated[str, Option(help="Contents of the $comment section.")] = "",
    debuglog: Annotated[
        str, Option(help="File to write the debug log to.")
    ] = "",
):
    """Convert a signal change log into a VCD trace.

    Every line of the log has the form '#<timestamp> <signal> <value> <size|f>'.
    Lines that do not parse are dropped with a warning.

    Args:
        inpath (str): Path to the input log.
        outpath (str): Path to the output VCD.
        unit (str): Timescale unit.
        step (int): Timescale step size.
        cfgpath (str): Path to the JSON configuration file.
        scope (str): Name of the top-level scope.
        strict (bool): Reject signals with inconsistent type or width.
        max_signals (int): Maximum number of distinct signals.
        date (bool): Emit a $date section.
        version (str): Contents of the $version section.
        comment (str): Contents of the $comment section.
        debuglog (str): File to write the debug log to.
    """
    setup_logging(debuglog)
    args = VLArgs(
        inpath=inpath,
        outpath=outpath,
        cfgpath=cfgpath,
        unit=unit,
        step=step,
        scope=scope,
        strict=strict,
        max_signals=max_signals,
        date=date,
        version=version,
        comment=comment,
    )
    try:
        run_convert(args)
    except (VcdLogError, OSError) as e:
        logger.error(str(e))
        raise typer.Exit(code=1)


@app.command("check")
def check_main(
    inpath: Annotated[
        str,
        Option("-i", "--input_file", help="Log file to read from, stdin if not provided."),
    ] = "",
    cfgpath: Annotated[
        str, Option("-c", "--config", help="Path to the JSON configuration file")
    ] = "",
    strict: Annotated[
        Optional[bool],
        Option(
            "--strict/--no-strict",
            help="Reject signals whose type or width changes between lines.",
        ),
    ] = None,
    max_signals: Annotated[
        Optional[int],
        Option(help="Maximum number of distinct signals, 0 for unbounded."),
    ] = None,
    debuglog: Annotated[str, Option(help="File to write the debug log to.")] = "",
):
    """Parse a log and print the inferred signal table without writing a VCD."""
    setup_logging(debuglog)
    args = VLArgs(
        inpath=inpath, cfgpath=cfgpath, strict=strict, max_signals=max_signals
    )
    try:
        registry, changes, dropped = run_check(args)
    except (VcdLogError, OSError) as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    for name, entry in registry:
        typer.echo(f"{entry.identifier}\t{entry.wire_type}\t{entry.width}\t{name}")
    typer.echo(f"{len(changes)} value changes, {len(registry)} signals.")
    for kind, count in dropped.items():
        typer.echo(f"dropped {kind.name}: {count}")


def main():
    """Main entry point for the VcdLog command-line interface.

    This function initializes and runs the Typer application that provides
    the command-line interface for VcdLog.
    """
    app()


if __name__ == "__main__":
    main()
