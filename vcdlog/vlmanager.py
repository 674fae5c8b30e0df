"""
File: vcdlog/vlmanager.py

This file manages the core functionalities of the VcdLog tool.
"""

import sys
import json
import logging
from collections import Counter
from typing import Iterable, TextIO

from jsonschema import validate
from jsonschema.exceptions import ValidationError
from pydantic import BaseModel, ValidationError as PydanticValidationError

from .vlconfig import VLConfig, HeaderConfig, TimescaleConfig, STANDARD_STEPS
from .vlerrors import ConfigError, ParseError
from .logparse import ValueChange, parse, LOG_LINE_PATTERN
from .vcdinterface import SignalRegistry, build_registry, write_vcd

logger = logging.getLogger(__name__)


class VLArgs(BaseModel):
    """Arguments for VcdLog tasks.

    Empty strings and None mean "not given on the command line": the value
    from the configuration file (or the default) is used instead.

    Attributes:
        inpath (str): Path to the input log, stdin if empty.
        outpath (str): Path to the output VCD, stdout if empty.
        cfgpath (str): Path to the JSON configuration file.
        unit (str): Timescale unit.
        step (int | None): Timescale step size.
        scope (str): Name of the top-level scope.
        strict (bool | None): Check signal shapes against their first occurrence.
        max_signals (int | None): Cap on the number of signals, 0 for unbounded.
        date (bool | None): Emit a $date section.
        version (str): Contents of the $version section.
        comment (str): Contents of the $comment section.
    """

    inpath: str = ""  #: Path to the input log
    outpath: str = ""  #: Path to the output VCD
    cfgpath: str = ""  #: Path to the configuration file
    unit: str = ""  #: Timescale unit
    step: int | None = None  #: Timescale step size
    scope: str = ""  #: Top-level scope name
    strict: bool | None = None  #: Shape checking
    max_signals: int | None = None  #: Signal capacity
    date: bool | None = None  #: Emit $date
    version: str = ""  #: $version contents
    comment: str = ""  #: $comment contents


VL_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "timescale": {
            "type": "object",
            "properties": {
                # One of s, ms, us, ns, ps, fs (any case)
                "unit": {
                    "type": "string",
                    "pattern": "^([sS]|[mMuUnNpPfF][sS])$",
                },
                "step": {"type": "integer", "minimum": 1},
            },
            "required": ["unit"],
            "additionalProperties": False,
        },
        # Name of the single top-level scope
        "scope": {"type": "string", "pattern": "^\\S+$"},
        "date": {"type": "boolean"},
        "version": {"type": "string"},
        "comment": {"type": "string"},
        # Reject signals whose type or width changes
        "strict": {"type": "boolean"},
        # 0 means unbounded
        "max_signals": {"type": "integer", "minimum": 0},
    },
    "additionalProperties": False,
}


def load_config_file(cfgpath: str) -> dict:
    with open(cfgpath, "r") as f:
        try:
            vlconfig = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file {cfgpath} is not valid JSON: {e}")
    # And validate it
    try:
        validate(instance=vlconfig, schema=VL_CONFIG_SCHEMA)
    except ValidationError as e:
        logger.error(
            f"Please check schema:\n{json.dumps(VL_CONFIG_SCHEMA, indent=4, sort_keys=True, separators=(',', ': '))}"
        )
        raise ConfigError(f"Config schema validation failed: {e.message}")
    return vlconfig


def get_vlconfig(args: VLArgs) -> VLConfig:
    """Create a VcdLog configuration from arguments.

    Values given on the command line take precedence over the configuration
    file, which takes precedence over the defaults.

    Args:
        args (VLArgs): VcdLog arguments.

    Raises:
        ConfigError: if the configuration file or an option value is invalid.

    Returns:
        VLConfig: VcdLog configuration.
    """
    filecfg = load_config_file(args.cfgpath) if args.cfgpath != "" else {}
    tscfg = filecfg.get("timescale", {})

    unit = args.unit or tscfg.get("unit", "")
    if unit == "":
        raise ConfigError(
            "No timescale unit given, must be one of: { 'S', 'MS', 'US', 'NS', 'PS', 'FS' }"
        )

    def pick(argval, key, default):
        if argval is None or argval == "":
            return filecfg.get(key, default)
        return argval

    try:
        return VLConfig(
            header=HeaderConfig(
                timescale=TimescaleConfig(
                    unit=unit,
                    step=args.step if args.step is not None else tscfg.get("step", 1),
                ),
                scope=pick(args.scope, "scope", "outputs"),
                date=pick(args.date, "date", False),
                version=pick(args.version, "version", ""),
                comment=pick(args.comment, "comment", ""),
            ),
            strict=pick(args.strict, "strict", False),
            max_signals=pick(args.max_signals, "max_signals", 0),
        )
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")


class VLManager:
    """Manager for VcdLog conversions.

    Runs the conversion pipeline: parse lines, sort the surviving value
    changes by time, build the signal registry and write the VCD.

    Attributes:
        vlconfig (VLConfig): Configuration for the conversion.
        pattern (re.Pattern): Compiled log line grammar.
        dropped (Counter): Number of rejected lines per ParseErrorKind.
    """

    def __init__(self, vlconfig: VLConfig, pattern=LOG_LINE_PATTERN) -> None:
        self.vlconfig = vlconfig
        self.pattern = pattern
        self.dropped: Counter = Counter()

    def parse_lines(self, lines: Iterable[str]) -> list[ValueChange]:
        """Parse every line independently, dropping (and logging) rejected ones.

        Args:
            lines (Iterable[str]): raw log lines.

        Returns:
            list[ValueChange]: the accepted value changes, in input order.
        """
        changes = []
        for lineno, line in enumerate(lines, start=1):
            if line.strip() == "":
                continue
            try:
                changes.append(parse(line, self.pattern))
            except ParseError as e:
                self.dropped[e.kind] += 1
                logger.warning(f"Dropping line {lineno}: {e}")
        total = sum(self.dropped.values())
        if total > 0:
            summary = ", ".join(f"{k.name}={v}" for k, v in self.dropped.items())
            logger.info(f"Dropped {total} lines ({summary}).")
        logger.info(f"Parsed {len(changes)} value changes.")
        return changes

    @staticmethod
    def sort_changes(changes: list[ValueChange]) -> list[ValueChange]:
        # sorted() is stable: equal timestamps keep their input order
        return sorted(changes, key=lambda vc: vc.timestamp)

    def build_registry(self, changes: list[ValueChange]) -> SignalRegistry:
        return build_registry(
            changes, max_signals=self.vlconfig.max_signals, strict=self.vlconfig.strict
        )

    def load(self, lines: Iterable[str]) -> tuple[SignalRegistry, list[ValueChange]]:
        """Parse and sort all lines and build the registry from them."""
        changes = self.sort_changes(self.parse_lines(lines))
        return self.build_registry(changes), changes

    def convert(self, lines: Iterable[str], out: TextIO) -> int:
        """Convert log lines into a VCD trace written to `out`.

        Args:
            lines (Iterable[str]): raw log lines.
            out (TextIO): VCD output sink.

        Raises:
            IdentifierSpaceExhausted: if the input exceeds max_signals.
            SignalShapeMismatch: in strict mode, on inconsistent signal shapes.

        Returns:
            int: number of value changes written.
        """
        registry, changes = self.load(lines)
        n = write_vcd(out, self.vlconfig.header, registry, changes)
        out.flush()
        return n


def open_input(inpath: str) -> TextIO:
    # Undecodable bytes become U+FFFD, so the line fails the grammar and is dropped
    if inpath == "":
        logger.debug("Reading log from stdin.")
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(errors="replace")
        return sys.stdin
    return open(inpath, "r", encoding="utf-8", errors="replace")


def open_output(outpath: str) -> TextIO:
    if outpath == "":
        logger.debug("Writing VCD to stdout.")
        return sys.stdout
    return open(outpath, "w")


def run_convert(args: VLArgs) -> int:
    """Run a full conversion as described by `args`.

    Returns:
        int: number of value changes written.
    """
    vlconfig = get_vlconfig(args)
    tstep = vlconfig.header.timescale.step
    if tstep not in STANDARD_STEPS:
        logger.warning(
            f"Timescale step {tstep} is not one of 1, 10, 100; some VCD readers may reject it."
        )
    manager = VLManager(vlconfig)

    fin = open_input(args.inpath)
    try:
        lines = fin.readlines()
    finally:
        if fin is not sys.stdin:
            fin.close()

    fout = open_output(args.outpath)
    try:
        n = manager.convert(lines, fout)
    finally:
        if fout is not sys.stdout:
            fout.close()

    if args.outpath != "":
        logger.info(f"VCD written to {args.outpath}.")
    return n


def run_check(args: VLArgs) -> tuple[SignalRegistry, list[ValueChange], Counter]:
    """Parse the input and build the registry without writing a VCD.

    Returns:
        tuple: Tuple of (registry, sorted value changes, dropped line counts).
    """
    filecfg = load_config_file(args.cfgpath) if args.cfgpath != "" else {}
    try:
        vlconfig = VLConfig(
            strict=args.strict if args.strict is not None else filecfg.get("strict", False),
            max_signals=(
                args.max_signals
                if args.max_signals is not None
                else filecfg.get("max_signals", 0)
            ),
        )
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
    manager = VLManager(vlconfig)

    fin = open_input(args.inpath)
    try:
        registry, changes = manager.load(fin.readlines())
    finally:
        if fin is not sys.stdin:
            fin.close()
    return registry, changes, manager.dropped
