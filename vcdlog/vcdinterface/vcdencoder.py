"""
File: vcdlog/vcdinterface/vcdencoder.py

This file is a part of the VcdLog tool.

Writes a VCD trace from a signal registry and a time-sorted sequence of
value changes. All signals are declared in a single flat module scope; dotted
signal names are kept verbatim as references.

The body starts at #0 without a $dumpvars section: signals are undefined until
their first recorded change.
"""

import logging
from datetime import datetime
from io import StringIO
from typing import Iterable, TextIO

from ..logparse.valuechange import Scalar, BinaryVector, Real, ValueChange
from ..vlconfig import HeaderConfig
from .registry import SignalRegistry

logger = logging.getLogger(__name__)


class VCDEncoder:
    """Streams VCD text to `out`.

    Attributes:
        out (TextIO): Output sink.
        registry (SignalRegistry): Declarations and identifiers of all signals.
        last_time (int | None): Timestamp of the last emitted marker.
    """

    def __init__(self, out: TextIO, registry: SignalRegistry) -> None:
        self.out = out
        self.registry = registry
        self.last_time = None

    def _section(self, keyword: str, body: str) -> None:
        self.out.write(f"${keyword}\n")
        self.out.write(f"   {body}\n")
        self.out.write("$end\n")

    def header(self, hc: HeaderConfig) -> None:
        """Write the declaration section, followed by the #0 marker."""
        if hc.date:
            self._section("date", datetime.now().strftime("%a %b %d %H:%M:%S %Y"))
        if hc.version != "":
            self._section("version", hc.version)
        if hc.comment != "":
            self._section("comment", hc.comment)
        self.out.write(f"$timescale {hc.timescale} $end\n")
        self.out.write(f"$scope module {hc.scope} $end\n")
        for name, entry in self.registry:
            self.out.write(
                f"$var {entry.wire_type} {entry.width} {entry.identifier} {name} $end\n"
            )
        self.out.write("$upscope $end\n")
        self.out.write("$enddefinitions $end\n")
        self.timestamp(0)

    def timestamp(self, time: int) -> None:
        if time != self.last_time:
            self.out.write(f"#{time}\n")
            self.last_time = time

    def change(self, vc: ValueChange) -> None:
        """Write the change record of `vc`, preceded by a marker if time advanced."""
        sig_id = self.registry.lookup(vc.signal_name).identifier
        self.timestamp(vc.timestamp)
        match vc.value:
            case Scalar():
                self.out.write(f"{vc.value}{sig_id}\n")
            case BinaryVector():
                self.out.write(f"b{vc.value} {sig_id}\n")
            case Real():
                self.out.write(f"r{vc.value} {sig_id}\n")
            case _:
                raise TypeError(f"Unsupported value {vc.value!r}")

    def body(self, changes: Iterable[ValueChange]) -> int:
        n = 0
        for vc in changes:
            self.change(vc)
            n += 1
        return n


def write_vcd(
    out: TextIO,
    hc: HeaderConfig,
    registry: SignalRegistry,
    changes: Iterable[ValueChange],
) -> int:
    """
    Generate a VCD trace from the given registry and value changes.

    Args:
        out (TextIO): Output sink.
        hc (HeaderConfig): Header configuration.
        registry (SignalRegistry): Signals built from the same value changes.
        changes (Iterable[ValueChange]): Value changes sorted by timestamp.

    Raises:
        UnknownSignal: if a change refers to a signal missing from the registry.

    Returns:
        int: Number of change records written.
    """
    encoder = VCDEncoder(out, registry)
    encoder.header(hc)
    n = encoder.body(changes)
    logger.info(f"Wrote {n} value changes for {len(registry)} signals.")
    return n


def encode_vcd(
    hc: HeaderConfig, registry: SignalRegistry, changes: Iterable[ValueChange]
) -> str:
    """Generate a VCD trace as a string."""
    out = StringIO()
    write_vcd(out, hc, registry, changes)
    return out.getvalue()
