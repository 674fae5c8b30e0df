"""
File: vcdlog/vcdinterface/registry.py

This file is a part of the VcdLog tool.

Signal registry: infers the VCD variable type and width of every signal from
its first value change and assigns it a short VCD identifier.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from ..logparse.valuechange import Scalar, BinaryVector, Real, Value, ValueChange
from ..vlerrors import IdentifierSpaceExhausted, SignalShapeMismatch, UnknownSignal

logger = logging.getLogger(__name__)

# Printable ASCII from '!' to '~'
ID_ALPHABET = "".join(chr(c) for c in range(ord("!"), ord("~") + 1))

# Declared width of real variables; the values themselves are 64-bit
REAL_WIDTH = 32


class WireType(Enum):
    """VCD variable types emitted by VcdLog."""

    WIRE = "wire"
    INTEGER = "integer"
    REAL = "real"

    def __str__(self) -> str:
        return self.value


def unique_id_generator() -> Iterator[str]:
    """
    Generates a sequence of unique short identifiers to be used as VCD ids.
    It first yields single printable characters and then combinations of increasing length.
    """
    # Yield one-character ids.
    for c in ID_ALPHABET:
        yield c
    length = 2
    while True:

        def rec_gen(prefix, length):
            if length == 0:
                yield prefix
            else:
                for c in ID_ALPHABET:
                    yield from rec_gen(prefix + c, length - 1)

        for identifier in rec_gen("", length):
            yield identifier
        length += 1


def infer_shape(value: Value) -> tuple[WireType, int]:
    """Infer the (type, width) declaration of a signal from one of its values."""
    match value:
        case Scalar():
            return WireType.WIRE, 1
        case BinaryVector(width=width):
            return WireType.INTEGER, width
        case Real():
            return WireType.REAL, REAL_WIDTH
        case _:
            raise TypeError(f"Unsupported value {value!r}")


@dataclass(frozen=True)
class SignalRegistryEntry:
    wire_type: WireType
    width: int
    identifier: str


class SignalRegistry:
    """Maps signal names to their VCD declaration, in first-seen order.

    Attributes:
        max_signals (int): Maximum number of signals, 0 for unbounded.
        strict (bool): Reject signals whose later values change type or width.
        entries (dict[str, SignalRegistryEntry]): Registered signals.
    """

    def __init__(self, max_signals: int = 0, strict: bool = False) -> None:
        self.max_signals = max_signals
        self.strict = strict
        self.entries: dict[str, SignalRegistryEntry] = {}
        self._ids = unique_id_generator()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __iter__(self):
        return iter(self.entries.items())

    def _next_id(self, name: str) -> str:
        if self.max_signals and len(self.entries) >= self.max_signals:
            raise IdentifierSpaceExhausted(self.max_signals, name)
        return next(self._ids)

    def observe(self, change: ValueChange) -> SignalRegistryEntry:
        """Register the signal of `change` if it has not been seen yet.

        Args:
            change (ValueChange): a parsed value change.

        Raises:
            IdentifierSpaceExhausted: if a new signal exceeds max_signals.
            SignalShapeMismatch: in strict mode, if the value disagrees with
                the declaration of an already registered signal.

        Returns:
            SignalRegistryEntry: the (possibly pre-existing) entry of the signal.
        """
        wire_type, width = infer_shape(change.value)
        entry = self.entries.get(change.signal_name)
        if entry is None:
            entry = SignalRegistryEntry(wire_type, width, self._next_id(change.signal_name))
            self.entries[change.signal_name] = entry
            logger.debug(
                f"Registered {change.signal_name} as {wire_type}[{width}] with id '{entry.identifier}'."
            )
        elif self.strict and (entry.wire_type, entry.width) != (wire_type, width):
            raise SignalShapeMismatch(
                change.signal_name,
                (entry.wire_type, entry.width),
                (wire_type, width),
            )
        return entry

    def lookup(self, name: str) -> SignalRegistryEntry:
        try:
            return self.entries[name]
        except KeyError:
            raise UnknownSignal(name)


def build_registry(
    changes: Iterable[ValueChange], max_signals: int = 0, strict: bool = False
) -> SignalRegistry:
    """Build the registry from time-sorted value changes.

    Args:
        changes (Iterable[ValueChange]): value changes, sorted by timestamp.
        max_signals (int, optional): identifier capacity, 0 for unbounded. Defaults to 0.
        strict (bool, optional): check later values against the first-seen shape.
            Defaults to False.

    Returns:
        SignalRegistry: the populated registry.
    """
    registry = SignalRegistry(max_signals, strict)
    for change in changes:
        registry.observe(change)
    logger.info(f"Registered {len(registry)} signals.")
    return registry
