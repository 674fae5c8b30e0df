"""
File: vcdlog/vlerrors.py

This file is a part of the VcdLog tool.

Exceptions raised by VcdLog. Per-line ParseErrors are recovered by the
pipeline; every other VcdLogError aborts the conversion.
"""

from enum import Enum


class VcdLogError(Exception):
    """Base class for all VcdLog errors."""


class ParseErrorKind(Enum):
    """Classification of a rejected log line."""

    INVALID_FORMAT = 0  #: Line does not match the log grammar
    PARSE_TIMESTAMP = 1  #: Timestamp does not fit in 64 bits
    INVALID_VALUE_TYPE = 2  #: Size token is neither 'f' nor a valid width
    INVALID_VALUE = 3  #: Value token does not fit the declared kind
    VALUE_TOO_LARGE_FOR_VEC_WIDTH = 4  #: More digits than the vector width


class ParseError(VcdLogError):
    def __init__(self, kind: ParseErrorKind, line: str = "") -> None:
        self.kind = kind
        self.line = line
        super().__init__(f"{kind.name}: '{line}'")


class IdentifierSpaceExhausted(VcdLogError):
    def __init__(self, capacity: int, signal_name: str) -> None:
        self.capacity = capacity
        self.signal_name = signal_name
        super().__init__(
            f"Input has too many signals, ran out of identifiers "
            f"(capacity {capacity}) at signal '{signal_name}'."
        )


class SignalShapeMismatch(VcdLogError):
    def __init__(self, signal_name: str, declared: tuple, observed: tuple) -> None:
        self.signal_name = signal_name
        self.declared = declared
        self.observed = observed
        super().__init__(
            f"Signal '{signal_name}' declared as {declared[0]}[{declared[1]}] "
            f"but later used as {observed[0]}[{observed[1]}]."
        )


class UnknownSignal(VcdLogError):
    def __init__(self, signal_name: str) -> None:
        self.signal_name = signal_name
        super().__init__(f"Signal '{signal_name}' has no registry entry.")


class ConfigError(VcdLogError):
    """Invalid configuration file or option value."""
