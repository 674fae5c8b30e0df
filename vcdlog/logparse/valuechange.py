"""
File: vcdlog/logparse/valuechange.py

This file is a part of the VcdLog tool.

Value representation classes for VcdLog:
    ScalarValue:
        Four-state logic value of a single bit
    Scalar, BinaryVector, Real:
        The closed set of values a log line can carry
    ValueChange:
        A single timestamped change of a named signal
"""

from enum import Enum
from dataclasses import dataclass


class ScalarValue(Enum):
    """Four-state logic value. The enum value is the VCD character."""

    ZERO = "0"  #: Driven low
    ONE = "1"  #: Driven high
    X = "x"  #: Unknown
    Z = "z"  #: High impedance

    @classmethod
    def from_char(cls, c: str) -> "ScalarValue":
        """Convert a log character into a ScalarValue.

        Args:
            c (str): One of '0', '1', 'x', 'X', 'z', 'Z'.

        Raises:
            ValueError: if the character is not a logic value.

        Returns:
            ScalarValue: the corresponding logic value.
        """
        return cls(c.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Scalar:
    """Single bit value"""

    value: ScalarValue

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BinaryVector:
    """Multi-bit value. Holds at most `width` digits, most significant first;
    fewer digits than `width` are legal and left-padded by VCD readers.
    """

    width: int
    value: tuple[ScalarValue, ...]

    def __str__(self) -> str:
        return "".join(str(v) for v in self.value)


@dataclass(frozen=True)
class Real:
    """64-bit floating point value"""

    value: float

    def __str__(self) -> str:
        return repr(self.value)


Value = Scalar | BinaryVector | Real


@dataclass(frozen=True)
class ValueChange:
    """A change of the signal `signal_name` to `value` at time `timestamp`."""

    timestamp: int
    signal_name: str
    value: Value
