"""
File: vcdlog/vlconfig.py

This file is a part of the VcdLog tool.
"""

from enum import Enum

from pydantic import BaseModel, field_validator


class TimescaleUnit(Enum):
    """Timescale units accepted by VcdLog, written in VCD (lowercase) form."""

    S = "s"
    MS = "ms"
    US = "us"
    NS = "ns"
    PS = "ps"
    FS = "fs"

    @classmethod
    def from_str(cls, unit: str) -> "TimescaleUnit":
        """Parse a unit name case-insensitively ('NS', 'ns', ...).

        Raises:
            ValueError: if the unit is unknown.
        """
        return cls(unit.strip().lower())

    def __str__(self) -> str:
        return self.value


# Magnitudes allowed by IEEE 1364 for $timescale
STANDARD_STEPS = (1, 10, 100)


class TimescaleConfig(BaseModel):
    """Timescale of the generated VCD.

    Attributes:
        unit (TimescaleUnit): Time unit.
        step (int): Number of units per timestamp tick.
    """

    unit: TimescaleUnit = TimescaleUnit.NS
    step: int = 1

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, v):
        if isinstance(v, str):
            return TimescaleUnit.from_str(v)
        return v

    @field_validator("step")
    @classmethod
    def check_step(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timescale step must be a positive integer.")
        return v

    def __str__(self) -> str:
        return f"{self.step} {self.unit}"


class HeaderConfig(BaseModel):
    """Configuration for the VCD header.

    Attributes:
        timescale (TimescaleConfig): Timescale declaration.
        scope (str): Name of the single top-level module scope.
        date (bool): Emit a $date section with the current time.
        version (str): Contents of the $version section, omitted if empty.
        comment (str): Contents of the $comment section, omitted if empty.
    """

    timescale: TimescaleConfig = TimescaleConfig()
    scope: str = "outputs"
    date: bool = False
    version: str = ""
    comment: str = ""

    @field_validator("scope")
    @classmethod
    def check_scope(cls, v: str) -> str:
        if v == "" or any(c.isspace() for c in v):
            raise ValueError("Scope name must be non-empty and contain no whitespace.")
        return v


class VLConfig(BaseModel):
    """VcdLog configuration class.

    Attributes:
        header (HeaderConfig): VCD header configuration.
        strict (bool): Reject signals whose type or width changes between lines.
        max_signals (int): Cap on the number of distinct signals, 0 for unbounded.
    """

    header: HeaderConfig = HeaderConfig()

    # Check signal shapes against their first occurrence
    strict: bool = False
    # 93 reproduces the single-character identifier limit
    max_signals: int = 0

    @field_validator("max_signals")
    @classmethod
    def check_max_signals(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Maximum number of signals must be non-negative.")
        return v
