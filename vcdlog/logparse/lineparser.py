"""
File: vcdlog/logparse/lineparser.py

This file is a part of the VcdLog tool.

Parses log lines of the form:

    #<timestamp> <signal_name> <value> <size | f>

For example:
    #100 imasignal 1 1
    #100 signame 11110010 8
    #222 signame 123.4 f

Interpretation:
    • timestamp is an unsigned 64-bit integer.
    • signal_name is made of [a-zA-Z0-9.] characters, dots are kept verbatim.
    • A size of 'f' makes the value a real, a size of 1 makes it a scalar,
      any other size makes it a binary vector of that width.
"""

import re

from .valuechange import ScalarValue, Scalar, BinaryVector, Real, Value, ValueChange
from ..vlerrors import ParseError, ParseErrorKind

U64_MAX = 2**64 - 1
U64_DIGITS = len(str(U64_MAX))

LOG_LINE_PATTERN = re.compile(
    r"#(\d+)\s+([a-zA-Z0-9.]+)\s+([01xXzZ]+|\d+\.\d+)\s+(\d+|f)", re.ASCII
)


def parse_scalar(token: str, line: str) -> Scalar:
    if len(token) != 1:
        raise ParseError(ParseErrorKind.INVALID_VALUE, line)
    try:
        return Scalar(ScalarValue.from_char(token))
    except ValueError:
        raise ParseError(ParseErrorKind.INVALID_VALUE, line)


def parse_vector(token: str, width: int, line: str) -> BinaryVector:
    digits = []
    for c in token:
        try:
            digits.append(ScalarValue.from_char(c))
        except ValueError:
            raise ParseError(ParseErrorKind.INVALID_VALUE, line)
    if len(digits) > width:
        raise ParseError(ParseErrorKind.VALUE_TOO_LARGE_FOR_VEC_WIDTH, line)
    return BinaryVector(width, tuple(digits))


def parse_value(token: str, size: str, line: str) -> Value:
    """Interpret the value token according to the size token.

    Args:
        token (str): the value token, a logic string or a decimal literal.
        size (str): 'f' for a real, otherwise the width in bits.
        line (str): the source line, for error reporting.

    Raises:
        ParseError: if the value does not fit the kind selected by the size.

    Returns:
        Value: the parsed value.
    """
    if size == "f":
        try:
            return Real(float(token))
        except ValueError:
            raise ParseError(ParseErrorKind.INVALID_VALUE, line)

    digits = size.lstrip("0") or "0"
    if len(digits) > U64_DIGITS or not digits.isdecimal() or not digits.isascii():
        raise ParseError(ParseErrorKind.INVALID_VALUE_TYPE, line)
    width = int(digits)
    if width > U64_MAX:
        raise ParseError(ParseErrorKind.INVALID_VALUE_TYPE, line)
    if width == 1:
        return parse_scalar(token, line)
    return parse_vector(token, width, line)


def parse(line: str, pattern: re.Pattern = LOG_LINE_PATTERN) -> ValueChange:
    """Parse a single log line into a ValueChange.

    Args:
        line (str): the raw log line, surrounding whitespace is ignored.
        pattern (re.Pattern, optional): compiled log grammar.
            Defaults to LOG_LINE_PATTERN.

    Raises:
        ParseError: if the line is rejected, the error carries the ParseErrorKind.

    Returns:
        ValueChange: the parsed value change.
    """
    s = line.strip()
    match = pattern.fullmatch(s)
    if match is None:
        raise ParseError(ParseErrorKind.INVALID_FORMAT, s)

    timestamp_str, name, value_str, size_str = match.groups()

    # Bound the digit count before int(), leading zeros are allowed
    digits = timestamp_str.lstrip("0") or "0"
    if len(digits) > U64_DIGITS or int(digits) > U64_MAX:
        raise ParseError(ParseErrorKind.PARSE_TIMESTAMP, s)

    timestamp = int(digits)
    return ValueChange(timestamp, name, parse_value(value_str, size_str, s))
