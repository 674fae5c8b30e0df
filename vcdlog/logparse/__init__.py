from .valuechange import ScalarValue, Scalar, BinaryVector, Real, Value, ValueChange
from .lineparser import LOG_LINE_PATTERN, parse
