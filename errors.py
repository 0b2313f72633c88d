"""Exception taxonomy for the big-integer engine.

All errors are caller-input errors, raised synchronously.  Each class
also derives from the builtin a caller would naturally catch, so
``except ValueError`` still sees a malformed decimal string and
``except ZeroDivisionError`` still sees a zero divisor.
"""
from __future__ import annotations


class BigIntError(Exception):
    """Base class for every error raised by the engine."""


class InvalidFormat(BigIntError, ValueError):
    """Decimal text that is not ``-?[0-9]+``."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"invalid decimal integer {text!r}: {reason}")


class DivideByZero(BigIntError, ZeroDivisionError):
    """Division or remainder with a zero divisor."""

    def __init__(self, operation: str = "division"):
        self.operation = operation
        super().__init__(f"big integer {operation} by zero")


class MachineIntOverflow(BigIntError, OverflowError):
    """Value does not fit a fixed-width machine integer type."""

    def __init__(self, value: str, type_name: str, lo: int, hi: int):
        self.value = value
        self.type_name = type_name
        super().__init__(
            f"{value} is outside {type_name} range [{lo}, {hi}]"
        )
