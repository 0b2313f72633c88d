"""
Machine integer types.

A BigInt can be built from, and converted back to, any of the standard
fixed-width integer types.  Python has a single unbounded ``int``, so
the widths are described as data: an ``IntType`` knows its bit width,
its signedness and therefore its inclusive range [lo, hi].

This module also provides the overflow strategies used when a value
has to be squeezed into a type that cannot hold it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OverflowMode(Enum):
    """What to do when a value does not fit the target type."""

    WRAP = auto()        # Two's-complement truncation (like a C cast)
    CLAMP = auto()       # Saturate at lo/hi
    ERROR = auto()       # Raise MachineIntOverflow


@dataclass(frozen=True)
class IntType:
    """
    A fixed-width integer type.

    ``IntType(32, signed=True)`` is a C ``int32_t``: range
    [-2**31, 2**31 - 1].  ``IntType(8, signed=False)`` is ``uint8_t``.
    """

    bits: int
    signed: bool = True

    def __post_init__(self):
        if self.bits <= 0:
            raise ValueError(f"bits ({self.bits}) must be positive")

    @property
    def name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    @property
    def lo(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def hi(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return 1 << self.bits

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def clamp(self, value: int) -> int:
        return max(self.lo, min(self.hi, value))

    def wrap(self, value: int) -> int:
        """Reduce ``value`` modulo 2**bits into [lo, hi]."""
        return self.lo + (value - self.lo) % self.width

    def from_bits(self, raw: int) -> int:
        """Interpret an unsigned ``bits``-wide pattern as a value of this type."""
        raw &= self.width - 1
        if self.signed and raw >> (self.bits - 1):
            return raw - self.width
        return raw


# ---------------------------------------------------------------------------
# Standard widths
# ---------------------------------------------------------------------------

INT8 = IntType(8)
INT16 = IntType(16)
INT32 = IntType(32)
INT64 = IntType(64)
UINT8 = IntType(8, signed=False)
UINT16 = IntType(16, signed=False)
UINT32 = IntType(32, signed=False)
UINT64 = IntType(64, signed=False)

STANDARD_TYPES = (INT8, UINT8, INT16, UINT16, INT32, UINT32, INT64, UINT64)

BY_NAME = {t.name: t for t in STANDARD_TYPES}
