"""Arbitrary-precision signed integer.

``BigInt`` stores its value as 32-bit limbs in two's-complement form
(see ``limbs.py``) and implements the full operator set on top of the
limb primitives:

    + - * / % & | ^ << >> ~   unary - and +   and their in-place forms

``/`` and ``%`` truncate toward zero (C semantics); ``divmod()`` returns
both.  In-place operators mutate the receiver and return it, so chained
forms like ``(a /= b) /= b`` translate to ``a.__itruediv__(b).__itruediv__(b)``.
Every mutation computes the complete new representation before it is
committed, so a failing operation leaves the receiver unchanged.
"""
from __future__ import annotations

import operator
from typing import Callable

import codec
import division
import limbs as lb
from errors import MachineIntOverflow
from widths import IntType, OverflowMode


def _coerce(value: object) -> BigInt | None:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int):
        return BigInt(value)
    return None


def _shift_count(count: object) -> int:
    count = operator.index(count)
    if count < 0:
        raise ValueError(f"negative shift count {count}")
    return count


class BigInt:
    """Signed integer of unbounded magnitude."""

    __slots__ = ("_limbs", "_negative")

    def __init__(self, value: BigInt | int | str = 0):
        if isinstance(value, BigInt):
            self._limbs, self._negative = list(value._limbs), value._negative
        elif isinstance(value, int):
            self._limbs, self._negative = lb.from_int(value)
        elif isinstance(value, str):
            self._limbs, self._negative = codec.parse(value)
        else:
            raise TypeError(
                f"cannot build BigInt from {type(value).__name__}"
            )

    @classmethod
    def from_machine(cls, value: int, int_type: IntType) -> BigInt:
        """Build from a value that must fit ``int_type``."""
        if not int_type.contains(value):
            raise MachineIntOverflow(
                str(value), int_type.name, int_type.lo, int_type.hi
            )
        return cls(value)

    # -- representation -----------------------------------------------------

    @property
    def limbs(self) -> tuple[int, ...]:
        return tuple(self._limbs)

    @property
    def is_negative(self) -> bool:
        return self._negative

    def limb_count(self) -> int:
        return len(self._limbs)

    def bit_length(self) -> int:
        """Bits needed for the magnitude, like ``int.bit_length``."""
        magnitude = lb.absolute(self._limbs, self._negative)
        if not magnitude:
            return 0
        return (len(magnitude) - 1) * lb.LIMB_BITS + magnitude[-1].bit_length()

    def _commit(self, result: tuple[lb.Limbs, bool]) -> BigInt:
        self._limbs, self._negative = result
        return self

    def swap(self, other: BigInt) -> None:
        self._limbs, other._limbs = other._limbs, self._limbs
        self._negative, other._negative = other._negative, self._negative

    # -- conversion ---------------------------------------------------------

    def to_string(self) -> str:
        return codec.to_string(self._limbs, self._negative)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInt({self.to_string()!r})"

    def __int__(self) -> int:
        return lb.to_int(self._limbs, self._negative)

    __index__ = __int__

    def __bool__(self) -> bool:
        return not lb.is_zero(self._limbs, self._negative)

    def __hash__(self) -> int:
        return hash(int(self))

    def to_machine(
        self, int_type: IntType, mode: OverflowMode = OverflowMode.ERROR
    ) -> int:
        """Convert to a host int that fits ``int_type``."""
        if self._fits(int_type):
            return int(self)
        if mode == OverflowMode.CLAMP:
            return int_type.lo if self._negative else int_type.hi
        if mode == OverflowMode.WRAP:
            return int_type.from_bits(self._low_bits(int_type.bits))
        raise MachineIntOverflow(
            self.to_string(), int_type.name, int_type.lo, int_type.hi
        )

    def _fits(self, int_type: IntType) -> bool:
        return BigInt(int_type.lo) <= self <= BigInt(int_type.hi)

    def _low_bits(self, bits: int) -> int:
        """The low ``bits`` bits of the two's-complement encoding."""
        fill = lb.complement(self._negative)
        raw = 0
        for i in range(-(-bits // lb.LIMB_BITS) - 1, -1, -1):
            limb = self._limbs[i] if i < len(self._limbs) else fill
            raw = (raw << lb.LIMB_BITS) | limb
        return raw & ((1 << bits) - 1)

    # -- comparison ---------------------------------------------------------

    def _compare(self, other: BigInt) -> int:
        return lb.compare(
            self._limbs, self._negative, other._limbs, other._negative
        )

    def __eq__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._negative == rhs._negative and self._limbs == rhs._limbs

    def __ne__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return not self == rhs

    def __lt__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) < 0

    def __le__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) <= 0

    def __gt__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) > 0

    def __ge__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) >= 0

    # -- in-place operators -------------------------------------------------

    def _apply(self, other: object, fn: Callable) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._commit(
            fn(self._limbs, self._negative, rhs._limbs, rhs._negative)
        )

    def __iadd__(self, other: BigInt | int) -> BigInt:
        return self._apply(other, lb.add)

    def __isub__(self, other: BigInt | int) -> BigInt:
        return self._apply(other, lb.sub)

    def __imul__(self, other: BigInt | int) -> BigInt:
        return self._apply(other, lb.mul)

    def __iand__(self, other: BigInt | int) -> BigInt:
        return self._apply(other, lb.and_)

    def __ior__(self, other: BigInt | int) -> BigInt:
        return self._apply(other, lb.or_)

    def __ixor__(self, other: BigInt | int) -> BigInt:
        return self._apply(other, lb.xor)

    def _divmod(
        self, other: BigInt, operation: str
    ) -> tuple[tuple[lb.Limbs, bool], tuple[lb.Limbs, bool]]:
        if other is self and self:
            return ([1], False), ([], False)
        return division.truncated_divmod(
            self._limbs, self._negative,
            other._limbs, other._negative,
            operation,
        )

    def __itruediv__(self, other: BigInt | int) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        quotient, _ = self._divmod(rhs, "division")
        return self._commit(quotient)

    def __imod__(self, other: BigInt | int) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        _, remainder = self._divmod(rhs, "remainder")
        return self._commit(remainder)

    def __ilshift__(self, count: int) -> BigInt:
        return self._commit(
            lb.shift_left(self._limbs, self._negative, _shift_count(count))
        )

    def __irshift__(self, count: int) -> BigInt:
        return self._commit(
            lb.shift_right(self._limbs, self._negative, _shift_count(count))
        )

    # -- binary operators ---------------------------------------------------

    def __add__(self, other: BigInt | int) -> BigInt:
        return BigInt(self).__iadd__(other)

    def __sub__(self, other: BigInt | int) -> BigInt:
        return BigInt(self).__isub__(other)

    def __mul__(self, other: BigInt | int) -> BigInt:
        return BigInt(self).__imul__(other)

    # Division works on the receiver's own limbs so that ``a / a`` still
    # sees the divisor as the dividend object.

    def __truediv__(self, other: BigInt | int) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        quotient, _ = self._divmod(rhs, "division")
        return BigInt()._commit(quotient)

    def __mod__(self, other: BigInt | int) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        _, remainder = self._divmod(rhs, "remainder")
        return BigInt()._commit(remainder)

    def __divmod__(self, other: BigInt | int) -> tuple[BigInt, BigInt]:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        quotient, remainder = self._divmod(rhs, "division")
        return BigInt()._commit(quotient), BigInt()._commit(remainder)

    def __and__(self, other: BigInt | int) -> BigInt:
        return BigInt(self).__iand__(other)

    def __or__(self, other: BigInt | int) -> BigInt:
        return BigInt(self).__ior__(other)

    def __xor__(self, other: BigInt | int) -> BigInt:
        return BigInt(self).__ixor__(other)

    def __lshift__(self, count: int) -> BigInt:
        return BigInt(self).__ilshift__(count)

    def __rshift__(self, count: int) -> BigInt:
        return BigInt(self).__irshift__(count)

    # Reflected forms: a host int on the left.

    def _reflected(self, other: object, method: str) -> BigInt:
        if not isinstance(other, int):
            return NotImplemented
        return getattr(BigInt(other), method)(self)

    def __radd__(self, other: int) -> BigInt:
        return self._reflected(other, "__iadd__")

    def __rsub__(self, other: int) -> BigInt:
        return self._reflected(other, "__isub__")

    def __rmul__(self, other: int) -> BigInt:
        return self._reflected(other, "__imul__")

    def __rtruediv__(self, other: int) -> BigInt:
        return self._reflected(other, "__itruediv__")

    def __rmod__(self, other: int) -> BigInt:
        return self._reflected(other, "__imod__")

    def __rdivmod__(self, other: int) -> tuple[BigInt, BigInt]:
        return self._reflected(other, "__divmod__")

    def __rand__(self, other: int) -> BigInt:
        return self._reflected(other, "__iand__")

    def __ror__(self, other: int) -> BigInt:
        return self._reflected(other, "__ior__")

    def __rxor__(self, other: int) -> BigInt:
        return self._reflected(other, "__ixor__")

    def __rlshift__(self, other: int) -> BigInt:
        return self._reflected(other, "__ilshift__")

    def __rrshift__(self, other: int) -> BigInt:
        return self._reflected(other, "__irshift__")

    # -- unary --------------------------------------------------------------

    def __pos__(self) -> BigInt:
        return BigInt(self)

    def __neg__(self) -> BigInt:
        return BigInt()._commit(lb.negate(self._limbs, self._negative))

    def __invert__(self) -> BigInt:
        return BigInt()._commit(lb.invert(self._limbs, self._negative))

    def __abs__(self) -> BigInt:
        return BigInt(self).absolutify()

    def negate(self) -> BigInt:
        return self._commit(lb.negate(self._limbs, self._negative))

    def absolutify(self) -> BigInt:
        if self._negative:
            self.negate()
        return self

    def increment(self) -> BigInt:
        """Pre-increment: add one in place and return self."""
        return self._commit(lb.add_small(self._limbs, self._negative, 1))

    def decrement(self) -> BigInt:
        """Pre-decrement: subtract one in place and return self."""
        return self._commit(lb.add_small(self._limbs, self._negative, -1))

    def post_increment(self) -> BigInt:
        """Post-increment: add one in place, return the previous value."""
        previous = BigInt(self)
        self.increment()
        return previous

    def post_decrement(self) -> BigInt:
        """Post-decrement: subtract one in place, return the previous value."""
        previous = BigInt(self)
        self.decrement()
        return previous


def to_string(value: BigInt) -> str:
    return value.to_string()


BINARY_OPERATIONS: dict[str, Callable[[BigInt, BigInt], BigInt]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "div": operator.truediv,
    "mod": operator.mod,
    "and": operator.and_,
    "or": operator.or_,
    "xor": operator.xor,
}

SHIFT_OPERATIONS: dict[str, Callable[[BigInt, int], BigInt]] = {
    "shl": operator.lshift,
    "shr": operator.rshift,
}

UNARY_OPERATIONS: dict[str, Callable[[BigInt], BigInt]] = {
    "neg": operator.neg,
    "pos": operator.pos,
    "invert": operator.invert,
}
