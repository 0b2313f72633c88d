"""Limb-level primitives for the big-integer engine.

A value is a pair ``(limbs, negative)``.  ``limbs`` is a list of 32-bit
unsigned words, least-significant first, holding the two's-complement
encoding of the value truncated to ``32 * len(limbs)`` bits.  Past the
last stored limb the encoding continues with the *complement word*:
all ones when ``negative`` is set, all zeros otherwise.

Every function here is pure: inputs are never mutated, results are
freshly built lists.  Callers commit a result only once it is complete.

Branch-IDs in trailing comments match ``spec.py`` ``BranchSpec`` ids.
"""
from __future__ import annotations

import operator
from typing import Callable, Iterator

LIMB_BITS = 32
BASE = 1 << LIMB_BITS
LIMB_MASK = BASE - 1
SIGN_BIT = 1 << (LIMB_BITS - 1)

Limbs = list[int]


def complement(negative: bool) -> int:
    """The implicit sign-extension word."""
    return LIMB_MASK if negative else 0


def remove_leading(limbs: Limbs, negative: bool) -> Limbs:
    """Strip redundant sign-extension limbs, in place.

    Branches: NORM-STRIP, NORM-KEEP-SIGN
    """
    fill = complement(negative)
    while limbs and limbs[-1] == fill:                            # NORM-STRIP
        limbs.pop()
    if not limbs and negative:                                    # NORM-KEEP-SIGN
        limbs.append(fill)
    return limbs


def is_zero(limbs: Limbs, negative: bool) -> bool:
    return not negative and not limbs


def paired(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> Iterator[tuple[int, int]]:
    """Yield limb pairs up to the longer operand, filling with complement words."""
    fill_a = complement(a_neg)
    fill_b = complement(b_neg)
    for i in range(max(len(a), len(b))):
        yield (
            a[i] if i < len(a) else fill_a,
            b[i] if i < len(b) else fill_b,
        )


# ---------------------------------------------------------------------------
# Conversion from / to host integers
# ---------------------------------------------------------------------------

def from_int(value: int) -> tuple[Limbs, bool]:
    magnitude = -value if value < 0 else value
    out: Limbs = []
    while magnitude:
        out.append(magnitude & LIMB_MASK)
        magnitude >>= LIMB_BITS
    if value < 0:
        return negate(out, False)
    return out, False


def to_int(limbs: Limbs, negative: bool) -> int:
    value = 0
    for limb in reversed(limbs):
        value = (value << LIMB_BITS) | limb
    if negative:
        value -= 1 << (LIMB_BITS * len(limbs))
    return value


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

def _identity(limb: int) -> int:
    return limb


def _not(limb: int) -> int:
    return ~limb & LIMB_MASK


def add_with(
    a: Limbs,
    a_neg: bool,
    b: Limbs,
    b_neg: bool,
    transform: Callable[[int], int],
    carry: int,
) -> tuple[Limbs, bool]:
    """Two's-complement ``a + transform(b) + carry`` over infinite limb streams.

    Branches: ADD-GROW, ADD-FIT
    """
    out: Limbs = []
    for x, y in paired(a, a_neg, b, b_neg):
        total = x + transform(y) + carry
        out.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS

    # One more step over the two complement words decides the sign of
    # everything past the last stored limb.
    fill = complement(a_neg)
    top = (fill + transform(complement(b_neg)) + carry) & LIMB_MASK
    negative = a_neg
    if top != fill:                                               # ADD-GROW
        out.append(top)
        negative = bool(top & SIGN_BIT)
    # (falls through) ADD-FIT
    return remove_leading(out, negative), negative


def add(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> tuple[Limbs, bool]:
    return add_with(a, a_neg, b, b_neg, _identity, 0)


def sub(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> tuple[Limbs, bool]:
    return add_with(a, a_neg, b, b_neg, _not, 1)


def add_small(a: Limbs, a_neg: bool, value: int) -> tuple[Limbs, bool]:
    """Add a host integer that fits a single signed limb."""
    small, small_neg = from_int(value)
    return add(a, a_neg, small, small_neg)


def invert(limbs: Limbs, negative: bool) -> tuple[Limbs, bool]:
    """Bitwise NOT: every limb complemented, sign flipped."""
    return remove_leading([_not(x) for x in limbs], not negative), not negative


def negate(limbs: Limbs, negative: bool) -> tuple[Limbs, bool]:
    if is_zero(limbs, negative):
        return [], False
    inverted, inv_neg = invert(limbs, negative)
    return add(inverted, inv_neg, [1], False)


def absolute(limbs: Limbs, negative: bool) -> Limbs:
    """Magnitude as an unsigned limb list (no sign-extension limb)."""
    if negative:
        limbs, _ = negate(limbs, negative)
    return list(limbs)


def with_sign(magnitude: Limbs, negative: bool) -> tuple[Limbs, bool]:
    """Inverse of ``absolute``: re-apply a sign to a magnitude."""
    magnitude = remove_leading(list(magnitude), False)
    if negative:
        return negate(magnitude, False)
    return magnitude, False


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def small_mul(magnitude: Limbs, factor: int) -> Limbs:
    """Multiply an unsigned magnitude by a single limb."""
    out: Limbs = []
    carry = 0
    for limb in magnitude:
        product = limb * factor + carry
        out.append(product & LIMB_MASK)
        carry = product >> LIMB_BITS
    if carry:
        out.append(carry)
    return remove_leading(out, False)


def mul_magnitudes(a: Limbs, b: Limbs) -> Limbs:
    """Schoolbook product of two unsigned magnitudes."""
    res = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        carry = 0
        for k, y in enumerate(b):
            product = x * y + res[i + k] + carry
            res[i + k] = product & LIMB_MASK
            carry = product >> LIMB_BITS
        res[i + len(b)] = carry
    return remove_leading(res, False)


def mul(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> tuple[Limbs, bool]:
    """Branches: MUL-SAME-SIGN, MUL-NEGATE"""
    product = mul_magnitudes(absolute(a, a_neg), absolute(b, b_neg))
    if a_neg != b_neg:                                            # MUL-NEGATE
        return negate(product, False)
    return product, False                                         # MUL-SAME-SIGN


# ---------------------------------------------------------------------------
# Bitwise operations
# ---------------------------------------------------------------------------

def bitwise(
    a: Limbs,
    a_neg: bool,
    b: Limbs,
    b_neg: bool,
    op: Callable[[int, int], int],
) -> tuple[Limbs, bool]:
    """Apply ``op`` limb-wise; the complement words combine the same way."""
    out = [op(x, y) & LIMB_MASK for x, y in paired(a, a_neg, b, b_neg)]
    negative = bool(op(int(a_neg), int(b_neg)))
    return remove_leading(out, negative), negative


def and_(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> tuple[Limbs, bool]:
    return bitwise(a, a_neg, b, b_neg, operator.and_)


def or_(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> tuple[Limbs, bool]:
    return bitwise(a, a_neg, b, b_neg, operator.or_)


def xor(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> tuple[Limbs, bool]:
    return bitwise(a, a_neg, b, b_neg, operator.xor)


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------

def shift_left(limbs: Limbs, negative: bool, count: int) -> tuple[Limbs, bool]:
    """Branches: SHL-NOOP, SHL-LIMBS"""
    if count == 0:                                                # SHL-NOOP
        return list(limbs), negative
    offset, rem = divmod(count, LIMB_BITS)                        # SHL-LIMBS
    out = [0] * offset
    carry = 0
    for limb in limbs:
        out.append(((limb << rem) | carry) & LIMB_MASK)
        carry = limb >> (LIMB_BITS - rem) if rem else 0
    out.append(((complement(negative) << rem) | carry) & LIMB_MASK)
    return remove_leading(out, negative), negative


def shift_right(limbs: Limbs, negative: bool, count: int) -> tuple[Limbs, bool]:
    """Arithmetic right shift (rounds toward negative infinity).

    Branches: SHR-NOOP, SHR-SATURATE, SHR-LIMBS
    """
    if count == 0:                                                # SHR-NOOP
        return list(limbs), negative
    if count >= LIMB_BITS * len(limbs):                           # SHR-SATURATE
        return remove_leading([], negative), negative

    offset, rem = divmod(count, LIMB_BITS)                        # SHR-LIMBS
    fill = complement(negative)
    src = limbs[offset:]
    out: Limbs = []
    for i, limb in enumerate(src):
        upper = src[i + 1] if i + 1 < len(src) else fill
        out.append(((limb >> rem) | (upper << (LIMB_BITS - rem))) & LIMB_MASK)
    return remove_leading(out, negative), negative


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def compare(a: Limbs, a_neg: bool, b: Limbs, b_neg: bool) -> int:
    """Three-way compare of two canonical values: -1, 0 or 1.

    Sign first, then limb count, then limbs from most significant.
    """
    if a_neg != b_neg:
        return -1 if a_neg else 1
    if len(a) != len(b):
        longer_is_bigger = not a_neg
        if len(a) > len(b):
            return 1 if longer_is_bigger else -1
        return -1 if longer_is_bigger else 1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1
    return 0
