"""Truncating division for the big-integer engine.

The quotient rounds toward zero and the remainder takes the sign of
the dividend, matching C/Java machine-integer semantics rather than
Python's floor division.

Multi-limb divisors go through Knuth's Algorithm D (TAOCP vol. 2,
4.3.1): both operands are scaled so the divisor's top limb is at least
BASE / 2, which keeps each trial quotient digit at most one too large
after the two-limb correction test.  A final add-back step fixes that
last unit.

Branch-IDs in trailing comments match ``spec.py`` ``BranchSpec`` ids.
"""
from __future__ import annotations

from errors import DivideByZero
from limbs import (
    BASE,
    LIMB_BITS,
    LIMB_MASK,
    Limbs,
    absolute,
    is_zero,
    remove_leading,
    small_mul,
    with_sign,
)


def div_with_rem(magnitude: Limbs, divisor: int) -> tuple[Limbs, int]:
    """Divide an unsigned magnitude by one limb; return (quotient, remainder)."""
    quotient = [0] * len(magnitude)
    rem = 0
    for i in range(len(magnitude) - 1, -1, -1):
        cur = (rem << LIMB_BITS) | magnitude[i]
        quotient[i], rem = divmod(cur, divisor)
    return remove_leading(quotient, False), rem


# ---------------------------------------------------------------------------
# Algorithm D steps
# ---------------------------------------------------------------------------

def _trial_digit(u: Limbs, v: Limbs, j: int) -> int:
    """Estimate quotient digit ``j`` from the top of the remainder window.

    Branches: DIV-TRIAL-CORRECT
    """
    n = len(v)
    top = u[j + n] * BASE + u[j + n - 1]
    qhat, rhat = divmod(top, v[n - 1])
    while qhat >= BASE or qhat * v[n - 2] > rhat * BASE + u[j + n - 2]:
        qhat -= 1                                                 # DIV-TRIAL-CORRECT
        rhat += v[n - 1]
        if rhat >= BASE:
            break
    return qhat


def _multiply_subtract(u: Limbs, v: Limbs, qhat: int, j: int) -> bool:
    """``u[j:j+n+1] -= qhat * v``; return True if the window went negative."""
    n = len(v)
    mul_carry = 0
    borrow = 0
    for i in range(n + 1):
        product = (v[i] if i < n else 0) * qhat + mul_carry
        mul_carry = product >> LIMB_BITS
        diff = u[j + i] - (product & LIMB_MASK) - borrow
        borrow = 1 if diff < 0 else 0
        u[j + i] = diff & LIMB_MASK
    return bool(borrow)


def _add_back(u: Limbs, v: Limbs, j: int) -> None:
    """``u[j:j+n+1] += v``, dropping the final carry."""
    n = len(v)
    carry = 0
    for i in range(n + 1):
        total = u[j + i] + (v[i] if i < n else 0) + carry
        u[j + i] = total & LIMB_MASK
        carry = total >> LIMB_BITS


def knuth_divmod(dividend: Limbs, divisor: Limbs) -> tuple[Limbs, Limbs]:
    """Algorithm D on unsigned magnitudes; ``len(divisor) >= 2``.

    Branches: DIV-ADD-BACK
    """
    n = len(divisor)
    m = len(dividend) - n
    scale = BASE // (divisor[-1] + 1)

    v = small_mul(divisor, scale)
    u = small_mul(dividend, scale)
    u.extend([0] * (m + n + 1 - len(u)))

    quotient = [0] * (m + 1)
    for j in range(m, -1, -1):
        qhat = _trial_digit(u, v, j)
        if _multiply_subtract(u, v, qhat, j):                     # DIV-ADD-BACK
            qhat -= 1
            _add_back(u, v, j)
        assert 0 <= qhat < BASE, f"quotient digit {qhat} out of range"
        quotient[j] = qhat

    remainder, leftover = div_with_rem(remove_leading(u[:n], False), scale)
    assert leftover == 0, "normalisation scale did not divide the remainder"
    return remove_leading(quotient, False), remainder


# ---------------------------------------------------------------------------
# Signed entry point
# ---------------------------------------------------------------------------

def truncated_divmod(
    a: Limbs,
    a_neg: bool,
    b: Limbs,
    b_neg: bool,
    operation: str = "division",
) -> tuple[tuple[Limbs, bool], tuple[Limbs, bool]]:
    """Signed quotient and remainder, both truncated toward zero.

    Branches: DIV-ZERO, DIV-BY-ONE, DIV-SHORT, DIV-SINGLE-LIMB, DIV-KNUTH
    """
    if is_zero(b, b_neg):                                         # DIV-ZERO
        raise DivideByZero(operation)
    if b == [1] and not b_neg:                                    # DIV-BY-ONE
        return (list(a), a_neg), ([], False)

    quot_neg = a_neg != b_neg
    u = absolute(a, a_neg)
    v = absolute(b, b_neg)

    if len(v) > len(u):                                           # DIV-SHORT
        return ([], False), (list(a), a_neg)

    if len(v) == 1:                                               # DIV-SINGLE-LIMB
        q, r = div_with_rem(u, v[0])
        rem: Limbs = [r] if r else []
    else:                                                         # DIV-KNUTH
        q, rem = knuth_divmod(u, v)

    return with_sign(q, quot_neg), with_sign(rem, a_neg)
