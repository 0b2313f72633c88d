"""
Tests for the limb-level primitives.

These pin down the representation itself - normalisation, the virtual
complement limb, and the carry/bitwise/shift loops - independently of
the BigInt operator layer.
"""
from __future__ import annotations

import pytest

import limbs as lb
from limbs import LIMB_MASK


# ---------------------------------------------------------------------------
# Representation
# ---------------------------------------------------------------------------

class TestRepresentation:

    def test_zero_is_empty(self):
        assert lb.from_int(0) == ([], False)

    def test_minus_one_keeps_one_limb(self):
        assert lb.from_int(-1) == ([LIMB_MASK], True)

    def test_small_positive(self):
        assert lb.from_int(5) == ([5], False)

    def test_top_bit_set_stays_positive(self):
        # The sign flag is authoritative; the top limb may have bit 31 set.
        assert lb.from_int(2**31) == ([0x80000000], False)

    def test_int_min(self):
        assert lb.from_int(-(2**31)) == ([0x80000000], True)

    def test_minus_two_pow_32(self):
        # 0xFFFFFFFF_00000000 with the all-ones limb stripped
        assert lb.from_int(-(2**32)) == ([0], True)

    def test_two_limbs(self):
        assert lb.from_int(2**32 + 7) == ([7, 1], False)

    def test_to_int_round_trip(self, edge_value):
        assert lb.to_int(*lb.from_int(edge_value)) == edge_value

    def test_complement_words(self):
        assert lb.complement(False) == 0
        assert lb.complement(True) == LIMB_MASK


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

class TestRemoveLeading:

    def test_strips_trailing_zeros(self):
        assert lb.remove_leading([5, 0, 0], False) == [5]

    def test_strips_trailing_ones_when_negative(self):
        assert lb.remove_leading([5, LIMB_MASK, LIMB_MASK], True) == [5]

    def test_keeps_one_complement_limb(self):
        assert lb.remove_leading([LIMB_MASK, LIMB_MASK], True) == [LIMB_MASK]

    def test_empty_non_negative_stays_empty(self):
        assert lb.remove_leading([0, 0], False) == []

    def test_does_not_strip_other_word(self):
        assert lb.remove_leading([1, LIMB_MASK], False) == [1, LIMB_MASK]

    def test_mutates_in_place(self):
        limbs = [3, 0]
        result = lb.remove_leading(limbs, False)
        assert result is limbs
        assert limbs == [3]


# ---------------------------------------------------------------------------
# Carry loop
# ---------------------------------------------------------------------------

class TestAddWith:

    @pytest.mark.parametrize("a, b", [
        (1, 2),
        (LIMB_MASK, 1),
        (-1, 1),
        (-1, -1),
        (2**31 - 1, 1),
        (-(2**31), -1),
        (2**64 - 1, 1),
        (-(2**64), 2**64),
        (2**32, -(2**32) - 1),
    ])
    def test_add_matches_host(self, a, b):
        result = lb.add(*lb.from_int(a), *lb.from_int(b))
        assert lb.to_int(*result) == a + b

    @pytest.mark.parametrize("a, b", [
        (0, 1),
        (1, 2),
        (-5, 3),
        (2**32, 1),
        (0, -(2**32)),
        (-(2**31), 2**31),
    ])
    def test_sub_matches_host(self, a, b):
        result = lb.sub(*lb.from_int(a), *lb.from_int(b))
        assert lb.to_int(*result) == a - b

    def test_positive_overflow_grows_a_limb(self):
        limbs, negative = lb.add([LIMB_MASK], False, [1], False)
        assert (limbs, negative) == ([0, 1], False)

    def test_negative_sum_stays_one_limb(self):
        # -(2**31) + -(2**31) == -(2**32)
        a = lb.from_int(-(2**31))
        assert lb.add(*a, *a) == ([0], True)

    def test_sign_change_without_classic_carry(self):
        # 2**31 - 1 + 1 is positive even though bit 31 of the limb flips.
        assert lb.add([0x7FFFFFFF], False, [1], False) == ([0x80000000], False)

    def test_add_small(self):
        assert lb.to_int(*lb.add_small([], False, -1)) == -1
        assert lb.to_int(*lb.add_small([LIMB_MASK], False, 1)) == 2**32

    def test_transform_is_applied_to_complement(self):
        # a - (-1): the subtrahend's complement word is all ones, its
        # inverse is zero, and the +1 carry finishes the negation.
        assert lb.to_int(*lb.sub([], False, [LIMB_MASK], True)) == 1


# ---------------------------------------------------------------------------
# Negation / inversion
# ---------------------------------------------------------------------------

class TestNegate:

    def test_negate_zero(self):
        assert lb.negate([], False) == ([], False)

    def test_negate_int_min(self):
        limbs, negative = lb.negate(*lb.from_int(-(2**31)))
        assert (limbs, negative) == ([0x80000000], False)

    def test_negate_round_trip(self, edge_value):
        once = lb.negate(*lb.from_int(edge_value))
        assert lb.to_int(*once) == -edge_value
        assert lb.to_int(*lb.negate(*once)) == edge_value

    def test_invert_zero_is_minus_one(self):
        assert lb.invert([], False) == ([LIMB_MASK], True)

    def test_invert_minus_one_is_zero(self):
        assert lb.invert([LIMB_MASK], True) == ([], False)

    def test_absolute(self):
        assert lb.absolute(*lb.from_int(-(2**32))) == [0, 1]
        assert lb.absolute(*lb.from_int(7)) == [7]

    def test_with_sign(self):
        assert lb.with_sign([0, 1], True) == lb.from_int(-(2**32))
        assert lb.with_sign([0, 0], False) == ([], False)


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

class TestMultiplication:

    def test_small_mul(self):
        assert lb.small_mul([LIMB_MASK], 2) == [LIMB_MASK - 1, 1]

    def test_small_mul_by_zero(self):
        assert lb.small_mul([1, 2, 3], 0) == []

    def test_mul_magnitudes(self):
        assert lb.mul_magnitudes([LIMB_MASK], [LIMB_MASK]) == [1, LIMB_MASK - 1]

    @pytest.mark.parametrize("a, b", [
        (0, 5), (7, -3), (-7, -3), (2**32, 2**32), (-(2**31), 2**31),
        (2**64 - 1, -(2**64) + 1),
    ])
    def test_mul_matches_host(self, a, b):
        assert lb.to_int(*lb.mul(*lb.from_int(a), *lb.from_int(b))) == a * b


# ---------------------------------------------------------------------------
# Bitwise
# ---------------------------------------------------------------------------

class TestBitwise:

    @pytest.mark.parametrize("a, b", [
        (0x55, 0xAA), (0x55, 0xCC - 256), (-1, 0xAA),
        (-(2**64 - 1), 2**67), (-(2**65), 2**67),
        (-987654321, -18765432123456),
    ])
    def test_ops_match_host(self, a, b):
        x, y = lb.from_int(a), lb.from_int(b)
        assert lb.to_int(*lb.and_(*x, *y)) == a & b
        assert lb.to_int(*lb.or_(*x, *y)) == a | b
        assert lb.to_int(*lb.xor(*x, *y)) == a ^ b

    def test_sign_follows_operator(self):
        _, negative = lb.and_([LIMB_MASK], True, [1], False)
        assert negative is False
        _, negative = lb.or_([LIMB_MASK], True, [1], False)
        assert negative is True

    def test_paired_fills_shorter_operand(self):
        pairs = list(lb.paired([1, 2], False, [9], True))
        assert pairs == [(1, 9), (2, LIMB_MASK)]


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------

class TestShifts:

    @pytest.mark.parametrize("k", [0, 1, 5, 31, 32, 33, 64, 100])
    def test_shift_left(self, edge_value, k):
        result = lb.shift_left(*lb.from_int(edge_value), k)
        assert lb.to_int(*result) == edge_value << k

    @pytest.mark.parametrize("k", [0, 1, 5, 31, 32, 33, 64, 100])
    def test_shift_right(self, edge_value, k):
        result = lb.shift_right(*lb.from_int(edge_value), k)
        assert lb.to_int(*result) == edge_value >> k

    def test_shift_right_saturates_positive(self):
        assert lb.shift_right([5, 7], False, 64) == ([], False)

    def test_shift_right_saturates_negative(self):
        assert lb.shift_right([5, 7], True, 1000) == ([LIMB_MASK], True)

    def test_shift_by_zero_copies(self):
        limbs = [1, 2]
        result, _ = lb.shift_left(limbs, False, 0)
        assert result == limbs and result is not limbs


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

class TestCompare:

    def test_total_order_over_edges(self, limb_edges):
        for a in limb_edges:
            for b in limb_edges:
                got = lb.compare(*lb.from_int(a), *lb.from_int(b))
                assert got == (a > b) - (a < b), (a, b)
