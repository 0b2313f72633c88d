"""Decimal text codec.

Text is converted nine digits at a time: 10**9 is the largest power of
ten that fits a 32-bit limb, so each block costs one single-limb
multiply (parsing) or one single-limb divide (printing).

Branches: PARSE-EMPTY, PARSE-SIGN-ONLY, PARSE-NON-DIGIT,
          PARSE-FULL-BLOCK, PARSE-SHORT-BLOCK, PRINT-ZERO, PRINT-PAD
"""
from __future__ import annotations

from division import div_with_rem
from errors import InvalidFormat
from limbs import Limbs, absolute, add, small_mul, with_sign

DIGITS_PER_BLOCK = 9
BLOCK_BASE = 10 ** DIGITS_PER_BLOCK


def _block_value(text: str, block: str) -> int:
    value = 0
    for ch in block:
        if not "0" <= ch <= "9":                                  # PARSE-NON-DIGIT
            raise InvalidFormat(text, f"unexpected character {ch!r}")
        value = value * 10 + (ord(ch) - ord("0"))
    return value


def parse(text: str) -> tuple[Limbs, bool]:
    """Parse ``-?[0-9]+`` into a canonical ``(limbs, negative)`` pair."""
    if not text:                                                  # PARSE-EMPTY
        raise InvalidFormat(text, "empty string")
    negative = text[0] == "-"
    digits = text[1:] if negative else text
    if not digits:                                                # PARSE-SIGN-ONLY
        raise InvalidFormat(text, "sign without digits")

    magnitude: Limbs = []
    for start in range(0, len(digits), DIGITS_PER_BLOCK):
        block = digits[start:start + DIGITS_PER_BLOCK]
        value = _block_value(text, block)
        if len(block) == DIGITS_PER_BLOCK:                        # PARSE-FULL-BLOCK
            magnitude = small_mul(magnitude, BLOCK_BASE)
        else:                                                     # PARSE-SHORT-BLOCK
            magnitude = small_mul(magnitude, 10 ** len(block))
        magnitude, _ = add(magnitude, False, [value] if value else [], False)

    return with_sign(magnitude, negative)


def to_string(limbs: Limbs, negative: bool) -> str:
    """Decimal text; zero prints as ``"0"`` without a sign."""
    if not limbs:                                                 # PRINT-ZERO
        return "0"
    magnitude = absolute(limbs, negative)
    groups: list[int] = []
    while magnitude:
        magnitude, rem = div_with_rem(magnitude, BLOCK_BASE)
        groups.append(rem)

    # Every group but the most significant keeps its leading zeros.
    head = str(groups[-1])
    tail = "".join(f"{g:09d}" for g in reversed(groups[:-1]))    # PRINT-PAD
    return ("-" if negative else "") + head + tail
