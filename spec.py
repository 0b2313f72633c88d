"""Formal contract for the big-integer engine.

Each operation is specified as a collection of:
- preconditions: what inputs must satisfy before the operation
- postconditions: what the output must satisfy, checked against the
  host ``int`` as an oracle
- error conditions: what inputs must cause specific exceptions
- algebraic properties: relationships between operations that must hold

The contract is machine-readable.  Validation tools iterate over it to
auto-generate conformance tests and search for counterexamples.

Layers
------
OperationSpec   per-operation contract (pre/post/error/properties)
BranchSpec      every decision point that white-box tests must cover
BigIntSpec      the full contract
build_spec()    constructs the BigIntSpec
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bigint import BigInt, BINARY_OPERATIONS, SHIFT_OPERATIONS, UNARY_OPERATIONS
from errors import DivideByZero


# ---------------------------------------------------------------------------
# Spec building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free input values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    arity: int          # 1 for unary operators, 2 otherwise
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class BigIntSpec:
    """Complete contract for the engine."""

    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    @property
    def branch_ids(self) -> list[str]:
        return [b.id for b in self.branches]


# ---------------------------------------------------------------------------
# Oracle helpers used inside the contract predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  C, Java and Rust
    truncate toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching ``truncdiv``: same sign as ``a`` or zero."""
    return a - truncdiv(a, b) * b


def operation(name: str) -> Callable:
    """Look up the BigInt operator implementing ``name``."""
    for table in (BINARY_OPERATIONS, SHIFT_OPERATIONS, UNARY_OPERATIONS):
        if name in table:
            return table[name]
    raise KeyError(name)


ORACLES: dict[str, Callable[..., int]] = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": truncdiv,
    "mod": truncmod,
    "and": lambda a, b: a & b,
    "or": lambda a, b: a | b,
    "xor": lambda a, b: a ^ b,
    "shl": lambda a, k: a << k,
    "shr": lambda a, k: a >> k,
    "neg": lambda a: -a,
    "invert": lambda a: ~a,
}


# ---------------------------------------------------------------------------
# Spec builder
# ---------------------------------------------------------------------------

def _matches_oracle(name: str) -> Postcondition:
    oracle = ORACLES[name]
    return Postcondition(
        "result_correct",
        f"Result equals host-int {name}",
        lambda *args: int(args[-1]) == oracle(*args[:-1]),
    )


_canonical = Postcondition(
    "result_canonical",
    "Result has no redundant sign-extension limbs",
    lambda *args: _is_canonical(args[-1]),
)


def _is_canonical(value: BigInt) -> bool:
    limbs = value.limbs
    fill = 0xFFFFFFFF if value.is_negative else 0
    if not limbs:
        return not value.is_negative
    if limbs == (fill,):
        return True
    return limbs[-1] != fill


def _binary(name: str, properties: list[AlgebraicProperty],
            errors: list[ErrorCondition] | None = None) -> OperationSpec:
    return OperationSpec(
        name=name,
        arity=2,
        preconditions=[],
        postconditions=[_matches_oracle(name), _canonical],
        error_conditions=errors or [],
        properties=properties,
    )


def build_spec() -> BigIntSpec:
    """Construct the full engine contract."""

    divide_by_zero = ErrorCondition(
        "divide_by_zero",
        "DivideByZero when the divisor is zero",
        lambda a, b: b == 0,
        DivideByZero,
    )

    # ------------------------------------------------------------------ add
    add_spec = _binary("add", [
        AlgebraicProperty(
            "commutativity", "a + b == b + a", 2,
            lambda a, b: a + b == b + a,
        ),
        AlgebraicProperty(
            "identity", "a + 0 == a", 1,
            lambda a: a + BigInt(0) == a,
        ),
        AlgebraicProperty(
            "inverse", "a + (-a) == 0", 1,
            lambda a: a + (-a) == 0,
        ),
    ])

    # ------------------------------------------------------------------ sub
    sub_spec = _binary("sub", [
        AlgebraicProperty(
            "self_inverse", "a - a == 0", 1,
            lambda a: a - BigInt(a) == 0,
        ),
        AlgebraicProperty(
            "add_sub_inverse", "(a + b) - b == a", 2,
            lambda a, b: (a + b) - b == a,
        ),
    ])

    # ------------------------------------------------------------------ mul
    mul_spec = _binary("mul", [
        AlgebraicProperty(
            "commutativity", "a * b == b * a", 2,
            lambda a, b: a * b == b * a,
        ),
        AlgebraicProperty(
            "identity", "a * 1 == a", 1,
            lambda a: a * 1 == a,
        ),
        AlgebraicProperty(
            "zero", "a * 0 == 0", 1,
            lambda a: a * 0 == 0,
        ),
    ])

    # ------------------------------------------------------------------ div
    div_spec = _binary(
        "div",
        [
            AlgebraicProperty(
                "division_law", "(a / b) * b + a % b == a for b != 0", 2,
                lambda a, b: b == 0 or (a / b) * b + a % b == a,
            ),
            AlgebraicProperty(
                "identity", "a / 1 == a", 1,
                lambda a: a / 1 == a,
            ),
            AlgebraicProperty(
                "self", "a / a == 1 for a != 0", 1,
                lambda a: a == 0 or a / a == 1,
            ),
            AlgebraicProperty(
                "truncation", "|a / b| <= |a| for b != 0", 2,
                lambda a, b: b == 0 or abs(a / b) <= abs(a),
            ),
        ],
        errors=[divide_by_zero],
    )

    # ------------------------------------------------------------------ mod
    mod_spec = _binary(
        "mod",
        [
            AlgebraicProperty(
                "remainder_sign", "a % b is zero or has the sign of a", 2,
                lambda a, b: (
                    b == 0 or a % b == 0
                    or (a % b).is_negative == a.is_negative
                ),
            ),
            AlgebraicProperty(
                "remainder_bound", "|a % b| < |b| for b != 0", 2,
                lambda a, b: b == 0 or abs(a % b) < abs(b),
            ),
        ],
        errors=[divide_by_zero],
    )

    # ------------------------------------------------------------ bitwise
    and_spec = _binary("and", [
        AlgebraicProperty(
            "commutativity", "a & b == b & a", 2,
            lambda a, b: a & b == b & a,
        ),
        AlgebraicProperty(
            "all_ones", "a & -1 == a", 1,
            lambda a: a & -1 == a,
        ),
    ])
    or_spec = _binary("or", [
        AlgebraicProperty(
            "commutativity", "a | b == b | a", 2,
            lambda a, b: a | b == b | a,
        ),
        AlgebraicProperty(
            "zero", "a | 0 == a", 1,
            lambda a: a | 0 == a,
        ),
    ])
    xor_spec = _binary("xor", [
        AlgebraicProperty(
            "self_cancel", "a ^ a == 0", 1,
            lambda a: a ^ BigInt(a) == 0,
        ),
        AlgebraicProperty(
            "involution", "(a ^ b) ^ b == a", 2,
            lambda a, b: (a ^ b) ^ b == a,
        ),
    ])

    # ------------------------------------------------------------- shifts
    non_negative_count = Precondition(
        "non_negative_count",
        "Shift count is a non-negative int",
        lambda a, k: k >= 0,
    )
    negative_count = ErrorCondition(
        "negative_count",
        "ValueError when the shift count is negative",
        lambda a, k: k < 0,
        ValueError,
    )
    shl_spec = OperationSpec(
        name="shl",
        arity=2,
        preconditions=[non_negative_count],
        postconditions=[_matches_oracle("shl"), _canonical],
        error_conditions=[negative_count],
        properties=[
            AlgebraicProperty(
                "power_of_two", "a << k == a * 2**k", 2,
                lambda a, k: a << k == a * (BigInt(1) << k),
            ),
        ],
    )
    shr_spec = OperationSpec(
        name="shr",
        arity=2,
        preconditions=[non_negative_count],
        postconditions=[_matches_oracle("shr"), _canonical],
        error_conditions=[negative_count],
        properties=[
            AlgebraicProperty(
                "floor_division", "a >> k == floor(a / 2**k)", 2,
                lambda a, k: int(a >> k) == int(a) // (1 << k),
            ),
            AlgebraicProperty(
                "round_trip", "(a << k) >> k == a", 2,
                lambda a, k: (a << k) >> k == a,
            ),
        ],
    )

    # -------------------------------------------------------------- unary
    def _unary(name: str, properties: list[AlgebraicProperty]) -> OperationSpec:
        return OperationSpec(
            name=name,
            arity=1,
            preconditions=[],
            postconditions=[_matches_oracle(name), _canonical],
            error_conditions=[],
            properties=properties,
        )

    neg_spec = _unary("neg", [
        AlgebraicProperty(
            "involution", "-(-a) == a", 1,
            lambda a: -(-a) == a,
        ),
        AlgebraicProperty(
            "text_round_trip", "BigInt(str(-a)) == -a", 1,
            lambda a: BigInt(str(-a)) == -a,
        ),
    ])
    invert_spec = _unary("invert", [
        AlgebraicProperty(
            "complement_law", "~a == -a - 1", 1,
            lambda a: ~a == -a - 1,
        ),
    ])

    # -------------------------------------------------------------- branches
    branches = [
        # Normalisation (limbs.remove_leading)
        BranchSpec("NORM-STRIP", "Trailing complement limbs removed",
                   "limbs[-1] == complement", "normalize"),
        BranchSpec("NORM-KEEP-SIGN", "Negative value keeps one complement limb",
                   "limbs empty and negative", "normalize"),
        # Addition
        BranchSpec("ADD-GROW", "Result needs a new top limb",
                   "virtual top limb != complement(a)", "add"),
        BranchSpec("ADD-FIT", "Result fits existing limb count",
                   "virtual top limb == complement(a)", "add"),
        # Multiplication
        BranchSpec("MUL-SAME-SIGN", "Operands share a sign",
                   "a_neg == b_neg", "mul"),
        BranchSpec("MUL-NEGATE", "Product negated at the end",
                   "a_neg != b_neg", "mul"),
        # Division
        BranchSpec("DIV-ZERO", "DivideByZero raised",
                   "b == 0", "div"),
        BranchSpec("DIV-BY-ONE", "Divisor is one",
                   "b == 1", "div"),
        BranchSpec("DIV-SELF", "Divisor is the dividend object",
                   "b is a", "div"),
        BranchSpec("DIV-SHORT", "Divisor magnitude longer than dividend",
                   "len(|b|) > len(|a|)", "div"),
        BranchSpec("DIV-SINGLE-LIMB", "One-pass single-limb division",
                   "len(|b|) == 1", "div"),
        BranchSpec("DIV-KNUTH", "Algorithm D",
                   "len(|b|) >= 2", "div"),
        BranchSpec("DIV-TRIAL-CORRECT", "Trial digit decremented by the v[n-2] test",
                   "qhat >= BASE or qhat*v[n-2] > rhat*BASE + u[j+n-2]", "div"),
        BranchSpec("DIV-ADD-BACK", "Multiply-subtract borrowed; divisor added back",
                   "u window < qhat * v", "div"),
        # Shifts
        BranchSpec("SHL-NOOP", "Left shift by zero", "k == 0", "shl"),
        BranchSpec("SHL-LIMBS", "Left shift across limbs", "k > 0", "shl"),
        BranchSpec("SHR-NOOP", "Right shift by zero", "k == 0", "shr"),
        BranchSpec("SHR-SATURATE", "Shift past every stored bit",
                   "k >= 32 * len(limbs)", "shr"),
        BranchSpec("SHR-LIMBS", "Right shift across limbs",
                   "0 < k < 32 * len(limbs)", "shr"),
        # Decimal codec
        BranchSpec("PARSE-EMPTY", "Empty string rejected", "text == ''", "parse"),
        BranchSpec("PARSE-SIGN-ONLY", "Lone '-' rejected", "text == '-'", "parse"),
        BranchSpec("PARSE-NON-DIGIT", "Non-digit rejected",
                   "ch not in '0123456789'", "parse"),
        BranchSpec("PARSE-FULL-BLOCK", "Nine-digit block",
                   "len(block) == 9", "parse"),
        BranchSpec("PARSE-SHORT-BLOCK", "Final short block",
                   "len(block) < 9", "parse"),
        BranchSpec("PRINT-ZERO", "Zero prints as '0'", "limbs == []", "print"),
        BranchSpec("PRINT-PAD", "Lower groups padded to nine digits",
                   "more than one group", "print"),
    ]

    return BigIntSpec(
        operations={
            "add": add_spec,
            "sub": sub_spec,
            "mul": mul_spec,
            "div": div_spec,
            "mod": mod_spec,
            "and": and_spec,
            "or": or_spec,
            "xor": xor_spec,
            "shl": shl_spec,
            "shr": shr_spec,
            "neg": neg_spec,
            "invert": invert_spec,
        },
        branches=branches,
    )
