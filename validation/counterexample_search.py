"""Counterexample search — discovers gaps in implementation or tests.

This module runs independently of the test suite.  It drives every
operation in ``spec.build_spec()`` over a grid of edge values (limb
boundaries, powers of ten, machine-width extremes) plus seeded random
operands, and searches for:

1. Postcondition violations: results that disagree with the host-int
   oracle or are not in canonical form.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import logging
import random
import sys
from dataclasses import dataclass, field

sys.path.insert(0, ".")

from bigint import BigInt
from spec import BigIntSpec, OperationSpec, build_spec, operation
from widths import STANDARD_TYPES

logger = logging.getLogger(__name__)

SHIFT_OPS = ("shl", "shr")
SHIFT_COUNTS = (0, 1, 5, 31, 32, 33, 63, 64, 65, 96, 200)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found — all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Input generation
# ---------------------------------------------------------------------------

def edge_values() -> list[int]:
    """Values that sit on limb, sign and decimal-block boundaries."""
    values = {0, 1, -1, 2, -2, 10**9, -(10**9), 10**9 - 1, 10**18 + 7}
    for k in (1, 2, 3):
        p = 1 << (32 * k)
        values.update({p - 1, p, p + 1, -(p - 1), -p, -(p + 1)})
        half = p >> 1
        values.update({half - 1, half, -half, -half - 1})
    for t in STANDARD_TYPES:
        values.update({t.lo, t.hi})
    return sorted(values)


def random_values(count: int, seed: int = 0, max_limbs: int = 6) -> list[int]:
    rng = random.Random(seed)
    out = []
    for _ in range(count):
        bits = rng.randint(1, 32 * max_limbs)
        value = rng.getrandbits(bits)
        out.append(-value if rng.random() < 0.5 else value)
    return out


def _second_operands(op_name: str, values: list[int]) -> list[int]:
    return list(SHIFT_COUNTS) if op_name in SHIFT_OPS else values


def _as_operand(op_name: str, value: int):
    # Shift counts stay host ints; everything else becomes a BigInt.
    return value if op_name in SHIFT_OPS else BigInt(value)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def _should_error(op_spec: OperationSpec, *inputs: int) -> bool:
    return any(ec.trigger(*inputs) for ec in op_spec.error_conditions)


def search_postcondition_violations(
    spec: BigIntSpec,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every input pair against the oracle."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        op = operation(op_name)
        if op_spec.arity == 1:
            cases = [(a,) for a in values]
        else:
            cases = [(a, b) for a in values for b in _second_operands(op_name, values)]

        for inputs in cases:
            checks += 1
            if op_spec.arity == 2 and _should_error(op_spec, *inputs):
                continue
            try:
                if op_spec.arity == 1:
                    result = op(BigInt(inputs[0]))
                else:
                    result = op(BigInt(inputs[0]), _as_operand(op_name, inputs[1]))
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=inputs,
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_spec.postconditions:
                if not post.check(*inputs, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=inputs,
                        expected=post.description,
                        actual=f"result={result!r} limbs={result.limbs}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    spec: BigIntSpec,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        if not op_spec.error_conditions:
            continue
        op = operation(op_name)
        seconds = [-1, -32] if op_name in SHIFT_OPS else [0]
        for a in values:
            for b in seconds:
                for ec in op_spec.error_conditions:
                    if not ec.trigger(a, b):
                        continue
                    checks += 1
                    try:
                        result = op(BigInt(a), _as_operand(op_name, b))
                        cxs.append(Counterexample(
                            category="missing_error",
                            operation=op_name,
                            inputs=(a, b),
                            expected=f"{ec.exception.__name__}",
                            actual=f"result={result!r}",
                            description=(
                                f"Error condition '{ec.name}' should have "
                                f"triggered but didn't"
                            ),
                        ))
                    except ec.exception:
                        pass  # expected
                    except Exception as e:
                        cxs.append(Counterexample(
                            category="wrong_error",
                            operation=op_name,
                            inputs=(a, b),
                            expected=f"{ec.exception.__name__}",
                            actual=f"{type(e).__name__}: {e}",
                            description=(
                                f"Wrong exception type for '{ec.name}'"
                            ),
                        ))

    return cxs, checks


def search_property_violations(
    spec: BigIntSpec,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over the value grid."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in spec.all_properties:
        if prop.arity == 2:
            cases = [(a, b) for a in values for b in _second_operands(op_name, values)]
        else:
            cases = [(a,) for a in values]

        for inputs in cases:
            checks += 1
            args = [BigInt(inputs[0])]
            if prop.arity == 2:
                args.append(_as_operand(op_name, inputs[1]))
            if not prop.check(*args):
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=inputs,
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(values: list[int]) -> SearchReport:
    """Run the complete counterexample search over one value grid."""
    spec = build_spec()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(spec, values)
        logger.debug("%s: %d checks, %d counterexamples",
                     search_fn.__name__, checks, len(cxs))
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run counterexample search over edge and random grids."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    grids = [
        ("edge values", edge_values()),
        ("random, seed 0", random_values(40, seed=0)),
        ("random, seed 1, wide", random_values(20, seed=1, max_limbs=40)),
    ]

    all_passed = True
    for name, values in grids:
        logger.info("grid %s: %d values", name, len(values))
        print(f"\n--- Grid: {name} ---")
        report = run_search(values)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL GRIDS PASSED")
    else:
        print("SOME GRIDS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
