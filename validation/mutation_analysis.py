"""Mutation testing analysis.

Reads ``mutmut results`` for the engine modules and groups the mutants
that no test killed by module and function, so each survivor points at
the code whose behaviour is under-tested.

Workflow::

    pip install -e ".[dev]"
    mutmut run                      # config in [tool.mutmut], pyproject.toml
    python -m validation.mutation_analysis

``mutmut results --all true`` prints one line per mutant::

    limbs.x_add_with__mutmut_7: killed
    bigint.xǁBigIntǁ__iadd____mutmut_1: survived

The goal: every mutant should be *killed* by at least one test.
"""
from __future__ import annotations

import logging
import re
import subprocess
import sys
from collections import Counter
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ENGINE_MODULES = ("limbs.py", "division.py", "codec.py", "bigint.py")

# "<module>.x_<function>__mutmut_<n>" or "<module>.xǁ<Class>ǁ<method>__mutmut_<n>"
_RESULT_LINE = re.compile(r"^\s*(?P<name>\S+__mutmut_\d+):\s*(?P<status>.+?)\s*$")
_MANGLED = re.compile(
    r"^(?P<module>[\w.]+?)\.x(?:ǁ(?P<cls>\w+)ǁ|_)(?P<func>\w+?)__mutmut_\d+$"
)

LIVE_STATUSES = ("survived", "no tests", "suspicious", "timeout")


@dataclass
class Mutant:
    name: str
    status: str
    module: str
    function: str


@dataclass
class MutationReport:
    mutants: list[Mutant] = field(default_factory=list)

    @property
    def counts(self) -> Counter:
        return Counter(m.status for m in self.mutants)

    @property
    def total(self) -> int:
        return len(self.mutants)

    @property
    def killed(self) -> int:
        return self.counts["killed"]

    @property
    def survivors(self) -> list[Mutant]:
        return [m for m in self.mutants if m.status in LIVE_STATUSES]

    @property
    def score(self) -> float:
        checked = self.total - self.counts["skipped"] - self.counts["not checked"]
        if checked <= 0:
            return 0.0
        return self.killed / checked

    def survivors_by_function(self) -> dict[str, list[Mutant]]:
        grouped: dict[str, list[Mutant]] = {}
        for m in self.survivors:
            grouped.setdefault(f"{m.module}:{m.function}", []).append(m)
        return grouped

    def summary(self) -> str:
        lines = ["Mutation Testing Report", "=" * 40]
        lines.append(f"Total mutants:   {self.total}")
        for status, count in sorted(self.counts.items()):
            lines.append(f"  {status + ':':<15}{count}")
        lines.append(f"Mutation score:  {self.score:.1%}")
        grouped = self.survivors_by_function()
        if grouped:
            lines.append("")
            lines.append("Live mutants by function:")
            for where, mutants in sorted(grouped.items()):
                lines.append(f"  {where}  ({len(mutants)})")
                for m in mutants:
                    lines.append(f"      {m.name}  [{m.status}]")
        elif self.total:
            lines.append("\nEvery checked mutant was killed.")
        return "\n".join(lines)


def split_mutant_name(name: str) -> tuple[str, str]:
    """Return ``(module, function)`` for a mutmut 3 mutant name."""
    match = _MANGLED.match(name)
    if match is None:
        return name.split(".", 1)[0], "?"
    func = match.group("func")
    if match.group("cls"):
        func = f"{match.group('cls')}.{func}"
    return match.group("module"), func


def parse_results_output(stdout: str, report: MutationReport) -> None:
    """Add every ``<mutant>: <status>`` line of ``mutmut results`` to ``report``."""
    for line in stdout.splitlines():
        match = _RESULT_LINE.match(line)
        if match is None:
            continue
        name = match.group("name")
        module, function = split_mutant_name(name)
        report.mutants.append(Mutant(
            name=name,
            status=match.group("status"),
            module=module,
            function=function,
        ))


def parse_mutmut_results() -> MutationReport:
    report = MutationReport()
    try:
        result = subprocess.run(
            ["mutmut", "results", "--all", "true"],
            capture_output=True, text=True, cwd=".",
        )
    except FileNotFoundError:
        print("mutmut not installed.  Install with: pip install -e \".[dev]\"")
        sys.exit(1)
    if result.returncode != 0:
        logger.warning("mutmut results failed: %s", result.stderr.strip())
    parse_results_output(result.stdout, report)
    return report


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    report = parse_mutmut_results()
    print(report.summary())

    if report.total == 0:
        print("\nNo mutmut results found.  Run `mutmut run` first; it mutates")
        print("  " + ", ".join(ENGINE_MODULES))
        sys.exit(1)
    if report.survivors:
        print(f"\nAdd tests for the {len(report.survivors)} live mutant(s).")
        sys.exit(1)


if __name__ == "__main__":
    main()
