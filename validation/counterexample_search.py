"""Counterexample search: runs every contract over its whole sample domain.

This module runs independently of the test suite.  For each operation
contract of a ``ContractSuite`` it looks for:

1. Postcondition violations: inputs where the result breaks a declared
   postcondition, or where the call raises although no error is expected.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import logging
import sys
from collections import Counter
from dataclasses import dataclass, field

from contracts import ContractSuite, build_complex_contracts, build_int_contracts
from errors import NumericError

logger = logging.getLogger(__name__)


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

    def describe(self, suite: str) -> list[str]:
        args = ", ".join(repr(x) for x in self.inputs)
        return [
            f"{suite}.{self.operation}({args}) [{self.category}]",
            f"    expected: {self.expected}",
            f"    actual:   {self.actual}",
            f"    {self.description}",
        ]


@dataclass
class SearchReport:
    suite: str
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks: Counter = field(default_factory=Counter)

    @property
    def checks_run(self) -> int:
        return sum(self.checks.values())

    @property
    def passed(self) -> bool:
        return not self.counterexamples

    def failures_by_operation(self) -> Counter:
        return Counter(cx.operation for cx in self.counterexamples)

    def summary(self) -> str:
        failures = self.failures_by_operation()
        width = max((len(name) for name in self.checks), default=0)
        lines = [
            f"{self.suite}: {self.checks_run} checks over "
            f"{len(self.checks)} operations, "
            f"{len(self.counterexamples)} counterexamples",
        ]
        for name in sorted(self.checks):
            mark = "FAIL" if failures[name] else "ok"
            lines.append(
                f"  {name:<{width}}  {self.checks[name]:>7} checks  "
                f"{failures[name]:>4} failing  {mark}"
            )
        for cx in self.counterexamples:
            lines.extend(cx.describe(self.suite))
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    suite: ContractSuite,
) -> tuple[list[Counterexample], Counter]:
    """Verify postconditions for every input that is not expected to raise."""
    cxs: list[Counterexample] = []
    checks: Counter = Counter()

    for op_name, op in suite.operations.items():
        for inputs in op.inputs():
            if op.expected_error(*inputs) is not None:
                continue
            checks[op_name] += 1
            try:
                result = op.invoke(*inputs)
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

            for post in op.postconditions:
                if not post.check(*inputs, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=inputs,
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    suite: ContractSuite,
) -> tuple[list[Counterexample], Counter]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks: Counter = Counter()

    for op_name, op in suite.operations.items():
        for inputs in op.inputs():
            ec = op.expected_error(*inputs)
            if ec is None:
                continue
            checks[op_name] += 1
            try:
                result = op.invoke(*inputs)
                cxs.append(Counterexample(
                    category="missing_error",
                    operation=op_name,
                    inputs=inputs,
                    expected=ec.exception.__name__,
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
                    inputs=inputs,
                    expected=ec.exception.__name__,
                    actual=f"{type(e).__name__}: {e}",
                    description=f"Wrong exception type for '{ec.name}'",
                ))

    return cxs, checks


def search_property_violations(
    suite: ContractSuite,
) -> tuple[list[Counterexample], Counter]:
    """Exhaustively check every algebraic property over its domain."""
    cxs: list[Counterexample] = []
    checks: Counter = Counter()

    for op_name, op in suite.operations.items():
        for prop in op.properties:
            for inputs in op.inputs():
                checks[op_name] += 1
                try:
                    holds = prop.check(*inputs)
                except NumericError:
                    # Inputs outside the property's domain, e.g. a zero divisor.
                    continue
                if not holds:
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

def run_search(suite: ContractSuite) -> SearchReport:
    """Run the complete counterexample search for one suite."""
    report = SearchReport(suite=suite.name)

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(suite)
        logger.info("%s/%s: %d checks, %d counterexamples",
                    suite.name, search_fn.__name__, sum(checks.values()), len(cxs))
        report.counterexamples.extend(cxs)
        report.checks.update(checks)

    return report


def main() -> None:
    """Run the counterexample search for both value types."""
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    reports = [run_search(suite) for suite in (build_int_contracts(), build_complex_contracts())]
    for report in reports:
        print(report.summary())
        print()

    failing = [r.suite for r in reports if not r.passed]
    if failing:
        print(f"Counterexamples found in: {', '.join(failing)}")
        sys.exit(1)
    print("ALL SUITES PASSED")


if __name__ == "__main__":
    main()
