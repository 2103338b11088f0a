"""Counterexample search: discovers gaps in the engine or its tests.

This module runs independently of the test suite.  It exhaustively
searches a small domain for:

1. Postcondition violations: inputs where the engine disagrees with the
   oracle in ``spec.build_spec``.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field

sys.path.insert(0, ".")

from bigint import BigInt
from spec import BigIntSpec, Domain, TINY, build_spec

# Expected exceptions while probing properties on arbitrary inputs
_PROBE_ERRORS = (ZeroDivisionError, OverflowError, ValueError)


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
            lines.append("\nNo counterexamples found.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    spec: BigIntSpec,
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every input pair in the domain."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        for a in spec.domain.all_values():
            for b in spec.domain.all_values():
                checks += 1
                if any(ec.trigger(a, b) for ec in op_spec.error_conditions):
                    continue

                try:
                    result = op_spec.apply(a, b)
                except Exception as e:
                    cxs.append(Counterexample(
                        category="unexpected_error",
                        operation=op_name,
                        inputs=(a, b),
                        expected="no error",
                        actual=f"{type(e).__name__}: {e}",
                        description="Operation raised an unexpected exception",
                    ))
                    continue

                for post in op_spec.postconditions:
                    if not post.check(a, b, result):
                        cxs.append(Counterexample(
                            category="postcondition_violation",
                            operation=op_name,
                            inputs=(a, b),
                            expected=post.description,
                            actual=f"result={result}",
                            description=f"Postcondition '{post.name}' violated",
                        ))

    return cxs, checks


def search_error_condition_violations(
    spec: BigIntSpec,
) -> tuple[list[Counterexample], int]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        for a in spec.domain.all_values():
            for b in spec.domain.all_values():
                for ec in op_spec.error_conditions:
                    if not ec.trigger(a, b):
                        continue
                    checks += 1
                    try:
                        result = op_spec.apply(a, b)
                        cxs.append(Counterexample(
                            category="missing_error",
                            operation=op_name,
                            inputs=(a, b),
                            expected=ec.exception.__name__,
                            actual=f"result={result}",
                            description=(
                                f"Error condition '{ec.name}' should have "
                                f"triggered but didn't"
                            ),
                        ))
                    except ec.exception:
                        pass
                    except Exception as e:
                        cxs.append(Counterexample(
                            category="wrong_error",
                            operation=op_name,
                            inputs=(a, b),
                            expected=ec.exception.__name__,
                            actual=f"{type(e).__name__}: {e}",
                            description=f"Wrong exception type for '{ec.name}'",
                        ))

    return cxs, checks


def search_property_violations(
    spec: BigIntSpec,
) -> tuple[list[Counterexample], int]:
    """Exhaustively check every algebraic property."""
    cxs: list[Counterexample] = []
    checks = 0
    values = [BigInt(v) for v in spec.domain.all_values()]

    for op_name, prop in spec.all_properties:
        if prop.arity == 2:
            combos = [(a, b) for a in values for b in values]
        else:
            combos = [(a,) for a in values]
        for combo in combos:
            checks += 1
            try:
                ok = prop.check(*combo)
            except _PROBE_ERRORS:
                continue
            if not ok:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=tuple(int(v) for v in combo),
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(domain: Domain) -> SearchReport:
    """Run complete counterexample search over one domain."""
    spec = build_spec(domain)
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(spec)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run counterexample search across several domains."""
    configs = [
        ("TINY      [-8, 7]", TINY),
        ("UNSIGNED  [0, 15]", Domain(0, 15)),
        ("MEDIUM    [-32, 31]", Domain(-32, 31)),
    ]

    all_passed = True
    for name, domain in configs:
        print(f"\n--- Domain: {name} ---")
        report = run_search(domain)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL DOMAINS PASSED")
    else:
        print("SOME DOMAINS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
