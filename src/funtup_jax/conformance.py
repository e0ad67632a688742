"""Per-contract pass rates for the combinator test suites."""

from __future__ import annotations

import io
import json
import unittest
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Final

# key -> (title, test files covering that contract)
CONTRACTS: Final[dict[str, tuple[str, tuple[str, ...]]]] = {
    "sequence": ("Index sequences", ("test_index_sequence.py",)),
    "invoke": ("Void-safe invocation", ("test_void_safe_invoke.py",)),
    "compose": ("Sequential composition", ("test_composition.py",)),
    "battery": ("Battery fan-out", ("test_battery.py",)),
    "unpack": ("Tuple auto-unpack", ("test_auto_unpack.py",)),
    "ownership": ("Ownership", ("test_ownership.py",)),
    "policy": ("Policy", ("test_policy.py",)),
    "scenarios": ("End-to-end scenarios", ("test_end_to_end_scenarios.py", "test_combinator_laws.py")),
    "jax": ("JAX interop", ("test_jax_transforms.py",)),
}


@dataclass(frozen=True)
class ContractResult:
    key: str
    title: str
    run: int
    failed: int
    skipped: int

    @property
    def executed(self) -> int:
        return self.run - self.skipped

    @property
    def passed(self) -> int:
        return self.executed - self.failed

    @property
    def pass_rate(self) -> float | None:
        return None if self.executed == 0 else 100.0 * self.passed / self.executed

    @property
    def status(self) -> str:
        if self.failed:
            return "fail"
        return "skipped" if self.executed == 0 else "pass"


def run_contract(key: str, *, tests_dir: Path = Path("tests")) -> ContractResult:
    """Run the suites behind one contract; failures and errors both count as failed."""
    title, files = CONTRACTS[key]
    loader = unittest.TestLoader()
    suite = unittest.TestSuite(
        loader.discover(start_dir=str(tests_dir), pattern=name, top_level_dir=str(tests_dir)) for name in files
    )
    result = unittest.TextTestRunner(stream=io.StringIO(), verbosity=0).run(suite)
    return ContractResult(
        key=key,
        title=title,
        run=result.testsRun,
        failed=len(result.failures) + len(result.errors),
        skipped=len(result.skipped),
    )


def run_contracts(*, tests_dir: Path = Path("tests")) -> list[ContractResult]:
    return [run_contract(key, tests_dir=tests_dir) for key in CONTRACTS]


def overall(results: list[ContractResult]) -> ContractResult:
    return ContractResult(
        key="all",
        title="All contracts",
        run=sum(r.run for r in results),
        failed=sum(r.failed for r in results),
        skipped=sum(r.skipped for r in results),
    )


def markdown_report(results: list[ContractResult]) -> str:
    lines = [
        "# Combinator contract conformance",
        "",
        "| Contract | Run | Passed | Skipped | Failed | Pass rate | Status |",
        "|---|---:|---:|---:|---:|---:|---|",
    ]
    for r in [*results, overall(results)]:
        rate = "n/a" if r.pass_rate is None else f"{r.pass_rate:.2f}%"
        lines.append(f"| {r.title} | {r.run} | {r.passed} | {r.skipped} | {r.failed} | {rate} | {r.status} |")
    return "\n".join(lines)


def write_report(results: list[ContractResult], *, json_out: Path, markdown_out: Path) -> None:
    rows = [{**asdict(r), "pass_rate": r.pass_rate, "status": r.status} for r in [*results, overall(results)]]
    for path in (json_out, markdown_out):
        path.parent.mkdir(parents=True, exist_ok=True)
    json_out.write_text(json.dumps(rows, indent=2), encoding="utf-8")
    markdown_out.write_text(markdown_report(results) + "\n", encoding="utf-8")
