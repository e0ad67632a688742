"""Run the per-contract unittest suites and write JSON/Markdown summaries."""

from __future__ import annotations

import argparse
from pathlib import Path

from funtup_jax.conformance import markdown_report, overall, run_contracts, write_report


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--tests-dir", default="tests", help="directory containing unittest test files")
    parser.add_argument(
        "--json-out",
        default="benchmarks/output/conformance/contract_conformance.json",
        help="where to write machine-readable conformance results",
    )
    parser.add_argument(
        "--markdown-out",
        default="benchmarks/output/conformance/contract_conformance.md",
        help="where to write markdown summary",
    )
    args = parser.parse_args()

    results = run_contracts(tests_dir=Path(args.tests_dir))
    print(markdown_report(results))
    write_report(results, json_out=Path(args.json_out), markdown_out=Path(args.markdown_out))
    return 1 if overall(results).status == "fail" else 0


if __name__ == "__main__":
    raise SystemExit(main())
