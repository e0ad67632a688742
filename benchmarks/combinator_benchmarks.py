"""Call overhead of combinators against hand-written equivalents, eager and jitted."""

from __future__ import annotations

import argparse
import json
import os
import platform
import statistics
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

import jax
import jax.numpy as jnp

from funtup_jax import auto_unpack, battery, compose
from funtup_jax.transforms import cached_jit, transform_helper_cache_stats

PROFILE_CONFIG = {
    "quick": {"samples": 3, "warmup": 1, "repeats": 2_000},
    "full": {"samples": 7, "warmup": 2, "repeats": 20_000},
}


@dataclass(frozen=True)
class Case:
    mode: str
    name: str
    combinator: Callable[..., object]
    direct: Callable[..., object]
    args: tuple[object, ...]


@dataclass(frozen=True)
class Timing:
    mean_us: float
    p95_us: float
    stdev_us: float

    @classmethod
    def of(cls, per_call_us: list[float]) -> "Timing":
        p95 = statistics.quantiles(per_call_us, n=20)[-1] if len(per_call_us) > 1 else per_call_us[0]
        stdev = statistics.stdev(per_call_us) if len(per_call_us) > 1 else 0.0
        return cls(mean_us=statistics.fmean(per_call_us), p95_us=p95, stdev_us=stdev)


@dataclass(frozen=True)
class Overhead:
    mode: str
    name: str
    combinator: Timing
    direct: Timing
    samples: int
    repeats: int

    @property
    def extra_us(self) -> float:
        return self.combinator.mean_us - self.direct.mean_us

    @property
    def ratio(self) -> float:
        return self.combinator.mean_us / self.direct.mean_us if self.direct.mean_us > 0 else float("inf")


def _settle(value: object) -> None:
    # jitted results are async; battery results are tuples of arrays
    for leaf in jax.tree_util.tree_leaves(value):
        if hasattr(leaf, "block_until_ready"):
            leaf.block_until_ready()


def _per_call_us(fn: Callable[..., object], args: tuple[object, ...], *, samples: int, warmup: int, repeats: int) -> list[float]:
    for _ in range(warmup):
        _settle(fn(*args))
    out: list[float] = []
    for _ in range(samples):
        start = time.perf_counter_ns()
        for _ in range(repeats):
            _settle(fn(*args))
        out.append((time.perf_counter_ns() - start) / repeats / 1e3)
    return out


def _add3(a):
    return a + 3


def _mul3(a):
    return a * 3


def _add(a, b):
    return a + b


def _mul(a, b):
    return a * b


def _divide_with_remainder(a, b):
    return a // b, a % b


def _cases() -> list[Case]:
    x = jnp.arange(1024, dtype=jnp.float32)
    chain = compose(_add3, _mul3)
    fan = battery(_add, _mul)
    bridge = compose(_divide_with_remainder, auto_unpack(_add))
    return [
        Case("eager", "compose2", chain, lambda a: _mul3(_add3(a)), (2,)),
        Case("eager", "battery2", fan, lambda a, b: (_add(a, b), _mul(a, b)), (3, 4)),
        Case("eager", "divmod_unpack", bridge, lambda a, b: _add(*_divide_with_remainder(a, b)), (5, 2)),
        Case("jit", "compose2", cached_jit(chain), cached_jit(lambda a: _mul3(_add3(a))), (x,)),
        Case("jit", "battery2", cached_jit(fan), cached_jit(lambda a, b: (_add(a, b), _mul(a, b))), (x, x)),
    ]


def measure(case: Case, *, samples: int, warmup: int, repeats: int) -> Overhead:
    timed = lambda fn: Timing.of(_per_call_us(fn, case.args, samples=samples, warmup=warmup, repeats=repeats))
    return Overhead(
        mode=case.mode,
        name=case.name,
        combinator=timed(case.combinator),
        direct=timed(case.direct),
        samples=samples,
        repeats=repeats,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--profile", choices=sorted(PROFILE_CONFIG), default="quick")
    parser.add_argument("--json-out", default="benchmarks/output/combinator_benchmarks.json")
    args = parser.parse_args()

    results = [measure(case, **PROFILE_CONFIG[args.profile]) for case in _cases()]
    for res in results:
        print(
            f"{res.mode:6s} {res.name:14s} combinator={res.combinator.mean_us:9.3f}us "
            f"direct={res.direct.mean_us:9.3f}us extra={res.extra_us:8.3f}us ratio={res.ratio:6.2f}"
        )

    out = Path(args.json_out)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "generated_at": datetime.now(UTC).isoformat(),
        "profile": args.profile,
        "python": platform.python_version(),
        "jax": jax.__version__,
        "backend": jax.default_backend(),
        "cpu_count": os.cpu_count(),
        "transform_cache": transform_helper_cache_stats(),
        "results": [asdict(r) | {"extra_us": r.extra_us, "ratio": r.ratio} for r in results],
    }
    out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
