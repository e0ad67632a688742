"""Index sequences driving positional iteration over fixed-size aggregates."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sized
from dataclasses import dataclass
from functools import lru_cache

_SEQ_CACHE_MAX = max(1, int(os.environ.get("FUNTUP_JAX_SEQ_CACHE_MAX", "256")))
_SEQ_CACHE_STATS: dict[str, int] = {"hits": 0, "misses": 0}


@dataclass(frozen=True)
class IndexSequence:
    """Ordered positions ``0..N-1`` for an aggregate of length N."""

    indices: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def __getitem__(self, pos: int) -> int:
        return self.indices[pos]

    def take(self, aggregate) -> tuple[object, ...]:
        """Gather ``aggregate[i]`` for every position, in order."""
        return tuple(aggregate[i] for i in self.indices)


@lru_cache(maxsize=_SEQ_CACHE_MAX)
def _gen_seq_cached(n: int) -> IndexSequence:
    _SEQ_CACHE_STATS["misses"] += 1
    return IndexSequence(indices=tuple(range(n)))


def gen_seq(n: int) -> IndexSequence:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"sequence length must be an int, got {type(n).__name__}")
    if n < 0:
        raise ValueError(f"sequence length must be non-negative, got {n}")
    misses = _SEQ_CACHE_STATS["misses"]
    seq = _gen_seq_cached(n)
    if _SEQ_CACHE_STATS["misses"] == misses:
        _SEQ_CACHE_STATS["hits"] += 1
    return seq


def make_seq(aggregate: Sized) -> IndexSequence:
    """Index sequence covering every position of ``aggregate``."""
    return gen_seq(len(aggregate))


def sequence_cache_stats(*, reset: bool = False) -> dict[str, float | int]:
    hits = _SEQ_CACHE_STATS["hits"]
    misses = _SEQ_CACHE_STATS["misses"]
    total = hits + misses
    info = _gen_seq_cached.cache_info()
    stats: dict[str, float | int] = {
        "hits": hits,
        "misses": misses,
        "size": int(info.currsize),
        "max_size": int(info.maxsize) if info.maxsize is not None else 0,
        "hit_rate": float(hits / total) if total else 0.0,
    }
    if reset:
        _gen_seq_cached.cache_clear()
        _SEQ_CACHE_STATS["hits"] = 0
        _SEQ_CACHE_STATS["misses"] = 0
    return stats
