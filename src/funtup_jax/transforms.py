"""JAX interop: pytree registration and cached transforms of combinators."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import jax

from .errors import TransformError
from .logger import logger
from .values import VOID, VoidType

_TRANSFORM_HELPER_CACHE: dict[tuple[object, ...], object] = {}
_TRANSFORM_HELPER_STATS: dict[str, int] = {"hits": 0, "misses": 0}

# VOID is a leafless node so battery results with void slots can cross jit boundaries.
jax.tree_util.register_pytree_node(VoidType, lambda _: ((), None), lambda _aux, _children: VOID)


def _cached_transform(key: tuple[object, ...], build: Callable[[], object]):
    try:
        cached = _TRANSFORM_HELPER_CACHE.get(key)
    except TypeError as err:
        raise TransformError(
            f"cannot cache a {key[0]} transform of an unhashable callable: {err}"
        ) from err
    if cached is not None:
        _TRANSFORM_HELPER_STATS["hits"] += 1
        return cached
    _TRANSFORM_HELPER_STATS["misses"] += 1
    logger.debug("building %s transform for %r", key[0], key[1])
    fn = build()
    _TRANSFORM_HELPER_CACHE[key] = fn
    return fn


def cached_jit(func: Callable[..., Any], *, static_argnums: tuple[int, ...] = ()):
    """Return a cached `jax.jit` of ``func`` keyed by the callable and static args."""
    key = ("jit", func, tuple(static_argnums))
    return _cached_transform(key, lambda: jax.jit(func, static_argnums=tuple(static_argnums)))


def cached_vmap(func: Callable[..., Any], *, in_axes=0, out_axes=0):
    """Return a cached `jax.vmap` of ``func`` keyed by the callable and axes."""
    key = ("vmap", func, repr(in_axes), repr(out_axes))
    return _cached_transform(key, lambda: jax.vmap(func, in_axes=in_axes, out_axes=out_axes))


def cached_grad(func: Callable[..., Any], *, argnums: int = 0):
    """Return a cached, jitted `jax.grad` of a scalar-valued ``func``."""
    key = ("grad", func, argnums)
    return _cached_transform(key, lambda: jax.jit(jax.grad(func, argnums=argnums)))


def transform_helper_cache_stats(*, reset: bool = False) -> dict[str, float | int]:
    hits = _TRANSFORM_HELPER_STATS["hits"]
    misses = _TRANSFORM_HELPER_STATS["misses"]
    total = hits + misses
    stats: dict[str, float | int] = {
        "hits": hits,
        "misses": misses,
        "size": len(_TRANSFORM_HELPER_CACHE),
        "hit_rate": float(hits / total) if total else 0.0,
    }
    if reset:
        _TRANSFORM_HELPER_CACHE.clear()
        _TRANSFORM_HELPER_STATS["hits"] = 0
        _TRANSFORM_HELPER_STATS["misses"] = 0
    return stats
