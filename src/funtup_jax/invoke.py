"""Application primitives: direct, void-safe, unpacking and fan-out calls."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from .policy import CombinatorPolicy, default_policy
from .sequence import IndexSequence, make_seq
from .signatures import declared_return
from .values import VOID


def apply(func: Callable[..., Any], *args, **kwargs):
    """Call ``func`` with the given arguments and return its natural result."""
    return func(*args, **kwargs)


def returns_void(func: object) -> bool | None:
    """True/False from the declared return annotation; None when nothing is declared."""
    annotation = declared_return(func)
    if annotation is inspect.Signature.empty:
        return None
    return annotation is None or annotation is type(None) or annotation == "None"


def _apply_novoid(
    func: Callable[..., Any],
    args: tuple[object, ...],
    kwargs: Mapping[str, object],
    *,
    declared_void: bool | None,
    void_on_none: bool,
):
    result = func(*args, **kwargs)
    if declared_void:
        return VOID
    if declared_void is None and void_on_none and result is None:
        return VOID
    return result


def apply_novoid(func: Callable[..., Any], *args, **kwargs):
    """Call ``func`` and return a storable result, substituting `VOID` for no value."""
    return _apply_novoid(
        func, args, kwargs, declared_void=returns_void(func), void_on_none=default_policy().void_on_none
    )


def unpack_and_apply(func: Callable[..., Any], packed: tuple[object, ...], seq: IndexSequence):
    return func(*seq.take(packed))


def _apply_tuple(
    funcs,
    seq: IndexSequence,
    args: tuple[object, ...],
    kwargs: Mapping[str, object],
    policy: CombinatorPolicy,
    declared: tuple[bool | None, ...],
) -> tuple[object, ...]:
    order = seq.indices if policy.call_order == "declaration" else tuple(reversed(seq.indices))
    results: list[object] = [VOID] * len(seq)
    for i in order:
        results[i] = _apply_novoid(
            funcs[i], args, kwargs, declared_void=declared[i], void_on_none=policy.void_on_none
        )
    return tuple(results)


def apply_tuple(funcs, *args, **kwargs) -> tuple[object, ...]:
    """Apply every callable in ``funcs`` to the same arguments.

    Slot ``i`` of the returned tuple holds the void-safe result of ``funcs[i]``.
    ``funcs`` may be any sized, indexable aggregate of callables, a `Battery`
    included; a battery's own policy decides its call order.
    """
    policy = getattr(funcs, "policy", None)
    if not isinstance(policy, CombinatorPolicy):
        policy = default_policy()
    declared = getattr(funcs, "declared_void", None)
    if declared is None:
        declared = tuple(returns_void(f) for f in funcs)
    return _apply_tuple(funcs, make_seq(funcs), args, kwargs, policy, declared)
