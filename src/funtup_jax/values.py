"""Runtime value model: the void sentinel, aggregates and combinator metadata."""

from __future__ import annotations

import inspect
from dataclasses import dataclass

from .signatures import signature_of


@dataclass(frozen=True)
class VoidType:
    """Storable stand-in for a result that carries no value."""

    def __repr__(self) -> str:
        return "VOID"


VOID = VoidType()


@dataclass(frozen=True)
class CombinatorInfo:
    kind: str
    arity: int | None
    name: str | None


def is_void(value: object) -> bool:
    return isinstance(value, VoidType)


def is_aggregate(value: object) -> bool:
    """Fixed-size heterogeneous aggregates are tuples (named tuples included)."""
    return isinstance(value, tuple)


def _positional_arity(func: object) -> int | None:
    sig = signature_of(func)
    if sig is None:
        return None
    count = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def combinator_info(value: object) -> CombinatorInfo | None:
    info = getattr(value, "info", None)
    if isinstance(info, CombinatorInfo):
        return info

    if callable(value):
        name = getattr(value, "__name__", None)
        if not isinstance(name, str):
            name = None
        return CombinatorInfo(kind="callable", arity=_positional_arity(value), name=name)
    return None
