"""Ownership helpers: private copies and explicit shared references."""

from __future__ import annotations

import copy
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import CombinatorConstructionError
from .signatures import resolved_signature
from .values import CombinatorInfo

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class Shared:
    """Reference-semantics wrapper: copies of a combinator keep aliasing ``target``."""

    target: Callable[..., Any]

    def __post_init__(self) -> None:
        if not callable(self.target):
            raise CombinatorConstructionError(
                f"shared requires a callable (got {type(self.target).__name__})"
            )
        sig = resolved_signature(self.target)
        if sig is not None:
            object.__setattr__(self, "__signature__", sig)

    @property
    def info(self) -> CombinatorInfo:
        return CombinatorInfo(kind="shared", arity=None, name=getattr(self.target, "__name__", None))

    def __call__(self, *args, **kwargs):
        return self.target(*args, **kwargs)

    def __copy__(self) -> "Shared":
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> "Shared":
        return self

    def __hash__(self) -> int:
        return id(self.target)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Shared) and other.target is self.target


def shared(func: Callable[..., Any]) -> Shared:
    return Shared(target=func)


def _copy_closure(func: types.FunctionType, memo: dict[int, object]) -> types.FunctionType:
    # copy.deepcopy returns plain functions as is; rebuild with fresh cells.
    cells = tuple(types.CellType() for _ in func.__closure__ or ())
    dup = types.FunctionType(func.__code__, func.__globals__, func.__name__, func.__defaults__, cells or None)
    memo[id(func)] = dup
    dup.__kwdefaults__ = copy.deepcopy(func.__kwdefaults__, memo)
    dup.__qualname__ = func.__qualname__
    dup.__module__ = func.__module__
    dup.__doc__ = func.__doc__
    dup.__annotations__ = dict(func.__annotations__)
    dup.__dict__.update(copy.deepcopy(func.__dict__, memo))
    for src, dst in zip(func.__closure__ or (), cells):
        try:
            contents = src.cell_contents
        except ValueError:
            continue  # unbound free variable
        dst.cell_contents = copy_member(contents, memo)
    return dup


def copy_member(value: T, memo: dict[int, object]) -> T:
    """Deep copy one combinator member, closures included; `Shared` stays aliased."""
    if id(value) in memo:
        return memo[id(value)]  # type: ignore[return-value]
    if isinstance(value, Shared):
        return value
    if isinstance(value, types.FunctionType) and value.__closure__:
        return _copy_closure(value, memo)  # type: ignore[return-value]
    return copy.deepcopy(value, memo)


def copy_of(value: T) -> T:
    """Independent deep copy of ``value``, suitable for a combinator to own.

    A `Shared` wrapper is stripped first, so the copy is of its referent.
    Closures get fresh cells holding copies of the captured state.
    """
    if isinstance(value, Shared):
        return copy_member(value.target, {})  # type: ignore[return-value]
    return copy_member(value, {})
