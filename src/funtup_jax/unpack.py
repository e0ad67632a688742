"""Adapter that spreads a single tuple argument into positional arguments."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import CombinatorConstructionError, UnpackError
from .invoke import unpack_and_apply
from .logger import logger
from .ownership import copy_member
from .policy import CombinatorPolicy, default_policy
from .sequence import make_seq
from .signatures import binds, bound_values_match
from .values import CombinatorInfo, is_aggregate


@dataclass(frozen=True)
class AutoUnpack:
    """Wraps ``func`` so that ``adapter((a, b)) == func(a, b)``.

    Only a call made with exactly one tuple argument and no keywords is a
    candidate for unpacking. The tuple is unpacked when its elements fit
    ``func``'s signature (arity and plain-class annotations), forwarded as is
    when only that fits, and rejected with `UnpackError` when neither does.
    Callables without an inspectable signature always get the unpacked form.
    Every other argument shape is forwarded unchanged.
    """

    func: Callable[..., Any]
    policy: CombinatorPolicy = field(default_factory=default_policy)

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise CombinatorConstructionError(
                f"auto_unpack requires a callable (got {type(self.func).__name__})"
            )

    @property
    def info(self) -> CombinatorInfo:
        return CombinatorInfo(kind="auto_unpack", arity=1, name=getattr(self.func, "__name__", None))

    def __deepcopy__(self, memo: dict[int, object]) -> "AutoUnpack":
        dup = AutoUnpack(func=copy_member(self.func, memo), policy=self.policy)
        memo[id(self)] = dup
        return dup

    def _should_unpack(self, packed: tuple[object, ...]) -> bool:
        if not self.policy.check_signatures:
            return True
        unpacked_fits = bound_values_match(self.func, packed)
        if unpacked_fits is None or unpacked_fits:
            return True
        if binds(self.func, (packed,)):
            return False
        raise UnpackError(
            f"{len(packed)}-element tuple fits neither as separate arguments nor as a single argument"
        )

    def __call__(self, *args, **kwargs):
        if len(args) == 1 and not kwargs and is_aggregate(args[0]):
            packed = args[0]
            if self._should_unpack(packed):
                logger.debug("auto_unpack: spreading %d-element tuple", len(packed))
                return unpack_and_apply(self.func, packed, make_seq(packed))
            logger.debug("auto_unpack: forwarding tuple unchanged")
        return self.func(*args, **kwargs)


def auto_unpack(func: Callable[..., Any], *, policy: CombinatorPolicy | None = None) -> AutoUnpack:
    """Let ``func`` take a tuple of its positional arguments.

    Bridges a stage returning a tuple into a stage taking separate arguments:

    ```
    divide_with_remainder = lambda a, b: (a // b, a % b)
    add = lambda a, b: a + b
    compose(divide_with_remainder, auto_unpack(add))(5, 2)  # 3
    ```
    """
    return AutoUnpack(func=func, policy=policy or default_policy())
