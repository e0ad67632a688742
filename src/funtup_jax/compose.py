"""Sequential composition of callables."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .errors import CombinatorConstructionError, StageMismatchError
from .logger import logger
from .ownership import copy_member
from .policy import CombinatorPolicy, default_policy
from .signatures import (
    accepts_single_argument,
    compatible,
    declared_return,
    display,
    first_parameter_type,
    resolved_signature,
)
from .values import CombinatorInfo


def _check_stage_chain(stages: tuple[Callable[..., Any], ...], policy: CombinatorPolicy) -> None:
    if not stages:
        raise CombinatorConstructionError("compose requires at least one callable")
    for idx, stage in enumerate(stages):
        if not callable(stage):
            raise CombinatorConstructionError(
                f"stage {idx} is not callable (got {type(stage).__name__})"
            )

    if not policy.check_signatures:
        return

    for idx in range(1, len(stages)):
        prev, stage = stages[idx - 1], stages[idx]
        if accepts_single_argument(stage) is False:
            raise StageMismatchError(
                message="stage cannot accept the previous result as its sole argument",
                stage=idx,
                expected="exactly one positional argument",
                found=str(inspect.signature(stage)),
            )
        produced = declared_return(prev)
        wanted = first_parameter_type(stage)
        if not compatible(produced, wanted):
            raise StageMismatchError(
                message="previous stage result type does not match stage argument type",
                stage=idx,
                expected=display(wanted),
                found=display(produced),
            )


def _chain_signature(stages: tuple[Callable[..., Any], ...]) -> inspect.Signature | None:
    """Arguments of the first stage, result of the last."""
    head = resolved_signature(stages[0])
    if head is None:
        return None
    return head.replace(return_annotation=declared_return(stages[-1]))


@dataclass(frozen=True)
class Composition:
    """Left-to-right chain: ``Composition((f, g, h))(x) == h(g(f(x)))``.

    The first stage receives the original arguments; every later stage gets
    exactly the previous stage's result. Stages are held as given; hand in
    `copy_of(f)` to keep a private copy.
    """

    stages: tuple[Callable[..., Any], ...]
    policy: CombinatorPolicy = field(default_factory=default_policy)

    def __post_init__(self) -> None:
        _check_stage_chain(self.stages, self.policy)
        sig = _chain_signature(self.stages)
        if sig is not None:
            object.__setattr__(self, "__signature__", sig)

    @property
    def info(self) -> CombinatorInfo:
        return CombinatorInfo(kind="composition", arity=len(self.stages), name=None)

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(self.stages)

    def __deepcopy__(self, memo: dict[int, object]) -> "Composition":
        dup = Composition(stages=tuple(copy_member(s, memo) for s in self.stages), policy=self.policy)
        memo[id(self)] = dup
        return dup

    def __call__(self, *args, **kwargs):
        head, *tail = self.stages
        result = head(*args, **kwargs)
        for stage in tail:
            result = stage(result)
        return result


def compose(*funcs: Callable[..., Any], policy: CombinatorPolicy | None = None) -> Composition:
    """Chain ``funcs`` so each one consumes the previous one's result.

    ```
    add3 = lambda a: a + 3
    mul3 = lambda a: a * 3
    compose(add3, mul3)(2)  # 15
    compose(mul3, add3)(2)  # 9
    ```
    """
    composition = Composition(stages=tuple(funcs), policy=policy or default_policy())
    logger.debug("built composition with %d stage(s)", len(composition))
    return composition


pipe = compose


def compose_right(*funcs: Callable[..., Any], policy: CombinatorPolicy | None = None) -> Composition:
    """Mathematical composition: ``compose_right(f, g)(x) == f(g(x))``."""
    return compose(*reversed(funcs), policy=policy)
