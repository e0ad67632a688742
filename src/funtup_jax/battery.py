"""Battery: fan one argument list out to several callables."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .errors import CombinatorConstructionError
from .invoke import _apply_tuple, returns_void
from .logger import logger
from .ownership import copy_member
from .policy import CombinatorPolicy, default_policy
from .sequence import IndexSequence, make_seq
from .signatures import resolved_signature
from .values import CombinatorInfo


@dataclass(frozen=True)
class Battery:
    """Tuple-like group of callables invoked with identical arguments.

    ``Battery((add, mul))(3, 4) == (7, 12)``. Slot ``i`` of the result always
    belongs to member ``i``; the order in which members actually run is not
    part of the contract (see `CombinatorPolicy.call_order`). Members that
    mutate a shared argument therefore observe unspecified intermediate
    state; batteries are meant for side-effect-free or independent callables.
    """

    members: tuple[Callable[..., Any], ...]
    policy: CombinatorPolicy = field(default_factory=default_policy)
    declared_void: tuple[bool | None, ...] = field(init=False, repr=False, compare=False)
    seq: IndexSequence = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for idx, member in enumerate(self.members):
            if not callable(member):
                raise CombinatorConstructionError(
                    f"battery member {idx} is not callable (got {type(member).__name__})"
                )
        object.__setattr__(self, "declared_void", tuple(returns_void(m) for m in self.members))
        object.__setattr__(self, "seq", make_seq(self.members))
        if self.members:
            sig = resolved_signature(self.members[0])
            if sig is not None:
                object.__setattr__(self, "__signature__", sig.replace(return_annotation=tuple))

    @property
    def info(self) -> CombinatorInfo:
        return CombinatorInfo(kind="battery", arity=len(self.members), name=None)

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, pos: int) -> Callable[..., Any]:
        return self.members[pos]

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(self.members)

    def __deepcopy__(self, memo: dict[int, object]) -> "Battery":
        dup = Battery(members=tuple(copy_member(m, memo) for m in self.members), policy=self.policy)
        memo[id(self)] = dup
        return dup

    def __call__(self, *args, **kwargs) -> tuple[object, ...]:
        return _apply_tuple(self.members, self.seq, args, kwargs, self.policy, self.declared_void)


def battery(*funcs: Callable[..., Any], policy: CombinatorPolicy | None = None) -> Battery:
    """Group ``funcs`` into one callable returning the tuple of their results.

    ```
    add = lambda a, b: a + b
    mul = lambda a, b: a * b
    battery(add, mul)(3, 4)  # (7, 12)
    ```
    """
    bundle = Battery(members=tuple(funcs), policy=policy or default_policy())
    logger.debug("built battery with %d member(s) (call order: %s)", len(bundle), bundle.policy.call_order)
    return bundle
