"""Combinator policy and its environment-driven defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

_CALL_ORDERS = ("declaration", "reverse")


@dataclass(frozen=True)
class CombinatorPolicy:
    """Explicit policy for combinator construction and invocation.

    - `call_order`: order in which battery members run. Output positions
      always follow declaration order whichever is chosen.
    - `check_signatures`: validate stage arity/annotations at construction
      and pick the auto-unpack path from the wrapped signature.
    - `void_on_none`: store `VOID` for a `None` result from callables that
      declare no return annotation.
    """

    call_order: Literal["declaration", "reverse"] = "declaration"
    check_signatures: bool = True
    void_on_none: bool = True

    def __post_init__(self) -> None:
        if self.call_order not in _CALL_ORDERS:
            raise ValueError(
                f"call_order must be one of {', '.join(_CALL_ORDERS)}; got {self.call_order!r}"
            )


def default_policy() -> CombinatorPolicy:
    return CombinatorPolicy(
        call_order=os.environ.get("FUNTUP_JAX_CALL_ORDER", "declaration"),  # type: ignore[arg-type]
        check_signatures=os.environ.get("FUNTUP_JAX_DISABLE_SIGNATURE_CHECKS", "0") != "1",
        void_on_none=os.environ.get("FUNTUP_JAX_DISABLE_VOID_ON_NONE", "0") != "1",
    )
