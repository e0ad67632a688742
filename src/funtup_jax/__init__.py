"""funtup-jax public API.

JAX transform helpers live in `funtup_jax.transforms`; importing that module
also registers `VOID` as a JAX pytree node.
"""

from .battery import Battery, battery
from .compose import Composition, compose, compose_right, pipe
from .errors import (
    CombinatorConstructionError,
    FuntupError,
    StageMismatchError,
    TransformError,
    UnpackError,
)
from .invoke import apply, apply_novoid, apply_tuple, returns_void, unpack_and_apply
from .ownership import Shared, copy_of, shared
from .policy import CombinatorPolicy, default_policy
from .sequence import IndexSequence, gen_seq, make_seq, sequence_cache_stats
from .unpack import AutoUnpack, auto_unpack
from .values import VOID, CombinatorInfo, VoidType, combinator_info, is_aggregate, is_void

__all__ = [
    "apply",
    "apply_novoid",
    "apply_tuple",
    "returns_void",
    "unpack_and_apply",
    "compose",
    "compose_right",
    "pipe",
    "Composition",
    "battery",
    "Battery",
    "auto_unpack",
    "AutoUnpack",
    "copy_of",
    "shared",
    "Shared",
    "gen_seq",
    "make_seq",
    "sequence_cache_stats",
    "IndexSequence",
    "VOID",
    "VoidType",
    "is_void",
    "is_aggregate",
    "CombinatorInfo",
    "combinator_info",
    "CombinatorPolicy",
    "default_policy",
    "FuntupError",
    "CombinatorConstructionError",
    "StageMismatchError",
    "UnpackError",
    "TransformError",
]
