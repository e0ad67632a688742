"""Structured error types for combinator construction and dispatch."""

from __future__ import annotations

from dataclasses import dataclass


class FuntupError(Exception):
    """Base class for structured funtup-jax errors."""


class CombinatorConstructionError(FuntupError, TypeError):
    """A combinator was built from an empty or non-callable member list."""


@dataclass(frozen=True)
class StageMismatchError(FuntupError, TypeError):
    """Stage ``stage`` cannot accept what the previous stage produces."""

    message: str
    stage: int
    expected: str | None = None
    found: str | None = None

    def __str__(self) -> str:
        expected = ""
        if self.expected is not None:
            expected = f"; expected {self.expected}"
        found = ""
        if self.found is not None:
            found = f"; found {self.found}"
        return f"{self.message} at stage {self.stage}{expected}{found}"


class UnpackError(FuntupError, TypeError):
    """Neither the unpacked nor the forwarded argument list fits the wrapped callable."""


class TransformError(FuntupError, TypeError):
    """A JAX transform helper could not be built for the given callable."""
