"""Signature inspection backing the construction-time contract checks."""

from __future__ import annotations

import inspect
import numbers
import typing

# PEP 484 numeric tower: an int is acceptable where a float or complex is expected.
_NUMERIC_WIDENING: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def signature_of(func: object) -> inspect.Signature | None:
    try:
        return inspect.signature(func)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def binds(func: object, args: tuple[object, ...], kwargs: dict[str, object] | None = None) -> bool | None:
    """Whether ``func`` accepts ``args``/``kwargs``; None when it has no signature."""
    sig = signature_of(func)
    if sig is None:
        return None
    try:
        sig.bind(*args, **(kwargs or {}))
    except TypeError:
        return False
    return True


def accepts_single_argument(func: object) -> bool | None:
    return binds(func, (object(),))


def type_hints(func: object) -> dict[str, object]:
    """Resolved annotations of ``func`` (or of its ``__call__``); empty when unresolvable."""
    target = func
    if not (inspect.isfunction(func) or inspect.ismethod(func)):
        target = getattr(type(func), "__call__", func)
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError, AttributeError):
        return {}


def resolved_signature(func: object) -> inspect.Signature | None:
    """Signature of ``func`` with string annotations replaced by their resolved types."""
    sig = signature_of(func)
    if sig is None:
        return None
    hints = type_hints(func)
    if not hints:
        return sig
    params = [p.replace(annotation=hints.get(p.name, p.annotation)) for p in sig.parameters.values()]
    return sig.replace(parameters=params, return_annotation=hints.get("return", sig.return_annotation))


def declared_return(func: object) -> object:
    """The declared return annotation, or ``inspect.Signature.empty``."""
    sig = signature_of(func)
    if sig is None:
        return inspect.Signature.empty
    hints = type_hints(func)
    if "return" in hints:
        return hints["return"]
    return sig.return_annotation


def first_parameter_type(func: object) -> object:
    sig = signature_of(func)
    if sig is None:
        return inspect.Signature.empty
    params = [
        p
        for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if not params:
        return inspect.Signature.empty
    first = params[0]
    hints = type_hints(func)
    return hints.get(first.name, first.annotation)


def _is_plain_class(annotation: object) -> bool:
    return isinstance(annotation, type) and annotation is not object


def compatible(found: object, expected: object) -> bool:
    """Static compatibility of two annotations; permissive unless both are plain classes."""
    if not (_is_plain_class(found) and _is_plain_class(expected)):
        return True
    if issubclass(found, expected):  # type: ignore[arg-type]
        return True
    return any(issubclass(found, t) for t in _NUMERIC_WIDENING.get(expected, ()))  # type: ignore[arg-type]


def value_matches(value: object, expected: object) -> bool:
    if not _is_plain_class(expected):
        return True
    if isinstance(value, expected):  # type: ignore[arg-type]
        return True
    if expected in _NUMERIC_WIDENING and isinstance(value, numbers.Number):
        return any(isinstance(value, t) for t in _NUMERIC_WIDENING[expected])  # type: ignore[index]
    return False


def bound_values_match(func: object, args: tuple[object, ...]) -> bool | None:
    """Whether ``args`` bind to ``func`` and satisfy its plain-class annotations."""
    sig = signature_of(func)
    if sig is None:
        return None
    try:
        bound = sig.bind(*args)
    except TypeError:
        return False
    hints = type_hints(func)
    for name, value in bound.arguments.items():
        param = sig.parameters[name]
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if not value_matches(value, hints.get(name, param.annotation)):
            return False
    return True


def display(annotation: object) -> str:
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)
