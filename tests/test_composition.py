from __future__ import annotations

import inspect
import logging
import unittest

from funtup_jax import (
    CombinatorConstructionError,
    CombinatorPolicy,
    Composition,
    StageMismatchError,
    combinator_info,
    compose,
    compose_right,
    pipe,
)
from funtup_jax.signatures import type_hints


def add3(a: int) -> int:
    return a + 3


def mul3(a: int) -> int:
    return a * 3


def to_text(a: int) -> str:
    return str(a)


def shout(text: str) -> str:
    return text + "!"


def scale(x: float) -> float:
    return x * 0.5


def is_positive(x: int) -> bool:
    return x > 0


def lookup(key: "MissingType") -> int:  # noqa: F821
    return len(str(key))


class Accumulator:
    def __init__(self) -> None:
        self.total = 0

    def __call__(self, x: int) -> int:
        self.total += x
        return self.total


class CompositionTests(unittest.TestCase):
    def test_left_to_right_chaining(self) -> None:
        self.assertEqual(compose(add3, mul3)(2), 15)
        self.assertEqual(compose(mul3, add3)(2), 9)
        self.assertEqual(compose(add3, mul3, to_text, shout)(1), "12!")

    def test_single_stage_is_plain_call(self) -> None:
        chain = compose(add3)
        self.assertIsInstance(chain, Composition)
        self.assertEqual(chain(4), add3(4))
        self.assertEqual(len(chain), 1)

    def test_first_stage_receives_full_argument_list(self) -> None:
        chain = compose(lambda a, b, *, c=0: a + b + c, mul3)
        self.assertEqual(chain(1, 2), 9)
        self.assertEqual(chain(1, 2, c=1), 12)

    def test_pipe_is_left_to_right_and_compose_right_is_mathematical(self) -> None:
        self.assertEqual(pipe(add3, mul3)(2), 15)
        self.assertEqual(compose_right(add3, mul3)(2), 9)
        self.assertEqual(compose_right(shout, to_text)(5), "5!")

    def test_reinvocation_is_independent_except_for_stage_state(self) -> None:
        chain = compose(add3, mul3)
        self.assertEqual([chain(2), chain(2), chain(0)], [15, 15, 9])

        acc = Accumulator()
        counting = compose(add3, acc)
        self.assertEqual(counting(0), 3)
        self.assertEqual(counting(0), 6)
        self.assertEqual(acc.total, 6)

    def test_compositions_nest(self) -> None:
        inner = compose(add3, mul3)
        outer = compose(inner, inner)
        self.assertEqual(outer(2), (15 + 3) * 3)
        self.assertEqual(list(outer), [inner, inner])

    def test_empty_and_non_callable_chains_are_rejected(self) -> None:
        with self.assertRaises(CombinatorConstructionError):
            compose()
        with self.assertRaises(CombinatorConstructionError):
            compose(add3, 3)  # type: ignore[arg-type]
        # Construction errors are also TypeErrors.
        with self.assertRaises(TypeError):
            compose(add3, "mul3")  # type: ignore[arg-type]

    def test_arity_mismatch_is_rejected_before_any_call(self) -> None:
        calls: list[int] = []

        def first(a: int) -> int:
            calls.append(a)
            return a

        with self.assertRaises(StageMismatchError) as ctx:
            compose(first, lambda a, b: a + b)
        self.assertEqual(ctx.exception.stage, 1)
        self.assertIn("stage 1", str(ctx.exception))
        self.assertEqual(calls, [])

        with self.assertRaises(StageMismatchError):
            compose(add3, lambda: 0)

    def test_declared_type_mismatch_is_rejected(self) -> None:
        with self.assertRaises(StageMismatchError) as ctx:
            compose(to_text, mul3)
        self.assertEqual(ctx.exception.expected, "int")
        self.assertEqual(ctx.exception.found, "str")

    def test_numeric_widening_and_unannotated_stages_are_accepted(self) -> None:
        self.assertEqual(compose(add3, scale)(1), 2.0)
        self.assertEqual(compose(to_text, lambda s: s * 2)(7), "77")
        self.assertEqual(compose(lambda x: x, mul3)(2), 6)

    def test_bool_result_widens_to_float_stage(self) -> None:
        chain = compose(is_positive, scale)
        self.assertEqual(chain(3), 0.5)
        self.assertEqual(chain(-3), 0.0)

    def test_unresolvable_annotations_are_trusted(self) -> None:
        self.assertEqual(type_hints(lookup), {})
        self.assertEqual(compose(lookup, add3)("abcd"), 7)
        self.assertEqual(compose(to_text, lookup)(123), 3)

    def test_composition_exposes_chain_signature(self) -> None:
        sig = inspect.signature(compose(add3, to_text))
        self.assertEqual(list(sig.parameters), ["a"])
        self.assertIs(sig.parameters["a"].annotation, int)
        self.assertIs(sig.return_annotation, str)

    def test_nested_compositions_are_checked_through(self) -> None:
        self.assertEqual(compose(add3, compose(to_text, shout))(1), "4!")
        with self.assertRaises(StageMismatchError):
            compose(to_text, compose(mul3, add3))
        with self.assertRaises(StageMismatchError):
            compose(add3, compose(lambda a, b: a + b))

    def test_checks_can_be_disabled_by_policy(self) -> None:
        policy = CombinatorPolicy(check_signatures=False)
        chain = compose(to_text, shout, policy=policy)
        self.assertEqual(chain(1), "1!")
        unchecked = compose(add3, lambda a, b: a + b, policy=policy)
        with self.assertRaises(TypeError):
            unchecked(1)

    def test_stage_exceptions_propagate_unchanged(self) -> None:
        err = ZeroDivisionError("boom")

        def fail(_):
            raise err

        chain = compose(add3, fail, mul3)
        with self.assertRaises(ZeroDivisionError) as ctx:
            chain(1)
        self.assertIs(ctx.exception, err)

    def test_composition_metadata(self) -> None:
        info = combinator_info(compose(add3, mul3))
        assert info is not None
        self.assertEqual(info.kind, "composition")
        self.assertEqual(info.arity, 2)

        plain = combinator_info(add3)
        assert plain is not None
        self.assertEqual(plain.kind, "callable")
        self.assertEqual(plain.arity, 1)
        self.assertEqual(plain.name, "add3")
        self.assertIsNone(combinator_info(3))

    def test_construction_is_logged_at_debug(self) -> None:
        with self.assertLogs("funtup_jax", level=logging.DEBUG) as logs:
            compose(add3, mul3)
        self.assertTrue(any("2 stage(s)" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
