from __future__ import annotations

import unittest
from unittest import mock

from funtup_jax import (
    VOID,
    Battery,
    CombinatorConstructionError,
    CombinatorPolicy,
    apply_tuple,
    battery,
    combinator_info,
    compose,
)
from funtup_jax import signatures


def add(a: int, b: int) -> int:
    return a + b


def mul(a: int, b: int) -> int:
    return a * b


def sub(a: int, b: int) -> int:
    return a - b


class BatteryTests(unittest.TestCase):
    def test_results_follow_declaration_order(self) -> None:
        b = battery(add, mul)
        self.assertIsInstance(b, Battery)
        self.assertEqual(b(3, 4), (7, 12))
        self.assertEqual(battery(mul, add, sub)(3, 4), (12, 7, -1))

    def test_slot_i_equals_member_i_applied_to_arguments(self) -> None:
        members = (add, mul, sub, max, min, lambda a, b: (a, b))
        b = battery(*members)
        for args in ((0, 0), (3, 4), (-2, 5)):
            with self.subTest(args=args):
                out = b(*args)
                self.assertEqual(len(out), len(members))
                for i, member in enumerate(members):
                    self.assertEqual(out[i], member(*args))

    def test_void_members_occupy_their_slot(self) -> None:
        seen: list[tuple[int, int]] = []

        def note(a: int, b: int) -> None:
            seen.append((a, b))

        out = battery(add, note, mul)(3, 4)
        self.assertEqual(out, (7, VOID, 12))
        self.assertEqual(seen, [(3, 4)])

    def test_void_slots_are_resolved_once_at_construction(self) -> None:
        def note(a: int, b: int) -> None:
            return None

        b = battery(add, note, lambda a, b: None, max)
        self.assertEqual(b.declared_void, (False, True, None, None))
        with mock.patch.object(signatures, "signature_of") as sig_of, mock.patch.object(
            signatures, "type_hints"
        ) as hints:
            for _ in range(3):
                self.assertEqual(b(3, 4), (7, VOID, VOID, 4))
        sig_of.assert_not_called()
        hints.assert_not_called()

    def test_empty_battery_returns_empty_tuple(self) -> None:
        self.assertEqual(battery()(1, 2), ())

    def test_positions_do_not_depend_on_call_order(self) -> None:
        for order in ("declaration", "reverse"):
            with self.subTest(order=order):
                calls: list[str] = []

                def tag(name: str, fn):
                    def member(a, b):
                        calls.append(name)
                        return fn(a, b)

                    return member

                b = battery(tag("add", add), tag("mul", mul), policy=CombinatorPolicy(call_order=order))
                self.assertEqual(b(3, 4), (7, 12))
                expected = ["add", "mul"] if order == "declaration" else ["mul", "add"]
                self.assertEqual(calls, expected)

    def test_aliased_mutable_argument_sees_unspecified_intermediate_state(self) -> None:
        # Members mutating a shared argument observe whatever earlier members
        # did; only output positions are guaranteed.
        def push(xs: list) -> int:
            xs.append(0)
            return len(xs)

        def size(xs: list) -> int:
            return len(xs)

        observed = set()
        for order in ("declaration", "reverse"):
            shared_list: list[int] = []
            out = battery(push, size, policy=CombinatorPolicy(call_order=order))(shared_list)
            self.assertEqual(len(out), 2)
            self.assertEqual(shared_list, [0])
            observed.add(out)
        self.assertEqual(observed, {(1, 1), (1, 0)})

    def test_battery_is_a_tuple_like_aggregate_of_members(self) -> None:
        b = battery(add, mul)
        self.assertEqual(len(b), 2)
        self.assertIs(b[0], add)
        self.assertEqual(list(b), [add, mul])
        self.assertEqual(apply_tuple(b, 3, 4), (7, 12))

    def test_apply_tuple_honours_battery_policy(self) -> None:
        calls: list[str] = []
        b = battery(
            lambda: calls.append("first") or 1,
            lambda: calls.append("second") or 2,
            policy=CombinatorPolicy(call_order="reverse"),
        )
        self.assertEqual(apply_tuple(b), (1, 2))
        self.assertEqual(calls, ["second", "first"])

    def test_batteries_nest_with_compositions(self) -> None:
        stats = battery(compose(add, lambda s: s * 10), mul)
        self.assertEqual(stats(1, 2), (30, 2))
        chain = compose(battery(add, mul), lambda pair: pair[0] - pair[1])
        self.assertEqual(chain(3, 4), -5)
        nested = battery(battery(add, mul), sub)
        self.assertEqual(nested(3, 4), ((7, 12), -1))

    def test_non_callable_member_is_rejected(self) -> None:
        with self.assertRaises(CombinatorConstructionError):
            battery(add, None)  # type: ignore[arg-type]

    def test_member_exception_propagates(self) -> None:
        with self.assertRaises(ZeroDivisionError):
            battery(add, lambda a, b: a // b)(1, 0)

    def test_battery_metadata(self) -> None:
        info = combinator_info(battery(add, mul, sub))
        assert info is not None
        self.assertEqual(info.kind, "battery")
        self.assertEqual(info.arity, 3)

    def test_invalid_call_order_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CombinatorPolicy(call_order="random")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
