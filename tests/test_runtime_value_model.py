from __future__ import annotations

import unittest
from decimal import Decimal

import numpy as np

from numcalc.dispatch import Function, Operator
from numcalc.environment import Environment
from numcalc.errors import ArityError, DispatchError
from numcalc.values import Array, Generator, ValueKind, count_up, format_signature, kind_of, signature_of, stringify, validate_value


class ValueKindTests(unittest.TestCase):
    def test_kind_of_each_variant(self) -> None:
        self.assertIs(kind_of(Decimal(1)), ValueKind.NUMBER)
        self.assertIs(kind_of(Array([Decimal(1)])), ValueKind.ARRAY)
        self.assertIs(kind_of(count_up(Decimal(3))), ValueKind.GENERATOR)
        self.assertIs(kind_of(1.5), ValueKind.UNKNOWN)

    def test_kinds_are_flags(self) -> None:
        both = ValueKind.NUMBER | ValueKind.ARRAY
        self.assertIn(ValueKind.NUMBER, both)
        self.assertNotIn(ValueKind.GENERATOR, both)

    def test_signature_is_ordered(self) -> None:
        arr = Array([Decimal(1)])
        self.assertEqual(signature_of(arr, Decimal(2)), (ValueKind.ARRAY, ValueKind.NUMBER))
        self.assertNotEqual(signature_of(arr, Decimal(2)), signature_of(Decimal(2), arr))
        self.assertEqual(format_signature(signature_of(Decimal(2), arr)), "number,array")

    def test_validator_rejects_unsupported_runtime_value(self) -> None:
        with self.assertRaises(TypeError):
            validate_value(object(), where="unsupported")


class ArrayValueTests(unittest.TestCase):
    def test_array_is_read_only(self) -> None:
        arr = Array([Decimal(1), Decimal(2)])
        with self.assertRaises(ValueError):
            arr.values[0] = Decimal(5)

    def test_array_copies_source_ndarray(self) -> None:
        source = np.array([Decimal(1), Decimal(2)], dtype=object)
        arr = Array(source)
        source[0] = Decimal(9)
        self.assertEqual(arr.tolist(), [Decimal(1), Decimal(2)])

    def test_empty_array(self) -> None:
        arr = Array([])
        self.assertEqual(len(arr), 0)
        self.assertEqual(stringify(arr), "")


class GeneratorStateTests(unittest.TestCase):
    def test_count_up_yields_exactly_bound_values(self) -> None:
        gen = count_up(Decimal(3))
        self.assertEqual([gen.next(), gen.next(), gen.next()], [Decimal(0), Decimal(1), Decimal(2)])
        self.assertIsNone(gen.next())
        self.assertTrue(gen.done)
        self.assertIsNone(gen.next())

    def test_non_positive_bound_is_immediately_exhausted(self) -> None:
        self.assertEqual(list(count_up(Decimal(0))), [])
        self.assertEqual(list(count_up(Decimal(-2))), [])

    def test_unbounded_generator_with_python_iteration(self) -> None:
        gen = Generator(current=Decimal(1), step=lambda c: c * 2)
        firsts = [value for _, value in zip(range(5), gen)]
        self.assertEqual(firsts, [Decimal(v) for v in (1, 2, 4, 8, 16)])

    def test_transforms_apply_in_registration_order(self) -> None:
        gen = count_up(Decimal(3)).chain(lambda v: v + 1).chain(lambda v: v * 10)
        self.assertEqual(list(gen), [Decimal(10), Decimal(20), Decimal(30)])

    def test_transform_can_end_the_sequence(self) -> None:
        gen = count_up(Decimal(10)).chain(lambda v: None if v >= 2 else v)
        self.assertEqual(list(gen), [Decimal(0), Decimal(1)])
        self.assertTrue(gen.done)

    def test_fork_is_independent(self) -> None:
        gen = count_up(Decimal(5))
        gen.next()
        copy = gen.fork().chain(lambda v: -v)
        self.assertEqual(copy.next(), Decimal(-1))
        self.assertEqual(gen.next(), Decimal(1))
        self.assertEqual(gen.transforms, [])


class StringifyTests(unittest.TestCase):
    def test_numbers_use_shortest_form(self) -> None:
        self.assertEqual(stringify(Decimal("15")), "15")
        self.assertEqual(stringify(Decimal("2.50")), "2.5")
        self.assertEqual(stringify(Decimal("1E+2")), "100")
        self.assertEqual(stringify(Decimal("0")), "0")
        self.assertEqual(stringify(Decimal("-0")), "-0")
        self.assertEqual(stringify(Decimal("1E+25")), "1e+25")

    def test_numbers_switch_to_exponent_form_outside_small_exponents(self) -> None:
        cases = (
            ("999999", "999999"),
            ("1000000", "1e+06"),
            ("1234567", "1.234567e+06"),
            ("-2500000", "-2.5e+06"),
            ("0.0001", "0.0001"),
            ("0.00001", "1e-05"),
            ("0.000001", "1e-06"),
            ("-0.0000123", "-1.23e-05"),
            ("1E+100", "1e+100"),
        )
        for source, expected in cases:
            with self.subTest(source=source):
                self.assertEqual(stringify(Decimal(source)), expected)

    def test_negative_zero_keeps_its_sign_in_arrays(self) -> None:
        arr = Array([Decimal("-0"), Decimal(5)])
        self.assertEqual(stringify(arr), "-0  5")

    def test_array_pads_to_widest_element(self) -> None:
        arr = Array([Decimal(1), Decimal(10), Decimal(100)])
        self.assertEqual(stringify(arr), "  1  10 100")

    def test_array_wraps_every_ten_elements(self) -> None:
        arr = Array([Decimal(i) for i in range(12)])
        self.assertEqual(
            stringify(arr),
            " 0  1  2  3  4  5  6  7  8  9\n10 11",
        )

    def test_generator_renders_opaque_tag(self) -> None:
        self.assertEqual(stringify(count_up(Decimal(2))), "<generator of number>")


class DispatchTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.env = Environment()

    def test_register_multiple_orderings(self) -> None:
        op = Operator("max")

        @op.register((ValueKind.NUMBER, ValueKind.NUMBER))
        def _max(env, left, right):
            return max(left, right)

        self.assertTrue(op.supports(ValueKind.NUMBER, ValueKind.NUMBER))
        self.assertEqual(op.dispatch(self.env, Decimal(2), Decimal(5)), Decimal(5))

    def test_signature_length_must_match_arity(self) -> None:
        fn = Function("twice", 1)
        with self.assertRaises(ValueError):
            fn.register((ValueKind.NUMBER, ValueKind.NUMBER))

    def test_arity_checked_before_signature(self) -> None:
        fn = Function("twice", 1)
        with self.assertRaises(ArityError):
            fn.dispatch(self.env, Decimal(1), Decimal(2))
        with self.assertRaises(DispatchError):
            fn.dispatch(self.env, Decimal(1))

    def test_builtin_tables_are_per_environment(self) -> None:
        other = Environment()
        self.env.define_function(Function("twice", 1))
        self.assertEqual(self.env.function_arity("twice"), 1)
        self.assertIsNone(other.function_arity("twice"))
        self.assertTrue(other.is_operator(":="))
        self.assertEqual(other.function_arity("...$"), 1)


if __name__ == "__main__":
    unittest.main()
