import unittest

from fraction64 import Fraction, FractionOverflowError, settings
from fraction64 import int64
from fraction64.int64 import INT64_MAX, INT64_MIN


class GcdLcmTests(unittest.TestCase):
    def test_gcd(self):
        self.assertEqual(int64.gcd(12, 18), 6)
        self.assertEqual(int64.gcd(17, 5), 1)
        self.assertEqual(int64.gcd(0, 9), 9)
        self.assertEqual(int64.gcd(9, 0), 9)

    def test_lcm(self):
        self.assertEqual(int64.lcm(4, 6), 12)
        self.assertEqual(int64.lcm(7, 3), 21)
        self.assertEqual(int64.lcm(-4, 6), 12)

    def test_lcm_overflow_follows_policy(self):
        big = 2**62 + 1
        with settings(overflow="raise"):
            with self.assertRaises(FractionOverflowError):
                int64.lcm(big, 3)


class BoundedArithmeticTests(unittest.TestCase):
    def test_wrap(self):
        self.assertEqual(int64.wrap(INT64_MAX + 1), INT64_MIN)
        self.assertEqual(int64.wrap(INT64_MIN - 1), INT64_MAX)
        self.assertEqual(int64.wrap(2**64 + 5), 5)
        self.assertEqual(int64.wrap(-3), -3)

    def test_mul_wraps_by_default(self):
        self.assertEqual(int64.mul(2**62, 4), 0)
        self.assertEqual(int64.add(INT64_MAX, 1), INT64_MIN)
        self.assertEqual(int64.neg(INT64_MIN), INT64_MIN)

    def test_mul_raises_when_checked(self):
        with settings(overflow="raise"):
            with self.assertRaises(FractionOverflowError) as ctx:
                int64.mul(2**62, 4)
        self.assertEqual(ctx.exception.value, 2**64)
        self.assertIsInstance(ctx.exception, OverflowError)

    def test_trunc_div(self):
        self.assertEqual(int64.trunc_div(7, 2), 3)
        self.assertEqual(int64.trunc_div(-7, 2), -3)
        self.assertEqual(int64.trunc_div(7, -2), -3)
        self.assertEqual(int64.trunc_div(-7, -2), 3)
        with self.assertRaises(ZeroDivisionError):
            int64.trunc_div(1, 0)

    def test_saturate(self):
        self.assertEqual(int64.saturate(2**70), INT64_MAX)
        self.assertEqual(int64.saturate(-(2**70)), INT64_MIN)


class OverflowPolicyTests(unittest.TestCase):
    def test_fraction_products_wrap(self):
        value = Fraction(INT64_MAX) * 2
        self.assertEqual(value.as_tuple(), (-2, 1))

    def test_fraction_products_raise_when_checked(self):
        with settings(overflow="raise"):
            with self.assertRaises(FractionOverflowError):
                _ = Fraction(INT64_MAX) * 2

    def test_unrepresentable_denominator(self):
        self.assertFalse(Fraction(1, INT64_MIN).is_valid)
        with settings(overflow="raise"):
            with self.assertRaises(FractionOverflowError):
                Fraction(1, INT64_MIN)

    def test_python_int_out_of_range(self):
        self.assertEqual(Fraction(2**64 + 3).as_tuple(), (3, 1))
        with settings(overflow="raise"):
            with self.assertRaises(FractionOverflowError):
                Fraction(2**64)

    def test_declared_range(self):
        from fraction64 import LARGEST, SMALLEST_POSITIVE

        self.assertEqual(LARGEST.numerator, INT64_MAX)
        self.assertAlmostEqual(float(SMALLEST_POSITIVE), 1.0842021724855044e-19)
        self.assertTrue(SMALLEST_POSITIVE > 0)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
