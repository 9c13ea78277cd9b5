import random
from itertools import product

from rangefold.ops import OPERATIONS, bit_and, bit_or, bit_xor, concat, first, gcd, last, lcm
from rangefold.ops import max as max_
from rangefold.ops import min as min_
from rangefold.test import MyTestCase, parametrize


class OpsTest(MyTestCase):
    @parametrize(
        (min_, 1, 2, 1),
        (min_, 2, 1, 1),
        (max_, 1, 2, 2),
        (max_, "b", "a", "b"),
        (gcd, 12, 18, 6),
        (gcd, 0, 5, 5),
        (lcm, 4, 6, 12),
        (lcm, 0, 6, 0),
        (lcm, -4, 6, 12),
        (bit_and, 0b1100, 0b1010, 0b1000),
        (bit_or, 0b1100, 0b1010, 0b1110),
        (bit_xor, 0b1100, 0b1010, 0b0110),
        (concat, "ab", "cd", "abcd"),
        (concat, (1,), (2, 3), (1, 2, 3)),
        (first, "a", "b", "a"),
        (last, "a", "b", "b"),
    )
    def test_binary(self, func, a, b, truth):
        self.assertEqual(truth, func(a, b))

    def test_min_stable(self):
        # equal elements keep the leftmost one
        a = (1, "a")
        b = (1, "a")
        self.assertIs(a, min_(a, b))
        self.assertIs(a, max_(a, b))

    def test_associative(self):
        values = [random.randint(-50, 50) for _ in range(8)]

        for name, func in OPERATIONS.items():
            if name == "concat":
                samples = [str(v) for v in values]
            else:
                samples = values

            with self.subTest(name):
                for a, b, c in product(samples[:5], repeat=3):
                    self.assertEqual(func(func(a, b), c), func(a, func(b, c)))


if __name__ == "__main__":
    import unittest

    unittest.main()
