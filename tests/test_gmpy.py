import unittest
from secsanta import gmpy


class Arithmetic(unittest.TestCase):

    def test_basic(self):
        self.assertFalse(gmpy.is_prime(1))
        self.assertTrue(gmpy.is_prime(2))
        self.assertTrue(gmpy.is_prime(101))
        self.assertFalse(gmpy.is_prime(561))
        self.assertTrue(gmpy.is_prime(2**16+1))
        self.assertFalse(gmpy.is_prime(41041))

        self.assertEqual(gmpy.powmod(3, 256, 257), 1)
        self.assertEqual(gmpy.powmod(3, -1, 257), 86)

        self.assertEqual(gmpy.legendre(2, 7), 1)
        self.assertEqual(gmpy.legendre(3, 7), -1)

    def test_prev_prime(self):
        self.assertRaises(ValueError, gmpy.prev_prime, 2)
        self.assertEqual(gmpy.prev_prime(3), 2)
        self.assertEqual(gmpy.prev_prime(4), 3)
        self.assertEqual(gmpy.prev_prime(5), 3)
        self.assertEqual(gmpy.prev_prime(258), 257)
        self.assertEqual(gmpy.prev_prime(2**31), 2**31 - 1)
        self.assertEqual(gmpy.prev_prime(1 << 64), 2**64 - 59)


if __name__ == "__main__":
    unittest.main()
