import operator
import unittest
from secsanta import fingroups as fg
from secsanta.gmpy import is_prime


class Arithmetic(unittest.TestCase):

    def setUp(self):
        self.QR11 = fg.QuadraticResidues(11)
        self.QR23 = fg.QuadraticResidues(23)

    def test_group_caching(self):
        QR11_cached = fg.QuadraticResidues(l=4)
        self.assertEqual(self.QR11, QR11_cached)
        self.assertEqual(self.QR11(3), QR11_cached(3))
        self.assertIs(fg.QuadraticResidues(l=5), self.QR23)

    def test_QR11(self):
        group = self.QR11
        self.assertEqual(group.modulus, 11)
        self.assertEqual(group.order, 5)
        self.assertEqual(group.identity, group(1))
        self.assertEqual(group(12), group(1))
        a = group(3)
        self.assertEqual(a^5, group.identity)
        b = group(4)
        self.assertEqual(b^5, group.identity)
        self.assertEqual(a * b, group.identity)
        self.assertEqual(a @ b, group.identity)
        self.assertEqual(1/a, b)
        self.assertEqual(~a, b)
        self.assertEqual(a^-1, b)
        self.assertEqual(a / b, a**2)
        self.assertEqual(a @ a, a^2)
        self.assertEqual(int(a^2), 9)
        self.assertRaises(TypeError, operator.truediv, 2, a)
        self.assertRaises(TypeError, operator.mul, a, 2)
        self.assertRaises(TypeError, group, 1.0)
        self.assertRaises(ValueError, group, 0)
        self.assertRaises(ValueError, group, 2)
        self.assertEqual({a, b, b}, {a, a, b})
        self.assertEqual(group.generator, group(3))

    def test_QR23(self):
        group = self.QR23
        self.assertEqual(group.order, 11)
        self.assertEqual(group.generator, group(2))
        self.assertEqual(len({int(group.generator^i) for i in range(group.order)}), 11)
        self.assertRaises(ValueError, group, 5)  # 5 is a non-residue modulo 23
        self.assertNotEqual(self.QR11(3), group(3))
        self.assertRaises(TypeError, operator.matmul, self.QR11(3), group(3))

    def test_element_types(self):
        for group in self.QR11, self.QR23, fg.FFDHEGroup():
            self.assertTrue(issubclass(group, fg.QuadraticResidue))
            self.assertTrue(issubclass(group, fg.FiniteGroupElement))
        self.assertEqual(fg.QuadraticResidue.__bases__, (fg.FiniteGroupElement,))

    def test_QR(self):
        QR = fg.QuadraticResidues(l=64)
        p = QR.modulus
        self.assertEqual(p.bit_length(), 64)
        self.assertTrue(is_prime(p))
        self.assertTrue(is_prime(QR.order))
        self.assertEqual(QR.order, (p - 1) // 2)
        g = QR.generator
        self.assertEqual(g^QR.order, QR.identity)
        self.assertEqual((g^(QR.order + 3)), g^3)

        self.assertRaises(ValueError, fg.QuadraticResidues, 2)
        self.assertRaises(ValueError, fg.QuadraticResidues, 13)  # 13 is not a safe prime
        self.assertRaises(ValueError, fg.QuadraticResidues, 15)
        self.assertRaises(ValueError, fg.QuadraticResidues, l=2)

    def test_FFDHE(self):
        G = fg.FFDHEGroup()
        p = G.modulus
        self.assertEqual(p.bit_length(), 2048)
        self.assertEqual(hex(p)[:34], '0xffffffffffffffffadf85458a2bb4a9a')
        self.assertEqual(p % 2**64, 2**64 - 1)
        self.assertTrue(is_prime(p))
        self.assertTrue(is_prime(G.order))
        self.assertEqual(G.generator, G(2))
        self.assertEqual(G.generator^G.order, G.identity)
        self.assertIs(fg.QuadraticResidues(l=2048), G)
        self.assertRaises(ValueError, fg.FFDHEGroup, 1024)

        G = fg.FFDHEGroup(3072)
        self.assertEqual(G.modulus.bit_length(), 3072)
        self.assertTrue(is_prime(G.modulus))
        self.assertTrue(is_prime(G.order))


if __name__ == "__main__":
    unittest.main()
