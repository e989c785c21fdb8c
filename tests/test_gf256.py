import unittest
from cryptovote import gf256


class Arithmetic(unittest.TestCase):

    def test_xtime(self):
        # FIPS PUB 197, Section 4.2.1
        self.assertEqual(gf256.xtime(0x57), 0xae)
        self.assertEqual(gf256.xtime(0xae), 0x47)
        self.assertEqual(gf256.xtime(0x47), 0x8e)
        self.assertEqual(gf256.xtime(0x8e), 0x07)
        self.assertEqual(gf256.xtime(0), 0)
        self.assertEqual(gf256.xtime(0x80), 0x1b)

    def test_gmul(self):
        gmul = gf256.gmul
        self.assertEqual(gmul(0x57, 0x83), 0xc1)
        self.assertEqual(gmul(0x57, 0x13), 0xfe)
        self.assertEqual(gmul(3, 3), 5)
        self.assertEqual(gmul(48, 16), 45)
        for a in (0, 1, 2, 0x53, 0xff):
            self.assertEqual(gmul(a, 1), a)
            self.assertEqual(gmul(a, 0), 0)
            self.assertEqual(gmul(a, 2), gf256.xtime(a))
            self.assertEqual(gmul(a, 0xca), gmul(0xca, a))

    def test_inverse(self):
        self.assertEqual(gf256.inverse(0), 0)
        self.assertEqual(gf256.inverse(1), 1)
        self.assertEqual(gf256.inverse(0x53), 0xca)
        for a in range(1, 256):
            self.assertEqual(gf256.gmul(a, gf256.inverse(a)), 1)

    def test_power(self):
        self.assertEqual(gf256.power(3, 0), 1)
        self.assertEqual(gf256.power(3, 255), 1)  # 3 generates the multiplicative group
        self.assertEqual(gf256.power(0x57, 2), gf256.gmul(0x57, 0x57))


if __name__ == "__main__":
    unittest.main()
