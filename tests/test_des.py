import unittest
from cryptovote import des
from cryptovote.errors import InvalidArgumentError
from cryptovote.random import RandomSource


class Arithmetic(unittest.TestCase):

    def setUp(self):
        self.rng = RandomSource(2)

    def test_permutations(self):
        x = 0x0123456789ABCDEF
        self.assertEqual(des.permute(des.permute(x, des.IP, 64), des.FP, 64), x)
        self.assertEqual(des.permute(des.permute(x, des.FP, 64), des.IP, 64), x)
        self.assertEqual(des.permute(0b100, (1, 2, 3), 3), 0b100)
        self.assertEqual(des.permute(0b100, (3, 2, 1), 3), 0b001)
        self.assertEqual(sum(des.SHIFTS), 28)

    def test_key_schedule(self):
        subkeys = des.key_schedule(0x133457799BBCDFF1)
        self.assertEqual(len(subkeys), 16)
        self.assertEqual(subkeys[0], 0x1B02EFFC7072)
        self.assertTrue(all(k < 1 << 48 for k in subkeys))

    def test_block(self):
        subkeys = des.key_schedule(0x133457799BBCDFF1)
        c = des.encrypt_block(0x0123456789ABCDEF, subkeys)
        self.assertEqual(c, 0x85E813540F0AB405)
        self.assertEqual(des.decrypt_block(c, subkeys), 0x0123456789ABCDEF)

        subkeys = des.key_schedule(0x0E329232EA6D0D73)
        self.assertEqual(des.encrypt_block(0x8787878787878787, subkeys), 0)
        self.assertEqual(des.decrypt_block(0, subkeys), 0x8787878787878787)

    def test_parity_bits(self):
        subkeys1 = des.key_schedule(0x133457799BBCDFF1)
        subkeys2 = des.key_schedule(0x133457799BBCDFF1 ^ 0x0101010101010101)
        self.assertEqual(subkeys1, subkeys2)

    def test_cbc(self):
        key, iv = 0x133457799BBCDFF1, 0x0011223344556677
        p = [0x0123456789ABCDEF, 0x0123456789ABCDEF, 0]
        blocks = list(p)
        des.encrypt_cbc(blocks, key, iv)
        subkeys = des.key_schedule(key)
        self.assertEqual(blocks[0], des.encrypt_block(p[0] ^ iv, subkeys))
        self.assertEqual(blocks[1], des.encrypt_block(p[1] ^ blocks[0], subkeys))
        self.assertNotEqual(blocks[0], blocks[1])
        des.decrypt_cbc(blocks, key, iv)
        self.assertEqual(blocks, p)

        blocks = []
        des.encrypt_cbc(blocks, key, iv)
        self.assertEqual(blocks, [])

    def test_blocks(self):
        data = bytes(range(16))
        blocks = des.to_blocks(data)
        self.assertEqual(blocks, [0x0001020304050607, 0x08090A0B0C0D0E0F])
        self.assertEqual(des.from_blocks(blocks), data)

    def test_encrypt_decrypt(self):
        key = des.generate_key(self.rng)
        self.assertEqual(len(key), 8)
        for m in ('', 'FName_0 LName_0', 'x' * 8, 'ballot ✓'):
            c = des.encrypt(m, key, self.rng)
            self.assertEqual(len(c) % 8, 0)
            self.assertEqual(des.decrypt(c, key), m.encode('utf-8'))
        self.assertEqual(len(des.encrypt('', key, self.rng)), 16)
        self.assertEqual(len(des.encrypt('x' * 8, key, self.rng)), 24)
        c = des.encrypt('abc', key, self.rng, padding_scheme='zero')
        self.assertEqual(len(c), 16)
        self.assertEqual(des.decrypt(c, key, padding_scheme='zero'), b'abc')

    def test_random_round_trips(self):
        for _ in range(4):
            key = des.generate_key(self.rng)
            for n in range(41):
                p = self.rng.randbytes(n)
                c = des.encrypt(p, key, self.rng)
                self.assertEqual(len(c), 8 + (n // 8 + 1) * 8)
                self.assertEqual(des.decrypt(c, key), p)

                p = p[:-1] + b'\x01' if n else b''  # no trailing zero byte
                c = des.encrypt(p, key, self.rng, padding_scheme='zero')
                self.assertEqual(len(c), 8 + max(1, -(-len(p) // 8)) * 8)
                self.assertEqual(des.decrypt(c, key, padding_scheme='zero'), p)

    def test_errors(self):
        key = des.generate_key(self.rng)
        self.assertRaises(InvalidArgumentError, des.encrypt, 'abc', key + b'\x00', self.rng)
        self.assertRaises(InvalidArgumentError, des.decrypt, bytes(8), key)
        self.assertRaises(InvalidArgumentError, des.decrypt, bytes(20), key)

    def test_key_from_hex(self):
        self.assertEqual(des.key_from_hex('133457799BBCDFF1'), bytes.fromhex('133457799BBCDFF1'))
        self.assertEqual(des.key_from_hex('1'), bytes(7) + b'\x01')
        self.assertRaises(InvalidArgumentError, des.key_from_hex, '')
        self.assertRaises(InvalidArgumentError, des.key_from_hex, '0' * 17)
        self.assertRaises(InvalidArgumentError, des.key_from_hex, '0x12')
        self.assertRaises(InvalidArgumentError, des.key_from_hex, '-12')


if __name__ == "__main__":
    unittest.main()
