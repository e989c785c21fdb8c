import json
import unittest
from cryptovote import aes, ballots, des, paillier, weights
from cryptovote.errors import InvalidArgumentError
from cryptovote.random import RandomSource


class Ballots(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.rng = RandomSource(4)
        cls.pk, cls.sk = paillier.generate_keypair(128, cls.rng)
        cls.weights = weights.calc_weights(3, 10)

    def test_get_cipher(self):
        self.assertIs(ballots.get_cipher('aes'), aes)
        self.assertIs(ballots.get_cipher('des'), des)
        self.assertRaises(InvalidArgumentError, ballots.get_cipher, 'rc4')

    def test_cast_decrypt(self):
        for cipher in ('aes', 'des'):
            key = ballots.get_cipher(cipher).generate_key(self.rng)
            b = ballots.cast_ballot('FName_7 LName_7', 2, self.weights, self.pk, cipher, key,
                                    self.rng)
            self.assertIsInstance(b.pii, bytes)
            self.assertEqual(ballots.decrypt_ballot(b, self.sk, cipher, key),
                             ('FName_7 LName_7', 121))
        self.assertRaises(InvalidArgumentError, ballots.cast_ballot, 'x', 3, self.weights,
                          self.pk, 'aes', key, self.rng)

    def test_tally(self):
        key = aes.generate_key(self.rng)
        choices = [0, 1, 1, 2, 0]
        bs = [ballots.cast_ballot(f'voter {i}', c, self.weights, self.pk, 'aes', key, self.rng)
              for i, c in enumerate(choices)]
        total = paillier.decrypt(self.sk, ballots.tally(bs, self.pk))
        self.assertEqual(total, 145)
        self.assertEqual(weights.decode(total, 3, 11), [2, 2, 1])
        self.assertEqual(paillier.decrypt(self.sk, ballots.tally(iter(bs), self.pk)), 145)
        self.assertIsNone(ballots.tally([], self.pk))

    def test_json(self):
        key = des.generate_key(self.rng)
        b = ballots.cast_ballot('FName_1 LName_1', 1, self.weights, self.pk, 'des', key, self.rng)
        obj = json.loads(json.dumps(ballots.to_json(b)))
        self.assertEqual(ballots.from_json(obj), b)
        self.assertRaises(InvalidArgumentError, ballots.from_json, {'weight': 'ff'})
        self.assertRaises(InvalidArgumentError, ballots.from_json, {'pii': 'zz', 'weight': 'ff'})
        self.assertRaises(InvalidArgumentError, ballots.from_json, {'pii': '00'})
        self.assertRaises(InvalidArgumentError, ballots.from_json, {'pii': '00', 'weight': 'g'})
        self.assertRaises(InvalidArgumentError, ballots.from_json, None)


if __name__ == "__main__":
    unittest.main()
