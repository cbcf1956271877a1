import random
import unittest
from secsanta import fingroups as fg
from secsanta.elgamal import CryptoFailure, rerandomize
from secsanta.mixnet import TokenList, initial_tokens
from secsanta.participant import Participant, Initialized, KeyGenerated, Assigned


class States(unittest.TestCase):

    def setUp(self):
        self.group = fg.QuadraticResidues(l=64)
        self.rng = random.Random(7)

    def test_lifecycle(self):
        p = Participant(1)
        self.assertIsInstance(p.state, Initialized)
        self.assertEqual(repr(p), '<Participant 1: Initialized>')
        self.assertRaises(RuntimeError, lambda: p.recipient)
        self.assertRaises(RuntimeError, lambda: p.public_key)
        self.assertRaises(RuntimeError, p.initial_token)
        self.assertRaises(RuntimeError, p.extract, TokenList([]))

        h = p.generate_key(self.group, self.rng)
        self.assertIsInstance(p.state, KeyGenerated)
        self.assertEqual(p.public_key, h)
        self.assertEqual(h, self.group.generator^p.state.key.x)
        self.assertRaises(RuntimeError, p.generate_key, self.group)
        self.assertRaises(RuntimeError, lambda: p.recipient)
        self.assertEqual(p.initial_token(), (self.group.generator, h))

        tokens = TokenList([p.initial_token()])
        self.assertEqual(p.extract(tokens), 1)
        self.assertIsInstance(p.state, Assigned)
        self.assertEqual(p.recipient, 1)
        self.assertEqual(p.public_key, h)
        self.assertRaises(RuntimeError, p.extract, tokens)
        self.assertRaises(RuntimeError, p.initial_token)

        p.forget()
        self.assertIsInstance(p.state, Initialized)
        self.assertRaises(RuntimeError, lambda: p.recipient)
        self.assertNotEqual(p.generate_key(self.group, self.rng), h)


class Extraction(unittest.TestCase):

    def setUp(self):
        self.group = fg.QuadraticResidues(l=64)
        self.rng = random.Random(11)
        self.participants = [Participant(i) for i in range(1, 5)]
        for p in self.participants:
            p.generate_key(self.group, self.rng)
        self.tokens = initial_tokens(self.participants)

    def test_unshuffled(self):
        for p in self.participants:
            self.assertEqual(p.extract(self.tokens), p.pid)

    def test_permuted(self):
        # reverse order and blind twice
        tokens = TokenList(rerandomize(c, 1234567) for c in reversed(self.tokens))
        tokens = TokenList(rerandomize(c, 89) for c in tokens)
        recipients = [p.extract(tokens) for p in self.participants]
        self.assertEqual(recipients, [4, 3, 2, 1])

        tokens = TokenList([self.tokens[1], self.tokens[2], self.tokens[0], self.tokens[3]])
        tokens = TokenList(rerandomize(c, 5) for c in tokens)
        for p in self.participants:
            p.forget()
            p.generate_key(self.group, self.rng)
        self.assertRaises(CryptoFailure, self.participants[0].extract, tokens)

    def test_malformed(self):
        p = self.participants[0]
        tokens = TokenList(self.tokens[1:])
        self.assertRaises(CryptoFailure, p.extract, tokens)
        self.assertIsInstance(p.state, KeyGenerated)
        tokens = TokenList([self.tokens[0], self.tokens[0], self.tokens[1]])
        self.assertRaises(CryptoFailure, p.extract, tokens)
        self.assertEqual(p.extract(self.tokens), 1)

    def test_empty(self):
        p = self.participants[0]
        self.assertRaises(CryptoFailure, p.extract, TokenList([]))
        self.assertRaises(CryptoFailure, p.extract, [])
        self.assertIsInstance(p.state, KeyGenerated)
        self.assertEqual(p.extract(self.tokens), 1)


if __name__ == "__main__":
    unittest.main()
