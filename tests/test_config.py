import unittest

from edgecov.config import SearchConfig, MAP_SIZE


class TestSearchConfig(unittest.TestCase):
    def testDefaults(self):
        config = SearchConfig()
        self.assertEqual(config.arraySize, MAP_SIZE)
        self.assertEqual(config.arraySize, 65536)
        self.assertEqual(config.delta, 10)
        self.assertEqual(config.sigma, 0.001)
        self.assertEqual(config.rounds, 15)

    def testMaxRoundsCapsRounds(self):
        self.assertEqual(SearchConfig(mapSizePow2=6, maxRounds=3).rounds, 3)
        self.assertEqual(SearchConfig(mapSizePow2=6, maxRounds=30).rounds, 5)

    def testReplace(self):
        config = SearchConfig().replace(mapSizePow2=8, candidateBudget=100)
        self.assertEqual(config.arraySize, 256)
        self.assertEqual(config.candidateBudget, 100)

    def testValidation(self):
        for kwargs in (
            dict(mapSizePow2=1),
            dict(mapSizePow2=31),
            dict(delta=-1),
            dict(sigma=-0.5),
            dict(maxRounds=0),
            dict(candidateBudget=-1),
        ):
            with self.assertRaises(ValueError, msg=repr(kwargs)):
                SearchConfig(**kwargs)


if __name__ == "__main__":
    unittest.main()
