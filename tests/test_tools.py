import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import MathTools, WeightConverter


class MathToolsTestCase(unittest.TestCase):
    def test_constants(self) -> None:
        self.assertEqual(MathTools.EPLEY_DIVISOR, 30)

    def test_epley_1rm(self) -> None:
        self.assertEqual(MathTools.epley_1rm(135, 8), 171)
        self.assertEqual(MathTools.epley_1rm(100, 10), 133)
        self.assertEqual(MathTools.epley_1rm(225, 1), 225)
        self.assertEqual(MathTools.epley_1rm(102.5, 1), 102.5)
        with self.assertRaises(ValueError):
            MathTools.epley_1rm(100, 0)

    def test_volume(self) -> None:
        sets = [(10, 100.0), (5, 150.0)]
        self.assertEqual(MathTools.volume(sets), 10 * 100.0 + 5 * 150.0)
        self.assertEqual(MathTools.volume(sets, 2), 2 * (10 * 100.0 + 5 * 150.0))
        self.assertEqual(MathTools.volume([]), 0.0)

    def test_best(self) -> None:
        self.assertEqual(MathTools.best([3, 9, 9, 1], lambda x: x), 9)
        self.assertEqual(MathTools.best(["b", "aa"], len), "aa")
        self.assertIsNone(MathTools.best([], lambda x: x))


class WeightConverterTestCase(unittest.TestCase):
    def test_kg_lb(self) -> None:
        self.assertAlmostEqual(WeightConverter.kg_to_lb(100), 220.46)
        self.assertAlmostEqual(WeightConverter.lb_to_kg(225), 102.06)

    def test_convert(self) -> None:
        self.assertEqual(WeightConverter.convert(100, "kg", "kg"), 100)
        self.assertAlmostEqual(WeightConverter.convert(100, "kg", "lbs"), 220.46)
        self.assertAlmostEqual(WeightConverter.convert(135, "lbs", "kg"), 61.24)
        with self.assertRaises(ValueError):
            WeightConverter.convert(100, "kg", "stone")


if __name__ == "__main__":
    unittest.main()
