import math
import unittest
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from keyevo.domain._errors import ConfigurationError, NumericDegeneracyError
from keyevo.infrastructure.containers import VectorContainer, vector_type
from keyevo.infrastructure.training import (
    ESConfig,
    History,
    MAX_GENERATIONS,
    PEPGConfig,
    TARGET_REACHED,
    Termination,
    evaluate_one,
    evaluate_population,
    scalar_values,
)


class TestHistory(unittest.TestCase):
    def test_append_and_last(self):
        h = History()
        h.append_generation(0, {"fitness": -3})
        h.append_generation(1, {"fitness": -1.5, "sigma": 0.5})
        self.assertEqual(len(h), 2)
        self.assertEqual(h.generation, [0, 1])
        self.assertEqual(h.history["fitness"], [-3.0, -1.5])
        self.assertEqual(h.last(), {"fitness": -1.5, "sigma": 0.5})

    def test_empty_history(self):
        self.assertEqual(History().last(), {})
        self.assertEqual(len(History()), 0)


class TestTermination(unittest.TestCase):
    def test_max_generations(self):
        t = Termination(max_generations=3)
        self.assertIsNone(t.check(2, -10.0))
        self.assertEqual(t.check(3, -10.0), MAX_GENERATIONS)

    def test_target_checked_first(self):
        t = Termination(max_generations=3, target_fitness=-1.0)
        self.assertEqual(t.check(0, -1.0), TARGET_REACHED)
        self.assertEqual(t.check(3, 0.0), TARGET_REACHED)
        self.assertIsNone(t.check(1, -1.5))

    def test_negative_max_rejected(self):
        with self.assertRaises(ConfigurationError):
            Termination(max_generations=-1)


class TestConfigs(unittest.TestCase):
    def test_es_defaults(self):
        cfg = ESConfig()
        self.assertEqual(cfg.population_size, 50)
        self.assertEqual(cfg.shaping, "rank")
        self.assertEqual(cfg.termination(), Termination(1000, None))

    def test_pepg_defaults(self):
        cfg = PEPGConfig()
        self.assertEqual(cfg.initial_sigma, 1.0)
        self.assertEqual(cfg.min_sigma, 1e-6)
        self.assertEqual(cfg.mu_learning_rate, 0.1)
        self.assertEqual(cfg.sigma_learning_rate, 0.01)
        self.assertLess(cfg.sigma_learning_rate, cfg.mu_learning_rate)

    def test_invalid_es_configs(self):
        for kwargs in (
            {"population_size": 0},
            {"sigma": 0.0},
            {"learning_rate": -0.1},
            {"shaping": "softmax"},
            {"rank_scale": 0.0},
            {"max_generations": -1},
        ):
            with self.subTest(**{k: str(v) for k, v in kwargs.items()}):
                with self.assertRaises(ConfigurationError):
                    ESConfig(**kwargs).termination()

    def test_invalid_pepg_configs(self):
        for kwargs in (
            {"population_size": 0},
            {"initial_sigma": 0.0},
            {"mu_learning_rate": 0.0},
            {"sigma_learning_rate": -1.0},
            {"min_sigma": 0.0},
        ):
            with self.subTest(**{k: str(v) for k, v in kwargs.items()}):
                with self.assertRaises(ConfigurationError):
                    PEPGConfig(**kwargs)


class TestEvaluation(unittest.TestCase):
    def test_evaluate_one_rejects_nan(self):
        with self.assertRaises(NumericDegeneracyError) as ctx:
            evaluate_one(lambda c: math.nan, None, generation=4)
        self.assertEqual(ctx.exception.generation, 4)
        self.assertIsNone(ctx.exception.trial)

    def test_evaluate_population_keeps_order(self):
        scores = evaluate_population(lambda c: float(c) * 2.0, [3, 1, 2])
        np.testing.assert_array_equal(scores, [6.0, 2.0, 4.0])

    def test_executor_keeps_trial_order(self):
        candidates = list(range(32))
        with ThreadPoolExecutor(max_workers=4) as pool:
            scores = evaluate_population(lambda c: float(c), candidates, executor=pool)
        np.testing.assert_array_equal(scores, np.arange(32, dtype=np.float64))

    def test_reports_first_bad_trial(self):
        values = [0.0, 1.0, math.inf, math.nan]
        with self.assertRaises(NumericDegeneracyError) as ctx:
            evaluate_population(lambda i: values[i], [0, 1, 2, 3], generation=7)
        self.assertEqual(ctx.exception.trial, 2)
        self.assertEqual(ctx.exception.generation, 7)


class TestScalarValues(unittest.TestCase):
    def test_collects_in_traversal_order(self):
        V = vector_type(3)
        self.assertEqual(scalar_values(V([1.0, 2.0, 3.0])), [1.0, 2.0, 3.0])

    def test_empty_container(self):
        class Empty(VectorContainer):
            size = 0

        self.assertEqual(scalar_values(Empty()), [])


if __name__ == "__main__":
    unittest.main()
