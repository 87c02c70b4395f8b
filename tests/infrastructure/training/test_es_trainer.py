import math
import unittest
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from keyevo.domain._errors import (
    ConfigurationError,
    DegeneratePopulationError,
    NumericDegeneracyError,
)
from keyevo.infrastructure.containers import (
    RastriginPoint,
    VectorContainer,
    rastrigin_score,
)
from keyevo.infrastructure.optimizers import Adam
from keyevo.infrastructure.training import (
    ESConfig,
    ESTrainer,
    MAX_GENERATIONS,
    TARGET_REACHED,
)


class Scalar(VectorContainer):
    size = 1


def parabola(c: Scalar) -> float:
    return -((c[0] - 5.0) ** 2)


class TestESTrainerConvergence(unittest.TestCase):
    def test_climbs_one_dimensional_parabola(self):
        cfg = ESConfig(
            population_size=50,
            sigma=0.5,
            learning_rate=0.1,
            max_generations=500,
            target_fitness=-0.04,
            seed=0,
        )
        result = ESTrainer(parabola, Scalar([0.0]), config=cfg).train()

        self.assertEqual(result.reason, TARGET_REACHED)
        self.assertLess(abs(result.container[0] - 5.0), 0.2)
        self.assertGreaterEqual(result.fitness, -0.04)
        self.assertEqual(len(result.history), result.generations + 1)

    def test_fixed_budget_ends_near_optimum(self):
        for seed in (0, 1, 2):
            with self.subTest(seed=seed):
                cfg = ESConfig(
                    population_size=50,
                    sigma=0.5,
                    learning_rate=0.1,
                    max_generations=200,
                    seed=seed,
                )
                result = ESTrainer(parabola, Scalar([0.0]), config=cfg).train()

                self.assertEqual(result.reason, MAX_GENERATIONS)
                self.assertEqual(result.generations, 200)
                self.assertLess(abs(result.container[0] - 5.0), 0.2)

    def test_improves_rastrigin_point(self):
        start = RastriginPoint.full(2.5)
        cfg = ESConfig(population_size=40, sigma=0.5, learning_rate=0.05, max_generations=30, seed=1)
        result = ESTrainer(rastrigin_score, start, config=cfg).train()

        self.assertEqual(result.reason, MAX_GENERATIONS)
        self.assertEqual(result.generations, 30)
        self.assertGreater(result.fitness, rastrigin_score(start))

    def test_standardize_policy(self):
        cfg = ESConfig(shaping="standardize", learning_rate=0.1, max_generations=20, seed=2)
        result = ESTrainer(parabola, Scalar([0.0]), config=cfg).train()
        self.assertGreater(result.fitness, parabola(Scalar([0.0])))


class TestESTrainerLoop(unittest.TestCase):
    def test_zero_generations_returns_initial(self):
        start = Scalar([1.0])
        result = ESTrainer(parabola, start, config=ESConfig(max_generations=0, seed=0)).train()
        self.assertIs(result.container, start)
        self.assertEqual(result.generations, 0)
        self.assertEqual(result.reason, MAX_GENERATIONS)
        self.assertEqual(result.fitness, -16.0)

    def test_initial_solution_at_target(self):
        cfg = ESConfig(max_generations=100, target_fitness=-1.0, seed=0)
        result = ESTrainer(parabola, Scalar([5.0]), config=cfg).train()
        self.assertEqual(result.reason, TARGET_REACHED)
        self.assertEqual(result.generations, 0)

    def test_on_generation_callback(self):
        seen = []
        cfg = ESConfig(max_generations=5, seed=0)
        trainer = ESTrainer(
            parabola,
            Scalar([0.0]),
            config=cfg,
            on_generation=lambda gen, fit: seen.append((gen, fit)),
        )
        result = trainer.train()

        self.assertEqual([g for g, _ in seen], [0, 1, 2, 3, 4, 5])
        self.assertEqual([f for _, f in seen], result.history.history["fitness"])
        self.assertEqual(seen[-1][1], result.fitness)

    def test_initial_container_not_mutated(self):
        start = Scalar([0.0])
        ESTrainer(parabola, start, config=ESConfig(max_generations=3, seed=0)).train()
        np.testing.assert_array_equal(start.values, [0.0])

    def test_seeded_runs_are_reproducible(self):
        cfg = ESConfig(max_generations=10, learning_rate=0.1, seed=42)
        a = ESTrainer(parabola, Scalar([0.0]), config=cfg).train()
        b = ESTrainer(parabola, Scalar([0.0]), config=cfg).train()
        np.testing.assert_array_equal(a.container.values, b.container.values)

    def test_executor_matches_serial(self):
        cfg = ESConfig(max_generations=10, learning_rate=0.1, seed=7)
        serial = ESTrainer(parabola, Scalar([0.0]), config=cfg).train()
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = ESTrainer(parabola, Scalar([0.0]), config=cfg, executor=pool).train()
        np.testing.assert_array_equal(serial.container.values, parallel.container.values)
        self.assertEqual(serial.history.history, parallel.history.history)

    def test_step_draws_population_size_perturbations(self):
        seen = []

        def recording(c):
            seen.append(c[0])
            return parabola(c)

        trainer = ESTrainer(recording, Scalar([0.0]), config=ESConfig(population_size=12, seed=0))
        trainer.step()
        self.assertEqual(len(seen), 12)


class TestESTrainerErrors(unittest.TestCase):
    def test_descent_optimizer_rejected(self):
        with self.assertRaises(ConfigurationError):
            ESTrainer(parabola, Scalar([0.0]), optimizer=Adam(lr=0.1))

    def test_nan_baseline_aborts(self):
        trainer = ESTrainer(lambda c: math.nan, Scalar([0.0]), config=ESConfig(seed=0))
        with self.assertRaises(NumericDegeneracyError) as ctx:
            trainer.train()
        self.assertEqual(ctx.exception.generation, 0)
        self.assertIsNone(ctx.exception.trial)

    def test_nan_trial_aborts(self):
        calls = {"n": 0}

        def flaky(c):
            calls["n"] += 1
            return 0.0 if calls["n"] == 1 else math.nan

        trainer = ESTrainer(flaky, Scalar([0.0]), config=ESConfig(seed=0))
        with self.assertRaises(NumericDegeneracyError) as ctx:
            trainer.train()
        self.assertEqual(ctx.exception.trial, 0)

    def test_degenerate_population_under_standardization(self):
        trainer = ESTrainer(
            lambda c: 1.0,
            Scalar([0.0]),
            config=ESConfig(shaping="standardize", max_generations=3, seed=0),
        )
        with self.assertRaises(DegeneratePopulationError):
            trainer.train()


if __name__ == "__main__":
    unittest.main()
