"""
scripts/bench_es_serial_vs_threads.py

Serial vs thread-pool ES generation benchmark (NOT a unit test) for KeyEvo.

Times `ESTrainer.step()` on the five-dimensional Rastrigin objective with
trials scored serially and through a `ThreadPoolExecutor`. Both runs use the
same seed, so the final points must match exactly; the script checks this.

Notes
-----
Rastrigin is cheap to evaluate, so thread fan-out mostly measures executor
overhead. Use `--work` to add artificial per-evaluation cost and see where
the pool starts to pay off.

Usage
-----
python scripts/bench_es_serial_vs_threads.py
python scripts/bench_es_serial_vs_threads.py --population 500 --generations 20 --workers 8
python scripts/bench_es_serial_vs_threads.py --work 2000
"""

from __future__ import annotations

import argparse
import os
import statistics
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import numpy as np

# Make repo_root/src importable
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from keyevo.infrastructure.containers import RastriginPoint, rastrigin_score
from keyevo.infrastructure.training import ESConfig, ESTrainer


def make_fitness(work: int):
    if work <= 0:
        return rastrigin_score

    def heavy(point: RastriginPoint) -> float:
        # np.dot releases the GIL
        m = np.full((32, 32), 0.01)
        for _ in range(work):
            np.dot(m, m)
        return rastrigin_score(point)

    return heavy


def run(args: argparse.Namespace, pool: Optional[ThreadPoolExecutor]):
    config = ESConfig(
        population_size=args.population,
        sigma=0.1,
        learning_rate=0.01,
        seed=args.seed,
    )
    trainer = ESTrainer(
        make_fitness(args.work),
        RastriginPoint.full(5.12),
        config=config,
        executor=pool,
    )
    times: List[float] = []
    for _ in range(args.generations):
        t0 = time.perf_counter()
        trainer.step()
        times.append(time.perf_counter() - t0)
        trainer.generation += 1
    return trainer.current, times


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--population", type=int, default=200)
    p.add_argument("--generations", type=int, default=10)
    p.add_argument("--workers", type=int, default=4)
    p.add_argument("--work", type=int, default=0, help="extra matmuls per evaluation")
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args()

    serial_point, serial_times = run(args, None)
    with ThreadPoolExecutor(max_workers=args.workers) as pool:
        pooled_point, pooled_times = run(args, pool)

    print(f"population={args.population} generations={args.generations} work={args.work}")
    print(f"serial   median step: {statistics.median(serial_times) * 1e3:9.3f} ms")
    print(
        f"threads  median step: {statistics.median(pooled_times) * 1e3:9.3f} ms "
        f"(workers={args.workers})"
    )

    if not np.array_equal(serial_point.values, pooled_point.values):
        raise SystemExit("MISMATCH: serial and pooled runs diverged")
    print("final points match")


if __name__ == "__main__":
    main()
