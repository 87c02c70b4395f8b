#!/usr/bin/env python3
"""
Train a 2-10-4-4-1 network on the XOR truth table with PEPG.

The trained mean is written to a JSON checkpoint (gzip when the path ends in
``.gz``) and the network outputs for the four XOR cases are printed.

Usage
-----
python scripts/train_xor_pepg.py
python scripts/train_xor_pepg.py --population 1000 --target -0.01 --out xor.json.gz
python scripts/train_xor_pepg.py --seed 3 --max-generations 2000 -v
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

# Make repo_root/src importable when running this file directly
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from keyevo.infrastructure.containers import XOR_CASES, XorNetwork, xor_reward
from keyevo.infrastructure.sampling import GaussianSampler
from keyevo.infrastructure.training import PEPGConfig, PEPGTrainer


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="PEPG on XOR")
    p.add_argument("--population", type=int, default=200, help="antithetic pairs per generation")
    p.add_argument("--mu-lr", type=float, default=0.1)
    p.add_argument("--sigma-lr", type=float, default=0.01)
    p.add_argument("--initial-sigma", type=float, default=1.0)
    p.add_argument("--max-generations", type=int, default=1000)
    p.add_argument("--target", type=float, default=-0.01, help="stop once reward >= target")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--report-every", type=int, default=10)
    p.add_argument("--out", type=Path, default=None, help="checkpoint path for the trained network")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = PEPGConfig(
        population_size=args.population,
        initial_sigma=args.initial_sigma,
        mu_learning_rate=args.mu_lr,
        sigma_learning_rate=args.sigma_lr,
        max_generations=args.max_generations,
        target_fitness=args.target,
        seed=args.seed,
    )

    def report(generation: int, fitness: float) -> None:
        if generation % args.report_every == 0:
            print(f"gen {generation:5d}  reward {fitness:+.6f}")

    # Initial mean: N(0, 1) weights from a stream separate from the trainer's.
    mu = XorNetwork.sample_normal(0.0, 1.0, GaussianSampler(args.seed + 1))
    trainer = PEPGTrainer(xor_reward, mu, config=config, on_generation=report)
    result = trainer.train()

    print(
        f"\nstopped after {result.generations} generations ({result.reason}), "
        f"reward {result.fitness:+.6f}, mean sigma {trainer.mean_sigma():.4g}"
    )
    for inputs, target in XOR_CASES:
        out = float(result.container(inputs)[0])
        print(f"  {inputs} -> {out:+.4f} (target {target})")

    if args.out is not None:
        result.container.save_json(args.out)
        print(f"\nSaved checkpoint to: {args.out.resolve()}")


if __name__ == "__main__":
    main()
