"""Sampling-importance-resampling demo: locate a point from range measurements."""

from __future__ import annotations

import argparse
import math
import random
import sys
from dataclasses import dataclass, field, replace
from typing import Any

from .particlefilter import Evolver, UniformResampler


@dataclass
class PointParticle:
    """A weighted hypothesis of a planar position."""

    x: float = 0.0
    y: float = 0.0
    weight: float = 0.0


@dataclass
class RandomWalkModel:
    """Moves a particle uniformly within a square of side ``step``."""

    step: float = 10.0
    rng: Any = None

    def evolve(self, particle: PointParticle) -> PointParticle:
        """Return a displaced copy of the particle."""
        rng = self.rng if self.rng is not None else random
        dx = self.step * (rng.random() - 0.5)
        dy = self.step * (rng.random() - 0.5)
        return replace(particle, x=particle.x + dx, y=particle.y + dy)


@dataclass
class RangeLikelihoodModel:
    """Likelihood of a position given range measurements from fixed observers."""

    observers: list[tuple[float, float]] = field(default_factory=list)
    observations: list[float] = field(default_factory=list)
    sigma: float = 1000.0

    def likelihood(self, particle: PointParticle) -> float:
        """Product of Gaussian terms on the squared-range mismatch to each observer."""
        value = 1.0
        for (ox, oy), measured in zip(self.observers, self.observations):
            squared = (particle.x - ox) ** 2 + (particle.y - oy) ** 2
            value *= math.exp(-(((squared - measured * measured) / self.sigma) ** 2))
        return value


def sir_step(
    particles: list[PointParticle],
    evolver: Evolver,
    likelihood_model: RangeLikelihoodModel,
    resampler: UniformResampler,
) -> list[PointParticle]:
    """Evolve and reweight ``particles`` in place, then return the resampled generation."""
    evolver.evolve(particles)
    for particle in particles:
        particle.weight *= likelihood_model.likelihood(particle)
    return resampler.resample(particles)


def main(argv: list[str] | None = None) -> int:
    """Run one filter step per line of standard input, dumping particles for gnuplot."""
    parser = argparse.ArgumentParser(prog="rangebearing")
    parser.add_argument("--particles", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default="sir.dat")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    particles = [
        PointParticle(400 * (rng.random() - 0.5), 400 * (rng.random() - 0.5), 1.0)
        for _ in range(args.particles)
    ]
    likelihood_model = RangeLikelihoodModel(
        observers=[(-50.0, 0.0), (50.0, 0.0), (0.0, 100.0)],
        observations=[70.0, 70.0, 70.0],
        sigma=1000.0,
    )
    evolver = Evolver(RandomWalkModel(rng=rng))
    resampler = UniformResampler(rng=rng)

    for _ in sys.stdin:
        print("# SIR step")
        resampled = sir_step(particles, evolver, likelihood_model, resampler)
        with open(args.output, "w") as out:
            out.writelines(f"{p.x:g} {p.y:g}\n" for p in particles)
        particles = resampled
        print(f'plot [-200:200][-200:200]"{args.output}" w p', flush=True)
    return 0