"""Generic particle filter helpers: weights, resampling and evolution."""

from __future__ import annotations

import copy
import math
import random
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence


def _weight(item: Any) -> float:
    return float(getattr(item, "weight", item))


def _systematic_indexes(weights: Iterable[Any], nparticles: int, rng: Any) -> list[int]:
    values = [_weight(w) for w in weights]
    n = nparticles if nparticles > 0 else len(values)
    if n == 0:
        raise ValueError("cannot resample an empty set of weights")
    if rng is None:
        rng = random
    interval = sum(values) / n
    target = interval * rng.random()
    indexes: list[int] = []
    cweight = 0.0
    for i, w in enumerate(values):
        cweight += w
        while cweight > target and len(indexes) < n:
            indexes.append(i)
            target += interval
    indexes.extend([0] * (n - len(indexes)))
    return indexes


def to_normal_form(values: Iterable[float]) -> tuple[list[float], float]:
    """Turn log weights into weights relative to the largest; return them and that maximum."""
    logs = [float(v) for v in values]
    lmax = max(logs, default=-math.inf)
    return [math.exp(v - lmax) for v in logs], lmax


def to_log_form(values: Iterable[float], lmax: float) -> list[float]:
    """Turn weights back into log weights shifted by ``lmax``."""
    return [math.log(float(v)) - lmax for v in values]


def resample(weights: Iterable[Any], nparticles: int = 0, rng: Any = None) -> list[int]:
    """Systematic resampling; return the chosen indexes."""
    return _systematic_indexes(weights, nparticles, rng)


def normalize_weights(weights: Sequence[float], min_weight: float) -> list[float]:
    """Map log weights linearly onto ``[log(min_weight), 0]`` and exponentiate."""
    values = [float(w) for w in weights]
    if not values:
        return []
    wmin, wmax = min(values), max(values)
    dn = math.log(1.0) - math.log(min_weight)
    dw = wmax - wmin or 1.0
    scale = dn / dw
    offset = -wmax * scale
    return [math.exp(scale * w + offset) for w in values]


def repeat_indexes(indexes: Iterable[int], particles: Sequence[Any]) -> list[Any]:
    """Return the particles picked by ``indexes``, in that order."""
    return [particles[i] for i in indexes]


def scatter_indexes(indexes2: Iterable[int], particles: Sequence[Any], indexes: Sequence[int]) -> list[Any]:
    """Copy ``particles`` and overwrite slot ``indexes[i]`` with ``particles[indexes2[i]]``."""
    dest = list(particles)
    for slot, source in zip(indexes, indexes2):
        dest[slot] = particles[source]
    return dest


def neff(weights: Iterable[float]) -> float:
    """Effective number of particles of a weight set."""
    values = [float(w) for w in weights]
    total = sum(values)
    return 1.0 / sum((w / total) ** 2 for w in values)


def normalize(weights: Iterable[float]) -> list[float]:
    """Scale weights so that they sum to one."""
    values = [float(w) for w in weights]
    total = sum(values)
    return [w / total for w in values]


def rle(values: Iterable[int]) -> list[tuple[int, int]]:
    """Run-length encode a sequence as ``(value, count)`` pairs."""
    runs: list[tuple[int, int]] = []
    for value in values:
        value = int(value)
        if runs and runs[-1][0] == value:
            runs[-1] = (value, runs[-1][1] + 1)
        else:
            runs.append((value, 1))
    return runs


@dataclass
class UniformResampler:
    """Systematic resampler over weighted particles.

    A particle's weight is its ``weight`` attribute, or the value itself when it has none.
    """

    rng: Any = None

    def resample_indexes(self, weights: Sequence[Any], nparticles: int = 0) -> list[int]:
        """Return the indexes chosen by systematic resampling."""
        return _systematic_indexes(weights, nparticles, self.rng)

    def resample(self, particles: Sequence[Any], nparticles: int = 0) -> list[Any]:
        """Return copies of the chosen particles, each with an equal weight."""
        indexes = _systematic_indexes(particles, nparticles, self.rng)
        uniform = 1.0 / len(indexes)
        resampled = []
        for i in indexes:
            particle = copy.copy(particles[i])
            particle.weight = uniform
            resampled.append(particle)
        return resampled

    def neff(self, particles: Iterable[Any]) -> float:
        """Effective number of particles, without prior normalisation."""
        values = [_weight(p) for p in particles]
        return sum(values) ** 2 / sum(w * w for w in values)


@dataclass
class Evolver:
    """Applies an evolution model to every particle."""

    evolution_model: Any

    def evolve(self, particles: list[Any]) -> None:
        """Evolve the particles in place."""
        particles[:] = [self.evolution_model.evolve(p) for p in particles]

    def evolved(self, particles: Iterable[Any]) -> list[Any]:
        """Return the evolved particles, leaving the input untouched."""
        return [self.evolution_model.evolve(p) for p in particles]


@dataclass
class AuxiliaryEvolver:
    """Auxiliary particle filter step: pre-select by a look-ahead likelihood, then evolve."""

    evolution_model: Any
    qualification_model: Any
    likelihood_model: Any
    resampler: UniformResampler = field(default_factory=UniformResampler)

    def _observation_weights(self, particles: Sequence[Any]) -> list[float]:
        return [
            self.likelihood_model.likelihood(self.qualification_model.evolve(p))
            for p in particles
        ]

    def evolve(self, particles: list[Any]) -> None:
        """Evolve the selected particles in place and reweight them."""
        observation_weights = self._observation_weights(particles)
        for i in self.resampler.resample_indexes(observation_weights):
            particle = self.evolution_model.evolve(particles[i])
            particle.weight = self.likelihood_model.likelihood(particle) / observation_weights[i]
            particles[i] = particle

    def evolved(self, particles: Sequence[Any]) -> list[Any]:
        """Return a new generation built from the selected particles."""
        observation_weights = self._observation_weights(particles)
        dest = []
        for i in self.resampler.resample_indexes(observation_weights):
            source = particles[i]
            particle = self.evolution_model.evolve(source)
            particle.weight *= self.likelihood_model.likelihood(source) / observation_weights[i]
            dest.append(particle)
        return dest