import math
import random
from dataclasses import dataclass, replace

import pytest

from carmenlog.particlefilter import (
    AuxiliaryEvolver,
    Evolver,
    UniformResampler,
    neff,
    normalize,
    normalize_weights,
    repeat_indexes,
    resample,
    rle,
    scatter_indexes,
    to_log_form,
    to_normal_form,
)


@dataclass
class Particle:
    p: float
    weight: float


@dataclass
class EvolutionModel:
    rng: random.Random

    def evolve(self, particle):
        return replace(particle, p=particle.p + 0.5 * (self.rng.random() - 0.5))


class QualificationModel:
    def evolve(self, particle):
        return particle


class IdentityModel:
    def evolve(self, particle):
        return replace(particle)


class LikelihoodModel:
    def likelihood(self, particle):
        x = particle.p
        return 1.0 / (0.1 + 10 * (x - 2) * (x - 2)) + 0.5 / (0.1 + 10 * (x - 8) * (x - 8))


def _initial(rng, n=100):
    return [Particle(10 * rng.random(), 1.0) for _ in range(n)]


def test_to_normal_form_relative_to_maximum():
    values, lmax = to_normal_form([0.0, math.log(2.0)])
    assert lmax == pytest.approx(math.log(2.0))
    assert values == pytest.approx([0.5, 1.0])


def test_log_form_round_trip():
    logs = [-3.0, -1.0, 0.5]
    values, lmax = to_normal_form(logs)
    back = to_log_form(values, -lmax)
    assert back == pytest.approx(logs)


def test_resample_picks_only_weighted_particle():
    assert resample([0.0, 0.0, 1.0], rng=random.Random(1)) == [2, 2, 2]


def test_resample_uniform_weights_keep_everyone():
    assert resample([1.0] * 5, rng=random.Random(3)) == [0, 1, 2, 3, 4]


def test_resample_nparticles_changes_count():
    indexes = resample([1.0, 3.0], nparticles=8, rng=random.Random(7))
    assert len(indexes) == 8
    assert indexes == sorted(indexes)


def test_resample_empty_raises():
    with pytest.raises(ValueError):
        resample([])


def test_normalize_weights_maps_range():
    out = normalize_weights([-10.0, -5.0, 0.0], 0.01)
    assert out[2] == pytest.approx(1.0)
    assert out[0] == pytest.approx(0.01)
    assert out[0] < out[1] < out[2]


def test_repeat_and_scatter_indexes():
    particles = ["a", "b", "c"]
    assert repeat_indexes([2, 2, 0], particles) == ["c", "c", "a"]
    assert scatter_indexes([0], particles, [2]) == ["a", "b", "a"]


def test_neff_and_normalize():
    assert neff([1, 1, 1, 1]) == pytest.approx(4.0)
    assert neff([0, 0, 5]) == pytest.approx(1.0)
    assert sum(normalize([1, 2, 3, 4])) == pytest.approx(1.0)


def test_rle():
    assert rle([1, 1, 2, 2, 2, 3]) == [(1, 2), (2, 3), (3, 1)]
    assert rle([]) == []


def test_uniform_resampler_sir_step():
    rng = random.Random(42)
    model = LikelihoodModel()
    particles = _initial(rng)
    Evolver(EvolutionModel(rng)).evolve(particles)
    for particle in particles:
        particle.weight = model.likelihood(particle)
    resampler = UniformResampler(rng)
    new_generation = resampler.resample(particles)
    assert len(new_generation) == 100
    assert all(p.weight == pytest.approx(0.01) for p in new_generation)
    assert resampler.neff(new_generation) == pytest.approx(100.0)
    originals = {p.p for p in particles}
    assert all(p.p in originals for p in new_generation)


def test_evolver_evolved_leaves_input():
    rng = random.Random(5)
    particles = _initial(rng, 10)
    before = [p.p for p in particles]
    evolved = Evolver(EvolutionModel(rng)).evolved(particles)
    assert [p.p for p in particles] == before
    assert all(abs(a.p - b) <= 0.25 for a, b in zip(evolved, before))


def test_auxiliary_evolved_keeps_weights_with_identity_model():
    rng = random.Random(11)
    particles = _initial(rng, 20)
    for particle in particles:
        particle.weight = 2.0
    aux = AuxiliaryEvolver(IdentityModel(), QualificationModel(), LikelihoodModel(), UniformResampler(rng))
    dest = aux.evolved(particles)
    assert len(dest) == 20
    assert all(p.weight == pytest.approx(2.0) for p in dest)


def test_auxiliary_evolve_in_place_reweights_selected():
    rng = random.Random(13)
    particles = _initial(rng, 20)
    aux = AuxiliaryEvolver(IdentityModel(), QualificationModel(), LikelihoodModel(), UniformResampler(rng))
    aux.evolve(particles)
    assert len(particles) == 20
    assert any(p.weight == pytest.approx(1.0) for p in particles)
    assert all(p.weight == pytest.approx(1.0) for p in particles)