import numpy as np
from photovary.domain.models import AdjustmentParams, FilterKind, PARAM_RANGES
from photovary.services.params.sampler import ParameterSampler, spawn_seeds


def test_draws_stay_in_range():
    sampler = ParameterSampler(1234)
    for params in sampler.draw_many(500):
        assert isinstance(params, AdjustmentParams)
        assert params.out_of_range() == {}
        assert isinstance(params.contrast, int)
        assert isinstance(params.sharpen, float)


def test_sharpen_has_one_decimal():
    sampler = ParameterSampler(5)
    for params in sampler.draw_many(200):
        assert round(params.sharpen, 1) == params.sharpen
        assert str(params.sharpen) != "-0.0"


def test_range_ends_are_reachable():
    sampler = ParameterSampler(99)
    seen = {kind: set() for kind in PARAM_RANGES}
    for params in sampler.draw_many(5000):
        for kind in PARAM_RANGES:
            seen[kind].add(params.value_for(kind))
    assert PARAM_RANGES[FilterKind.CONTRAST].low in seen[FilterKind.CONTRAST]
    assert PARAM_RANGES[FilterKind.CONTRAST].high in seen[FilterKind.CONTRAST]
    assert -0.5 in seen[FilterKind.SHARPEN]
    assert 0.5 in seen[FilterKind.SHARPEN]


def test_same_seed_same_draws():
    a = ParameterSampler(42).draw_many(10)
    b = ParameterSampler(42).draw_many(10)
    c = ParameterSampler(43).draw_many(10)
    assert a == b
    assert a != c


def test_draw_many_negative_count():
    assert ParameterSampler(0).draw_many(-3) == []


def test_spawned_seeds_are_independent_and_stable():
    first = spawn_seeds(7, 3)
    second = spawn_seeds(7, 3)
    draws_first = [ParameterSampler(s).draw() for s in first]
    draws_second = [ParameterSampler(s).draw() for s in second]
    assert draws_first == draws_second
    assert len({p for p in draws_first}) == 3


def test_unseeded_sampler_still_draws():
    params = ParameterSampler().draw()
    assert params.out_of_range() == {}
    assert np.isfinite(params.sharpen)
