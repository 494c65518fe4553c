import math
import random

import pytest

from tsp_route.data import Instance, random_instance
from tsp_route.evaluation import (
    BenchConfig,
    aggregate,
    evaluate_strategy,
    optimality_gap,
    performance_rating,
    run_benchmark,
)
from tsp_route.exceptions import InsufficientCitiesError


@pytest.fixture
def square_instance(square):
    return Instance(name="square4", path=None, cities=square, optimum=40.0)


@pytest.mark.parametrize(
    "cities, runtime, rating",
    [
        (10, 0.2, "excellent"),
        (18, 0.2, "good"),
        (15, 3.0, "good"),
        (50, 6.0, "acceptable"),
        (50, 12.0, "slow"),
    ],
)
def test_performance_rating(cities, runtime, rating):
    assert performance_rating(cities, runtime) == rating


def test_optimality_gap():
    assert optimality_gap(44.0, 40.0) == pytest.approx(0.1)
    assert math.isinf(optimality_gap(44.0, None))
    assert math.isinf(optimality_gap(44.0, 0.0))


def test_evaluate_strategy(square_instance):
    ev = evaluate_strategy(square_instance, "hybrid")
    assert ev.instance == "square4"
    assert ev.length == 40.0
    assert ev.gap == 0.0
    assert ev.cities == 4
    assert ev.distance_per_city == 10.0
    assert ev.time_per_city == pytest.approx(ev.runtime / 4)
    assert ev.runtime >= 0.0


def test_evaluate_strategy_validates(square_instance):
    small = Instance(name="pair", path=None, cities=square_instance.cities[:2], optimum=None)
    with pytest.raises(InsufficientCitiesError):
        evaluate_strategy(small, "two-opt")


def test_aggregate(square_instance):
    evs = [evaluate_strategy(square_instance, "genetic", rng=random.Random(i)) for i in range(3)]
    stats = aggregate(evs)
    assert stats["best_length"] == min(e.length for e in evs)
    assert stats["mean_length"] >= stats["best_length"]
    assert stats["mean_gap"] >= 0.0


def test_aggregate_empty():
    stats = aggregate([])
    assert math.isinf(stats["mean_length"])
    assert stats["std_length"] == 0.0


def test_run_benchmark_table():
    seen = []
    inst = random_instance(8, seed=3)
    cfg = BenchConfig(runs=2, random_seed=1)
    table = run_benchmark([inst], cfg, on_result=seen.append)
    assert list(table) == [inst.name]
    assert list(table[inst.name]) == ["nearest-neighbor", "two-opt", "genetic", "hybrid"]
    assert len(seen) == 8
    assert table[inst.name]["hybrid"]["std_length"] == 0.0
    assert math.isinf(table[inst.name]["hybrid"]["mean_gap"])
