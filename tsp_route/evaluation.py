import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .data import Instance
from .engine import STRATEGIES, solve
from .solvers.base import TourResult
from .solvers.genetic import ProgressCallback


@dataclass
class Evaluation:
    instance: str
    strategy: str
    result: TourResult
    runtime: float
    gap: float

    @property
    def length(self) -> float:
        return self.result.distance

    @property
    def cities(self) -> int:
        return len(self.result.route)

    @property
    def distance_per_city(self) -> float:
        return self.length / self.cities if self.cities else 0.0

    @property
    def time_per_city(self) -> float:
        return self.runtime / self.cities if self.cities else 0.0

    @property
    def rating(self) -> str:
        return performance_rating(self.cities, self.runtime)


@dataclass
class BenchConfig:
    runs: int = 3
    random_seed: int = 123
    strategies: List[str] = field(default_factory=lambda: list(STRATEGIES))


def performance_rating(cities: int, runtime: float) -> str:
    if cities <= 15 and runtime < 1.0:
        return "excellent"
    if cities <= 20 and runtime < 5.0:
        return "good"
    if runtime < 10.0:
        return "acceptable"
    return "slow"


def optimality_gap(length: float, optimum: Optional[float]) -> float:
    if optimum is None or np.isclose(optimum, 0.0):
        return float("inf")
    return (length - optimum) / optimum


def evaluate_strategy(
    instance: Instance,
    strategy: str,
    rng: Optional[random.Random] = None,
    seed_route: Optional[Sequence[int]] = None,
    progress: Optional[ProgressCallback] = None,
) -> Evaluation:
    start = time.perf_counter()
    result = solve(instance.cities, strategy, seed_route=seed_route, rng=rng, progress=progress)
    runtime = time.perf_counter() - start
    return Evaluation(
        instance=instance.name,
        strategy=strategy,
        result=result,
        runtime=runtime,
        gap=optimality_gap(result.distance, instance.optimum),
    )


def aggregate(evaluations: List[Evaluation]) -> Dict[str, float]:
    if not evaluations:
        return {
            "mean_length": float("inf"),
            "best_length": float("inf"),
            "std_length": 0.0,
            "mean_runtime": float("inf"),
            "mean_gap": float("inf"),
        }
    lengths = np.array([e.length for e in evaluations])
    gaps = [e.gap for e in evaluations if e.gap != float("inf")]
    return {
        "mean_length": float(lengths.mean()),
        "best_length": float(lengths.min()),
        "std_length": float(lengths.std()),
        "mean_runtime": float(np.mean([e.runtime for e in evaluations])),
        "mean_gap": float(np.mean(gaps)) if gaps else float("inf"),
    }


def run_benchmark(
    instances: Sequence[Instance],
    cfg: BenchConfig,
    on_result: Optional[Callable[[Evaluation], None]] = None,
) -> Dict[str, Dict[str, Dict[str, float]]]:
    """Run every strategy ``cfg.runs`` times per instance; returns instance -> strategy -> stats."""
    table: Dict[str, Dict[str, Dict[str, float]]] = {}
    for inst in instances:
        table[inst.name] = {}
        for strategy in cfg.strategies:
            evaluations = []
            for run in range(cfg.runs):
                rng = random.Random(cfg.random_seed + run)
                evaluation = evaluate_strategy(inst, strategy, rng=rng)
                evaluations.append(evaluation)
                if on_result:
                    on_result(evaluation)
            table[inst.name][strategy] = aggregate(evaluations)
    return table
