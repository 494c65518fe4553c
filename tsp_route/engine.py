"""
Solver facade: one immutable city snapshot, four strategies.

The ``Solver`` methods never validate their input; ``solve`` is the checked
entry point that rejects unusable requests before any strategy runs.
"""

import random
from collections.abc import Mapping
from typing import Dict, Iterable, Optional, Sequence, Type

from .exceptions import InsufficientCitiesError, MalformedRouteError, UnknownStrategyError
from .solvers.base import City, Strategy, TourResult, build_graph, euclidean, tour_length
from .solvers.genetic import GeneticConfig, GeneticSolver, ProgressCallback
from .solvers.heuristics import HybridSolver, NearestNeighborSolver, TwoOptSolver, two_opt


STRATEGIES: Dict[str, Type[Strategy]] = {
    NearestNeighborSolver.name: NearestNeighborSolver,
    TwoOptSolver.name: TwoOptSolver,
    GeneticSolver.name: GeneticSolver,
    HybridSolver.name: HybridSolver,
}


def as_city(value) -> City:
    if isinstance(value, City):
        return value
    if isinstance(value, Mapping):
        return City(float(value["x"]), float(value["y"]), value.get("id"))
    if hasattr(value, "x") and hasattr(value, "y"):
        return City(float(value.x), float(value.y), getattr(value, "id", None))
    x, y = value
    return City(float(x), float(y))


class Solver:
    def __init__(self, cities: Iterable):
        self.cities = tuple(as_city(c) for c in cities)
        self.graph = build_graph(self.cities)

    def __len__(self) -> int:
        return len(self.cities)

    def distance(self, a: City, b: City) -> float:
        return euclidean(a, b)

    def tour_length(self, route: Sequence[int]) -> float:
        return tour_length(self.graph, route)

    def nearest_neighbor(self) -> TourResult:
        return NearestNeighborSolver().solve(self.graph)

    def two_opt(self, route: Sequence[int]) -> TourResult:
        return two_opt(self.graph, route)

    def genetic(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[GeneticConfig] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> TourResult:
        return GeneticSolver(config=config, rng=rng, progress=progress).solve(self.graph)

    def hybrid(self) -> TourResult:
        return HybridSolver().solve(self.graph)


def strategy_class(strategy: str) -> Type[Strategy]:
    try:
        return STRATEGIES[strategy]
    except KeyError:
        known = ", ".join(STRATEGIES)
        raise UnknownStrategyError(f"unknown strategy {strategy!r} (expected one of: {known})") from None


def validate_cities(cities: Sequence, strategy: str) -> None:
    required = strategy_class(strategy).minimum_cities
    if len(cities) < required:
        raise InsufficientCitiesError(strategy, required, len(cities))


def validate_route(route: Sequence[int], n: int) -> None:
    if len(route) != n:
        raise MalformedRouteError(f"route has {len(route)} entries for {n} cities")
    seen = set()
    for idx in route:
        if not isinstance(idx, int) or isinstance(idx, bool) or not 0 <= idx < n:
            raise MalformedRouteError(f"route index {idx!r} out of range [0, {n})")
        if idx in seen:
            raise MalformedRouteError(f"route visits city {idx} more than once")
        seen.add(idx)


def solve(
    cities: Sequence,
    strategy: str = HybridSolver.name,
    seed_route: Optional[Sequence[int]] = None,
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressCallback] = None,
) -> TourResult:
    validate_cities(cities, strategy)
    solver = Solver(cities)
    if strategy == NearestNeighborSolver.name:
        return solver.nearest_neighbor()
    if strategy == TwoOptSolver.name:
        if seed_route is None:
            seed_route = list(range(len(solver)))
        validate_route(seed_route, len(solver))
        return solver.two_opt(seed_route)
    if strategy == GeneticSolver.name:
        return solver.genetic(rng=rng, progress=progress)
    return solver.hybrid()
