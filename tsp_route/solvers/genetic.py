import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import networkx as nx

from .base import Route, Strategy, TourResult, tour_length


Scored = Tuple[float, Route]
ProgressCallback = Callable[[int, TourResult], None]


@dataclass
class GeneticConfig:
    population_size: int = 20
    generations: int = 100
    mutation_rate: float = 0.02
    elite_size: int = 4
    tournament_size: int = 5

    @classmethod
    def for_cities(cls, n: int) -> "GeneticConfig":
        population_size = min(50, max(20, n * 2))
        return cls(
            population_size=population_size,
            generations=min(100, n * 5),
            elite_size=int(population_size * 0.2),
        )


def random_population(n: int, size: int, rng: random.Random) -> List[Route]:
    population = []
    for _ in range(size):
        route = list(range(n))
        rng.shuffle(route)
        population.append(route)
    return population


def score_population(graph: nx.Graph, population: Sequence[Route]) -> List[Scored]:
    scored = [(tour_length(graph, route), route) for route in population]
    # stable: equal lengths keep population order
    scored.sort(key=lambda x: x[0])
    return scored


def tournament_selection(scored: Sequence[Scored], size: int, rng: random.Random) -> Route:
    best_len, best = scored[rng.randrange(len(scored))]
    for _ in range(size - 1):
        length, route = scored[rng.randrange(len(scored))]
        if length < best_len:
            best_len, best = length, route
    return best


def order_crossover(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> Route:
    """OX1: keep parent1[start..end], fill the gaps in parent2's order."""
    n = len(parent1)
    start = rng.randrange(n)
    end = start + rng.randrange(n - start)
    child = [-1] * n
    child[start : end + 1] = parent1[start : end + 1]
    used = set(child[start : end + 1])
    fill = (city for city in parent2 if city not in used)
    for i in range(n):
        if child[i] == -1:
            child[i] = next(fill)
    return child


def swap_mutation(route: Route, rng: random.Random) -> None:
    i = rng.randrange(len(route))
    j = rng.randrange(len(route))
    route[i], route[j] = route[j], route[i]


class GeneticSolver(Strategy):
    """
    Elitist GA over city permutations: tournament selection, order crossover
    and swap mutation.

    All draws come from ``rng`` in a fixed order: one shuffle per individual
    at start-up, then for each bred child two tournaments, one crossover and
    one mutation roll (plus two swap positions when the roll hits).

    ``progress(generation, best)`` is called once per generation with the
    best route of the newly bred population, so the last call reports the
    route ``solve`` returns.
    """

    name = "genetic"

    def __init__(
        self,
        config: Optional[GeneticConfig] = None,
        rng: Optional[random.Random] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        self.config = config
        self.cfg: Optional[GeneticConfig] = None
        self.rng = rng or random.Random()
        self.progress = progress
        self.population: List[Route] = []
        self.scored: Optional[List[Scored]] = None
        self.generation = 0

    def _resolve_config(self, graph: nx.Graph) -> GeneticConfig:
        return self.config or GeneticConfig.for_cities(graph.number_of_nodes())

    def _score(self, graph: nx.Graph) -> List[Scored]:
        if self.scored is None:
            self.scored = score_population(graph, self.population)
        return self.scored

    def initialize(self, graph: nx.Graph) -> None:
        self.cfg = self._resolve_config(graph)
        self.population = random_population(
            graph.number_of_nodes(), self.cfg.population_size, self.rng
        )
        self.scored = None
        self.generation = 0

    def step(self, graph: nx.Graph) -> None:
        if self.cfg is None:
            self.cfg = self._resolve_config(graph)
        scored = self._score(graph)
        new_pop: List[Route] = [route[:] for _, route in scored[: self.cfg.elite_size]]
        while len(new_pop) < self.cfg.population_size:
            p1 = tournament_selection(scored, self.cfg.tournament_size, self.rng)
            p2 = tournament_selection(scored, self.cfg.tournament_size, self.rng)
            child = order_crossover(p1, p2, self.rng)
            if self.rng.random() < self.cfg.mutation_rate:
                swap_mutation(child, self.rng)
            new_pop.append(child)
        self.population = new_pop
        self.scored = score_population(graph, new_pop)
        self.generation += 1
        if self.progress:
            best_len, best = self.scored[0]
            self.progress(self.generation, TourResult(route=best[:], distance=best_len))

    def best(self, graph: nx.Graph) -> TourResult:
        best_len, best = self._score(graph)[0]
        return TourResult(route=best[:], distance=best_len)

    def solve(self, graph: nx.Graph) -> TourResult:
        self.initialize(graph)
        for _ in range(self.cfg.generations):
            self.step(graph)
        return self.best(graph)
