from typing import Optional, Sequence

import networkx as nx

from .base import Route, Strategy, TourResult, tour_length


def nearest_neighbor_tour(graph: nx.Graph, start: int = 0) -> Route:
    if graph.number_of_nodes() == 0:
        return []
    tour = [start]
    # dict keys keep insertion order, so min() breaks ties by lowest position
    unvisited = dict.fromkeys(node for node in graph.nodes() if node != start)
    current = start
    while unvisited:
        nxt = min(unvisited, key=lambda node: graph[current][node]["weight"])
        tour.append(nxt)
        del unvisited[nxt]
        current = nxt
    return tour


def default_max_iter(graph: nx.Graph) -> int:
    return min(1000, graph.number_of_nodes() * 10)


def two_opt(graph: nx.Graph, tour: Sequence[int], max_iter: Optional[int] = None) -> TourResult:
    """
    First-improvement 2-opt.

    Every pass reverses segments ``tour[i..j]`` (inclusive) for
    ``1 <= i < len - 2`` and ``i + 2 <= j < len`` and keeps the first
    candidate that is strictly shorter, then starts over. Stops after a pass
    with no improvement or after ``max_iter`` passes.
    """
    if max_iter is None:
        max_iter = default_max_iter(graph)
    best = list(tour)
    best_len = tour_length(graph, best)
    n = len(best)
    improved = True
    it = 0
    while improved and it < max_iter:
        improved = False
        it += 1
        for i in range(1, n - 2):
            for j in range(i + 1, n):
                if j - i == 1:
                    continue
                new_tour = best[:]
                new_tour[i : j + 1] = reversed(new_tour[i : j + 1])
                new_len = tour_length(graph, new_tour)
                if new_len < best_len:
                    best = new_tour
                    best_len = new_len
                    improved = True
                    break
            if improved:
                break
    return TourResult(route=best, distance=best_len)


class NearestNeighborSolver(Strategy):
    name = "nearest-neighbor"
    minimum_cities = 0

    def solve(self, graph: nx.Graph) -> TourResult:
        route = nearest_neighbor_tour(graph, 0)
        return TourResult(route=route, distance=tour_length(graph, route))


class TwoOptSolver(Strategy):
    name = "two-opt"

    def __init__(self, seed_route: Optional[Sequence[int]] = None, max_iter: Optional[int] = None):
        self.seed_route = seed_route
        self.max_iter = max_iter

    def solve(self, graph: nx.Graph) -> TourResult:
        seed = self.seed_route
        if seed is None:
            seed = list(range(graph.number_of_nodes()))
        return two_opt(graph, seed, self.max_iter)


class HybridSolver(Strategy):
    """
    Construct -> improve: nearest neighbor from city 0, then 2-opt.
    """

    name = "hybrid"

    def solve(self, graph: nx.Graph) -> TourResult:
        base = NearestNeighborSolver().solve(graph)
        return two_opt(graph, base.route)
