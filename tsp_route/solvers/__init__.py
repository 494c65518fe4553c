from .base import City, Route, Strategy, TourResult, build_graph, euclidean, tour_length
from .genetic import (
    GeneticConfig,
    GeneticSolver,
    order_crossover,
    random_population,
    swap_mutation,
    tournament_selection,
)
from .heuristics import (
    HybridSolver,
    NearestNeighborSolver,
    TwoOptSolver,
    nearest_neighbor_tour,
    two_opt,
)

__all__ = [
    "City",
    "Route",
    "Strategy",
    "TourResult",
    "build_graph",
    "euclidean",
    "tour_length",
    "GeneticConfig",
    "GeneticSolver",
    "order_crossover",
    "random_population",
    "swap_mutation",
    "tournament_selection",
    "HybridSolver",
    "NearestNeighborSolver",
    "TwoOptSolver",
    "nearest_neighbor_tour",
    "two_opt",
]
