import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Sequence

import networkx as nx


Route = List[int]


@dataclass(frozen=True)
class City:
    x: float
    y: float
    token: Optional[Hashable] = field(default=None, compare=False)


def euclidean(a: City, b: City) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


def build_graph(cities: Sequence[City]) -> nx.Graph:
    """Complete graph over city indices, weighted by Euclidean distance."""
    graph = nx.Graph()
    for i, city in enumerate(cities):
        graph.add_node(i, x=city.x, y=city.y)
    for i in range(len(cities)):
        for j in range(i + 1, len(cities)):
            graph.add_edge(i, j, weight=euclidean(cities[i], cities[j]))
    return graph


def tour_length(graph: nx.Graph, route: Sequence[int]) -> float:
    """
    Length of the closed tour, wrap-around edge included.

    Edges missing from the graph (out-of-range or repeated indices) add
    nothing instead of raising.
    """
    n = len(route)
    if n < 2:
        return 0.0
    dist = 0.0
    for i in range(n):
        a = route[i]
        b = route[(i + 1) % n]
        try:
            dist += graph[a][b]["weight"]
        except (KeyError, TypeError):
            continue
    return float(dist)


@dataclass
class TourResult:
    route: Route
    distance: float

    def as_dict(self) -> Dict[str, Any]:
        return {"route": list(self.route), "distance": self.distance}


class Strategy(ABC):
    name: str = "base"
    minimum_cities: int = 3

    @abstractmethod
    def solve(self, graph: nx.Graph) -> TourResult:
        raise NotImplementedError
