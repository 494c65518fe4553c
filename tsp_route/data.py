from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import numpy as np
import tsplib95

from .exceptions import InstanceError
from .solvers.base import City, build_graph, tour_length


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    cities: List[City]
    optimum: Optional[float]

    def __len__(self) -> int:
        return len(self.cities)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def _load_optimum(cities: Sequence[City], labels: Sequence[int], path: Path) -> Optional[float]:
    index = {label: i for i, label in enumerate(labels)}
    graph = None
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.parse(candidate.read_text())
            route = [index[node] for node in tour_file.tours[0]]
        except Exception:
            continue
        if graph is None:
            graph = build_graph(cities)
        return tour_length(graph, route)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    try:
        problem = tsplib95.load(path)
    except Exception as exc:
        raise InstanceError(f"cannot read {path}: {exc}") from exc
    coords = problem.node_coords or problem.display_data
    if not coords:
        raise InstanceError(f"{path} has no node coordinates")
    labels = sorted(coords)
    cities = []
    for label in labels:
        point = coords[label]
        if len(point) != 2:
            raise InstanceError(f"{path}: node {label} is not a 2-D point")
        cities.append(City(float(point[0]), float(point[1]), label))
    optimum = _load_optimum(cities, labels, path)
    return Instance(name=problem.name or path.stem, path=path, cities=cities, optimum=optimum)


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    tsp_files = sorted(Path(root).glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        instances.append(load_instance(p))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances


def random_instance(count: int, seed: Optional[int] = None, width: float = 1000.0, height: float = 1000.0) -> Instance:
    """Uniform cities in a ``width`` x ``height`` box; no known optimum."""
    rng = np.random.default_rng(seed)
    points = rng.uniform((0.0, 0.0), (width, height), size=(count, 2))
    cities = [City(float(x), float(y), i) for i, (x, y) in enumerate(points)]
    name = f"random{count}" if seed is None else f"random{count}-s{seed}"
    return Instance(name=name, path=None, cities=cities, optimum=None)
