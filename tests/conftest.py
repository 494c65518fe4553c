import pytest

from tsp_route.data import random_instance
from tsp_route.solvers.base import City, build_graph


SQUARE_TSP = """NAME: square4
TYPE: TSP
COMMENT: 10x10 square
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 10 0
3 10 10
4 0 10
EOF
"""

SQUARE_TOUR = """NAME: square4.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""


@pytest.fixture
def square():
    return [City(0, 0), City(10, 0), City(10, 10), City(0, 10)]


@pytest.fixture
def square_graph(square):
    return build_graph(square)


@pytest.fixture
def cities20():
    return random_instance(20, seed=42).cities


@pytest.fixture
def graph20(cities20):
    return build_graph(cities20)


@pytest.fixture
def write_square(tmp_path):
    """Writes square4.tsp into tmp_path, plus its optimal tour at ``tour_name`` if given."""

    def write(tour_name="square4.opt.tour"):
        (tmp_path / "square4.tsp").write_text(SQUARE_TSP)
        if tour_name:
            tour = tmp_path / tour_name
            tour.parent.mkdir(parents=True, exist_ok=True)
            tour.write_text(SQUARE_TOUR)
        return tmp_path / "square4.tsp"

    return write
