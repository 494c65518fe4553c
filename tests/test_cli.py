import pytest

from tsp_route.cli import main, parse_route
from tsp_route.exceptions import MalformedRouteError


def route_line(out):
    return [int(tok) for tok in out.strip().splitlines()[-1].split()]


def test_parse_route():
    assert parse_route("0, 2,1,3") == [0, 2, 1, 3]
    with pytest.raises(MalformedRouteError):
        parse_route("0,a,2")


@pytest.mark.parametrize("strategy", ["nearest-neighbor", "two-opt", "hybrid", "genetic"])
def test_solve_random(capsys, strategy):
    main(["solve", "--random", "9", "--seed", "4", "--strategy", strategy, "--quiet"])
    out = capsys.readouterr().out
    assert f"{strategy} on random9-s4" in out
    assert sorted(route_line(out)) == list(range(9))


def test_solve_two_opt_with_route(capsys):
    main(["solve", "--random", "5", "--seed", "1", "--strategy", "two-opt", "--route", "4,3,2,1,0"])
    assert sorted(route_line(capsys.readouterr().out)) == [0, 1, 2, 3, 4]


def test_solve_tsp_file_reports_gap(write_square, capsys):
    main(["solve", "--tsp", str(write_square())])
    out = capsys.readouterr().out
    assert "length=40.00" in out
    assert "gap to optimum: 0.00%" in out
    assert route_line(out) == [0, 1, 2, 3]


def test_solve_too_few_cities_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["solve", "--random", "2", "--strategy", "hybrid"])
    assert excinfo.value.code == 2
    assert "needs at least 3 cities" in capsys.readouterr().err


def test_solve_bad_route_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["solve", "--random", "4", "--strategy", "two-opt", "--route", "0,1,1,2"])
    assert excinfo.value.code == 2
    assert "more than once" in capsys.readouterr().err


def test_bench_random(capsys):
    main(["bench", "--random", "7", "--runs", "1", "--strategies", "nearest-neighbor", "hybrid"])
    out = capsys.readouterr().out
    assert "random7-s123" in out
    assert "nearest-neighbor" in out
    assert "hybrid" in out
    assert "genetic" not in out


def test_bench_empty_dir_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["bench", "--data-root", str(tmp_path)])
    assert excinfo.value.code == 2
    assert "No TSPLIB instances" in capsys.readouterr().err


def test_solve_reports_time_per_city(capsys):
    main(["solve", "--random", "6", "--seed", "2", "--strategy", "nearest-neighbor"])
    assert "ms/city" in capsys.readouterr().out


def test_solve_malformed_tsp_exits(tmp_path, capsys):
    path = tmp_path / "broken.tsp"
    path.write_text("NAME: broken\nTYPE: TSP\nDIMENSION: four\nNODE_COORD_SECTION\n1 a b\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["solve", "--tsp", str(path)])
    assert excinfo.value.code == 2
    assert "cannot read" in capsys.readouterr().err


@pytest.mark.parametrize("strategy", ["nearest-neighbor", "genetic", "hybrid"])
def test_route_rejected_outside_two_opt(capsys, strategy):
    with pytest.raises(SystemExit) as excinfo:
        main(["solve", "--random", "5", "--strategy", strategy, "--route", "0,1,2,3,4"])
    assert excinfo.value.code == 2
    assert "--route only applies to --strategy two-opt" in capsys.readouterr().err
