import argparse
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from tsp_route.data import Instance, load_instance, load_tsplib_instances, random_instance
from tsp_route.engine import STRATEGIES
from tsp_route.evaluation import BenchConfig, Evaluation, evaluate_strategy, run_benchmark
from tsp_route.exceptions import InstanceError, MalformedRouteError, TSPRouteError
from tsp_route.solvers.genetic import GeneticConfig


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def parse_route(text: str) -> List[int]:
    try:
        return [int(tok) for tok in text.replace(" ", "").split(",") if tok]
    except ValueError:
        raise MalformedRouteError(f"cannot parse route {text!r}; expected comma-separated indices") from None


def _load_single(args) -> Instance:
    if args.tsp:
        log(f"loading {args.tsp}")
        return load_instance(Path(args.tsp))
    return random_instance(args.random, seed=args.seed)


def _print_evaluation(ev: Evaluation) -> None:
    log(
        f"{ev.strategy} on {ev.instance}: length={ev.length:.2f} time={ev.runtime * 1000:.1f}ms "
        f"({ev.time_per_city * 1000:.2f}ms/city, {ev.rating})"
    )
    if ev.gap != float("inf"):
        log(f"gap to optimum: {ev.gap * 100:.2f}%")
    print(" ".join(str(i) for i in ev.result.route))


def solve_cmd(args) -> None:
    instance = _load_single(args)
    log(f"{instance.name}: {len(instance)} cities, strategy={args.strategy}")
    seed_route = parse_route(args.route) if args.route else None
    rng = random.Random(args.seed)
    if args.strategy == "genetic" and len(instance) >= 3:
        generations = GeneticConfig.for_cities(len(instance)).generations
        with tqdm(total=generations, desc="genetic", disable=args.quiet) as pbar:

            def progress(generation, best):
                pbar.update(1)
                pbar.set_postfix(best=f"{best.distance:.2f}")

            ev = evaluate_strategy(instance, args.strategy, rng=rng, progress=progress)
    else:
        ev = evaluate_strategy(instance, args.strategy, rng=rng, seed_route=seed_route)
    _print_evaluation(ev)


def bench_cmd(args) -> None:
    if args.data_root:
        data_root = Path(args.data_root)
        log(f"loading data from {data_root}")
        instances = load_tsplib_instances(data_root, max_nodes=args.max_nodes)
        if not instances:
            raise InstanceError(
                f"No TSPLIB instances found in {data_root}. "
                "Place .tsp (and optional .opt.tour) files there before running."
            )
    else:
        instances = [random_instance(args.random, seed=args.seed)]
    names = ", ".join(inst.name for inst in instances)
    log(f"using instances: {names} (count={len(instances)})")
    cfg = BenchConfig(runs=args.runs, random_seed=args.seed, strategies=args.strategies or list(STRATEGIES))
    table = run_benchmark(instances, cfg)
    for name, rows in table.items():
        print(name)
        for strategy, stats in rows.items():
            line = (
                f"  {strategy:<17} mean={stats['mean_length']:10.2f} best={stats['best_length']:10.2f} "
                f"std={stats['std_length']:8.2f} time={stats['mean_runtime'] * 1000:9.1f}ms"
            )
            if stats["mean_gap"] != float("inf"):
                line += f" gap={stats['mean_gap'] * 100:6.2f}%"
            print(line)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="tsp-route", description="Euclidean TSP route optimizer")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Run one strategy on one instance")
    source = solve_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--tsp", help="TSPLIB .tsp file")
    source.add_argument("--random", type=int, metavar="N", help="N uniform random cities")
    solve_parser.add_argument("--strategy", choices=list(STRATEGIES), default="hybrid")
    solve_parser.add_argument("--route", help="seed route for two-opt, e.g. 0,2,1,3")
    solve_parser.add_argument("--seed", type=int, default=None)
    solve_parser.add_argument("--quiet", action="store_true", help="hide the genetic progress bar")
    solve_parser.set_defaults(func=solve_cmd)

    bench_parser = subparsers.add_parser("bench", help="Compare all strategies")
    source = bench_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--data-root", help="directory of TSPLIB .tsp files")
    source.add_argument("--random", type=int, metavar="N", help="N uniform random cities")
    bench_parser.add_argument("--max-nodes", type=int, default=None)
    bench_parser.add_argument("--runs", type=int, default=3)
    bench_parser.add_argument("--seed", type=int, default=123)
    bench_parser.add_argument("--strategies", nargs="+", choices=list(STRATEGIES))
    bench_parser.set_defaults(func=bench_cmd)

    args = parser.parse_args(argv)
    if args.command == "solve" and args.route and args.strategy != "two-opt":
        parser.error("--route only applies to --strategy two-opt")
    try:
        args.func(args)
    except TSPRouteError as exc:
        parser.exit(2, f"{parser.prog}: error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
