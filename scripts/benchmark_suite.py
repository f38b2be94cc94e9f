import sys
import os
import time
import json
import logging
import argparse
from dataclasses import dataclass, asdict
from typing import List

# Setup Path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.core.analysis import calculate_stats, is_spanning_tree
from gridmaze.session import MazeSession

# Setup Logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger("Benchmark")


@dataclass
class RunResult:
    size: str
    seed: int
    gen_time_sec: float
    solve_time_sec: float
    solved: bool
    spanning_tree: bool
    path_len: int
    visited: int
    promoted: int
    dead_ends: int


def benchmark_size(rows: int, columns: int, seeds: List[int]) -> List[RunResult]:
    results = []
    for seed in seeds:
        session = MazeSession(seed=seed, rows=rows, columns=columns)

        t0 = time.time()
        session.generate()
        t1 = time.time()
        session.solve()
        t2 = time.time()

        results.append(RunResult(
            size=f"{rows}x{columns}",
            seed=seed,
            gen_time_sec=t1 - t0,
            solve_time_sec=t2 - t1,
            solved=session.solver.solved,
            spanning_tree=is_spanning_tree(session.grid),
            path_len=len(session.solver.path()),
            visited=session.solver.visited_count,
            promoted=session.reconciler.promoted,
            dead_ends=calculate_stats(session.grid)["dead_ends"],
        ))
    return results


def main():
    parser = argparse.ArgumentParser(description="Sweep grid sizes and record timings")
    parser.add_argument("--seeds", type=int, default=10, help="Mazes per size")
    parser.add_argument("--out", type=str, default=None, help="Optional JSON results file")
    args = parser.parse_args()

    sizes = [(10, 10), (25, 25), (50, 50), (10, 50), (50, 10)]
    all_results = []

    print(f"\n{'SIZE':<8} | {'GEN (ms)':<10} | {'SOLVE (ms)':<10} | {'PATH':<6} | {'VISITED':<8} | {'FIXED':<6}")
    print("-" * 62)
    for rows, columns in sizes:
        results = benchmark_size(rows, columns, list(range(args.seeds)))
        all_results.extend(results)

        n = len(results)
        gen_ms = sum(r.gen_time_sec for r in results) / n * 1000
        solve_ms = sum(r.solve_time_sec for r in results) / n * 1000
        path_len = sum(r.path_len for r in results) / n
        visited = sum(r.visited for r in results) / n
        promoted = sum(r.promoted for r in results) / n
        print(f"{rows}x{columns:<5} | {gen_ms:<10.3f} | {solve_ms:<10.3f} | {path_len:<6.1f} | {visited:<8.1f} | {promoted:<6.2f}")

        bad = [r for r in results if not (r.solved and r.spanning_tree)]
        if bad:
            logger.warning(f"{len(bad)} runs at {rows}x{columns} were not clean spanning trees / solves")

    if args.out:
        with open(args.out, "w") as f:
            json.dump([asdict(r) for r in all_results], f, indent=2)
        logger.info(f"Results written to {args.out}")


if __name__ == "__main__":
    main()
