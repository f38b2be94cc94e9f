import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'gridmaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.config import EngineConfig
from gridmaze.core.errors import MazeError

logger = logging.getLogger("gridmaze")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_maze_args(parser: argparse.ArgumentParser, defaults: EngineConfig):
    parser.add_argument("--rows", type=int, default=defaults.default_rows, help="Maze rows")
    parser.add_argument("--columns", type=int, default=defaults.default_columns, help="Maze columns")
    parser.add_argument("--max-rows", type=int, default=defaults.max_rows, help="Largest allowed row count")
    parser.add_argument("--max-columns", type=int, default=defaults.max_columns, help="Largest allowed column count")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")


def build_parser() -> argparse.ArgumentParser:
    defaults = EngineConfig()
    parser = argparse.ArgumentParser(description="Grid Maze: step-by-step maze generation and solving")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze and print it")
    add_maze_args(gen_parser, defaults)
    gen_parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the maze")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate, solve and print a maze")
    add_maze_args(solve_parser, defaults)
    solve_parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the maze")

    # Visual Command
    vis_parser = subparsers.add_parser("visual", help="Open the animated window")
    add_maze_args(vis_parser, defaults)
    vis_parser.add_argument("--speed", type=int, default=defaults.default_speed,
                            help=f"Steps per frame ({defaults.min_speed}-{defaults.max_speed})")
    vis_parser.add_argument("--record", action="store_true", help="Record video")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    add_maze_args(bench_parser, defaults)
    bench_parser.add_argument("--runs", type=int, default=20, help="Number of mazes to build")

    return parser


def make_session(args):
    from gridmaze.session import MazeSession
    config = EngineConfig(max_rows=args.max_rows, max_columns=args.max_columns)
    logger.debug(f"Config: {config.as_dict()}")
    session = MazeSession(config=config, seed=args.seed, rows=1, columns=1)
    session.resize(args.rows, args.columns)
    return session


def print_maze(session):
    from gridmaze.viz.text import render_ascii
    print("\n".join(render_ascii(session.grid)))


def run_generate(args) -> int:
    from gridmaze.core.analysis import calculate_stats
    session = make_session(args)
    logger.info(f"Generating {args.rows}x{args.columns} maze...")
    session.generate()
    if not args.quiet:
        print_maze(session)
    logger.info(f"Stats: {calculate_stats(session.grid)}")
    return 0


def run_solve(args) -> int:
    session = make_session(args)
    logger.info(f"Generating {args.rows}x{args.columns} maze...")
    session.generate()
    logger.info(f"Solving from {session.grid.start} to {session.grid.end}...")
    session.solve()
    if not args.quiet:
        print_maze(session)
    print(session.status_line())
    if session.solver.failed:
        return 1
    print(f"Path Length: {len(session.solver.path())}")
    return 0


def run_visual(args) -> int:
    from gridmaze.viz.driver import AnimationDriver
    from gridmaze.viz.renderer import Renderer

    session = make_session(args)
    driver = AnimationDriver(session, speed=args.speed)
    renderer = Renderer(driver, record=args.record, record_prefix=f"maze_{args.rows}x{args.columns}")
    if args.record:
        logger.info(f"Recording video to {renderer.recorder.output_file}")

    logger.info("Visual mode enabled - Opening window...")
    renderer.init_window()
    driver.start_generation()
    renderer.run_loop()
    return 0


def run_benchmark(args) -> int:
    import time
    session = make_session(args)

    gen_time = 0.0
    solve_time = 0.0
    visited = 0
    for _ in range(args.runs):
        t0 = time.time()
        session.generate()
        t1 = time.time()
        session.solve()
        t2 = time.time()
        gen_time += t1 - t0
        solve_time += t2 - t1
        visited += session.solver.visited_count

    runs = max(1, args.runs)
    print(f"\n{'PHASE':<12} | {'AVG TIME (s)':<12}")
    print("-" * 28)
    print(f"{'generate':<12} | {gen_time / runs:<12.5f}")
    print(f"{'solve':<12} | {solve_time / runs:<12.5f}")
    print(f"Average cells visited by solver: {visited / runs:.1f} of {session.grid.total_cells}")
    return 0


COMMANDS = {
    "generate": run_generate,
    "solve": run_solve,
    "visual": run_visual,
    "benchmark": run_benchmark,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")
    try:
        return COMMANDS[args.command](args)
    except MazeError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
