import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_reveal' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Reveal: perfect maze generator with animated construction")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze headlessly and print it")
    gen_parser.add_argument("--rows", type=int, default=8, help="Number of rows")
    gen_parser.add_argument("--cols", type=int, default=8, help="Number of columns")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--stepwise", action="store_true", help="Carve one wall at a time and log each step")
    gen_parser.add_argument("--no-print", action="store_true", help="Do not print the ASCII maze")

    # Reveal Command
    rev_parser = subparsers.add_parser("reveal", help="Open a window and animate the maze construction")
    rev_parser.add_argument("--rows", type=int, default=8, help="Number of rows")
    rev_parser.add_argument("--cols", type=int, default=8, help="Number of columns")
    rev_parser.add_argument("--cell-size", type=int, default=15, help="Cell size in pixels")
    rev_parser.add_argument("--border-width", type=int, default=3, help="Wall thickness in pixels")
    rev_parser.add_argument("--intro-delay", type=float, default=100.0, help="Delay between intro frames (ms)")
    rev_parser.add_argument("--build-delay", type=float, default=100.0, help="Delay between carve steps (ms)")
    rev_parser.add_argument("--blink-count", type=int, default=6, help="Success message blinks before restarting")
    rev_parser.add_argument("--blink-delay", type=float, default=500.0, help="Delay between blinks (ms)")
    rev_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    rev_parser.add_argument("--once", action="store_true", help="Exit after the first maze instead of looping")
    rev_parser.add_argument("--record", action="store_true", help="Record the reveal to video")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time batch vs stepwise generation")
    bench_parser.add_argument("--size", type=int, default=300, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_reveal")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            return cmd_generate(args, logger)
        elif args.command == "reveal":
            return cmd_reveal(args, logger)
        elif args.command == "benchmark":
            return cmd_benchmark(args, logger)
    except ValueError as e:
        logger.error(str(e))
        return 2
    return 0

def cmd_generate(args, logger):
    from maze_reveal.core.complexity import calculate_stats, is_perfect
    from maze_reveal.core.grid import create_grid
    from maze_reveal.core.shuffle import make_rng
    from maze_reveal.viz.text import render_text

    logger.info(f"Generating {args.cols}x{args.rows} maze...")
    rng = make_rng(args.seed)

    if args.stepwise:
        from maze_reveal.algo.stepwise import StepwiseCarver
        grid = create_grid(args.rows, args.cols)
        carver = StepwiseCarver(grid, rng=rng)
        for event in carver:
            if event.is_done:
                logger.info(f"Done, back at {tuple(event.coords)}")
            else:
                logger.debug(f"Step {carver.steps}: carved into {tuple(event.coords)}")
    else:
        from maze_reveal.algo.dfs import generate_maze
        grid = generate_maze(args.rows, args.cols, rng=rng)

    logger.info(f"Stats: {calculate_stats(grid)}")
    if not is_perfect(grid):
        # Never expected; the carve always yields a spanning tree
        logger.error("Generated maze is not perfect")
        return 1

    if not args.no_print:
        print(render_text(grid))
    return 0

def cmd_reveal(args, logger):
    from maze_reveal.viz.renderer import Renderer
    from maze_reveal.viz.reveal import RevealSettings

    if args.rows <= 0 or args.cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {args.cols}x{args.rows}")

    renderer = Renderer(
        nb_rows=args.rows,
        nb_columns=args.cols,
        cell_size=args.cell_size,
        border_width=args.border_width,
        settings=RevealSettings(intro_delay=args.intro_delay, build_delay=args.build_delay),
        blink_count=args.blink_count,
        blink_delay=args.blink_delay,
        seed=args.seed,
        once=args.once,
        record=args.record,
    )

    if args.record:
        logger.info(f"Recording video to {renderer.recorder.output_file}")

    logger.info("Visual mode enabled - Opening window...")
    renderer.init_window()
    renderer.run_loop()
    logger.info(f"Closed after {renderer.runs_completed} complete maze(s)")
    return 0

def cmd_benchmark(args, logger):
    import time
    from maze_reveal.algo.dfs import generate_maze
    from maze_reveal.algo.stepwise import StepwiseCarver
    from maze_reveal.core.grid import create_grid
    from maze_reveal.core.shuffle import make_rng

    logger.info(f"Running Benchmark (Size: {args.size}x{args.size})...")

    print(f"\n{'VARIANT':<12} | {'TIME (s)':<10} | {'STEPS':<10}")
    print("-" * 38)

    t0 = time.time()
    grid = generate_maze(args.size, args.size, rng=make_rng(args.seed))
    print(f"{'batch':<12} | {time.time() - t0:<10.4f} | {grid.open_wall_count():<10}")

    t0 = time.time()
    carver = StepwiseCarver(create_grid(args.size, args.size), rng=make_rng(args.seed))
    for _ in carver:
        pass
    print(f"{'stepwise':<12} | {time.time() - t0:<10.4f} | {carver.steps:<10}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
