#!/usr/bin/env python3
"""
Tactics Benchmark Runner

Runs the tactics suite at each difficulty level to check playing strength
and measure how long the built-in opponent thinks.

Usage:
    python tools/run_benchmark.py [--levels easy,medium,hard] [--seed 7] [--verbose]
"""

import sys
import argparse
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from chess_companion.search.engine import DIFFICULTY_DEPTH, Difficulty, SearchEngine
from chess_companion.utils.log import setup_logger
from chess_companion.utils.testing import run_tactics


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_benchmark(levels: list[Difficulty], seed: int | None = None, verbose: bool = False):
    """
    Run the tactics suite at several difficulty levels.

    Args:
        levels: Difficulty levels to test
        seed: Seed for the root move shuffle
        verbose: If True, print detailed results for each position
    """
    engine = SearchEngine(seed=seed)

    print("=" * 80)
    print("TACTICS BENCHMARK - Chess Companion")
    print("=" * 80)
    print("Evaluator: Classical (Piece-Square Tables)")
    print("Search: Minimax with Alpha-Beta Pruning")
    print(f"Levels: {', '.join(f'{lvl.value} ({DIFFICULTY_DEPTH[lvl]} ply)' for lvl in levels)}")
    print("=" * 80)

    all_results = []

    for level in levels:
        start_time = time.time()
        result = run_tactics(engine, level, verbose=verbose)
        total_time = time.time() - start_time

        total_nodes = sum(r.nodes_searched for r in result['results'])
        nodes_per_sec = total_nodes / total_time if total_time > 0 else 0

        all_results.append({
            'level': level,
            'score': result['score'],
            'total': result['total'],
            'percentage': result['percentage'],
            'avg_time': result['avg_time'],
            'nodes_per_sec': nodes_per_sec,
            'results': result['results'],
        })

        print(f"\nResults at {level.value}:")
        print(f"  Correct: {result['score']}/{result['total']} ({result['percentage']:.1f}%)")
        print(f"  Total time: {format_time(total_time)}")
        print(f"  Avg time per position: {format_time(result['avg_time'])}")
        print(f"  Total nodes: {total_nodes:,}")
        print(f"  Nodes/sec: {nodes_per_sec:,.0f}")

        failed = [r for r in result['results'] if not r.correct]
        if failed and verbose:
            print("\n  Failed positions:")
            for r in failed:
                print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Level':<10} {'Correct':<12} {'%':<8} {'Avg Time':<12} {'Nodes/sec':<15}")
    print("-" * 80)

    for r in all_results:
        print(f"{r['level'].value:<10} {r['score']}/{r['total']:<10} {r['percentage']:<7.1f}% "
              f"{format_time(r['avg_time']):<12} {r['nodes_per_sec']:>12,.0f}")

    print("=" * 80)

    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Run the tactics suite at several difficulty levels"
    )
    parser.add_argument(
        "--levels",
        type=str,
        default="easy,medium,hard",
        help="Comma-separated difficulty levels (default: easy,medium,hard)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the root move shuffle"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results for each position"
    )

    args = parser.parse_args()
    setup_logger(debug=args.verbose)

    try:
        levels = [Difficulty(name.strip().lower()) for name in args.levels.split(",")]
    except ValueError:
        print("Error: levels must be a comma-separated list of easy, medium, hard")
        sys.exit(1)

    try:
        run_benchmark(levels, seed=args.seed, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
