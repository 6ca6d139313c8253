#!/usr/bin/env python3
"""
Publishing gate for delivery puzzle levels.

Validates and solves every level in a catalog, replays each optimal path
through the simulation, reports the results and optionally writes CSV
output. Exits non-zero if any level is invalid or not provably solvable.

Usage:
    python check_levels.py
    python check_levels.py --levels my_levels.json --max-visited 200000
    python check_levels.py --csv results.csv --parallel
"""
import argparse
import csv
import json
import logging
import multiprocessing
import sys
from pathlib import Path

from delivery_puzzle import (
    DEFAULT_MAX_VISITED, LEVELS_FILE,
    build_level, run_headless, validate_level_data,
)


def _check_single(args):
    """Wrapper for multiprocessing: validate, then solve and replay one entry."""
    entry, max_visited = args
    level_id = str(entry.get("id", "?"))
    errors = validate_level_data(entry)
    if errors:
        return {"level_id": level_id, "errors": errors}
    result = run_headless(build_level(entry), max_visited=max_visited)
    result["errors"] = []
    return result


def _verdict(r):
    if r["errors"]:
        return "INVALID"
    if not r["solvable"]:
        return r["outcome"].upper()
    if r["status"] != "success":
        return "REPLAY-FAILED"
    return "OK"


def main():
    parser = argparse.ArgumentParser(description="Validate and solve a level catalog")
    parser.add_argument("--levels", type=Path, default=LEVELS_FILE,
                        help="JSON level catalog (default: bundled levels)")
    parser.add_argument("--max-visited", type=int, default=DEFAULT_MAX_VISITED,
                        help=f"Solver state cap per level (default: {DEFAULT_MAX_VISITED})")
    parser.add_argument("--csv", type=str, default=None,
                        help="Optional CSV output file path")
    parser.add_argument("--parallel", action="store_true",
                        help="Solve levels using multiprocessing")
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of parallel workers (default: cpu_count, capped at 8)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log solver and replay details")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    entries = json.loads(args.levels.read_text())
    if not isinstance(entries, list):
        print(f"{args.levels}: expected a JSON list of levels")
        sys.exit(2)
    entries = [e if isinstance(e, dict) else {"id": f"#{i}"} for i, e in enumerate(entries)]

    jobs = [(entry, args.max_visited) for entry in entries]
    total = len(jobs)
    print(f"Checking {total} levels from {args.levels} (cap {args.max_visited} states)")

    results = []
    if args.parallel:
        n_workers = args.workers or min(multiprocessing.cpu_count(), 8)
        print(f"Mode: parallel ({n_workers} workers)")
        with multiprocessing.Pool(processes=n_workers) as pool:
            for i, result in enumerate(pool.imap(_check_single, jobs), 1):
                results.append(result)
                print(f"  [{i}/{total}] {result['level_id']}: {_verdict(result)}")
    else:
        for i, job in enumerate(jobs, 1):
            print(f"  [{i}/{total}] {job[0].get('id', '?')} ...", end="", flush=True)
            result = _check_single(job)
            results.append(result)
            print(f"  {_verdict(result)}")

    # Summary table
    print()
    header = f"{'Level':<20}  {'Verdict':<13}  {'Moves':>5}  {'States':>8}  {'Wall(s)':>8}"
    print(header)
    print("-" * len(header))
    for r in results:
        if r["errors"]:
            print(f"{r['level_id']:<20}  {'INVALID':<13}")
            for err in r["errors"]:
                print(f"    - {err}")
            continue
        moves = r["optimal_moves"] if r["optimal_moves"] is not None else "--"
        print(f"{r['level_id']:<20}  {_verdict(r):<13}  {moves:>5}  "
              f"{r['visited_states']:>8}  {r['wall_clock_seconds']:>8.3f}")

    failed = [r for r in results if _verdict(r) != "OK"]
    print(f"\n{total - len(failed)}/{total} levels publishable")

    if args.csv:
        fieldnames = [
            "level_id", "verdict", "optimal_moves", "visited_states",
            "outcome", "wall_clock_seconds",
        ]
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for r in results:
                writer.writerow({
                    "level_id": r["level_id"],
                    "verdict": _verdict(r),
                    "optimal_moves": r.get("optimal_moves"),
                    "visited_states": r.get("visited_states"),
                    "outcome": r.get("outcome"),
                    "wall_clock_seconds": r.get("wall_clock_seconds"),
                })
        print(f"CSV written to: {args.csv}")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
