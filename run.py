"""CLI entrypoint: load puzzle(s), run solver, and report results."""

import argparse
import csv
import json
from pathlib import Path
from typing import Any

from tqdm import tqdm

from solver import solve_puzzle
from src.csp.errors import InvalidPuzzleInput, PuzzleError
from src.csp.loader import load_puzzles
from src.csp.model import PuzzleResult
from src.utils.config import MAX_SEARCH_DEPTH, PUZZLE_SUFFIXES
from src.utils.io import result_to_dict, save_json
from src.utils.logging_utils import get_logger
from src.utils.trace import get_tracer, reset_tracer


def parse_args(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Solve zebra (Einstein) logic puzzles")
    parser.add_argument("input", type=Path, help="Path to puzzle JSON/JSONL/Parquet file or directory of puzzles")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write solutions")
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format for --output: JSON house records or a CSV of grid solutions.",
    )
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the solver trace CSV")
    parser.add_argument(
        "--include-status",
        action="store_true",
        help="Include a 'status' field in grid_solution (CSV output only).",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_SEARCH_DEPTH,
        help="Give up on search branches deeper than this (default: unbounded).",
    )
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG or WARNING")
    return parser.parse_args(argv)


def reformat_to_grid(result: PuzzleResult, *, header: list[str] | None = None) -> dict:
    categories = list(result.houses[0].values) if result.houses else []
    if header:
        # Header includes "House" as first column.
        categories = list(header[1:])

    rows: list[list[Any]] = []
    for house in result.houses:
        row = [str(house.position)]
        for category in categories:
            row.append(house.values.get(category, "___"))
        rows.append(row)

    return {
        "header": ["House"] + categories,
        "rows": rows
    }


def format_solution(
    result: PuzzleResult | None,
    *,
    include_status: bool = False,
) -> dict:
    if result is None or not result.houses:
        grid = {"header": [], "rows": []}
    else:
        grid = reformat_to_grid(result)

    if include_status:
        status = "solved" if result is not None and result.houses else "unsolved"
        return {"status": status, **grid}
    return grid


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "grid_solution", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                json.dumps(r["grid_solution"], ensure_ascii=False, separators=(",", ":")),
                r["steps"]
            ])


def write_results_json(results, output_path: Path):
    payload = []
    for r in results:
        if r["result"] is not None:
            payload.append({"id": r["id"], **result_to_dict(r["result"])})
        else:
            payload.append({"id": r["id"], "error": r["error"]})
    save_json(output_path, payload)


def _trace_path(base: Path, puzzle_id: str, many: bool) -> Path:
    if not many:
        return base
    return base.with_name(f"{base.stem}_{puzzle_id}{base.suffix or '.csv'}")


def collect_puzzles(input_path: Path) -> list[dict]:
    puzzles = []
    if input_path.is_file():
        puzzles = load_puzzles(str(input_path))
    elif input_path.is_dir():
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")
    return puzzles


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    get_logger(args.log_level)

    puzzles = collect_puzzles(args.input)
    many = len(puzzles) > 1
    results = []

    iterator = tqdm(puzzles, desc="Solving", unit="puzzle") if many else puzzles
    for puzzle in iterator:
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = str(puzzle.get("id", "unknown"))

        try:
            result = solve_puzzle(puzzle, max_depth=args.max_depth)
            summary = tracer.summary()
            results.append({
                "id": puzzle_id,
                "result": result,
                "error": None,
                "grid_solution": format_solution(result, include_status=args.include_status),
                "steps": summary["num_assignments"],
            })
        except (InvalidPuzzleInput, PuzzleError) as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "result": None,
                "error": str(e),
                "grid_solution": format_solution(None, include_status=args.include_status),
                "steps": -1
            })

        if args.trace:
            tracer.to_csv(_trace_path(args.trace, puzzle_id, many))

    if args.output:
        if args.format == "csv":
            write_results_csv(results, args.output)
        else:
            write_results_json(results, args.output)
        print(f"Wrote {len(results)} result(s) to {args.output}")
    else:
        for r in results:
            if r["result"] is not None:
                print(json.dumps({"id": r["id"], **result_to_dict(r["result"])}, indent=2, ensure_ascii=False))
            else:
                print(json.dumps({"id": r["id"], "error": r["error"]}, ensure_ascii=False))

    return results


def cli() -> int:
    """Console-script entrypoint; exits non-zero when any puzzle failed."""
    results = main()
    return 1 if any(r["error"] for r in results) else 0


if __name__ == "__main__":
    raise SystemExit(cli())
