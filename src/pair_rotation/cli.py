from __future__ import annotations

import argparse
import json
import logging
import uuid
from typing import Any, Dict

from pydantic import ValidationError

from pair_rotation.errors import InfeasibleError, InvalidDesireError, InvalidPairError, SearchTimeout
from pair_rotation.io.csv_loader import load_roster, parse_pair_arg
from pair_rotation.io.history_store import append_round, load_history
from pair_rotation.models.validated import ValidatedPlannerConfig
from pair_rotation.solver.planner import RotationPlanner
from pair_rotation.utils.logging_setup import get_logger, setup_logging
from pair_rotation.utils.structured_logging import bind_context, clear_context, configure_structlog

logger = get_logger("pair_rotation.cli")

EXIT_OK = 0
EXIT_INVALID = 2
EXIT_INFEASIBLE = 3
EXIT_TIMEOUT = 4


def _build_cfg(args: argparse.Namespace) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {"matcher": args.matcher}
    if args.window is not None:
        cfg["history_window"] = int(args.window)
    if args.time_limit is not None:
        cfg["time_limit_seconds"] = float(args.time_limit)
    if args.max_steps is not None:
        cfg["max_search_steps"] = int(args.max_steps)
    return cfg


def _verbosity(count: int) -> str:
    return {0: "WARNING", 1: "INFO", 2: "DEBUG"}.get(count, "TRACE")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="pair-rotation",
        description="Plan the next round of pairs without repeating recent pairings",
    )
    p.add_argument("--roster", required=True, help="CSV with a 'name' column (optional 'active')")
    p.add_argument("--history", help="JSON file of past rounds, oldest first")
    p.add_argument("--desire", action="append", default=[], metavar="A,B", help="Pair that must be formed")
    p.add_argument("--block", action="append", default=[], metavar="A,B", help="Pair that must never be formed")
    p.add_argument("--window", type=int, help="Only the N most recent rounds constrain the plan")
    p.add_argument("--matcher", choices=["backtracking", "cp-sat"], default="backtracking")
    p.add_argument("--time-limit", dest="time_limit", type=float, help="Search budget in seconds")
    p.add_argument("--max-steps", dest="max_steps", type=int, help="Backtracking step budget")
    p.add_argument("--record", action="store_true", help="Append the planned round to --history")
    p.add_argument("--json", dest="json_out", action="store_true", help="JSON output")
    p.add_argument("--log-file", dest="log_file", help="Also log to this file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    args = p.parse_args(argv)

    level = _verbosity(args.verbose)
    setup_logging(level="DEBUG", log_file=args.log_file, console_level=level)
    configure_structlog(json_output=args.json_out, level=logging.INFO if args.verbose else logging.WARNING)
    bind_context(run_id=uuid.uuid4().hex[:8])

    try:
        if args.record and not args.history:
            p.error("--record requires --history")

        try:
            config = ValidatedPlannerConfig(**_build_cfg(args)).to_dataclass()
            roster = load_roster(args.roster)
            history = load_history(args.history) if args.history else None
            desires = [parse_pair_arg(d) for d in args.desire]
            blocked = [parse_pair_arg(b) for b in args.block]
        except (ValueError, ValidationError, OSError) as e:
            logger.error(f"Invalid input: {e}")
            return EXIT_INVALID

        try:
            result = RotationPlanner(config).plan(roster, desires, history, blocked)
        except (InvalidPairError, InvalidDesireError) as e:
            logger.error(f"Invalid input: {e}")
            return EXIT_INVALID
        except InfeasibleError as e:
            logger.error(str(e))
            if args.json_out:
                print(json.dumps({"error": "infeasible", "message": str(e), "attempts": e.attempts}))
            return EXIT_INFEASIBLE
        except SearchTimeout as e:
            logger.error(str(e))
            if args.json_out:
                print(json.dumps({"error": "timeout", "message": str(e), "steps": e.steps}))
            return EXIT_TIMEOUT

        if args.record:
            append_round(result.distribution, args.history)

        if args.json_out:
            print(json.dumps({
                "round": result.distribution.to_dict(),
                "forgotten": [d.to_dict() for d in result.forgotten],
                "window_size": result.window_size,
                "attempts": result.attempts,
            }, ensure_ascii=False, indent=2))
        else:
            print("Paires:")
            for pair in result.distribution.sorted_pairs():
                print(f" - {pair.first} / {pair.second}")
            if result.distribution.leftover is not None:
                print(f"Sans binôme: {result.distribution.leftover}")
            if result.forgotten:
                print(f"Historique oublié: {result.forgotten_count} tour(s)")
        return EXIT_OK
    finally:
        clear_context()


if __name__ == "__main__":
    raise SystemExit(main())
