"""Planner configuration."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class MatcherBackend(str, Enum):
    """Search engines available to the planner."""
    BACKTRACKING = "backtracking"  # First-fit recursive search over ordered pairs
    CP_SAT = "cp-sat"  # OR-Tools CP-SAT exact-cover model, for larger rosters


@dataclass
class PlannerConfig:
    """Configuration for the rotation planner."""

    # Search engine
    matcher: MatcherBackend = MatcherBackend.BACKTRACKING

    # History window: keep only the N most recent rounds (0 = keep all)
    history_window: int = 0

    # Search budget (0 = unlimited); exceeding it raises SearchTimeout
    time_limit_seconds: float = 0.0
    max_search_steps: int = 0  # Backtracking only

    # CP-SAT behavior
    num_workers: int = 1  # One worker keeps the result reproducible
    random_seed: int = 0

    def build_matcher(self):
        """Instantiate the configured matcher."""
        if self.matcher == MatcherBackend.CP_SAT:
            from pair_rotation.solver.cp_sat import CpSatMatcher
            return CpSatMatcher(
                time_limit_seconds=self.time_limit_seconds,
                num_workers=self.num_workers,
                random_seed=self.random_seed,
            )
        from pair_rotation.solver.matcher import BacktrackingMatcher
        return BacktrackingMatcher(
            max_steps=self.max_search_steps,
            time_limit_seconds=self.time_limit_seconds,
        )

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "matcher": self.matcher.value,
            "history_window": self.history_window,
            "time_limit_seconds": self.time_limit_seconds,
            "max_search_steps": self.max_search_steps,
            "num_workers": self.num_workers,
            "random_seed": self.random_seed,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "PlannerConfig":
        """Create from dictionary, ignoring unknown keys."""
        cfg = cls()
        for key, value in d.items():
            if hasattr(cfg, key):
                if key == "matcher":
                    value = MatcherBackend(value) if value else MatcherBackend.BACKTRACKING
                setattr(cfg, key, value)
        return cfg
