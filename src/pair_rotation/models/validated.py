"""
Pydantic Validated Models
=========================
Validation layer for planner configuration at the CLI and API boundaries.

Usage:
    from pair_rotation.models.validated import ValidatedPlannerConfig

    config = ValidatedPlannerConfig(matcher="cp-sat", time_limit_seconds=5).to_dataclass()

The dataclass PlannerConfig stays the type the planner consumes.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pair_rotation.models.constraints import MatcherBackend, PlannerConfig


class ValidatedPlannerConfig(BaseModel):
    """
    Pydantic-validated planner configuration.

    Can be converted to/from the dataclass PlannerConfig.
    """
    model_config = ConfigDict(validate_assignment=True)

    matcher: MatcherBackend = Field(default=MatcherBackend.BACKTRACKING)
    history_window: int = Field(default=0, ge=0, description="Most recent rounds kept (0 = all)")
    time_limit_seconds: float = Field(default=0.0, ge=0, le=3600, description="Search budget (0 = unlimited)")
    max_search_steps: int = Field(default=0, ge=0)
    num_workers: int = Field(default=1, ge=1, le=32)
    random_seed: int = Field(default=0, ge=0)

    @field_validator("matcher", mode="before")
    @classmethod
    def normalize_matcher(cls, v):
        """Accept 'cp_sat' / 'CP-SAT' spellings."""
        if isinstance(v, str):
            return v.strip().lower().replace("_", "-")
        return v

    def to_dataclass(self) -> PlannerConfig:
        """Convert to dataclass PlannerConfig for planner compatibility."""
        return PlannerConfig(
            matcher=MatcherBackend(self.matcher),
            history_window=self.history_window,
            time_limit_seconds=self.time_limit_seconds,
            max_search_steps=self.max_search_steps,
            num_workers=self.num_workers,
            random_seed=self.random_seed,
        )

    @classmethod
    def from_dataclass(cls, config: PlannerConfig) -> "ValidatedPlannerConfig":
        """Create from dataclass PlannerConfig."""
        return cls(
            matcher=config.matcher,
            history_window=config.history_window,
            time_limit_seconds=config.time_limit_seconds,
            max_search_steps=config.max_search_steps,
            num_workers=config.num_workers,
            random_seed=config.random_seed,
        )
