"""
Tunable parameters and fixed thresholds for the capability analyses.

The thresholds are constants shared by every analysis run. Only the training
cost per skill level is supplied per call; AnalysisSettings reads its default
(and the runner's directories) from the environment.
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigurationError


# Currency units charged per missing skill level
DEFAULT_TRAINING_COST_PER_LEVEL = 5000.0

# Minimum match percentages
EMPLOYMENT_MIN_MATCH_PERCENTAGE = 70.0
CAPABILITY_MIN_MATCH_PERCENTAGE = 75.0

# Reliance suggestions must be missing between 1 and this many skills
RELIANCE_MAX_MISSING_SKILLS = 2

# Result list caps
TOP_CANDIDATES_LIMIT = 5
SUGGESTION_LIMIT = 5
TRAININGS_PER_GAP_LIMIT = 2

# Candidate scoring weights (sum to 1.0)
MATCHING_SKILLS_WEIGHT = 0.60
LEVEL_PROXIMITY_WEIGHT = 0.25
COST_WEIGHT = 0.15

# Largest possible gap on a single skill (absent skill, Expert required)
MAX_LEVEL_GAP = 5


def validate_training_cost(value) -> float:
    """Return the cost per level as a float, rejecting negative or non-finite values."""
    if isinstance(value, bool):
        raise ConfigurationError(
            f"Training cost per level must be numeric, got {value!r}",
            parameter="training_cost_per_level"
        )

    try:
        cost = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Training cost per level must be numeric, got {value!r}",
            parameter="training_cost_per_level"
        ) from e

    if math.isnan(cost) or math.isinf(cost) or cost < 0:
        raise ConfigurationError(
            f"Training cost per level must be a finite non-negative number, got {value!r}",
            parameter="training_cost_per_level"
        )
    return cost


@dataclass(frozen=True)
class AnalysisSettings:
    """Settings for a runner session."""

    training_cost_per_level: float = DEFAULT_TRAINING_COST_PER_LEVEL
    data_dir: Path = Path("data")
    output_dir: Path = Path("outputs")

    @classmethod
    def from_env(cls) -> "AnalysisSettings":
        """
        Build settings from environment variables.

        TRAINING_COST_PER_LEVEL, WORKFORCE_DATA_DIR and WORKFORCE_OUTPUT_DIR
        override the defaults when set.
        """
        raw_cost = os.getenv('TRAINING_COST_PER_LEVEL')
        cost = DEFAULT_TRAINING_COST_PER_LEVEL if raw_cost is None else validate_training_cost(raw_cost)

        return cls(
            training_cost_per_level=cost,
            data_dir=Path(os.getenv('WORKFORCE_DATA_DIR', 'data')),
            output_dir=Path(os.getenv('WORKFORCE_OUTPUT_DIR', 'outputs'))
        )
