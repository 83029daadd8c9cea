from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

import numpy as np

from .logger import logger
from .utils import ENSEMBLE_FORMULAS, round_half_up, rpe_adjustment, rpe_linear_1rm


class EstimationMode(str, Enum):
    """How a (weight, reps, rpe) triple is turned into a 1RM.

    SINGLE:   weight * (1 + 0.033 * reps * (10 - rpe))
    ENSEMBLE: mean of seven classical estimators, scaled up 3% per RPE
              point below 10.

    The two modes give materially different numbers for the same input
    (100 x 5 @ 8 is 133.0 in SINGLE and about 122.4 in ENSEMBLE).
    """

    SINGLE = "single"
    ENSEMBLE = "ensemble"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional[EstimationMode] = None) -> EstimationMode:
        default = default or DEFAULT_MODE
        if not value:
            return default
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown estimation mode %r; using %s", value, default.value)
            return default


DEFAULT_MODE = EstimationMode.ENSEMBLE


class OneRepMaxEstimator:
    """Stateless 1RM estimator bound to one mode.

    Valid for reps 1-12 and rpe 6-10. Inputs outside that range are not
    rejected here; the history store validates before saving.
    """

    def __init__(self, mode: EstimationMode | str = DEFAULT_MODE):
        self.mode = mode if isinstance(mode, EstimationMode) else EstimationMode.parse(mode)
        logger.debug(f"OneRepMaxEstimator using mode={self.mode.value}")

    def estimate(self, weight: float, reps: int, rpe: float) -> float:
        if self.mode is EstimationMode.SINGLE:
            est = rpe_linear_1rm(weight, reps, rpe)
        else:
            est = self.ensemble_average(weight, reps) * (1 + rpe_adjustment(rpe))
        return round_half_up(float(est))

    def ensemble_average(self, weight: float, reps: int) -> float:
        values = [formula(weight, reps) for formula in ENSEMBLE_FORMULAS.values()]
        return float(np.mean(values))

    def breakdown(self, weight: float, reps: int) -> Dict[str, float]:
        """Per-formula estimates (no RPE adjustment), rounded to 2 decimals."""
        return {name: round_half_up(formula(weight, reps)) for name, formula in ENSEMBLE_FORMULAS.items()}
