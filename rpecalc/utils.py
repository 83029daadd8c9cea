from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, List

# Classical single-set 1RM estimators. All of them are calibrated for
# 1-12 reps; outside that range the denominators of brzycki and lander
# approach zero and the results stop being meaningful.


def brzycki_1rm(weight: float, reps: int) -> float:
    """1RM = weight / (1.0278 - 0.0278 * reps)"""
    return weight / (1.0278 - 0.0278 * reps)


def epley_1rm(weight: float, reps: int) -> float:
    """1RM = weight * (1 + 0.0333 * reps)"""
    return weight * (1 + 0.0333 * reps)


def lander_1rm(weight: float, reps: int) -> float:
    """1RM = 100 * weight / (101.3 - 2.67123 * reps)"""
    return (100 * weight) / (101.3 - 2.67123 * reps)


def lombardi_1rm(weight: float, reps: int) -> float:
    """1RM = weight * reps ** 0.1"""
    return weight * math.pow(reps, 0.1)


def mayhew_1rm(weight: float, reps: int) -> float:
    """1RM = 100 * weight / (52.2 + 41.9 * e^(-0.055 * reps))"""
    return (100 * weight) / (52.2 + 41.9 * math.exp(-0.055 * reps))


def oconner_1rm(weight: float, reps: int) -> float:
    """1RM = weight * (1 + 0.025 * reps)"""
    return weight * (1 + 0.025 * reps)


def wathan_1rm(weight: float, reps: int) -> float:
    """1RM = 100 * weight / (48.8 + 53.8 * e^(-0.075 * reps))"""
    return (100 * weight) / (48.8 + 53.8 * math.exp(-0.075 * reps))


ENSEMBLE_FORMULAS: Dict[str, Callable[[float, int], float]] = {
    "brzycki": brzycki_1rm,
    "epley": epley_1rm,
    "lander": lander_1rm,
    "lombardi": lombardi_1rm,
    "mayhew": mayhew_1rm,
    "oconner": oconner_1rm,
    "wathan": wathan_1rm,
}


def rpe_linear_1rm(weight: float, reps: int, rpe: float) -> float:
    """Single-formula RPE estimate.

    1RM = weight * (1 + 0.033 * reps * (10 - rpe))

    Unrounded; rounding is the estimator's job.
    """
    return weight * (1 + 0.033 * reps * (10 - rpe))


def rpe_adjustment(rpe: float) -> float:
    """Fractional headroom added to the ensemble average.

    Each RPE point below 10 adds 3%, so RPE 8 scales the estimate by 1.06.
    """
    return (10 - rpe) * 0.03


def round_half_up(value: float, ndigits: int = 2) -> float:
    """Round with halves going up, e.g. 3.655 -> 3.66.

    Built-in round() sends halves to the even digit and would show
    3.65 here. The value is first cut to ten decimals so binary noise
    (3.6549999999999998) still counts as a half.
    """
    exact = Decimal(repr(round(value, 10)))
    return float(exact.quantize(Decimal(1).scaleb(-ndigits), rounding=ROUND_HALF_UP))


def normalize_decimal(value) -> float:
    """Convert numeric input to float, accepting both comma and period as decimal separator."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(',', '.'))
    except (ValueError, AttributeError):
        return 0.0


LIFT_TYPES: List[str] = ["Squat", "Bench", "Deadlift"]
FILTER_ALL = "All"

REP_CHOICES: List[int] = list(range(1, 13))
RPE_MIN = 6.0
RPE_MAX = 10.0
RPE_STEP = 0.5

DEFAULT_WEIGHT = 100.0
DEFAULT_REPS = 5
DEFAULT_RPE = 8.0

HISTORY_CAPACITY = 10
HISTORY_COLUMNS: List[str] = ["id", "weight", "reps", "rpe", "oneRepMax", "date", "liftType"]
