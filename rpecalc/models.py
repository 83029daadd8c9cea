from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rpecalc.utils import RPE_MAX, RPE_MIN

"""Pydantic models for the calculator.

`CalculationInput` is the save-boundary check. `HistoryEntry` is the stored
record and does not repeat those bounds, so whatever is
already in storage can always be loaded and displayed.
"""


class CalculationInput(BaseModel):
    """Validation model for a calculation that is about to be saved."""

    weight: float = Field(gt=0, allow_inf_nan=False, description="Weight must be positive")
    reps: int = Field(gt=0, description="Reps must be at least 1")
    rpe: float = Field(ge=RPE_MIN, le=RPE_MAX, description="RPE must be between 6-10")
    lift_type: str = "Squat"

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "weight": 100.0,
                    "reps": 5,
                    "rpe": 8.0,
                    "lift_type": "Squat",
                }
            ]
        }
    )


class HistoryEntry(BaseModel):
    """One saved calculation.

    Serialized with the camelCase keys of the storage format
    (`oneRepMax`, `liftType`); `populate_by_name` lets Python code use the
    snake_case names.
    """

    id: str
    weight: float
    reps: int
    rpe: float
    one_rep_max: float = Field(alias="oneRepMax")
    date: str
    # Entries saved before lift categories existed have no liftType
    lift_type: str = Field("", alias="liftType")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
