"""Tests for rpecalc.models module."""
import pytest
from pydantic import ValidationError

from rpecalc.models import CalculationInput, HistoryEntry


class TestCalculationInput:
    """Test cases for the save-boundary model."""

    def test_valid_input(self):
        calc = CalculationInput(weight=100.0, reps=5, rpe=8.0, lift_type="Bench")
        assert calc.weight == 100.0
        assert calc.lift_type == "Bench"

    @pytest.mark.parametrize("rpe", [6.0, 6.5, 9.5, 10.0])
    def test_rpe_bounds_inclusive(self, rpe):
        assert CalculationInput(weight=100.0, reps=5, rpe=rpe).rpe == rpe

    @pytest.mark.parametrize("rpe", [5.0, 5.5, 10.5, 11.0])
    def test_rpe_out_of_range(self, rpe):
        with pytest.raises(ValidationError):
            CalculationInput(weight=100.0, reps=5, rpe=rpe)

    @pytest.mark.parametrize("weight", [0.0, -2.5, float("nan"), float("inf")])
    def test_weight_must_be_positive_and_finite(self, weight):
        with pytest.raises(ValidationError):
            CalculationInput(weight=weight, reps=5, rpe=8.0)

    def test_reps_must_be_positive(self):
        with pytest.raises(ValidationError):
            CalculationInput(weight=100.0, reps=0, rpe=8.0)

    def test_reps_above_widget_range_still_saves(self):
        """Only reps > 0 is enforced when saving."""
        assert CalculationInput(weight=100.0, reps=15, rpe=8.0).reps == 15


class TestHistoryEntry:
    """Test cases for the stored record."""

    def test_alias_fields(self, sample_entry_data):
        entry = HistoryEntry.model_validate(sample_entry_data)
        assert entry.one_rep_max == 133.0
        assert entry.lift_type == "Squat"

    def test_payload_round_trip(self, sample_entry_data):
        entry = HistoryEntry.model_validate(sample_entry_data)
        assert entry.to_payload() == sample_entry_data

    def test_missing_required_field(self, sample_entry_data):
        del sample_entry_data["oneRepMax"]
        with pytest.raises(ValidationError):
            HistoryEntry.model_validate(sample_entry_data)

    def test_entry_is_frozen(self, sample_entry):
        with pytest.raises(ValidationError):
            sample_entry.weight = 200.0

    def test_snake_case_construction(self):
        entry = HistoryEntry(
            id="1", weight=100, reps=5, rpe=8, one_rep_max=133.0, date="x", lift_type="Bench"
        )
        assert entry.to_payload()["liftType"] == "Bench"
        assert entry.to_payload()["oneRepMax"] == 133.0

    def test_lift_type_defaults_to_empty(self, sample_entry_data):
        del sample_entry_data["liftType"]
        assert HistoryEntry.model_validate(sample_entry_data).lift_type == ""
