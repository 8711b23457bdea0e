from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.core.enums import SelectionField, SelectionStage, SubmissionStatus
from app.models.vehicle import VehicleRecord


class SelectionState(BaseModel):
    """In-progress make/model/year/trim selection and the options it unlocks.

    Instances are frozen; the transition functions in
    ``app.services.selector`` return a new state for every change.
    """

    model_config = ConfigDict(frozen=True)

    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    trim: Optional[str] = None

    available_models: tuple[str, ...] = ()
    available_years: tuple[int, ...] = ()
    available_trims: tuple[str, ...] = ()

    @field_validator("make", "model", "year", "trim", mode="before")
    @classmethod
    def blank_is_unset(cls, value: Any) -> Any:
        """Form controls send "" for "Select ..."; that means not chosen."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def stage(self) -> SelectionStage:
        if self.make is None:
            return SelectionStage.EMPTY
        if self.model is None:
            return SelectionStage.MAKE_CHOSEN
        if self.year is None:
            return SelectionStage.MODEL_CHOSEN
        if self.trim is None:
            return SelectionStage.YEAR_CHOSEN
        return SelectionStage.TRIM_CHOSEN

    @property
    def is_complete(self) -> bool:
        return self.stage == SelectionStage.TRIM_CHOSEN

    def value_of(self, field: SelectionField):
        return getattr(self, field.value)

    def enabled_fields(self) -> list[SelectionField]:
        """Fields whose control is enabled: the make plus every field after a chosen one."""
        enabled = [SelectionField.MAKE]
        for field in list(SelectionField)[:-1]:
            if self.value_of(field) is None:
                break
            enabled.append(list(SelectionField)[field.depth + 1])
        return enabled


class CalculationResult(BaseModel):
    vehicle: VehicleRecord
    max_wheel_size: int


class SubmissionOutcome(BaseModel):
    """Typed result of a submit: success carries a result, the rest carry a message."""

    status: SubmissionStatus
    result: Optional[CalculationResult] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == SubmissionStatus.SUCCESS
