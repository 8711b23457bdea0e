from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class VehicleRecord(BaseModel):
    """Factory wheel and tire specification for one make/model/year/trim."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    make: str
    model: str
    year: int
    trim: str

    wheel_size: int = Field(alias="wheelSize")  # inches
    tire_size: str = Field(alias="tireSize")  # e.g. "215/55R17"
    bolt_pattern: str = Field(alias="boltPattern")  # e.g. "5x114.3"
    offset: int  # mm

    @model_validator(mode="before")
    @classmethod
    def stringify_text_fields(cls, data: Any) -> Any:
        """Accept numeric model/trim names such as 86 or 300."""
        if isinstance(data, dict):
            data = dict(data)
            for key in ("make", "model", "trim", "tireSize", "tire_size"):
                value = data.get(key)
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    data[key] = str(value)
        return data

    @field_validator("make", "model", "trim", "tire_size", "bolt_pattern")
    @classmethod
    def strip_required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("wheel_size")
    @classmethod
    def positive_wheel_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("wheel size must be a positive number of inches")
        return value

    @property
    def key(self) -> tuple[str, str, int, str]:
        """Identity of the record within a dataset."""
        return (self.make, self.model, self.year, self.trim)

    @property
    def label(self) -> str:
        return f"{self.year} {self.make} {self.model} {self.trim}"
