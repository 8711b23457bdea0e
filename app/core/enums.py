"""Enums for selection and outcome constants."""

from enum import Enum


class SelectionField(str, Enum):
    """The four cascading form fields, in dependency order."""

    MAKE = "make"
    MODEL = "model"
    YEAR = "year"
    TRIM = "trim"

    @property
    def depth(self) -> int:
        return _FIELD_ORDER.index(self)

    @classmethod
    def from_string(cls, value: str | None) -> "SelectionField | None":
        """Convert string to enum, returning None if invalid."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_FIELD_ORDER = [
    SelectionField.MAKE,
    SelectionField.MODEL,
    SelectionField.YEAR,
    SelectionField.TRIM,
]


class SelectionStage(str, Enum):
    """How far the user has progressed through the form."""

    EMPTY = "empty"
    MAKE_CHOSEN = "make_chosen"
    MODEL_CHOSEN = "model_chosen"
    YEAR_CHOSEN = "year_chosen"
    TRIM_CHOSEN = "trim_chosen"
    SUBMITTED = "submitted"


class SubmissionStatus(str, Enum):
    """Outcome of pressing Calculate."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    INCOMPLETE = "incomplete"
    AMBIGUOUS = "ambiguous"


class LoadStatus(str, Enum):
    """State of the one-shot dataset load."""

    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class DatasetSource(str, Enum):
    """Backing store for the vehicle dataset."""

    STATIC = "static"
    SUPABASE = "supabase"
    HTTP = "http"

    @classmethod
    def from_string(cls, value: str | None) -> "DatasetSource":
        """Convert string to enum, defaulting to the bundled static file."""
        if not value:
            return cls.STATIC
        return cls(value.strip().lower())


# Wheel-size rule: factory diameter plus headroom, capped
WHEEL_SIZE_HEADROOM = 2
MAX_WHEEL_SIZE = 24
