"""Cascading make → model → year → trim selection over a dataset snapshot.

Every function here is pure: the dataset is passed in, never captured, and
``SelectionState`` values are replaced rather than mutated.
"""

from typing import Any, Iterable, Optional

from app.core.enums import SelectionField, SubmissionStatus
from app.models.selection import SelectionState, SubmissionOutcome
from app.models.vehicle import VehicleRecord
from app.services.exceptions import InvalidSelectionError
from app.services.wheel_size import calculate

Dataset = Iterable[VehicleRecord]


def _coerce_year(value: Any) -> Optional[int]:
    """Years arrive as ints from the dataset and as strings from form controls."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return None


# -----------------------------------------------------------------------------
# Option lists
# -----------------------------------------------------------------------------


def list_makes(dataset: Dataset) -> list[str]:
    return sorted({r.make for r in dataset})


def list_models(dataset: Dataset, make: Optional[str]) -> list[str]:
    if not make:
        return []
    return sorted({r.model for r in dataset if r.make == make})


def list_years(dataset: Dataset, make: Optional[str], model: Optional[str]) -> list[int]:
    """Distinct years for a make and model, newest first."""
    if not make or not model:
        return []
    return sorted(
        {r.year for r in dataset if r.make == make and r.model == model},
        reverse=True,
    )


def list_trims(
    dataset: Dataset,
    make: Optional[str],
    model: Optional[str],
    year: Any,
) -> list[str]:
    year = _coerce_year(year)
    if not make or not model or year is None:
        return []
    return sorted(
        {
            r.trim
            for r in dataset
            if r.make == make and r.model == model and r.year == year
        }
    )


# -----------------------------------------------------------------------------
# Record lookup
# -----------------------------------------------------------------------------


def find_matches(
    dataset: Dataset,
    make: Optional[str],
    model: Optional[str],
    year: Any,
    trim: Optional[str],
) -> list[VehicleRecord]:
    """All records matching the four fields exactly, in dataset order."""
    year = _coerce_year(year)
    if not make or not model or year is None or not trim:
        return []
    return [r for r in dataset if r.key == (make, model, year, trim)]


def select_record(
    dataset: Dataset,
    make: Optional[str],
    model: Optional[str],
    year: Any,
    trim: Optional[str],
) -> Optional[VehicleRecord]:
    """Return the single matching record, or None when zero or several match."""
    matches = find_matches(dataset, make, model, year, trim)
    if len(matches) != 1:
        return None
    return matches[0]


# -----------------------------------------------------------------------------
# State transitions
# -----------------------------------------------------------------------------


def empty_selection() -> SelectionState:
    return SelectionState()


def _derive(
    dataset: Dataset,
    make: Optional[str] = None,
    model: Optional[str] = None,
    year: Optional[int] = None,
    trim: Optional[str] = None,
) -> SelectionState:
    records = list(dataset)
    return SelectionState(
        make=make,
        model=model,
        year=year,
        trim=trim,
        available_models=tuple(list_models(records, make)),
        available_years=tuple(list_years(records, make, model)),
        available_trims=tuple(list_trims(records, make, model, year)),
    )


def _require(state: SelectionState, field: SelectionField, value: Any) -> None:
    predecessor = list(SelectionField)[field.depth - 1]
    if state.value_of(predecessor) is None:
        raise InvalidSelectionError(
            field.value, value, f"{predecessor.value} must be chosen first"
        )


def choose_make(dataset: Dataset, state: SelectionState, make: Optional[str]) -> SelectionState:
    """Set the make and clear model, year and trim."""
    records = list(dataset)
    if not make:
        return empty_selection()
    if make not in list_makes(records):
        raise InvalidSelectionError("make", make, "not in the dataset")
    return _derive(records, make)


def choose_model(dataset: Dataset, state: SelectionState, model: Optional[str]) -> SelectionState:
    records = list(dataset)
    _require(state, SelectionField.MODEL, model)
    if not model:
        return _derive(records, state.make)
    if model not in list_models(records, state.make):
        raise InvalidSelectionError("model", model, f"not offered for {state.make}")
    return _derive(records, state.make, model)


def choose_year(dataset: Dataset, state: SelectionState, year: Any) -> SelectionState:
    records = list(dataset)
    _require(state, SelectionField.YEAR, year)
    if year is None or year == "":
        return _derive(records, state.make, state.model)
    coerced = _coerce_year(year)
    if coerced is None or coerced not in list_years(records, state.make, state.model):
        raise InvalidSelectionError(
            "year", year, f"not offered for {state.make} {state.model}"
        )
    return _derive(records, state.make, state.model, coerced)


def choose_trim(dataset: Dataset, state: SelectionState, trim: Optional[str]) -> SelectionState:
    records = list(dataset)
    _require(state, SelectionField.TRIM, trim)
    if not trim:
        return _derive(records, state.make, state.model, state.year)
    if trim not in list_trims(records, state.make, state.model, state.year):
        raise InvalidSelectionError(
            "trim", trim, f"not offered for {state.year} {state.make} {state.model}"
        )
    return _derive(records, state.make, state.model, state.year, trim)


_TRANSITIONS = {
    SelectionField.MAKE: choose_make,
    SelectionField.MODEL: choose_model,
    SelectionField.YEAR: choose_year,
    SelectionField.TRIM: choose_trim,
}


def apply_choice(
    dataset: Dataset,
    state: SelectionState,
    field: SelectionField | str,
    value: Any,
) -> SelectionState:
    """Set ``field`` to ``value``; every deeper field is cleared."""
    resolved = field if isinstance(field, SelectionField) else SelectionField.from_string(field)
    if resolved is None:
        raise InvalidSelectionError(str(field), value, "unknown field")
    return _TRANSITIONS[resolved](dataset, state, value)


# -----------------------------------------------------------------------------
# Submission
# -----------------------------------------------------------------------------


def submit_selection(dataset: Dataset, state: SelectionState) -> SubmissionOutcome:
    if not state.is_complete:
        return SubmissionOutcome(
            status=SubmissionStatus.INCOMPLETE,
            message="Choose a make, model, year and trim first.",
        )

    matches = find_matches(dataset, state.make, state.model, state.year, state.trim)
    label = f"{state.year} {state.make} {state.model} {state.trim}"
    if not matches:
        return SubmissionOutcome(
            status=SubmissionStatus.NOT_FOUND,
            message=f"No matching vehicle for {label}.",
        )
    if len(matches) > 1:
        return SubmissionOutcome(
            status=SubmissionStatus.AMBIGUOUS,
            message=f"{len(matches)} records match {label}; the dataset has duplicates.",
        )
    return SubmissionOutcome(status=SubmissionStatus.SUCCESS, result=calculate(matches[0]))
