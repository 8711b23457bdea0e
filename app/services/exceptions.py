"""Domain exceptions for dataset loading and the selection form."""


class WheelSizeError(Exception):
    """Base class for every error raised by the wheel size calculator."""


class DatasetLoadError(WheelSizeError):
    """The dataset backend could not produce a list of vehicle documents."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class DatasetIntegrityError(DatasetLoadError):
    """Two or more records share the same (make, model, year, trim)."""

    def __init__(self, duplicates: list[tuple], source: str | None = None):
        self.duplicates = duplicates
        keys = ", ".join(" / ".join(str(part) for part in key) for key in duplicates)
        super().__init__(f"Duplicate vehicle records: {keys}", source=source)


class DatasetNotReadyError(WheelSizeError):
    """A selection was attempted before the dataset finished loading."""


class InvalidSelectionError(WheelSizeError):
    """A field was set to a value that is not currently selectable."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Cannot set {field} to {value!r}: {reason}")
