"""Largest wheel diameter that fits without modification.

The rule is deliberately naive: factory diameter plus two inches, never
above 24". It does not look at wheel wells, brakes or suspension.
"""

from app.core.enums import MAX_WHEEL_SIZE, WHEEL_SIZE_HEADROOM
from app.models.selection import CalculationResult
from app.models.vehicle import VehicleRecord


def max_wheel_size(record: VehicleRecord) -> int:
    """Return ``min(record.wheel_size + 2, 24)``."""
    return min(record.wheel_size + WHEEL_SIZE_HEADROOM, MAX_WHEEL_SIZE)


def calculate(record: VehicleRecord) -> CalculationResult:
    return CalculationResult(vehicle=record, max_wheel_size=max_wheel_size(record))
