"""Tests for the maximum wheel size rule and the vehicle record model."""

import pytest
from pydantic import ValidationError

from app.models.vehicle import VehicleRecord
from app.services.wheel_size import calculate, max_wheel_size


def _with_wheel(size: int) -> VehicleRecord:
    return VehicleRecord(
        make="Honda",
        model="Civic",
        year=2020,
        trim="EX",
        wheelSize=size,
        tireSize="215/55R17",
        boltPattern="5x114.3",
        offset=45,
    )


class TestMaxWheelSize:
    @pytest.mark.parametrize(
        "factory,expected",
        [(15, 17), (17, 19), (18, 20), (22, 24), (23, 24), (24, 24), (26, 24)],
    )
    def test_known_values(self, factory, expected):
        assert max_wheel_size(_with_wheel(factory)) == expected

    def test_monotonic_and_capped(self):
        results = [max_wheel_size(_with_wheel(size)) for size in range(13, 30)]
        assert results == sorted(results)
        assert max(results) == 24

    def test_calculate_wraps_record(self):
        result = calculate(_with_wheel(18))
        assert result.max_wheel_size == 20
        assert result.vehicle.tire_size == "215/55R17"


class TestVehicleRecord:
    def test_camel_case_document(self):
        record = VehicleRecord.model_validate(
            {
                "make": "Toyota",
                "model": "86",
                "year": "2019",
                "trim": "GT",
                "wheelSize": 17,
                "tireSize": "215/45R17",
                "boltPattern": "5x100",
                "offset": 48,
            }
        )
        assert record.year == 2019
        assert record.key == ("Toyota", "86", 2019, "GT")
        assert record.model_dump(by_alias=True)["wheelSize"] == 17

    def test_numeric_model_name(self):
        doc = _with_wheel(17).model_dump(by_alias=True) | {"model": 86}
        assert VehicleRecord.model_validate(doc).model == "86"

    def test_missing_wheel_size_rejected(self):
        with pytest.raises(ValidationError):
            VehicleRecord.model_validate(
                {
                    "make": "Honda",
                    "model": "Civic",
                    "year": 2020,
                    "trim": "EX",
                    "tireSize": "215/55R17",
                    "boltPattern": "5x114.3",
                    "offset": 45,
                }
            )

    def test_non_numeric_wheel_size_rejected(self):
        doc = _with_wheel(17).model_dump(by_alias=True) | {"wheelSize": "seventeen"}
        with pytest.raises(ValidationError):
            VehicleRecord.model_validate(doc)

    def test_blank_make_rejected(self):
        doc = _with_wheel(17).model_dump(by_alias=True) | {"make": "  "}
        with pytest.raises(ValidationError):
            VehicleRecord.model_validate(doc)

    def test_frozen(self):
        record = _with_wheel(17)
        with pytest.raises(ValidationError):
            record.wheel_size = 20
