# File: tests/config/test_units.py
"""Tests for project unit conversion."""

import pytest
from src.sanitary_pipe_sizing.config.units import (
    ProjectUnits,
    convert_from_inches,
)


class TestConversion:
    """Inches to project units."""

    @pytest.mark.parametrize("units, expected", [
        (ProjectUnits.FEET, 0.5),
        (ProjectUnits.INCHES, 6.0),
        (ProjectUnits.METERS, 0.1524),
        (ProjectUnits.MILLIMETERS, 152.4),
    ])
    def test_from_inches(self, units, expected):
        assert convert_from_inches(6.0, units) == pytest.approx(expected)

    def test_string_units(self):
        assert convert_from_inches(12, " Feet ") == pytest.approx(1.0)
        assert convert_from_inches(4, "millimeters") == pytest.approx(101.6)

    def test_unsupported_units(self):
        with pytest.raises(ValueError, match="Unsupported"):
            convert_from_inches(1.0, "furlongs")

    def test_wrong_type(self):
        with pytest.raises(ValueError):
            convert_from_inches(1.0, 3)
