# File: src/sanitary_pipe_sizing/config/units.py

"""
Unit management and conversion functionality for the sanitary pipe sizer.

Capacity tables resolve diameters in inches, while host models store lengths
in their own unit (Revit works internally in feet). This module converts
resolved diameters into the project unit of a sizing pass.
"""

from enum import Enum
from typing import Union, Dict


class ProjectUnits(Enum):
    """
    Enumeration of supported project length units.
    Using an enum provides type safety and autocompletion support.
    """
    FEET = "feet"
    INCHES = "inches"
    METERS = "meters"
    MILLIMETERS = "millimeters"


# Conversion factors from inches
_CONVERSION_FROM_INCHES: Dict[ProjectUnits, float] = {
    ProjectUnits.FEET: 1 / 12.0,
    ProjectUnits.INCHES: 1.0,
    ProjectUnits.METERS: 0.0254,
    ProjectUnits.MILLIMETERS: 25.4,
}


def _coerce_units(units: Union[ProjectUnits, str]) -> ProjectUnits:
    """Resolve a ProjectUnits value from an enum member or its string value."""
    if isinstance(units, ProjectUnits):
        return units
    if isinstance(units, str):
        try:
            return ProjectUnits(units.lower().strip())
        except ValueError:
            raise ValueError(f"Unsupported unit: {units}")
    raise ValueError(f"Units must be ProjectUnits enum or string, got {type(units)}")


def convert_from_inches(value: float, target_units: Union[ProjectUnits, str]) -> float:
    """
    Converts a value in inches to the specified target units.

    Args:
        value: The numeric value in inches
        target_units: The units to convert to (ProjectUnits enum or string)

    Returns:
        The converted value in the target units

    Raises:
        ValueError: If the provided units are not supported
    """
    return value * _CONVERSION_FROM_INCHES[_coerce_units(target_units)]

