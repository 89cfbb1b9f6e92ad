# File: src/sanitary_pipe_sizing/config/__init__.py

"""
Configuration package for the sanitary pipe sizer.
Provides a unified interface to:
- Unit management and conversion
- Sizing pass settings and alternate code tables
"""

from .units import (
    ProjectUnits,
    convert_from_inches,
)

from .sizing_config import (
    MIN_LOAD_UNITS,
    SizingConfig,
    SizingConfigError,
    load_sizing_config,
)

__all__ = [
    "ProjectUnits",
    "convert_from_inches",
    "MIN_LOAD_UNITS",
    "SizingConfig",
    "SizingConfigError",
    "load_sizing_config",
]
