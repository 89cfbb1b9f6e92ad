# File: src/sanitary_pipe_sizing/config/sizing_config.py
"""
Sizing pass configuration.

The IPC tables and thresholds are fixed defaults. Alternate code variants
(metric tables, local amendments) are supplied as a JSON document with the
same shape as ``SizingConfig.to_dict()``; missing keys keep their defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from ..core.network import DEFAULT_CONNECTION_TOLERANCE
from ..sizing.tables import DEFAULT_TABLES, MIN_DRAIN_SLOPE, SizingTables
from .units import ProjectUnits, _coerce_units

logger = logging.getLogger(__name__)

# Segments carrying less than this are treated as dry or uninitialized
MIN_LOAD_UNITS = 0.01

_KNOWN_KEYS = {
    "min_load_units",
    "default_slope",
    "connection_tolerance",
    "length_units",
    "system_types",
    "tables",
}


class SizingConfigError(ValueError):
    """Raised when a sizing configuration document is unreadable or invalid."""


@dataclass(frozen=True)
class SizingConfig:
    """
    Settings for one sizing pass.

    Attributes:
        min_load_units: Loads below this are skipped
        default_slope: Slope substituted when a segment has none
        connection_tolerance: Endpoint matching tolerance (length units)
        length_units: Unit of segment coordinates and written diameters
        system_types: Host piping system types selected for sizing
        tables: Capacity tables, slope threshold and low-slope diameter
    """
    min_load_units: float = MIN_LOAD_UNITS
    default_slope: float = MIN_DRAIN_SLOPE
    connection_tolerance: float = DEFAULT_CONNECTION_TOLERANCE
    length_units: ProjectUnits = ProjectUnits.FEET
    system_types: Tuple[str, ...] = ("Sanitary",)
    tables: SizingTables = field(default=DEFAULT_TABLES)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "min_load_units": self.min_load_units,
            "default_slope": self.default_slope,
            "connection_tolerance": self.connection_tolerance,
            "length_units": self.length_units.value,
            "system_types": list(self.system_types),
            "tables": self.tables.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SizingConfig':
        """
        Create from dictionary, keeping defaults for missing keys.

        Raises:
            SizingConfigError: If a value cannot be interpreted
        """
        if not data:
            return cls()

        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            logger.warning(f"Ignoring unknown sizing config keys: {sorted(unknown)}")

        defaults = cls()
        try:
            return cls(
                min_load_units=float(data.get("min_load_units", defaults.min_load_units)),
                default_slope=float(data.get("default_slope", defaults.default_slope)),
                connection_tolerance=float(
                    data.get("connection_tolerance", defaults.connection_tolerance)
                ),
                length_units=_coerce_units(data.get("length_units", defaults.length_units)),
                system_types=tuple(data.get("system_types", defaults.system_types)),
                tables=(
                    SizingTables.from_dict(data["tables"])
                    if data.get("tables") else defaults.tables
                ),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SizingConfigError(f"Invalid sizing config: {e}") from e


def load_sizing_config(source: Union[str, Dict[str, Any], None]) -> SizingConfig:
    """
    Load a sizing configuration from a JSON file path or a dict.

    Args:
        source: Path to a JSON file, an already parsed dict, or None for defaults

    Returns:
        SizingConfig

    Raises:
        SizingConfigError: If the file cannot be read or parsed
    """
    if source is None:
        return SizingConfig()
    if isinstance(source, dict):
        return SizingConfig.from_dict(source)

    try:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SizingConfigError(f"Could not read sizing config '{source}': {e}") from e

    if not isinstance(data, dict):
        raise SizingConfigError(f"Sizing config '{source}' must be a JSON object")

    logger.info(f"Loaded sizing config from {source}")
    return SizingConfig.from_dict(data)
