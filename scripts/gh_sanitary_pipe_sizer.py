# File: scripts/gh_sanitary_pipe_sizer.py
"""Sanitary Pipe Sizer for Grasshopper.

Sizes the selected Revit sanitary pipes from their drainage fixture unit
(DFU) loads and writes the resulting diameters back through
RhinoInside.Revit.

Key Features:
1. Selection
   - Uses the pipes wired into the component, or every pipe in the document
   - Keeps only pipes whose PipeSystemType is Sanitary

2. Sizing Rules
   - IPC Table 710.1(1) for pipes connected to a vertical stack
   - IPC Table 710.1(2) and 703.2 for horizontal drains and branches
   - 4" minimum when a horizontal drain is below 1/8" per foot
   - No reduction in size in the direction of flow

3. Transaction Management
   - All diameters are written in a single transaction
   - Rollback on any error, nothing is written

Environment:
    Rhino 8
    Grasshopper
    RhinoInside.Revit
    Python component (CPython 3)

Dependencies:
    - RhinoInside.Revit: Document access
    - Autodesk.Revit.DB: Revit API
    - sanitary_pipe_sizing: Sizing rules and Revit read/write helpers

Input Requirements:
    pipes (pipes) - list of Revit Pipe:
        Pipes to size. When empty every pipe in the document is considered.
        Required: No
        Access: List

    config_path (config) - str:
        Optional JSON file with alternate tables or thresholds
        Required: No
        Access: Item

    run (run) - bool:
        Execute toggle
        Required: Yes
        Access: Item

Outputs:
    sized_count (count) - int:
        Number of pipes whose diameter was written

    result_json (json) - str:
        Per-pipe sizing decisions

    summary (summary) - str:
        Processing summary and diagnostics
"""

# =============================================================================
# Imports
# =============================================================================

# Standard library
import sys
import traceback

# Force reload of project modules (development only)
FORCE_RELOAD = True
if FORCE_RELOAD:
    modules_to_reload = [k for k in sys.modules.keys()
                         if 'sanitary_pipe_sizing' in k]
    for mod_name in modules_to_reload:
        del sys.modules[mod_name]

# .NET / CLR
import clr
clr.AddReference("Grasshopper")

# Rhino / Grasshopper
import Grasshopper

# =============================================================================
# Constants
# =============================================================================

COMPONENT_NAME = "Sanitary Pipe Sizer"
COMPONENT_NICKNAME = "SanSize"
COMPONENT_MESSAGE = "v0.1"

# Project path
PROJECT_PATH = r"C:\Users\Public\Documents\GitHub\sanitary_pipe_sizing"
if PROJECT_PATH not in sys.path:
    sys.path.insert(0, PROJECT_PATH)

# =============================================================================
# Project Imports
# =============================================================================

try:
    from src.sanitary_pipe_sizing import (
        SanitaryPipeSizer,
        RevitParameterWriter,
        load_sizing_config,
        select_sanitary_segments,
    )
    from src.sanitary_pipe_sizing.utils.logging_config import SanitarySizingLogger
    PROJECT_AVAILABLE = True
    PROJECT_ERROR = None
except ImportError as e:
    PROJECT_AVAILABLE = False
    PROJECT_ERROR = str(e)

# =============================================================================
# Revit API Imports
# =============================================================================

REVIT_AVAILABLE = False
REVIT_ERROR = None

try:
    clr.AddReference("RevitAPI")
    from Autodesk.Revit.DB import (
        Transaction,
        FilteredElementCollector,
        BuiltInParameter,
        StorageType,
    )
    from Autodesk.Revit.DB.Plumbing import Pipe
    from RhinoInside.Revit import Revit
    REVIT_AVAILABLE = True
except ImportError as e:
    REVIT_ERROR = str(e)
except Exception as e:
    REVIT_ERROR = str(e)

# =============================================================================
# Logging Utilities
# =============================================================================

def log_message(message, level="info"):
    """Log to console and optionally add GH runtime message."""
    print(f"[{level.upper()}] {message}")
    if level == "warning":
        ghenv.Component.AddRuntimeMessage(
            Grasshopper.Kernel.GH_RuntimeMessageLevel.Warning, message)
    elif level == "error":
        ghenv.Component.AddRuntimeMessage(
            Grasshopper.Kernel.GH_RuntimeMessageLevel.Error, message)


def log_warning(message):
    log_message(message, "warning")


def log_error(message):
    log_message(message, "error")

# =============================================================================
# Component Setup
# =============================================================================

def setup_component():
    """Initialize and configure the Grasshopper component."""
    ghenv.Component.Name = COMPONENT_NAME
    ghenv.Component.NickName = COMPONENT_NICKNAME
    ghenv.Component.Message = COMPONENT_MESSAGE


def validate_inputs():
    """Validate component inputs.

    Returns:
        tuple: (is_valid, error_message)
    """
    if not PROJECT_AVAILABLE:
        return False, f"ERROR: Project import failed: {PROJECT_ERROR}"
    if not REVIT_AVAILABLE:
        return False, f"ERROR: Revit API not available: {REVIT_ERROR}"
    if not run:
        return False, "Set run=True to size pipes"
    return True, None


def collect_pipes(doc):
    """Wired pipes, or every Pipe in the document when none are wired."""
    if pipes:
        return [p for p in pipes if p is not None]
    return list(FilteredElementCollector(doc).OfClass(Pipe).ToElements())

# =============================================================================
# Main Function
# =============================================================================

def main():
    """Main entry point for the component.

    Returns:
        tuple: (sized_count, result_json, summary)
    """
    setup_component()

    sized_count = 0
    result_json = ""
    debug_lines = []

    debug_lines.append("=" * 50)
    debug_lines.append("SANITARY PIPE SIZER")
    debug_lines.append("=" * 50)

    try:
        is_valid, error_msg = validate_inputs()
        if not is_valid:
            debug_lines.append(error_msg)
            return sized_count, result_json, "\n".join(debug_lines)

        SanitarySizingLogger.configure(debug_mode=False, log_dir=None, rhino_mode=True)

        doc = Revit.ActiveDBDocument
        if doc is None:
            debug_lines.append("ERROR: No active Revit document")
            return sized_count, result_json, "\n".join(debug_lines)

        debug_lines.append(f"Document: {doc.Title}")

        config = load_sizing_config(config_path or None)

        elements = collect_pipes(doc)
        segments, lookup = select_sanitary_segments(
            elements,
            system_types=config.system_types,
            parameter_keys={
                "load_units": BuiltInParameter.RBS_DRAIN_FIXTURE_UNITS_PARAM,
                "slope": BuiltInParameter.RBS_PIPE_SLOPE,
                "diameter": BuiltInParameter.RBS_PIPE_DIAMETER_PARAM,
            },
        )
        debug_lines.append(f"Pipes considered: {len(elements)}")
        debug_lines.append(f"Sanitary segments: {len(segments)}")

        writer = RevitParameterWriter(
            lookup,
            lambda name: Transaction(doc, name),
            diameter_parameter=BuiltInParameter.RBS_PIPE_DIAMETER_PARAM,
            double_storage_type=StorageType.Double,
        )
        result = SanitaryPipeSizer(config).size(segments, writer)

        sized_count = result.count_sized
        result_json = result.to_json()

        debug_lines.append(f"Skipped (no load): {len(result.skipped)}")
        debug_lines.append(f"Not writable: {len(result.not_written)}")
        for error in result.errors:
            debug_lines.append(f"ERROR: {error}")
            log_error(error)

        debug_lines.append("")
        debug_lines.append("=" * 50)
        debug_lines.append(result.summary())
        debug_lines.append("=" * 50)

    except Exception as e:
        log_error(f"Unexpected error: {str(e)}")
        debug_lines.append(f"ERROR: {str(e)}")
        debug_lines.append(traceback.format_exc())

    return sized_count, result_json, "\n".join(debug_lines)

# =============================================================================
# Execution
# =============================================================================

# Define default input values if not provided by Grasshopper
if 'run' not in dir():
    run = False

if 'pipes' not in dir():
    pipes = []

if 'config_path' not in dir():
    config_path = None

# Execute main and assign to output variables
sized_count, result_json, summary = main()
