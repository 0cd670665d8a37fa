# src/biascalc_core/analysis/__init__.py
"""
Defines the public interface for the topology analysis package.

The `bjt`, `jfet` and `mosfet` modules hold one pure function per bias topology;
importing them here fills the analysis registry. `systems` composes AC results
into two-port and cascaded gains.
"""
from . import bjt, jfet, mosfet
from .enums import BypassMode, PhaseRelation
from .exceptions import OperatingPointError, ParameterValidationError
from .helpers import (
    parallel_resistance,
    select_drain_current,
    thevenin_resistance,
    thevenin_voltage,
    transconductance,
)
from .registry import ANALYSIS_REGISTRY, AnalysisSpec, get_analysis, register_analysis
from .results import (
    BJTACResult,
    BJTDCResult,
    CascadedResult,
    FETACResult,
    FETDCResult,
    StageGain,
    TwoPortResult,
)
from .systems import cascaded_from_results, cascaded_system, two_port_from_result, two_port_system

__all__ = [
    # Topology Modules
    "bjt", "jfet", "mosfet",
    # Enumerations
    "BypassMode", "PhaseRelation",
    # Formal Result Contracts
    "BJTDCResult", "BJTACResult", "FETDCResult", "FETACResult",
    "TwoPortResult", "StageGain", "CascadedResult",
    # Shared Helpers
    "parallel_resistance", "thevenin_resistance", "thevenin_voltage",
    "transconductance", "select_drain_current",
    # Aggregation
    "two_port_system", "cascaded_system", "two_port_from_result", "cascaded_from_results",
    # Registry
    "ANALYSIS_REGISTRY", "AnalysisSpec", "get_analysis", "register_analysis",
    # Exceptions
    "ParameterValidationError", "OperatingPointError",
]
