# src/biascalc_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("BiasCalc Core package initialized.")

from .units import ureg, pint, Quantity, to_si_magnitude
from .constants import VBE_VOLTS, THERMAL_VOLTAGE_VOLTS
from .analysis import (
    bjt, jfet, mosfet,
    BypassMode, PhaseRelation,
    BJTDCResult, BJTACResult, FETDCResult, FETACResult,
    TwoPortResult, StageGain, CascadedResult,
    two_port_system, cascaded_system, two_port_from_result, cascaded_from_results,
    ANALYSIS_REGISTRY, get_analysis,
    ParameterValidationError, OperatingPointError,
)
from .jobs import JobFileParser, JobRunResult, run_job_file, run_batch
from .reporting import format_result
from .errors import BiasCalcError, AnalysisRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "to_si_magnitude",
    # Model constants
    "VBE_VOLTS", "THERMAL_VOLTAGE_VOLTS",
    # Topology Analyses
    "bjt", "jfet", "mosfet",
    "BypassMode", "PhaseRelation",
    # Result Records
    "BJTDCResult", "BJTACResult", "FETDCResult", "FETACResult",
    "TwoPortResult", "StageGain", "CascadedResult",
    # Aggregation
    "two_port_system", "cascaded_system", "two_port_from_result", "cascaded_from_results",
    # Registry
    "ANALYSIS_REGISTRY", "get_analysis",
    # Job Files
    "JobFileParser", "JobRunResult", "run_job_file", "run_batch",
    # Reporting
    "format_result",
    # Errors (Actionable Diagnostics)
    "BiasCalcError", "AnalysisRunError", "ParameterValidationError", "OperatingPointError",
]
