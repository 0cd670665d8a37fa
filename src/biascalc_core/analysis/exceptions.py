# src/biascalc_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the topology analysis functions.

Two failure modes exist. A `ParameterValidationError` is a broken calling contract:
the caller handed a topology a parameter it can never accept, and nothing is computed.
An `OperatingPointError` means the parameters were individually valid, but the
first-order model has no real, conducting operating point for them.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ParameterValidationError(DiagnosableError, ValueError):
    """Raised when a topology function receives a parameter outside its contract."""
    topology: str
    parameter: str
    value: Any
    details: str

    def __str__(self) -> str:
        return f"{self.topology}: invalid parameter '{self.parameter}'={self.value!r}. {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Circuit Parameter",
            details=self.details,
            suggestion="Resistances, beta/alpha and device current constants must be finite and strictly positive. Check the parameter against the topology's documented signature.",
            context={'topology': self.topology, 'parameter': self.parameter, 'value': self.value}
        )


@dataclass()
class OperatingPointError(DiagnosableError, ArithmeticError):
    """
    Raised when the bias equations of a topology have no real operating point,
    e.g. a negative discriminant in the drain-current quadratic or a BJT in cutoff.
    """
    details: str
    topology: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.topology}: " if self.topology else ""
        return f"{prefix}no real operating point. {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="No Real Operating Point",
            details=self.details,
            suggestion="The supply voltages and device constants cannot bias the transistor into conduction. Check the supply polarity, the pinch-off/threshold voltage and the bias resistors.",
            context={'topology': self.topology}
        )
