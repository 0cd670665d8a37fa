# src/biascalc_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class BiasCalcError(Exception):
    """Base class for all custom, user-facing errors in BiasCalc Core."""
    pass

class AnalysisRunError(BiasCalcError):
    """
    Raised when a job file or a batch of analyses fails for any reason, from
    parsing to evaluating a single topology. The message is a pre-formatted,
    user-friendly diagnostic report; the original exception is chained.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses. Every
    subclass must override `get_diagnostic_report`.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Invalid Parameter").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (topology, parameter,
                 offending value, job id, source file).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============== BiasCalc Core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if topology := context.get('topology'):
        lines.append(f"Topology:       {topology}")
    if parameter := context.get('parameter'):
        lines.append(f"Parameter:      {parameter}")
    if 'value' in context and context['value'] is not None:
        lines.append(f"Value:          {context['value']!r}")
    if job := context.get('job'):
        lines.append(f"Job:            {job}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=========================================================================")
    return "\n".join(lines)
