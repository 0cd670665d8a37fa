# src/biascalc_core/jobs/exceptions.py
"""
Diagnosable exceptions raised while loading and resolving job files.

`ParsingError` covers file-level problems (missing file, unreadable file, bad YAML),
`SchemaValidationError` covers structural problems found by the Cerberus schema, and
`JobResolutionError` covers a structurally valid job that cannot be bound to the
analysis registry (unknown analysis, wrong parameter names, incompatible units,
bad stage references).
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


def _field_path(key) -> str:
    return ".".join(map(str, key)) if isinstance(key, tuple) else str(key)


def _flatten_cerberus_errors(errors: Dict[Any, Any], prefix: str = "") -> Dict[str, str]:
    """Collapses Cerberus' nested error tree into 'a.0.b' -> first message."""
    flat = {}
    for key, messages in errors.items():
        path = f"{prefix}.{_field_path(key)}" if prefix else _field_path(key)
        for message in messages:
            if isinstance(message, dict):
                flat.update(_flatten_cerberus_errors(message, path))
            else:
                flat.setdefault(path, str(message))
    return flat


@dataclass(frozen=True)
class ParsingError(DiagnosableError):
    """The job file could not be read or is not a YAML mapping."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in job file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Job File Parsing Error",
            details=self.details,
            suggestion="Ensure the job file exists, is readable and contains a YAML mapping at its root.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SchemaValidationError(DiagnosableError):
    """The job file is valid YAML but does not match the job schema."""
    errors: Dict[Any, Any]
    file_path: Path

    @property
    def flat_errors(self) -> Dict[str, str]:
        return _flatten_cerberus_errors(self.errors)

    def __str__(self):
        error_lines = [f"  - In field '{k}': {v}" for k, v in sorted(self.flat_errors.items())]
        return f"Job file schema validation failed for '{self.file_path}':\n" + "\n".join(error_lines)

    def get_diagnostic_report(self) -> str:
        flat = self.flat_errors
        error_list_str = "\n".join(f"  - Field '{k}': {v}" for k, v in sorted(flat.items()))
        details = (
            "The structure of the job file does not conform to the required schema.\n"
            f"See details for {len(flat)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Job File Schema Validation Error",
            details=details,
            suggestion="Every analysis needs an 'id', an 'analysis' name and a 'parameters' mapping. Ids must be valid identifiers (no '-' or '.') and unique across analyses and systems.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class JobResolutionError(DiagnosableError):
    """A parsed job could not be bound to a registered analysis or to its stages."""
    job_id: str
    details: str
    file_path: Optional[Path] = None
    parameter: Optional[str] = None

    def __str__(self):
        return f"Job '{self.job_id}' could not be resolved: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Job Resolution Error",
            details=self.details,
            suggestion="Check the analysis name against the registry, the parameter names against the topology's signature, and that each value carries a unit of the expected dimension.",
            context={'job': self.job_id, 'parameter': self.parameter, 'source_file': self.file_path}
        )
