# src/biascalc_core/jobs/__init__.py
from .raw_data import ParsedAnalysisJob, ParsedJobFile, ParsedSystemJob
from .parser import JobFileParser
from .exceptions import JobResolutionError, ParsingError, SchemaValidationError
from .execution import JobRunResult, resolve_parameters, run_batch, run_job_file

__all__ = [
    # IR Data Structures
    "ParsedAnalysisJob",
    "ParsedSystemJob",
    "ParsedJobFile",
    # Parser and Exceptions
    "JobFileParser",
    "ParsingError",
    "SchemaValidationError",
    "JobResolutionError",
    # Execution
    "JobRunResult",
    "resolve_parameters",
    "run_job_file",
    "run_batch",
]
