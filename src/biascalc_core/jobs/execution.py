# src/biascalc_core/jobs/execution.py
"""
Public entry points for running analyses from job files and in batches.

`run_job_file` parses a YAML job file, binds every analysis job to the registry,
converts its unit-bearing parameters to SI floats, evaluates it, and then composes
any two-port or cascaded systems over the resulting AC records. `run_batch`
evaluates one analysis over many parameter sets, optionally on a thread pool.

Both wrap every diagnosable failure in a single `AnalysisRunError` whose message
is the diagnostic report; the original exception is chained.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pint

from ..analysis.registry import TAG_DIMENSION, AnalysisSpec, get_analysis
from ..analysis.results import BJTACResult, CascadedResult, FETACResult, TwoPortResult
from ..analysis.systems import cascaded_from_results, two_port_from_result
from ..errors import AnalysisRunError, DiagnosableError, format_diagnostic_report
from ..units import to_si_magnitude
from .exceptions import JobResolutionError
from .parser import JobFileParser
from .raw_data import ParsedAnalysisJob, ParsedSystemJob

logger = logging.getLogger(__name__)

SystemResult = Union[TwoPortResult, CascadedResult]


@dataclass(frozen=True)
class JobRunResult:
    """Records produced by one job file, keyed by job id in declaration order."""
    name: str
    source_path: Path
    analyses: Dict[str, Any]
    systems: Dict[str, SystemResult]


def resolve_parameters(
    spec: AnalysisSpec,
    raw_parameters: Mapping[str, Any],
    job_id: str,
    file_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Checks raw parameter names against the analysis signature and converts every
    dimensioned value to its SI magnitude. Tag parameters pass through unchanged.

    Raises:
        JobResolutionError: On unknown or missing names, or a value whose unit
                            is unknown or has the wrong dimension.
    """
    declared = spec.parameter_dimensions
    unknown = sorted(set(raw_parameters) - set(declared))
    if unknown:
        raise JobResolutionError(
            job_id=job_id,
            details=f"Unknown parameter(s) {unknown} for analysis '{spec.name}'. Expected: {list(declared)}.",
            file_path=file_path,
            parameter=unknown[0],
        )
    missing = [name for name in declared if name not in raw_parameters]
    if missing:
        raise JobResolutionError(
            job_id=job_id,
            details=f"Missing parameter(s) {missing} for analysis '{spec.name}'.",
            file_path=file_path,
            parameter=missing[0],
        )

    resolved = {}
    for name, dimension in declared.items():
        value = raw_parameters[name]
        if dimension == TAG_DIMENSION:
            resolved[name] = value
            continue
        try:
            resolved[name] = to_si_magnitude(value, dimension)
        except (pint.UndefinedUnitError, pint.DimensionalityError, pint.DefinitionSyntaxError, TypeError, ValueError) as e:
            raise JobResolutionError(
                job_id=job_id,
                details=f"Value {value!r} of parameter '{name}' cannot be read as a {dimension} quantity: {e}",
                file_path=file_path,
                parameter=name,
            ) from e
    return resolved


def _run_analysis_job(job: ParsedAnalysisJob) -> Any:
    try:
        spec = get_analysis(job.analysis_name)
    except KeyError as e:
        raise JobResolutionError(
            job_id=job.job_id,
            details=f"Unknown analysis '{job.analysis_name}'.",
            file_path=job.source_yaml_path,
        ) from e

    params = resolve_parameters(spec, job.raw_parameters, job.job_id, job.source_yaml_path)
    logger.debug(f"Job '{job.job_id}': running '{spec.name}' with {params}")
    return spec(**params)


def _run_system_job(job: ParsedSystemJob, analyses: Mapping[str, Any]) -> SystemResult:
    stages = []
    for stage_id in job.stage_ids:
        if stage_id not in analyses:
            raise JobResolutionError(
                job_id=job.job_id,
                details=f"Stage '{stage_id}' does not name an analysis job in this file.",
                file_path=job.source_yaml_path,
            )
        record = analyses[stage_id]
        if not isinstance(record, (BJTACResult, FETACResult)):
            raise JobResolutionError(
                job_id=job.job_id,
                details=f"Stage '{stage_id}' produced a {type(record).__name__}; systems can only compose AC analyses.",
                file_path=job.source_yaml_path,
            )
        stages.append(record)

    resistances = {}
    for name, raw in (("Rs", job.raw_Rs), ("Rl", job.raw_Rl)):
        try:
            resistances[name] = to_si_magnitude(raw, "ohm")
        except (pint.UndefinedUnitError, pint.DimensionalityError, pint.DefinitionSyntaxError, TypeError, ValueError) as e:
            raise JobResolutionError(
                job_id=job.job_id,
                details=f"Value {raw!r} of '{name}' cannot be read as a resistance: {e}",
                file_path=job.source_yaml_path,
                parameter=name,
            ) from e

    if job.system_type == "two_port":
        if len(stages) != 1:
            raise JobResolutionError(
                job_id=job.job_id,
                details=f"A two_port system takes exactly one stage, got {len(stages)}.",
                file_path=job.source_yaml_path,
                parameter="stages",
            )
        return two_port_from_result(stages[0], **resistances)
    return cascaded_from_results(stages, **resistances)


def run_job_file(job_file_path: Union[str, Path]) -> JobRunResult:
    """
    Parses and runs every analysis and system job of a YAML job file.

    Args:
        job_file_path: Path to the job file.

    Returns:
        A `JobRunResult` holding one record per job id.

    Raises:
        AnalysisRunError: A user-friendly, diagnosable error if the job fails at
                          any stage (parsing, resolution or evaluation).
    """
    try:
        parsed = JobFileParser().parse(job_file_path)
        logger.info(f"--- Running job file '{parsed.name}' ({len(parsed.analyses)} analyses, {len(parsed.systems)} systems) ---")

        analyses: Dict[str, Any] = {}
        for job in parsed.analyses:
            analyses[job.job_id] = _run_analysis_job(job)

        systems: Dict[str, SystemResult] = {}
        for job in parsed.systems:
            systems[job.job_id] = _run_system_job(job, analyses)

        logger.info(f"Job file '{parsed.name}' completed.")
        return JobRunResult(
            name=parsed.name,
            source_path=parsed.source_yaml_path,
            analyses=analyses,
            systems=systems,
        )

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred while running job file '{job_file_path}': {e}")
        raise AnalysisRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred while running job file '{job_file_path}': {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Analysis Error Occurred ({type(e).__name__})",
            details=f"The job runner encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'source_file': job_file_path}
        )
        raise AnalysisRunError(report) from e


def run_batch(
    analysis: Union[str, AnalysisSpec],
    parameter_sets: Sequence[Mapping[str, Any]],
    max_workers: Optional[int] = None,
) -> List[Any]:
    """
    Evaluates one registered analysis for each parameter set, preserving input order.

    Parameter values may be plain SI numbers or unit strings, exactly as in a job
    file. Every call builds its own result record, so with `max_workers` set the
    sets are evaluated concurrently on a thread pool.

    Raises:
        KeyError: If `analysis` names no registered analysis.
        AnalysisRunError: If any parameter set fails; the first failure in input
                          order is reported.
    """
    spec = get_analysis(analysis) if isinstance(analysis, str) else analysis

    def evaluate(indexed):
        index, raw_parameters = indexed
        params = resolve_parameters(spec, raw_parameters, job_id=f"{spec.name}[{index}]")
        return spec(**params)

    try:
        if max_workers is None:
            results = [evaluate(item) for item in enumerate(parameter_sets)]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(evaluate, enumerate(parameter_sets)))
        logger.info(f"Batch '{spec.name}': evaluated {len(results)} parameter set(s).")
        return results
    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred in batch '{spec.name}': {e}")
        raise AnalysisRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred in batch '{spec.name}': {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Analysis Error Occurred ({type(e).__name__})",
            details=f"The batch runner encountered an unexpected internal error: {e}",
            suggestion="Check that every parameter set is a mapping of parameter names to values. Otherwise this may be a bug; review the traceback and consider filing a bug report.",
            context={'topology': spec.name}
        )
        raise AnalysisRunError(report) from e
