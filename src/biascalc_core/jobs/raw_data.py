# src/biascalc_core/jobs/raw_data.py
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

# Intermediate representation handed from the JobFileParser to the job runner.
# Parameter values are still raw (numbers or unit strings); unit conversion and
# name resolution happen in the runner.

@dataclass(frozen=True)
class ParsedAnalysisJob:
    """One topology analysis requested by a job file."""
    job_id: str
    analysis_name: str
    raw_parameters: Dict[str, Any]
    source_yaml_path: Path

@dataclass(frozen=True)
class ParsedSystemJob:
    """A two-port or cascaded composition over previously declared AC analyses."""
    job_id: str
    system_type: str  # "two_port" or "cascaded"
    stage_ids: Tuple[str, ...]
    raw_Rs: Any
    raw_Rl: Any
    source_yaml_path: Path

@dataclass(frozen=True)
class ParsedJobFile:
    """Top-level IR node for a single job file."""
    name: str
    source_yaml_path: Path
    analyses: List[ParsedAnalysisJob]
    systems: List[ParsedSystemJob]
