# src/biascalc_core/jobs/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from .exceptions import ParsingError, SchemaValidationError
from .raw_data import ParsedAnalysisJob, ParsedJobFile, ParsedSystemJob

logger = logging.getLogger(__name__)

ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

# '<family>.<function>', e.g. 'bjt.ac_voltage_divider'.
ANALYSIS_NAME_REGEX = r"^[a-z][a-z0-9_]*\.(dc|ac)_[a-z0-9_]+$"

SYSTEM_TYPES = ["two_port", "cascaded"]


class EnhancedValidator(cerberus.Validator):
    """Cerberus validator with identifier and uniqueness rules for job files."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['id_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_ids_across'] = {'type': 'list'}

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        if not constraint: return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            message = (
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore "
                "and can only contain letters, numbers and underscores. "
                f"Forbidden character(s) found: {invalid_chars}"
            )
            self._error(field, message)

    def _validate_unique_ids_across(self, sections: List[str], field: str, value: Any):
        """
        Validates that the 'id' of every entry is unique across the listed sections.
        The rule's arguments are validated against this schema:
        {'type': 'list'}
        """
        if not isinstance(value, list):
            return # Let the 'type: list' rule handle this.

        seen = set()
        duplicates = set()
        for section in sections:
            entries = self.document.get(section) or []
            if not isinstance(entries, list):
                continue
            for item in entries:
                if not isinstance(item, dict):
                    continue # Let sub-schema validation handle this.
                item_id = item.get("id")
                if item_id is None:
                    continue
                if item_id in seen:
                    duplicates.add(item_id)
                seen.add(item_id)

        if duplicates:
            self._error(field, f"Duplicate ids found across {sections}: {sorted(duplicates)}")


class JobFileParser:
    """
    Parses and validates a YAML job file into the job IR. It resolves nothing
    against the analysis registry; that is the runner's responsibility.
    """
    _id_rule = {"type": "string", "required": True, "empty": False, "id_regex": True}
    _param_key_rule = {"type": "string", "id_regex": True}
    _resistance_rule = {"type": ["string", "number"], "required": True}

    _analysis_schema = {
        "id": _id_rule,
        "analysis": {"type": "string", "required": True, "empty": False, "regex": ANALYSIS_NAME_REGEX},
        "parameters": {
            "type": "dict", "required": True,
            "keysrules": _param_key_rule,
            "valuesrules": {"type": ["string", "number"]},
        },
    }

    _system_schema = {
        "id": _id_rule,
        "type": {"type": "string", "required": True, "allowed": SYSTEM_TYPES},
        "stages": {"type": "list", "required": True, "minlength": 1, "schema": {"type": "string", "id_regex": True}},
        "Rs": _resistance_rule,
        "Rl": _resistance_rule,
    }

    _schema = {
        "name": {"type": "string", "required": False, "id_regex": True},
        "analyses": {
            "type": "list", "required": True, "minlength": 1,
            "unique_ids_across": ["analyses", "systems"],
            "schema": {"type": "dict", "schema": _analysis_schema},
        },
        "systems": {
            "type": "list", "required": False,
            "schema": {"type": "dict", "schema": _system_schema},
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.info("JobFileParser initialized with strict structural validation rules.")

    def parse(self, yaml_path: Union[str, Path]) -> ParsedJobFile:
        """Parses one job file and returns its IR."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing job file: {resolved_path}")

        yaml_content = self._load_yaml(resolved_path)
        if not self._validator.validate(yaml_content):
            raise SchemaValidationError(self._validator.errors, resolved_path)
        validated_data = self._validator.document

        analyses = [
            ParsedAnalysisJob(
                job_id=raw["id"],
                analysis_name=raw["analysis"],
                raw_parameters=dict(raw["parameters"]),
                source_yaml_path=resolved_path,
            )
            for raw in validated_data["analyses"]
        ]
        systems = [
            ParsedSystemJob(
                job_id=raw["id"],
                system_type=raw["type"],
                stage_ids=tuple(raw["stages"]),
                raw_Rs=raw["Rs"],
                raw_Rl=raw["Rl"],
                source_yaml_path=resolved_path,
            )
            for raw in validated_data.get("systems", [])
        ]
        logger.debug(f"Parsed {len(analyses)} analysis job(s) and {len(systems)} system job(s).")

        return ParsedJobFile(
            name=validated_data.get("name", resolved_path.stem),
            source_yaml_path=resolved_path,
            analyses=analyses,
            systems=systems,
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Job file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
