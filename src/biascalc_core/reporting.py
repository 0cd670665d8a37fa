# src/biascalc_core/reporting.py
"""
Plain-text rendering of analysis records, one 'name: value unit' line per field.

Currents and transconductances use exponential notation, everything else fixed
notation. A field the topology does not define (`None`) renders as 'not calculated'.
"""
from typing import Any, List, Optional, Sequence, Tuple, Union

from .analysis.results import (
    BJTACResult,
    BJTDCResult,
    CascadedResult,
    FETACResult,
    FETDCResult,
    TwoPortResult,
)
from .constants import VBE_VOLTS

NOT_CALCULATED = "not calculated"

# (field, unit, exponential notation)
_BJT_DC_FIELDS = [
    ("Ib", "A", True), ("Ic", "A", True), ("Ie", "A", True), ("Icsat", "A", True),
    ("Vce", "V", False), ("Vc", "V", False), ("Ve", "V", False), ("Vb", "V", False), ("Vbc", "V", False),
]
_FET_DC_FIELDS = [
    ("Id", "A", True), ("Vgs", "V", False), ("Vds", "V", False),
    ("Vg", "V", False), ("Vd", "V", False), ("Vs", "V", False),
]
_BJT_AC_FIELDS = [("re", "ohm", False), ("Zi", "ohm", False), ("Zo", "ohm", False), ("Av", "", False)]
_FET_AC_FIELDS = [("gm", "S", True), ("Zi", "ohm", False), ("Zo", "ohm", False), ("Av", "", False)]
_TWO_PORT_FIELDS = [("Avl", "", False), ("Avs", "", False), ("Ail", "", False)]


def format_value(name: str, value: Optional[float], unit: str = "", exponential: bool = False) -> str:
    """Formats a single report line."""
    if value is None:
        return f"{name}: {NOT_CALCULATED}"
    text = f"{value:e}" if exponential else f"{value:f}"
    return f"{name}: {text} {unit}" if unit else f"{name}: {text}"


def _format_fields(record: Any, fields: Sequence[Tuple[str, str, bool]]) -> List[str]:
    return [format_value(name, getattr(record, name), unit, exp) for name, unit, exp in fields]


def format_dc_report(result: Union[BJTDCResult, FETDCResult]) -> str:
    if isinstance(result, BJTDCResult):
        lines = _format_fields(result, _BJT_DC_FIELDS)
        lines.append(format_value("Vbe", VBE_VOLTS, "V"))
        return "\n".join(lines)
    lines = []
    if result.k is not None:
        lines.append(format_value("k", result.k, "A/V^2", exponential=True))
    lines.extend(_format_fields(result, _FET_DC_FIELDS))
    return "\n".join(lines)


def format_ac_report(result: Union[BJTACResult, FETACResult]) -> str:
    fields = _BJT_AC_FIELDS if isinstance(result, BJTACResult) else _FET_AC_FIELDS
    lines = _format_fields(result, fields)
    lines.append(f"Phase: {result.phase.label}")
    return "\n".join(lines)


def format_two_port_report(result: TwoPortResult) -> str:
    return "\n".join(_format_fields(result, _TWO_PORT_FIELDS))


def format_cascaded_report(result: CascadedResult) -> str:
    """Lists Av1..Avn in stage order, then the totals."""
    lines = [format_value(stage.name, stage.gain) for stage in result.stages]
    lines.extend(format_value(name, getattr(result, name)) for name in ("Avt", "Avs", "Ait"))
    return "\n".join(lines)


def format_result(result: Any) -> str:
    """
    Renders any analysis or system record.

    Raises:
        TypeError: If `result` is not one of the known record types.
    """
    if isinstance(result, (BJTDCResult, FETDCResult)):
        return format_dc_report(result)
    if isinstance(result, (BJTACResult, FETACResult)):
        return format_ac_report(result)
    if isinstance(result, TwoPortResult):
        return format_two_port_report(result)
    if isinstance(result, CascadedResult):
        return format_cascaded_report(result)
    raise TypeError(f"Cannot format object of type {type(result).__name__}.")
