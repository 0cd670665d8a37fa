# src/biascalc_core/analysis/helpers.py
"""
Shared numeric building blocks for the topology analyses: resistor reductions,
transconductance and re formulas, the drain-current quadratic solver, and the
parameter checks every topology runs before computing anything.
"""
import logging
from typing import Optional

import numpy as np

from ..constants import THERMAL_VOLTAGE_VOLTS
from .exceptions import OperatingPointError, ParameterValidationError

logger = logging.getLogger(__name__)


# --- Parameter Contracts ---

def require_finite(topology: str, **params: float) -> None:
    """Rejects NaN, infinite and non-numeric values."""
    for name, value in params.items():
        if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
            raise ParameterValidationError(
                topology=topology, parameter=name, value=value,
                details=f"Parameter '{name}' must be a real number, got {type(value).__name__}."
            )
        if not np.isfinite(value):
            raise ParameterValidationError(
                topology=topology, parameter=name, value=value,
                details=f"Parameter '{name}' must be finite."
            )


def require_positive(topology: str, **params: float) -> None:
    """Rejects any value that is not a finite, strictly positive real number."""
    require_finite(topology, **params)
    for name, value in params.items():
        if value <= 0:
            raise ParameterValidationError(
                topology=topology, parameter=name, value=value,
                details=f"Parameter '{name}' must be strictly positive."
            )


def require_nonzero(topology: str, **params: float) -> None:
    require_finite(topology, **params)
    for name, value in params.items():
        if value == 0:
            raise ParameterValidationError(
                topology=topology, parameter=name, value=value,
                details=f"Parameter '{name}' must be non-zero."
            )


# --- Resistor Network Reductions ---

def parallel_resistance(R1: float, R2: float) -> float:
    """Resultant of two resistances in parallel. Both must be non-zero."""
    return 1.0 / (1.0 / R1 + 1.0 / R2)


def thevenin_resistance(R1: float, R2: float) -> float:
    """Thevenin resistance seen from the tap of an R1/R2 divider."""
    return parallel_resistance(R1, R2)


def thevenin_voltage(Vcc: float, R1: float, R2: float) -> float:
    """Open-circuit tap voltage of a divider with R1 on the supply side and R2 to ground."""
    return Vcc * (R2 / (R1 + R2))


# --- Small-Signal Parameters ---

def emitter_resistance(Ie: float, topology: Optional[str] = None) -> float:
    """
    The re of the BJT re-model, VT / Ie.

    Raises:
        OperatingPointError: If Ie <= 0; the transistor is in cutoff and re is undefined.
    """
    if Ie <= 0:
        raise OperatingPointError(
            details=f"Emitter current Ie={Ie:.6e} A is not positive, so the transistor is in cutoff and re is undefined.",
            topology=topology
        )
    return THERMAL_VOLTAGE_VOLTS / Ie


def require_jfet_conducting(Vgs: float, Vp: float, topology: Optional[str] = None) -> None:
    """
    Raises:
        OperatingPointError: If Vgs is at or beyond pinch-off (Vgs/Vp >= 1). Shockley's
                             equation mirrors there and would give a spurious Id and gm.
    """
    if Vgs / Vp >= 1.0:
        raise OperatingPointError(
            details=f"Vgs={Vgs:.6g} V is at or beyond pinch-off (Vp={Vp:.6g} V), so the JFET is cut off.",
            topology=topology
        )


def require_mosfet_conducting(Vgs: float, Vgsth: float, topology: Optional[str] = None) -> None:
    """
    Raises:
        OperatingPointError: If Vgs <= Vgsth; the E-MOSFET is below threshold and
                             the square law has no physical solution.
    """
    if Vgs <= Vgsth:
        raise OperatingPointError(
            details=f"Vgs={Vgs:.6g} V does not exceed the threshold Vgsth={Vgsth:.6g} V, so the E-MOSFET is cut off.",
            topology=topology
        )


def transconductance(Idss: float, Vp: float, Vgs: float) -> float:
    """JFET transconductance at Vgs: gm = (2 Idss / |Vp|)(1 - Vgs / Vp)."""
    return (2.0 * Idss / abs(Vp)) * (1.0 - Vgs / Vp)


def k_constant(Idon: float, Vgson: float, Vgsth: float) -> float:
    """E-MOSFET device constant from one datasheet point (Vgson, Idon) and the threshold."""
    return Idon / ((Vgson - Vgsth) * (Vgson - Vgsth))


def k_transconductance(k: float, Vgs: float, Vgsth: float) -> float:
    """E-MOSFET transconductance: gm = 2k(Vgs - Vgsth)."""
    return 2.0 * k * (Vgs - Vgsth)


# --- Drain-Current Quadratic ---

def select_drain_current(a: float, b: float, c: float, topology: Optional[str] = None) -> float:
    """
    Solves a*Id^2 + b*Id + c = 0 and selects the physical drain current.

    Selection policy over the two real roots:
      - exactly one root is non-negative: that root;
      - both are non-negative: the smaller one (the other lies beyond pinch-off/threshold);
      - both are negative: the root with the larger absolute value.

    Raises:
        OperatingPointError: If the quadratic is degenerate (a == 0) or has no real root.
    """
    if a == 0:
        raise OperatingPointError(
            details=f"Degenerate drain-current quadratic (a=0, b={b:.6e}, c={c:.6e}).",
            topology=topology
        )
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0:
        raise OperatingPointError(
            details=(
                f"The drain-current quadratic has no real root "
                f"(a={a:.6e}, b={b:.6e}, c={c:.6e}, discriminant={discriminant:.6e})."
            ),
            topology=topology
        )

    sqrt_disc = np.sqrt(discriminant)
    root1 = float((-b + sqrt_disc) / (2.0 * a))
    root2 = float((-b - sqrt_disc) / (2.0 * a))
    logger.debug(f"Drain-current roots: {root1:.6e} A, {root2:.6e} A")

    if root1 >= 0 and root2 < 0:
        return root1
    if root2 >= 0 and root1 < 0:
        return root2
    if root1 >= 0 and root2 >= 0:
        return min(root1, root2)

    selected = root1 if abs(root1) >= abs(root2) else root2
    logger.warning(
        f"Both drain-current roots are negative ({root1:.6e} A, {root2:.6e} A); "
        f"selected {selected:.6e} A. The bias network likely reverses the device."
    )
    return selected
