# src/biascalc_core/analysis/mosfet.py
"""
DC and AC analysis of enhancement-type n-channel MOSFET bias configurations.

The device law is Id = k (Vgs - Vgsth)^2, with k derived from one datasheet
point (Vgson, Idon). Depletion-type MOSFETs follow the JFET equations and are
analysed with `biascalc_core.analysis.jfet`.
"""
import logging
from typing import Tuple

from .enums import PhaseRelation
from .exceptions import ParameterValidationError
from .helpers import (
    k_constant,
    k_transconductance,
    parallel_resistance,
    require_finite,
    require_mosfet_conducting,
    require_positive,
    select_drain_current,
)
from .registry import register_analysis
from .results import FETACResult, FETDCResult

logger = logging.getLogger(__name__)


def _check_device(topology: str, Idon: float, Vgson: float, Vgsth: float) -> None:
    require_positive(topology, Idon=Idon)
    require_finite(topology, Vgson=Vgson, Vgsth=Vgsth)
    if Vgson == Vgsth:
        raise ParameterValidationError(
            topology=topology,
            parameter="Vgson",
            value=Vgson,
            details=f"Vgson must differ from the threshold voltage Vgsth={Vgsth} V to define the k constant."
        )


def _bias_line_coefficients(VG: float, R: float, k: float, Vgsth: float) -> Tuple[float, float, float]:
    """
    Coefficients (a, b, c) of a*Id^2 + b*Id + c = 0 obtained by substituting the
    bias line Vgs = VG - Id*R into Id = k (Vgs - Vgsth)^2.
    """
    overdrive = VG - Vgsth
    a = k * R * R
    b = -2.0 * k * R * overdrive - 1.0
    c = k * overdrive * overdrive
    return a, b, c


# --- Drain Feedback ---

@register_analysis(
    "mosfet.dc_drain_feedback",
    Vdd="volt", Rg="ohm", Rd="ohm", Idon="ampere", Vgson="volt", Vgsth="volt",
)
def dc_drain_feedback(Vdd: float, Rg: float, Rd: float, Idon: float, Vgson: float, Vgsth: float) -> FETDCResult:
    """
    DC analysis of the drain-feedback configuration. No current flows through the
    feedback resistor Rg, so the gate sits at the drain voltage and Vgs = Vds.

    Example:
        >>> r = dc_drain_feedback(Vdd=12, Rg=10e6, Rd=2000, Idon=6e-3, Vgson=8, Vgsth=3)
        >>> round(r.Vgs, 3)
        6.412
    """
    topology = "mosfet.dc_drain_feedback"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg=Rg, Rd=Rd)
    _check_device(topology, Idon, Vgson, Vgsth)

    k = k_constant(Idon, Vgson, Vgsth)
    Id = select_drain_current(*_bias_line_coefficients(Vdd, Rd, k, Vgsth), topology=topology)
    Vgs = Vdd - Id * Rd
    require_mosfet_conducting(Vgs, Vgsth, topology)
    Vds = Vgs
    Vd = Vds
    Vg = Vd
    Vs = 0.0

    logger.debug(f"{topology}: k={k:.4e} A/V^2, Id={Id:.4e} A, Vgs={Vgs:.4f} V")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg, k=k)


@register_analysis(
    "mosfet.ac_drain_feedback",
    Vdd="volt", Rg="ohm", Rd="ohm", Idon="ampere", Vgson="volt", Vgsth="volt", rd="ohm",
)
def ac_drain_feedback(
    Vdd: float, Rg: float, Rd: float, Idon: float, Vgson: float, Vgsth: float, rd: float
) -> FETACResult:
    """
    AC analysis of the drain-feedback configuration. The feedback resistor Rg
    (Miller effect) sets both the input and the output impedance.
    """
    topology = "mosfet.ac_drain_feedback"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg=Rg, Rd=Rd, rd=rd)
    _check_device(topology, Idon, Vgson, Vgsth)

    k = k_constant(Idon, Vgson, Vgsth)
    Id = select_drain_current(*_bias_line_coefficients(Vdd, Rd, k, Vgsth), topology=topology)
    Vgs = Vdd - Id * Rd
    require_mosfet_conducting(Vgs, Vgsth, topology)
    gm = k_transconductance(k, Vgs, Vgsth)
    drain_load = parallel_resistance(rd, Rd)
    Zi = (Rg + drain_load) / (1.0 + gm * drain_load)
    Zo = parallel_resistance(Rg, drain_load)
    Av = -gm * Zo

    logger.debug(f"{topology}: Id={Id:.4e} A, gm={gm:.4e} S, Av={Av:.4f}")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Voltage Divider ---

@register_analysis(
    "mosfet.dc_voltage_divider",
    Vdd="volt", Rg1="ohm", Rg2="ohm", Rd="ohm", Rs="ohm", Idon="ampere", Vgson="volt", Vgsth="volt",
)
def dc_voltage_divider(
    Vdd: float, Rg1: float, Rg2: float, Rd: float, Rs: float, Idon: float, Vgson: float, Vgsth: float
) -> FETDCResult:
    """DC analysis of the voltage-divider configuration (Rg1 to Vdd, Rg2 to ground)."""
    topology = "mosfet.dc_voltage_divider"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg1=Rg1, Rg2=Rg2, Rd=Rd, Rs=Rs)
    _check_device(topology, Idon, Vgson, Vgsth)

    k = k_constant(Idon, Vgson, Vgsth)
    Vg = Rg2 * Vdd / (Rg1 + Rg2)
    Id = select_drain_current(*_bias_line_coefficients(Vg, Rs, k, Vgsth), topology=topology)
    Vgs = Vg - Id * Rs
    require_mosfet_conducting(Vgs, Vgsth, topology)
    Vds = Vdd - Id * (Rs + Rd)
    Vs = Id * Rs
    Vd = Vdd - Id * Rd

    logger.debug(f"{topology}: k={k:.4e} A/V^2, Vg={Vg:.4f} V, Id={Id:.4e} A")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg, k=k)


@register_analysis(
    "mosfet.ac_voltage_divider",
    Vdd="volt", Rg1="ohm", Rg2="ohm", Rd="ohm", Rs="ohm", Idon="ampere", Vgson="volt", Vgsth="volt", rd="ohm",
)
def ac_voltage_divider(
    Vdd: float, Rg1: float, Rg2: float, Rd: float, Rs: float, Idon: float, Vgson: float, Vgsth: float, rd: float
) -> FETACResult:
    """AC analysis of the voltage-divider configuration with Rs bypassed."""
    topology = "mosfet.ac_voltage_divider"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg1=Rg1, Rg2=Rg2, Rd=Rd, Rs=Rs, rd=rd)
    _check_device(topology, Idon, Vgson, Vgsth)

    k = k_constant(Idon, Vgson, Vgsth)
    Vg = Rg2 * Vdd / (Rg1 + Rg2)
    Id = select_drain_current(*_bias_line_coefficients(Vg, Rs, k, Vgsth), topology=topology)
    Vgs = Vg - Id * Rs
    require_mosfet_conducting(Vgs, Vgsth, topology)
    gm = k_transconductance(k, Vgs, Vgsth)
    Zi = parallel_resistance(Rg1, Rg2)
    Zo = parallel_resistance(rd, Rd)
    Av = -gm * Zo

    logger.debug(f"{topology}: Id={Id:.4e} A, gm={gm:.4e} S, Av={Av:.4f}")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)
