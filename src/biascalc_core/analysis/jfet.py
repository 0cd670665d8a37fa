# src/biascalc_core/analysis/jfet.py
"""
DC and AC analysis of the standard n-channel JFET bias configurations.

The DC operating point follows Shockley's equation, Id = Idss (1 - Vgs/Vp)^2.
Whenever Vgs itself depends on Id through a source resistor, substituting the
bias line Vgs = VG - Id*Rs turns Shockley's equation into a quadratic in Id,
solved with `select_drain_current`. `Vp` is the (negative) pinch-off voltage.
"""
import logging
from typing import Tuple

from .enums import PhaseRelation
from .helpers import (
    parallel_resistance,
    require_finite,
    require_jfet_conducting,
    require_nonzero,
    require_positive,
    select_drain_current,
    transconductance,
)
from .registry import register_analysis
from .results import FETACResult, FETDCResult

logger = logging.getLogger(__name__)


def _bias_line_coefficients(VG: float, Rs: float, Idss: float, Vp: float) -> Tuple[float, float, float]:
    """
    Coefficients (a, b, c) of a*Id^2 + b*Id + c = 0 obtained by substituting the
    bias line Vgs = VG - Id*Rs into Shockley's equation.
    """
    a = Rs * Rs * Idss / (Vp * Vp)
    b = 2.0 * Rs * Idss / Vp - 2.0 * VG * Rs * Idss / (Vp * Vp) - 1.0
    c = Idss * (1.0 - 2.0 * VG / Vp + VG * VG / (Vp * Vp))
    return a, b, c


def _check_device(topology: str, Idss: float, Vp: float) -> None:
    require_positive(topology, Idss=Idss)
    require_nonzero(topology, Vp=Vp)


# --- Fixed Bias ---

@register_analysis("jfet.dc_fixed_bias", Vdd="volt", Vgg="volt", Rd="ohm", Idss="ampere", Vp="volt")
def dc_fixed_bias(Vdd: float, Vgg: float, Rd: float, Idss: float, Vp: float) -> FETDCResult:
    """
    DC analysis of the fixed-bias configuration. The gate supply magnitude Vgg is
    applied with reverse polarity, so Vgs = -Vgg and the source is grounded.

    Example:
        >>> r = dc_fixed_bias(Vdd=16, Vgg=2, Rd=2000, Idss=10e-3, Vp=-8)
        >>> round(r.Id * 1e3, 3)
        5.625
    """
    topology = "jfet.dc_fixed_bias"
    require_finite(topology, Vdd=Vdd, Vgg=Vgg)
    require_positive(topology, Rd=Rd)
    _check_device(topology, Idss, Vp)

    Vgs = -Vgg
    require_jfet_conducting(Vgs, Vp, topology)
    Id = Idss * (1.0 - Vgs / Vp) ** 2
    Vds = Vdd - Id * Rd
    Vd = Vds
    Vg = Vgs
    Vs = 0.0

    logger.debug(f"{topology}: Id={Id:.4e} A, Vds={Vds:.4f} V")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg)


@register_analysis(
    "jfet.ac_fixed_bias",
    Vdd="volt", Vgg="volt", Rg="ohm", Rd="ohm", Idss="ampere", Vp="volt", rd="ohm",
)
def ac_fixed_bias(Vdd: float, Vgg: float, Rg: float, Rd: float, Idss: float, Vp: float, rd: float) -> FETACResult:
    """AC analysis of the fixed-bias configuration, with the drain resistance rd included."""
    topology = "jfet.ac_fixed_bias"
    require_finite(topology, Vdd=Vdd, Vgg=Vgg)
    require_positive(topology, Rg=Rg, Rd=Rd, rd=rd)
    _check_device(topology, Idss, Vp)

    Vgs = -Vgg
    require_jfet_conducting(Vgs, Vp, topology)
    gm = transconductance(Idss, Vp, Vgs)
    Zi = Rg
    Zo = parallel_resistance(Rd, rd)
    Av = -gm * Zo

    logger.debug(f"{topology}: gm={gm:.4e} S, Zo={Zo:.2f} ohm, Av={Av:.4f}")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Self Bias ---

@register_analysis("jfet.dc_self_bias", Vdd="volt", Rd="ohm", Rs="ohm", Idss="ampere", Vp="volt")
def dc_self_bias(Vdd: float, Rd: float, Rs: float, Idss: float, Vp: float) -> FETDCResult:
    """DC analysis of the self-bias configuration (gate grounded through Rg, Vgs = -Id*Rs)."""
    topology = "jfet.dc_self_bias"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rd=Rd, Rs=Rs)
    _check_device(topology, Idss, Vp)

    Id = select_drain_current(*_bias_line_coefficients(0.0, Rs, Idss, Vp), topology=topology)
    Vgs = -Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    Vds = Vdd - Id * (Rs + Rd)
    Vs = Id * Rs
    Vg = 0.0
    Vd = Vds + Vs

    logger.debug(f"{topology}: Id={Id:.4e} A, Vgs={Vgs:.4f} V, Vds={Vds:.4f} V")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg)


@register_analysis(
    "jfet.ac_self_bias",
    Vdd="volt", Rg="ohm", Rd="ohm", Rs="ohm", Idss="ampere", Vp="volt", rd="ohm",
)
def ac_self_bias(Vdd: float, Rg: float, Rd: float, Rs: float, Idss: float, Vp: float, rd: float) -> FETACResult:
    """
    AC analysis of the self-bias configuration with Rs unbypassed and rd included.

    Returns:
        A `FETACResult`; Zi is Rg, and both Zo and Av account for the local
        feedback introduced by Rs.
    """
    topology = "jfet.ac_self_bias"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg=Rg, Rd=Rd, Rs=Rs, rd=rd)
    _check_device(topology, Idss, Vp)

    Id = select_drain_current(*_bias_line_coefficients(0.0, Rs, Idss, Vp), topology=topology)
    Vgs = -Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    gm = transconductance(Idss, Vp, Vgs)
    Zi = Rg
    feedback = 1.0 + gm * Rs + Rs / rd
    Zo = feedback * Rd / (feedback + Rd / rd)
    Av = -gm * Rd / (1.0 + gm * Rs + (Rd + Rs) / rd)

    logger.debug(f"{topology}: Id={Id:.4e} A, gm={gm:.4e} S, Av={Av:.4f}")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Voltage Divider ---

@register_analysis(
    "jfet.dc_voltage_divider",
    Vdd="volt", Rg1="ohm", Rg2="ohm", Rd="ohm", Rs="ohm", Idss="ampere", Vp="volt",
)
def dc_voltage_divider(
    Vdd: float, Rg1: float, Rg2: float, Rd: float, Rs: float, Idss: float, Vp: float
) -> FETDCResult:
    """DC analysis of the voltage-divider configuration (Rg1 to Vdd, Rg2 to ground)."""
    topology = "jfet.dc_voltage_divider"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg1=Rg1, Rg2=Rg2, Rd=Rd, Rs=Rs)
    _check_device(topology, Idss, Vp)

    Vg = Rg2 * Vdd / (Rg1 + Rg2)
    Id = select_drain_current(*_bias_line_coefficients(Vg, Rs, Idss, Vp), topology=topology)
    Vgs = Vg - Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    Vds = Vdd - Id * (Rs + Rd)
    Vs = Id * Rs
    Vd = Vdd - Id * Rd

    logger.debug(f"{topology}: Vg={Vg:.4f} V, Id={Id:.4e} A, Vds={Vds:.4f} V")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg)


@register_analysis(
    "jfet.ac_voltage_divider",
    Vdd="volt", Rg1="ohm", Rg2="ohm", Rd="ohm", Rs="ohm", Idss="ampere", Vp="volt", rd="ohm",
)
def ac_voltage_divider(
    Vdd: float, Rg1: float, Rg2: float, Rd: float, Rs: float, Idss: float, Vp: float, rd: float
) -> FETACResult:
    """AC analysis of the voltage-divider configuration with Rs bypassed."""
    topology = "jfet.ac_voltage_divider"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rg1=Rg1, Rg2=Rg2, Rd=Rd, Rs=Rs, rd=rd)
    _check_device(topology, Idss, Vp)

    Vg = Rg2 * Vdd / (Rg1 + Rg2)
    Id = select_drain_current(*_bias_line_coefficients(Vg, Rs, Idss, Vp), topology=topology)
    Vgs = Vg - Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    gm = transconductance(Idss, Vp, Vgs)
    Zi = parallel_resistance(Rg1, Rg2)
    Zo = parallel_resistance(Rd, rd)
    Av = -gm * Zo

    logger.debug(f"{topology}: Id={Id:.4e} A, gm={gm:.4e} S, Av={Av:.4f}")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Common Gate ---

@register_analysis("jfet.dc_common_gate", Vdd="volt", Vss="volt", Rd="ohm", Rs="ohm", Idss="ampere", Vp="volt")
def dc_common_gate(Vdd: float, Vss: float, Rd: float, Rs: float, Idss: float, Vp: float) -> FETDCResult:
    """
    DC analysis of the common-gate configuration. The gate is grounded and an
    optional source supply of magnitude Vss feeds the source through Rs.
    """
    topology = "jfet.dc_common_gate"
    require_finite(topology, Vdd=Vdd, Vss=Vss)
    require_positive(topology, Rd=Rd, Rs=Rs)
    _check_device(topology, Idss, Vp)

    Id = select_drain_current(*_bias_line_coefficients(Vss, Rs, Idss, Vp), topology=topology)
    Vgs = Vss - Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    Vds = Vdd + Vss - Id * (Rs + Rd)
    Vs = -Vss + Id * Rs
    Vd = Vdd - Id * Rd
    Vg = 0.0

    logger.debug(f"{topology}: Id={Id:.4e} A, Vgs={Vgs:.4f} V, Vds={Vds:.4f} V")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg)


@register_analysis(
    "jfet.ac_common_gate",
    Vdd="volt", Vss="volt", Rd="ohm", Rs="ohm", Idss="ampere", Vp="volt", rd="ohm",
)
def ac_common_gate(Vdd: float, Vss: float, Rd: float, Rs: float, Idss: float, Vp: float, rd: float) -> FETACResult:
    """AC analysis of the common-gate configuration; output and input are in phase."""
    topology = "jfet.ac_common_gate"
    require_finite(topology, Vdd=Vdd, Vss=Vss)
    require_positive(topology, Rd=Rd, Rs=Rs, rd=rd)
    _check_device(topology, Idss, Vp)

    Id = select_drain_current(*_bias_line_coefficients(Vss, Rs, Idss, Vp), topology=topology)
    Vgs = Vss - Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    gm = transconductance(Idss, Vp, Vgs)
    Zi = parallel_resistance(Rs, (rd + Rd) / (1.0 + gm * rd))
    Zo = parallel_resistance(Rd, rd)
    Av = (gm * Rd + Rd / rd) / (1.0 + Rd / rd)

    logger.debug(f"{topology}: Id={Id:.4e} A, gm={gm:.4e} S, Zi={Zi:.2f} ohm")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.IN_PHASE)


# --- Source Follower ---

@register_analysis("jfet.dc_source_follower", Vdd="volt", Rs="ohm", Idss="ampere", Vp="volt")
def dc_source_follower(Vdd: float, Rs: float, Idss: float, Vp: float) -> FETDCResult:
    """
    DC analysis of the source-follower (common-drain) configuration: drain tied to
    Vdd, gate returned to ground through Rg, load Rs in the source.
    """
    topology = "jfet.dc_source_follower"
    require_finite(topology, Vdd=Vdd)
    require_positive(topology, Rs=Rs)
    _check_device(topology, Idss, Vp)

    Id = select_drain_current(*_bias_line_coefficients(0.0, Rs, Idss, Vp), topology=topology)
    Vgs = -Id * Rs
    require_jfet_conducting(Vgs, Vp, topology)
    Vs = Id * Rs
    Vd = Vdd
    Vds = Vd - Vs
    Vg = 0.0

    logger.debug(f"{topology}: Id={Id:.4e} A, Vs={Vs:.4f} V")
    return FETDCResult(Id=Id, Vgs=Vgs, Vds=Vds, Vd=Vd, Vs=Vs, Vg=Vg)


@register_analysis(
    "jfet.ac_source_follower",
    Vdd="volt", Vgs="volt", Rg="ohm", Rs="ohm", Idss="ampere", Vp="volt", rd="ohm",
)
def ac_source_follower(Vdd: float, Vgs: float, Rg: float, Rs: float, Idss: float, Vp: float, rd: float) -> FETACResult:
    """AC analysis of the source follower at a known quiescent Vgs."""
    topology = "jfet.ac_source_follower"
    require_finite(topology, Vdd=Vdd, Vgs=Vgs)
    require_positive(topology, Rg=Rg, Rs=Rs, rd=rd)
    _check_device(topology, Idss, Vp)

    require_jfet_conducting(Vgs, Vp, topology)
    gm = transconductance(Idss, Vp, Vgs)
    Zi = Rg
    Zo = parallel_resistance(rd, parallel_resistance(Rs, 1.0 / gm))
    loop_gain = gm * parallel_resistance(rd, Rs)
    Av = loop_gain / (1.0 + loop_gain)

    logger.debug(f"{topology}: gm={gm:.4e} S, Zo={Zo:.2f} ohm, Av={Av:.6f}")
    return FETACResult(gm=gm, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.IN_PHASE)
