# src/biascalc_core/analysis/bjt.py
"""
DC and AC analysis of the standard npn BJT bias configurations.

Every DC analysis uses the fixed base-emitter drop VBE_VOLTS; every AC analysis
uses the re model, re = VT / Ie, with the emitter current re-derived from the
topology's own bias equations. All resistances are in ohms, voltages in volts.
"""
import logging
from typing import Union

from ..constants import VBE_VOLTS as Vbe
from .enums import BypassMode, PhaseRelation
from .helpers import (
    emitter_resistance,
    parallel_resistance,
    require_finite,
    require_positive,
    thevenin_resistance,
    thevenin_voltage,
)
from .registry import TAG_DIMENSION, register_analysis
from .results import BJTACResult, BJTDCResult

logger = logging.getLogger(__name__)


def _loaded_emitter_stage(Rc: float, Re: float, beta: float, ro: float, re: float):
    """
    Input impedance Zb, output resistance looking into the collector, and gain of a
    stage whose emitter resistor Re is not bypassed, with ro included.
    """
    Zb = beta * re + ((beta + 1) + Rc / ro) / (1 + (Rc + Re) / ro) * Re
    collector_resistance = ro + beta * (ro + re) / (1 + beta * re / Re)
    Av = ((-beta * Rc / Zb) * (1 + re / ro) + Rc / ro) / (1 + Rc / ro)
    return Zb, collector_resistance, Av


# --- Fixed Bias ---

@register_analysis("bjt.dc_fixed_bias", Vcc="volt", Rb="ohm", Rc="ohm", beta="dimensionless")
def dc_fixed_bias(Vcc: float, Rb: float, Rc: float, beta: float) -> BJTDCResult:
    """
    DC analysis of the fixed-bias configuration: Rb from Vcc to the base, Rc from
    Vcc to the collector, emitter grounded.

    Example:
        >>> r = dc_fixed_bias(Vcc=12, Rb=240e3, Rc=2.2e3, beta=50)
        >>> round(r.Vce, 4)
        6.8208
    """
    topology = "bjt.dc_fixed_bias"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb=Rb, Rc=Rc, beta=beta)

    Ib = (Vcc - Vbe) / Rb
    Ie = (beta + 1) * Ib
    Ic = beta * Ib
    Icsat = Vcc / Rc
    Vce = Vcc - Ic * Rc
    Vc = Vce
    Ve = 0.0
    Vb = Vbe
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Ib={Ib:.4e} A, Ic={Ic:.4e} A, Vce={Vce:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=Icsat, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)


@register_analysis("bjt.ac_fixed_bias", Vcc="volt", Rb="ohm", Rc="ohm", beta="dimensionless", ro="ohm")
def ac_fixed_bias(Vcc: float, Rb: float, Rc: float, beta: float, ro: float) -> BJTACResult:
    """AC analysis of the fixed-bias configuration, with the output resistance ro included."""
    topology = "bjt.ac_fixed_bias"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb=Rb, Rc=Rc, beta=beta, ro=ro)

    Ib = (Vcc - Vbe) / Rb
    Ie = (beta + 1) * Ib
    re = emitter_resistance(Ie, topology)
    Zi = parallel_resistance(Rb, beta * re)
    Zo = parallel_resistance(Rc, ro)
    Av = -Zo / re

    logger.debug(f"{topology}: re={re:.4f} ohm, Zi={Zi:.2f} ohm, Av={Av:.4f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Emitter Bias ---

@register_analysis("bjt.dc_emitter_bias", Vcc="volt", Rb="ohm", Rc="ohm", Re="ohm", beta="dimensionless")
def dc_emitter_bias(Vcc: float, Rb: float, Rc: float, Re: float, beta: float) -> BJTDCResult:
    """DC analysis of the emitter-stabilized configuration (fixed bias plus Re)."""
    topology = "bjt.dc_emitter_bias"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb=Rb, Rc=Rc, Re=Re, beta=beta)

    Ib = (Vcc - Vbe) / (Rb + (beta + 1) * Re)
    Ie = (beta + 1) * Ib
    Ic = beta * Ib
    Icsat = Vcc / (Rc + Re)
    Vce = Vcc - Ic * (Rc + Re)
    Ve = Ie * Re
    Vc = Vce + Ve
    Vb = Vbe + Ve
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Ib={Ib:.4e} A, Ic={Ic:.4e} A, Vce={Vce:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=Icsat, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)


@register_analysis("bjt.ac_emitter_bias", Vcc="volt", Rb="ohm", Rc="ohm", Re="ohm", beta="dimensionless", ro="ohm")
def ac_emitter_bias(Vcc: float, Rb: float, Rc: float, Re: float, beta: float, ro: float) -> BJTACResult:
    """AC analysis of the emitter-bias configuration with Re unbypassed."""
    topology = "bjt.ac_emitter_bias"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb=Rb, Rc=Rc, Re=Re, beta=beta, ro=ro)

    Ib = (Vcc - Vbe) / (Rb + (beta + 1) * Re)
    Ie = (beta + 1) * Ib
    re = emitter_resistance(Ie, topology)
    Zb, collector_resistance, Av = _loaded_emitter_stage(Rc, Re, beta, ro, re)
    Zi = parallel_resistance(Rb, Zb)
    Zo = parallel_resistance(Rc, collector_resistance)

    logger.debug(f"{topology}: re={re:.4f} ohm, Zb={Zb:.2f} ohm, Av={Av:.4f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Voltage Divider ---

@register_analysis(
    "bjt.dc_voltage_divider",
    Vcc="volt", Rb1="ohm", Rb2="ohm", Rc="ohm", Re="ohm", beta="dimensionless",
)
def dc_voltage_divider(Vcc: float, Rb1: float, Rb2: float, Rc: float, Re: float, beta: float) -> BJTDCResult:
    """
    Exact (Thevenin) DC analysis of the voltage-divider configuration.

    Args:
        Vcc: Supply voltage.
        Rb1: Upper divider resistor, Vcc to base.
        Rb2: Lower divider resistor, base to ground.
        Rc: Collector resistor.
        Re: Emitter resistor.
        beta: Common-emitter current gain.

    Returns:
        A `BJTDCResult` with every field populated.
    """
    topology = "bjt.dc_voltage_divider"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb1=Rb1, Rb2=Rb2, Rc=Rc, Re=Re, beta=beta)

    Rth = thevenin_resistance(Rb1, Rb2)
    Eth = thevenin_voltage(Vcc, Rb1, Rb2)
    Ib = (Eth - Vbe) / (Rth + (beta + 1) * Re)
    Ie = (beta + 1) * Ib
    Ic = beta * Ib
    Icsat = Vcc / (Rc + Re)
    Vce = Vcc - Ic * (Rc + Re)
    Ve = Ie * Re
    Vc = Vce + Ve
    Vb = Vbe + Ve
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Rth={Rth:.2f} ohm, Eth={Eth:.4f} V, Ic={Ic:.4e} A")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=Icsat, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)


@register_analysis(
    "bjt.ac_voltage_divider",
    Vcc="volt", Rb1="ohm", Rb2="ohm", Rc="ohm", Re="ohm", beta="dimensionless", ro="ohm",
    bypass=TAG_DIMENSION,
)
def ac_voltage_divider(
    Vcc: float,
    Rb1: float,
    Rb2: float,
    Rc: float,
    Re: float,
    beta: float,
    ro: float,
    bypass: Union[BypassMode, str],
) -> BJTACResult:
    """
    AC analysis of the voltage-divider configuration.

    With `BypassMode.BYPASSED` the emitter resistor is an AC short and the base
    presents beta*re; with `BypassMode.UNBYPASSED` it presents the full Zb, which
    lowers the gain and raises the input impedance.

    Raises:
        ParameterValidationError: For a non-positive parameter or an unrecognized
                                  bypass tag.
    """
    topology = "bjt.ac_voltage_divider"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb1=Rb1, Rb2=Rb2, Rc=Rc, Re=Re, beta=beta, ro=ro)
    mode = BypassMode.coerce(bypass, topology)

    Rth = thevenin_resistance(Rb1, Rb2)
    Eth = thevenin_voltage(Vcc, Rb1, Rb2)
    Ib = (Eth - Vbe) / (Rth + (beta + 1) * Re)
    Ie = (beta + 1) * Ib
    re = emitter_resistance(Ie, topology)

    if mode is BypassMode.BYPASSED:
        Zi = parallel_resistance(Rth, beta * re)
        Zo = parallel_resistance(Rc, ro)
        Av = -Zo / re
    elif mode is BypassMode.UNBYPASSED:
        Zb, collector_resistance, Av = _loaded_emitter_stage(Rc, Re, beta, ro, re)
        Zi = parallel_resistance(Rth, Zb)
        Zo = parallel_resistance(Rc, collector_resistance)
    else:
        raise AssertionError(f"Unhandled bypass mode {mode!r}")

    logger.debug(f"{topology} ({mode}): re={re:.4f} ohm, Zi={Zi:.2f} ohm, Av={Av:.4f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Collector Feedback ---

@register_analysis("bjt.dc_collector_feedback", Vcc="volt", Rf="ohm", Rc="ohm", Re="ohm", beta="dimensionless")
def dc_collector_feedback(Vcc: float, Rf: float, Rc: float, Re: float, beta: float) -> BJTDCResult:
    """DC analysis of the collector-feedback configuration, Rf from collector to base."""
    topology = "bjt.dc_collector_feedback"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rf=Rf, Rc=Rc, Re=Re, beta=beta)

    Ib = (Vcc - Vbe) / (Rf + beta * (Rc + Re))
    Ie = (beta + 1) * Ib
    Ic = beta * Ib
    Icsat = Vcc / (Rc + Re)
    Vce = Vcc - Ic * (Rc + Re)
    Ve = Ie * Re
    Vc = Vce + Ve
    Vb = Vbe + Ve
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Ib={Ib:.4e} A, Ic={Ic:.4e} A, Vce={Vce:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=Icsat, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)


@register_analysis("bjt.ac_collector_feedback", Vcc="volt", Rf="ohm", Rc="ohm", beta="dimensionless", ro="ohm")
def ac_collector_feedback(Vcc: float, Rf: float, Rc: float, beta: float, ro: float) -> BJTACResult:
    """AC analysis of the collector-feedback configuration with the emitter grounded."""
    topology = "bjt.ac_collector_feedback"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rf=Rf, Rc=Rc, beta=beta, ro=ro)

    Ib = (Vcc - Vbe) / (Rf + beta * Rc)
    Ie = (beta + 1) * Ib
    re = emitter_resistance(Ie, topology)
    Rl = parallel_resistance(Rc, ro)
    Zi = (1 + Rl / Rf) / (1 / (beta * re) + 1 / Rf + Rl / (beta * re * Rf) + Rl / (Rf * re))
    Zo = 1 / (1 / ro + 1 / Rc + 1 / Rf)
    Av = -(Rf / (Rl + Rf)) * (Rl / re)

    logger.debug(f"{topology}: re={re:.4f} ohm, Zi={Zi:.2f} ohm, Av={Av:.4f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


@register_analysis("bjt.dc_collector_dc_feedback", Vcc="volt", Rf1="ohm", Rf2="ohm", Rc="ohm", beta="dimensionless")
def dc_collector_dc_feedback(Vcc: float, Rf1: float, Rf2: float, Rc: float, beta: float) -> BJTDCResult:
    """
    DC analysis of the collector DC-feedback configuration: the feedback resistor is
    split into Rf1 (base side) and Rf2 (collector side), emitter grounded. The
    base current is neglected next to Ic in the drop across Rc.
    """
    topology = "bjt.dc_collector_dc_feedback"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rf1=Rf1, Rf2=Rf2, Rc=Rc, beta=beta)

    Ib = (Vcc - Vbe) / (Rf1 + Rf2 + beta * Rc)
    Ie = (beta + 1) * Ib
    Ic = beta * Ib
    Icsat = Vcc / Rc
    Vce = Vcc - Ic * Rc
    Vc = Vce
    Ve = 0.0
    Vb = Vbe
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Ib={Ib:.4e} A, Ic={Ic:.4e} A, Vce={Vce:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=Icsat, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)


@register_analysis(
    "bjt.ac_collector_dc_feedback",
    Vcc="volt", Rf1="ohm", Rf2="ohm", Rc="ohm", beta="dimensionless", ro="ohm",
)
def ac_collector_dc_feedback(Vcc: float, Rf1: float, Rf2: float, Rc: float, beta: float, ro: float) -> BJTACResult:
    """AC analysis of the collector DC-feedback configuration (feedback midpoint AC-grounded)."""
    topology = "bjt.ac_collector_dc_feedback"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rf1=Rf1, Rf2=Rf2, Rc=Rc, beta=beta, ro=ro)

    Ib = (Vcc - Vbe) / (Rf1 + Rf2 + beta * Rc)
    Ie = (beta + 1) * Ib
    re = emitter_resistance(Ie, topology)
    Zi = parallel_resistance(Rf1, beta * re)
    Zo = 1 / (1 / Rc + 1 / Rf2 + 1 / ro)
    Av = -Zo / re

    logger.debug(f"{topology}: re={re:.4f} ohm, Zi={Zi:.2f} ohm, Av={Av:.4f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.OUT_OF_PHASE)


# --- Emitter Follower ---

@register_analysis("bjt.dc_emitter_follower", Vee="volt", Rb="ohm", Re="ohm", beta="dimensionless")
def dc_emitter_follower(Vee: float, Rb: float, Re: float, beta: float) -> BJTDCResult:
    """
    DC analysis of the emitter-follower configuration biased from a supply of
    magnitude Vee through Re. The emitter node voltage is Ve = Ie*Re + Vee and Vc,
    Vb follow from Vce and Vbe. The follower has no collector load, so `Icsat` is
    not applicable.
    """
    topology = "bjt.dc_emitter_follower"
    require_finite(topology, Vee=Vee)
    require_positive(topology, Rb=Rb, Re=Re, beta=beta)

    Ib = (Vee - Vbe) / (Rb + (beta + 1) * Re)
    Ie = (beta + 1) * Ib
    Ic = beta * Ib
    Vce = Vee - Ie * Re
    Ve = Ie * Re + Vee
    Vc = Vce + Ve
    Vb = Vbe + Ve
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Ib={Ib:.4e} A, Ie={Ie:.4e} A, Vce={Vce:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=None, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)


@register_analysis("bjt.ac_emitter_follower", Vcc="volt", Rb="ohm", Re="ohm", beta="dimensionless", ro="ohm")
def ac_emitter_follower(Vcc: float, Rb: float, Re: float, beta: float, ro: float) -> BJTACResult:
    """AC analysis of the emitter-follower configuration. The gain is just under unity."""
    topology = "bjt.ac_emitter_follower"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb=Rb, Re=Re, beta=beta, ro=ro)

    Ib = (Vcc - Vbe) / (Rb + (beta + 1) * Re)
    Ie = (beta + 1) * Ib
    re = emitter_resistance(Ie, topology)
    Zb = beta * re + (beta + 1) * Re / (1 + Re / ro)
    Zi = parallel_resistance(Rb, Zb)
    Zo = 1 / (1 / ro + 1 / Re + 1 / (beta * re / (beta + 1)))
    Av = ((beta + 1) * Re / Zb) / (1 + Re / ro)

    logger.debug(f"{topology}: re={re:.4f} ohm, Zo={Zo:.4f} ohm, Av={Av:.6f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.IN_PHASE)


# --- Common Base ---

@register_analysis("bjt.dc_common_base", Vcc="volt", Vee="volt", Rc="ohm", Re="ohm", beta="dimensionless")
def dc_common_base(Vcc: float, Vee: float, Rc: float, Re: float, beta: float) -> BJTDCResult:
    """
    DC analysis of the common-base configuration with split supplies (Vee on the
    emitter through Re, Vcc on the collector through Rc, base grounded).

    The stage has no single ground reference for its terminals, so the node
    voltages Vc, Ve, Vb and the saturation current are reported as not applicable.
    """
    topology = "bjt.dc_common_base"
    require_finite(topology, Vcc=Vcc, Vee=Vee)
    require_positive(topology, Rc=Rc, Re=Re, beta=beta)

    Ie = (Vee - Vbe) / Re
    Ib = Ie / (beta + 1)
    Ic = beta * Ib
    Vce = Vee + Vcc - Ie * (Rc + Re)
    Vcb = Vcc - Ic * Rc
    Vbc = -Vcb

    logger.debug(f"{topology}: Ie={Ie:.4e} A, Vce={Vce:.4f} V, Vcb={Vcb:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=None, Vce=Vce, Vc=None, Ve=None, Vb=None, Vbc=Vbc)


@register_analysis("bjt.ac_common_base", Vcc="volt", Vee="volt", Rc="ohm", Re="ohm", alpha="dimensionless")
def ac_common_base(Vcc: float, Vee: float, Rc: float, Re: float, alpha: float) -> BJTACResult:
    """AC analysis of the common-base configuration; `alpha` is the common-base current gain."""
    topology = "bjt.ac_common_base"
    require_finite(topology, Vcc=Vcc, Vee=Vee)
    require_positive(topology, Rc=Rc, Re=Re, alpha=alpha)

    Ie = (Vee - Vbe) / Re
    re = emitter_resistance(Ie, topology)
    Zi = parallel_resistance(Re, re)
    Zo = Rc
    Av = alpha * Rc / re

    logger.debug(f"{topology}: re={re:.4f} ohm, Zi={Zi:.4f} ohm, Av={Av:.4f}")
    return BJTACResult(re=re, Zi=Zi, Zo=Zo, Av=Av, phase=PhaseRelation.IN_PHASE)


# --- Miscellaneous Bias ---

@register_analysis("bjt.dc_miscellaneous_bias", Vcc="volt", Rb="ohm", Rc="ohm", beta="dimensionless")
def dc_miscellaneous_bias(Vcc: float, Rb: float, Rc: float, beta: float) -> BJTDCResult:
    """
    DC analysis of the collector-feedback variant without an emitter resistor, where
    the full emitter current flows through Rc. `Icsat` is not applicable.
    """
    topology = "bjt.dc_miscellaneous_bias"
    require_finite(topology, Vcc=Vcc)
    require_positive(topology, Rb=Rb, Rc=Rc, beta=beta)

    Ib = (Vcc - Vbe) / (Rb + beta * Rc)
    Ic = beta * Ib
    Ie = (beta + 1) * Ib
    Vce = Vcc - Ie * Rc
    Ve = 0.0
    Vc = Vce + Ve
    Vb = Vbe + Ve
    Vbc = Vb - Vc

    logger.debug(f"{topology}: Ib={Ib:.4e} A, Ic={Ic:.4e} A, Vce={Vce:.4f} V")
    return BJTDCResult(Ib=Ib, Ic=Ic, Ie=Ie, Icsat=None, Vce=Vce, Vc=Vc, Ve=Ve, Vb=Vb, Vbc=Vbc)
