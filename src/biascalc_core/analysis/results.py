# src/biascalc_core/analysis/results.py
"""
Defines the formal, type-safe data contracts for the results of every analysis.

Each record is a frozen dataclass built fresh by a single analysis call, so a
result handed to one caller can never be altered by another call. A field the
topology does not define is `None` (not applicable), which keeps "not calculated"
distinct from any genuine value, negative gains and voltages included.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import VBE_VOLTS
from .enums import PhaseRelation


@dataclass(frozen=True)
class BJTDCResult:
    """DC operating point of a BJT stage. Currents in A, voltages in V."""
    Ib: float
    Ic: float
    Ie: float
    Icsat: Optional[float]
    Vce: float
    Vc: Optional[float]
    Ve: Optional[float]
    Vb: Optional[float]
    Vbc: float

    @property
    def Vbe(self) -> float:
        return VBE_VOLTS


@dataclass(frozen=True)
class FETDCResult:
    """
    DC operating point of a JFET or E-MOSFET stage. `k` is the E-MOSFET device
    constant in A/V^2 and is `None` for a JFET.
    """
    Id: float
    Vgs: float
    Vds: float
    Vd: float
    Vs: float
    Vg: float
    k: Optional[float] = None


@dataclass(frozen=True)
class BJTACResult:
    """Small-signal re-model parameters of a BJT stage."""
    re: float
    Zi: float
    Zo: float
    Av: float
    phase: PhaseRelation


@dataclass(frozen=True)
class FETACResult:
    """Small-signal parameters of a JFET or E-MOSFET stage."""
    gm: float
    Zi: float
    Zo: float
    Av: float
    phase: PhaseRelation


@dataclass(frozen=True)
class TwoPortResult:
    """Loaded gains of a single two-port stage."""
    Avl: float
    Avs: float
    Ail: float


@dataclass(frozen=True)
class StageGain:
    """Loaded voltage gain of one stage in a cascade, labelled by its 1-based index."""
    index: int
    gain: float

    @property
    def name(self) -> str:
        return f"Av{self.index}"


@dataclass(frozen=True)
class CascadedResult:
    """Per-stage and total gains of a cascaded system."""
    stages: Tuple[StageGain, ...]
    Avt: float
    Avs: float
    Ait: float

    @property
    def stage_gains(self) -> Tuple[float, ...]:
        return tuple(stage.gain for stage in self.stages)
