# src/biascalc_core/analysis/systems.py
"""
Signal-chain gain composition for single two-port stages and cascades.

Each stage is reduced to its no-load voltage gain Avnl and its input/output
impedances (Zi, Zo). Loading between stages is a plain voltage divider formed
by one stage's Zo and the next stage's Zi (or the external load Rl).
"""
import logging
from typing import Sequence, Union

from .exceptions import ParameterValidationError
from .helpers import require_finite, require_positive
from .results import BJTACResult, CascadedResult, FETACResult, StageGain, TwoPortResult

logger = logging.getLogger(__name__)

ACResult = Union[BJTACResult, FETACResult]


def two_port_system(Avnl: float, Zi: float, Zo: float, Rs: float, Rl: float) -> TwoPortResult:
    """
    Loaded gains of a single stage driven from a source with resistance Rs into a load Rl.

    Example:
        >>> r = two_port_system(Avnl=-480, Zi=4000, Zo=2000, Rs=200, Rl=5600)
        >>> round(r.Avl, 2), round(r.Avs, 2), round(r.Ail, 2)
        (-353.68, -336.84, 252.63)
    """
    topology = "system.two_port"
    require_finite(topology, Avnl=Avnl)
    require_positive(topology, Zi=Zi, Zo=Zo, Rs=Rs, Rl=Rl)

    Avl = Avnl * Rl / (Rl + Zo)
    Avs = Avl * Zi / (Zi + Rs)
    Ail = -Avl * Zi / Rl

    logger.debug(f"{topology}: Avl={Avl:.4f}, Avs={Avs:.4f}, Ail={Ail:.4f}")
    return TwoPortResult(Avl=Avl, Avs=Avs, Ail=Ail)


def _check_stage_lists(topology: str, Avnls: Sequence[float], Zis: Sequence[float], Zos: Sequence[float]) -> None:
    if len(Avnls) == 0:
        raise ParameterValidationError(
            topology=topology, parameter="Avnls", value=list(Avnls),
            details="A cascaded system needs at least one stage."
        )
    for name, values in (("Zis", Zis), ("Zos", Zos)):
        if len(values) != len(Avnls):
            raise ParameterValidationError(
                topology=topology, parameter=name, value=list(values),
                details=f"Expected {len(Avnls)} values, one per stage, got {len(values)}."
            )
    for i, (Avnl, Zi, Zo) in enumerate(zip(Avnls, Zis, Zos), start=1):
        require_finite(topology, **{f"Avnl{i}": Avnl})
        require_positive(topology, **{f"Zi{i}": Zi, f"Zo{i}": Zo})


def cascaded_system(
    Avnls: Sequence[float], Zis: Sequence[float], Zos: Sequence[float], Rs: float, Rl: float
) -> CascadedResult:
    """
    Per-stage and total gains of n two-port stages in cascade.

    Stage i is loaded by the input impedance of stage i+1; the last stage is
    loaded by Rl. The total voltage gain Avt is the product of the loaded
    stage gains, which are returned in order and labelled Av1..Avn.

    Args:
        Avnls: No-load voltage gain of each stage, input side first.
        Zis: Input impedance of each stage in ohms.
        Zos: Output impedance of each stage in ohms.
        Rs: Source resistance driving the first stage.
        Rl: Load resistance on the last stage.
    """
    topology = "system.cascaded"
    _check_stage_lists(topology, Avnls, Zis, Zos)
    require_positive(topology, Rs=Rs, Rl=Rl)

    n = len(Avnls)
    stages = []
    Avt = 1.0
    for i in range(n):
        next_load = Zis[i + 1] if i < n - 1 else Rl
        gain = Avnls[i] * next_load / (next_load + Zos[i])
        stages.append(StageGain(index=i + 1, gain=gain))
        Avt *= gain

    Avs = Avt * Zis[0] / (Zis[0] + Rs)
    Ait = -Avt * Zis[0] / Rl

    logger.debug(f"{topology}: {n} stage(s), Avt={Avt:.4f}, Avs={Avs:.4f}, Ait={Ait:.4f}")
    return CascadedResult(stages=tuple(stages), Avt=Avt, Avs=Avs, Ait=Ait)


def two_port_from_result(result: ACResult, Rs: float, Rl: float) -> TwoPortResult:
    """Two-port composition using the Av, Zi and Zo of an AC analysis result."""
    return two_port_system(Avnl=result.Av, Zi=result.Zi, Zo=result.Zo, Rs=Rs, Rl=Rl)


def cascaded_from_results(results: Sequence[ACResult], Rs: float, Rl: float) -> CascadedResult:
    """Cascaded composition of AC analysis results, input stage first."""
    return cascaded_system(
        Avnls=[r.Av for r in results],
        Zis=[r.Zi for r in results],
        Zos=[r.Zo for r in results],
        Rs=Rs,
        Rl=Rl,
    )
