# src/biascalc_core/analysis/registry.py
"""
Registry of every topology analysis, keyed by '<family>.<function name>'
(e.g. 'bjt.dc_fixed_bias'). The job runner uses it to look analyses up by name
and to convert unit-bearing parameter values into the SI floats each one expects.
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Mapping

from ..units import SI_UNITS

logger = logging.getLogger(__name__)

#: Dimension tag for enumerated string parameters (e.g. the bypass mode).
TAG_DIMENSION = "tag"


@dataclass(frozen=True)
class AnalysisSpec:
    """Registry entry describing one topology analysis."""
    name: str
    family: str
    kind: str
    function: Callable
    parameter_dimensions: Mapping[str, str]

    def __call__(self, *args, **kwargs):
        return self.function(*args, **kwargs)


ANALYSIS_REGISTRY: Dict[str, AnalysisSpec] = {}


def register_analysis(name: str, **dimensions: str):
    """
    A function decorator that registers a topology analysis and declares the
    dimension of each of its parameters. The declared names must match the
    function's signature exactly.
    """
    def decorator(func: Callable) -> Callable:
        family, _, func_name = name.partition(".")
        if not family or func_name != func.__name__:
            raise TypeError(f"Analysis name '{name}' must be '<family>.{func.__name__}'.")

        signature_params = list(inspect.signature(func).parameters)
        if list(dimensions) != signature_params:
            raise TypeError(
                f"Declared parameters {list(dimensions)} of '{name}' do not match "
                f"the function signature {signature_params}."
            )
        for param, dim in dimensions.items():
            if dim != TAG_DIMENSION and dim not in SI_UNITS:
                raise TypeError(f"Parameter '{param}' of '{name}' declares unknown dimension '{dim}'.")

        kind = func_name.split("_", 1)[0]
        if kind not in ("dc", "ac"):
            raise TypeError(f"Analysis function '{func_name}' must start with 'dc_' or 'ac_'.")

        if name in ANALYSIS_REGISTRY:
            logger.warning(f"Analysis '{name}' is being redefined/overwritten.")
        ANALYSIS_REGISTRY[name] = AnalysisSpec(
            name=name,
            family=family,
            kind=kind,
            function=func,
            parameter_dimensions=dict(dimensions),
        )
        logger.debug(f"Registered analysis '{name}' -> {func.__module__}.{func.__name__}")
        return func
    return decorator


def get_analysis(name: str) -> AnalysisSpec:
    """Looks up a registered analysis by its qualified name."""
    try:
        return ANALYSIS_REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown analysis '{name}'. Available analyses: {sorted(ANALYSIS_REGISTRY)}") from None
