# src/biascalc_core/analysis/enums.py
from enum import Enum
from typing import Union

from .exceptions import ParameterValidationError


class BypassMode(Enum):
    """
    AC state of the emitter resistor in a voltage-divider BJT stage.
    BYPASSED treats Re as an AC short; UNBYPASSED keeps it in the input impedance Zb.
    """
    BYPASSED = "bypassed"
    UNBYPASSED = "unbypassed"

    def __str__(self):
        return self.value

    @classmethod
    def coerce(cls, value: Union["BypassMode", str], topology: str) -> "BypassMode":
        """Accepts a member or its tag string; any other value is a contract violation."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ParameterValidationError(
                topology=topology,
                parameter="bypass",
                value=value,
                details=f"Unrecognized bypass mode. Allowed tags: {[m.value for m in cls]}."
            ) from None


class PhaseRelation(Enum):
    """Phase relationship between the output and the input of a stage."""
    IN_PHASE = "in-phase"
    OUT_OF_PHASE = "out-of-phase"

    def __str__(self):
        return self.value

    @property
    def label(self) -> str:
        return "In phase" if self is PhaseRelation.IN_PHASE else "Out of phase"
