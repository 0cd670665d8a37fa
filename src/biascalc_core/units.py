# --- src/biascalc_core/units.py ---
import logging
from typing import Union

import numpy as np
import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# Canonical SI units used by every analysis function. Analyses themselves only
# ever see the bare magnitudes in these units.
SI_UNITS = {
    "volt": "V",
    "ampere": "A",
    "ohm": "ohm",
    "siemens": "S",
    "dimensionless": "dimensionless",
}


def to_si_magnitude(value: Union[int, float, str, Quantity], dimension: str) -> float:
    """
    Converts a raw parameter value to a float magnitude in the SI unit of `dimension`.

    Plain numbers are taken to already be in SI units. Strings are parsed by pint
    (e.g. '2.2 kohm', '12 V', '8 mA'), and quantities are converted directly.

    Raises:
        pint.DimensionalityError: If the value is not compatible with `dimension`.
        pint.UndefinedUnitError: If a string names an unknown unit.
        ValueError: If `dimension` is not one of the canonical SI dimensions.
        TypeError: If the value is a boolean or not a number, string or quantity.
    """
    if dimension not in SI_UNITS:
        raise ValueError(f"Unknown parameter dimension '{dimension}'. Known: {sorted(SI_UNITS)}")
    if isinstance(value, bool):
        raise TypeError(f"Boolean value {value!r} is not a valid numeric parameter.")
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    if isinstance(value, str):
        value = Quantity(value)
    if not isinstance(value, pint.Quantity):
        raise TypeError(f"Value {value!r} of type {type(value).__name__} is neither a number, a unit string nor a quantity.")
    return float(value.to(SI_UNITS[dimension]).magnitude)
