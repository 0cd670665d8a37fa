# --- src/biascalc_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- First-Order Device Model Constants ---

#: Fixed base-emitter drop of a conducting silicon BJT.
#: Value: 0.7 V.
VBE_VOLTS: float = 0.7 # Volts

#: Thermal voltage used by the re model, re = VT / Ie.
#: Value: 26 mV (room temperature approximation).
THERMAL_VOLTAGE_VOLTS: float = 0.026 # Volts

logger.debug("Defined core constants: VBE_VOLTS, THERMAL_VOLTAGE_VOLTS")
