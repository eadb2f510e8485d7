"""International Standard Atmosphere — troposphere density model.

Pure math module, no I/O.  Called from performance.compute_performance().

  T_K = temperature_c + 273.15
  P   = P0 * (1 + L * h / T0) ** (-g / (R * L))
  rho = P / (R * T_K)

Pressure follows the standard lapse-rate atmosphere for the given altitude,
while density uses the user's temperature rather than the ISA temperature at
that altitude.  No validity bounds are enforced: altitudes above the
pressure-formula singularity (~44 km) yield NaN, and temperatures at or below
absolute zero yield infinite or negative density.  Those values propagate to
the caller instead of raising.
"""

from __future__ import annotations

import numpy as np

# ---------------------------------------------------------------------------
# ISA constants
# ---------------------------------------------------------------------------

T0_K: float = 288.15            # sea-level standard temperature
P0_PA: float = 101325.0         # sea-level standard pressure
LAPSE_RATE: float = -0.0065     # K/m, troposphere
GAS_CONSTANT: float = 287.058   # J/(kg*K), dry air
GRAVITY: float = 9.80665        # m/s^2
KELVIN_OFFSET: float = 273.15


def pressure_at(altitude_m: float) -> float:
    """Static pressure (Pa) at *altitude_m* from the barometric formula."""
    exponent = -GRAVITY / (GAS_CONSTANT * LAPSE_RATE)
    base = np.float64(1.0 + LAPSE_RATE * altitude_m / T0_K)
    with np.errstate(invalid="ignore", over="ignore"):
        return float(P0_PA * np.power(base, exponent))


def air_density(temperature_c: float, altitude_m: float) -> float:
    """Air density (kg/m^3) for a temperature in deg C and an altitude in m.

    Sea level at 15 deg C gives 1.225 kg/m^3.
    """
    temperature_k = np.float64(temperature_c + KELVIN_OFFSET)
    pressure = np.float64(pressure_at(altitude_m))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(pressure / (GAS_CONSTANT * temperature_k))
