"""Per-channel helpers: mass-flow update, fix point and outlet checks."""

from __future__ import annotations

from dataclasses import dataclass

_OUTLET_TOLERANCE = 10e-3
_FIX_TEMPERATURE = 0.7


@dataclass
class MassFlowBounds:
    """Relative limits on how far one update may move the mass flow."""

    lower: float = 0.9
    upper: float = 1.1

    def widen(self):
        """Loosen both limits by ten percent."""
        self.lower *= 0.9
        self.upper *= 1.1


def _closest_index(coords, target):
    """Index of the first local minimum of ``|coords - target|``."""
    coords = [float(c) for c in coords]
    if not coords:
        raise ValueError("coordinate list is empty")
    best = 0
    for k in range(1, len(coords)):
        if abs(coords[k] - target) < abs(coords[best] - target):
            best = k
        else:
            break
    return best


def find_fix_index(xc, yc, xfix, yfix):
    """Cell indices (i, j) whose centre lies nearest to (xfix, yfix)."""
    return _closest_index(xc, xfix), _closest_index(yc, yfix)


def calculate_new_m(
    temperature, z, mass_flux_east, mass_flux_north, ifix, jfix, alpha, m, q, bounds
):
    """Relaxed mass-flow estimate from the energy balance at the fix cell.

    The temperature at the fix cell is pinned to 0.7 first; ``temperature``
    is modified in place.
    """
    ni, nj = temperature.ni, temperature.nj
    if not (1 <= ifix <= ni - 2 and 1 <= jfix <= nj - 2):
        raise IndexError(f"fix cell ({ifix}, {jfix}) is not an interior cell")

    t = temperature.value
    index = ifix + jfix * ni
    t[index] = _FIX_TEMPERATURE

    vx, vy = temperature.visc_x, temperature.visc_y
    se, sn = temperature.se, temperature.sn
    mfe, mfn = mass_flux_east.value, mass_flux_north.value
    fxe, fxp = temperature.fxe, temperature.fxp
    fyn, fyp = temperature.fyn, temperature.fyp

    diffusive_x = (
        vx[index] * se[jfix] * (t[index + 1] - t[index]) / temperature.dxp_to_e[ifix]
        - vx[index - 1]
        * se[jfix - 1]
        * (t[index] - t[index - 1])
        / temperature.dxp_to_e[ifix - 1]
    )
    diffusive_y = (
        vy[index] * sn[ifix] * (t[index + ni] - t[index]) / temperature.dyp_to_n[jfix]
        - vy[index - ni]
        * sn[ifix - 1]
        * (t[index] - t[index - ni])
        / temperature.dyp_to_n[jfix - 1]
    )
    convective_x = mfe[index] * (
        t[index + 1] * fxe[ifix] + t[index] * fxp[ifix]
    ) - mfe[index - 1] * (t[index] * fxe[ifix - 1] + t[index - 1] * fxp[ifix - 1])
    convective_y = mfn[index] * (
        t[index + ni] * fyn[jfix] + t[index] * fyp[jfix]
    ) - mfn[index - ni] * (t[index] * fyn[jfix - 1] + t[index - ni] * fyp[jfix - 1])
    reaction = q * z.value[index] * se[jfix] * sn[ifix]

    convective = float(convective_x + convective_y)
    if convective == 0.0:
        raise ZeroDivisionError("convective balance at the fix cell vanishes")

    new_m = alpha * float(reaction + diffusive_x + diffusive_y) / convective + (
        1 - alpha
    ) * m
    new_m = min(m * bounds.upper, new_m)
    new_m = max(m * bounds.lower, new_m)
    return new_m


def is_outlet_temperature_converged(sol_values, n, m, q, left_to_right):
    """Whether the outlet temperature column sums to ``q * m / 2``."""
    column = n - 2 if left_to_right else 1
    values = [float(v) for v in sol_values]
    if len(values) < n * m:
        raise ValueError(f"solution needs {n * m} values, got {len(values)}")
    outlet = sum(values[column + j * n] for j in range(m))
    return abs(outlet - q * m / 2.0) < _OUTLET_TOLERANCE


def wall_viscosities(visc_x, visc_y, le_f, le_z):
    """Diffusivities (x, y) of temperature, fuel and intermediate species."""
    return {
        "T": (visc_x, visc_y),
        "F": (visc_x / le_f, visc_y / le_f),
        "Z": (visc_x / le_z, visc_y / le_z),
    }