import numpy as np
import pytest

from nowall.channel import (
    MassFlowBounds,
    calculate_new_m,
    find_fix_index,
    is_outlet_temperature_converged,
    wall_viscosities,
)
from nowall.stencil import FieldData

NI = NJ = 5


def _geometry_field(value=0.0):
    return FieldData(
        NI,
        NJ,
        value=np.full(NI * NJ, value),
        fxe=np.full(NI, 0.5),
        fxp=np.full(NI, 0.5),
        fyn=np.full(NJ, 0.5),
        fyp=np.full(NJ, 0.5),
        dxp_to_e=np.ones(NI),
        dyp_to_n=np.ones(NJ),
        se=np.ones(NJ),
        sn=np.ones(NI),
    )


def _setup(ifix=2, jfix=2):
    temperature = _geometry_field(0.7)
    z = _geometry_field(1.0)
    east = _geometry_field(0.0)
    north = _geometry_field(0.0)
    index = ifix + jfix * NI
    east.value[index] = 2.0
    east.value[index - 1] = 1.0
    return temperature, z, east, north


def test_bounds_defaults_and_widen():
    bounds = MassFlowBounds()
    assert bounds.lower == pytest.approx(0.9)
    assert bounds.upper == pytest.approx(1.1)
    bounds.widen()
    assert bounds.lower == pytest.approx(0.9 * 0.9)
    assert bounds.upper == pytest.approx(1.1 * 1.1)


def test_find_fix_index_nearest():
    xc = [0.0, 1.0, 2.0, 3.0, 4.0]
    yc = [0.0, 0.5, 1.0, 1.5]
    assert find_fix_index(xc, yc, 2.2, 1.4) == (2, 3)


def test_find_fix_index_at_end():
    assert find_fix_index([0.0, 1.0, 2.0], [0.0, 1.0], 10.0, -5.0) == (2, 0)


def test_find_fix_index_empty():
    with pytest.raises(ValueError):
        find_fix_index([], [0.0], 1.0, 0.0)


def test_new_m_alpha_zero_keeps_m():
    temperature, z, east, north = _setup()
    result = calculate_new_m(temperature, z, east, north, 2, 2, 0.0, 1.0, 0.7, MassFlowBounds())
    assert result == pytest.approx(1.0)


def test_new_m_pins_fix_temperature():
    temperature, z, east, north = _setup()
    temperature.value[:] = 0.3
    calculate_new_m(temperature, z, east, north, 2, 2, 0.5, 1.0, 0.7, MassFlowBounds())
    assert temperature.value[2 + 2 * NI] == pytest.approx(0.7)


def test_new_m_balanced_case():
    temperature, z, east, north = _setup()
    result = calculate_new_m(temperature, z, east, north, 2, 2, 1.0, 1.0, 0.7, MassFlowBounds())
    assert result == pytest.approx(1.0)


def test_new_m_clamped_above_and_below():
    bounds = MassFlowBounds()
    temperature, z, east, north = _setup()
    high = calculate_new_m(temperature, z, east, north, 2, 2, 1.0, 2.0, 1000.0, bounds)
    assert high == pytest.approx(2.0 * bounds.upper)
    temperature, z, east, north = _setup()
    low = calculate_new_m(temperature, z, east, north, 2, 2, 1.0, 2.0, -1000.0, bounds)
    assert low == pytest.approx(2.0 * bounds.lower)


def test_new_m_within_bounds_invariant():
    bounds = MassFlowBounds()
    for q in (-5.0, 0.0, 0.3, 0.7, 1.2, 50.0):
        temperature, z, east, north = _setup()
        result = calculate_new_m(temperature, z, east, north, 2, 2, 0.8, 3.0, q, bounds)
        assert 3.0 * bounds.lower - 1e-12 <= result <= 3.0 * bounds.upper + 1e-12


def test_new_m_zero_convection_raises():
    temperature, z, east, north = _setup()
    east.value[:] = 0.0
    with pytest.raises(ZeroDivisionError):
        calculate_new_m(temperature, z, east, north, 2, 2, 1.0, 1.0, 0.7, MassFlowBounds())


def test_new_m_boundary_cell_rejected():
    temperature, z, east, north = _setup()
    with pytest.raises(IndexError):
        calculate_new_m(temperature, z, east, north, 0, 2, 1.0, 1.0, 0.7, MassFlowBounds())


def test_outlet_converged_left_to_right():
    n, m, q = 4, 3, 1.2
    values = np.zeros(n * m)
    for j in range(m):
        values[n - 2 + j * n] = q / 2.0
    assert is_outlet_temperature_converged(values, n, m, q, True) is True
    assert is_outlet_temperature_converged(values, n, m, q, False) is False


def test_outlet_converged_right_to_left():
    n, m, q = 4, 3, 1.2
    values = np.zeros(n * m)
    for j in range(m):
        values[1 + j * n] = q / 2.0
    assert is_outlet_temperature_converged(values, n, m, q, False) is True
    assert is_outlet_temperature_converged(values, n, m, q, True) is False


def test_outlet_too_short():
    with pytest.raises(ValueError):
        is_outlet_temperature_converged([0.0, 0.0], 4, 3, 1.0, True)


def test_wall_viscosities():
    result = wall_viscosities(2.0, 4.0, 1.0, 0.5)
    assert result["T"] == (2.0, 4.0)
    assert result["F"] == pytest.approx((2.0, 4.0))
    assert result["Z"] == pytest.approx((4.0, 8.0))


def test_wall_viscosities_zero_lewis():
    with pytest.raises(ZeroDivisionError):
        wall_viscosities(1.0, 1.0, 0.0, 0.3)