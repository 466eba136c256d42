"""Cell fields and the five-point finite-volume terms built on them."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field, fields

import numpy as np

_WALL_THRESHOLD = 10e-8


def interior_cells(ni, nj):
    """Yield (i, j) for every interior cell, row by row."""
    for j in range(1, nj - 1):
        for i in range(1, ni - 1):
            yield i, j


def east_face_cells(ni, nj):
    """Yield (i, j) for cells whose east face is interior."""
    for j in range(1, nj - 1):
        for i in range(1, ni - 2):
            yield i, j


def north_face_cells(ni, nj):
    """Yield (i, j) for cells whose north face is interior."""
    for j in range(1, nj - 2):
        for i in range(1, ni - 1):
            yield i, j


def plus_upwind(v):
    """Positive part of ``v``."""
    return (v + np.abs(v)) / 2


def minus_upwind(v):
    """Negative part of ``v``."""
    return (v - np.abs(v)) / 2


_CELL_ARRAYS = ("value", "visc_x", "visc_y", "density", "volume")
_X_ARRAYS = ("xc", "fxe", "fxp", "dxp_to_e", "sn")
_Y_ARRAYS = ("yc", "fyn", "fyp", "dyp_to_n", "se")


@dataclass(eq=False)
class FieldData:
    """A scalar on an ni x nj cell grid, stored i-fastest, with its geometry."""

    ni: int
    nj: int
    value: np.ndarray | None = None
    xc: np.ndarray | None = None
    yc: np.ndarray | None = None
    fxe: np.ndarray | None = None
    fxp: np.ndarray | None = None
    fyn: np.ndarray | None = None
    fyp: np.ndarray | None = None
    dxp_to_e: np.ndarray | None = None
    dyp_to_n: np.ndarray | None = None
    se: np.ndarray | None = None
    sn: np.ndarray | None = None
    visc_x: np.ndarray | None = None
    visc_y: np.ndarray | None = None
    density: np.ndarray | None = None
    volume: np.ndarray | None = None

    def __post_init__(self):
        if self.ni < 3 or self.nj < 3:
            raise ValueError(f"grid must be at least 3x3, got {self.ni}x{self.nj}")
        sizes = {name: self.ni * self.nj for name in _CELL_ARRAYS}
        sizes.update({name: self.ni for name in _X_ARRAYS})
        sizes.update({name: self.nj for name in _Y_ARRAYS})
        for name, size in sizes.items():
            current = getattr(self, name)
            if current is None:
                array = np.zeros(size)
            else:
                array = np.array(current, dtype=float).ravel()
                if array.size != size:
                    raise ValueError(f"{name} needs {size} entries, got {array.size}")
            setattr(self, name, array)

    @property
    def grid(self):
        """View of ``value`` indexed as [i, j]."""
        return _cells(self.value, self.ni, self.nj)

    def __getitem__(self, index):
        return self.value[index]


def _cells(array, ni, nj):
    return np.asarray(array).reshape(nj, ni).T


@dataclass(eq=False)
class StencilMatrix:
    """Coefficients of the five-point stencil for every cell, indexed [i, j]."""

    ni: int
    nj: int
    aw: np.ndarray = dc_field(default=None)
    ae: np.ndarray = dc_field(default=None)
    as_: np.ndarray = dc_field(default=None)
    an: np.ndarray = dc_field(default=None)
    ap: np.ndarray = dc_field(default=None)
    svalue: np.ndarray = dc_field(default=None)

    def __post_init__(self):
        for name in self._coefficient_names():
            current = getattr(self, name)
            if current is None:
                array = np.zeros((self.ni, self.nj))
            else:
                array = np.array(current, dtype=float)
                if array.shape != (self.ni, self.nj):
                    raise ValueError(
                        f"{name} must have shape {(self.ni, self.nj)}, got {array.shape}"
                    )
            setattr(self, name, array)

    @staticmethod
    def _coefficient_names():
        return [f.name for f in fields(StencilMatrix) if f.name not in ("ni", "nj")]

    def _combine(self, other, op):
        if not isinstance(other, StencilMatrix):
            return NotImplemented
        if (self.ni, self.nj) != (other.ni, other.nj):
            raise ValueError("stencil matrices have different shapes")
        return StencilMatrix(
            self.ni,
            self.nj,
            **{
                name: op(getattr(self, name), getattr(other, name))
                for name in self._coefficient_names()
            },
        )

    def __add__(self, other):
        return self._combine(other, np.add)

    def __sub__(self, other):
        return self._combine(other, np.subtract)


def diffusive_term(field):
    """Central-difference diffusion coefficients for ``field``."""
    ni, nj = field.ni, field.nj
    mat = StencilMatrix(ni, nj)
    vx = _cells(field.visc_x, ni, nj)
    vy = _cells(field.visc_y, ni, nj)
    se, sn = field.se, field.sn

    east = -(vx[1 : ni - 2, 1 : nj - 1] * se[None, 1 : nj - 1]) / field.dxp_to_e[
        1 : ni - 2, None
    ]
    mat.ae[1 : ni - 2, 1 : nj - 1] = east
    mat.aw[2 : ni - 1, 1 : nj - 1] = east

    dx = abs(field.xc[1] - field.xc[0])
    mat.aw[1, 1 : nj - 1] = -(vx[1, 1 : nj - 1] * se[1 : nj - 1]) / dx
    mat.ae[ni - 2, 1 : nj - 1] = (
        -(vx[ni - 2, 1 : nj - 1] * se[1 : nj - 1]) / field.dxp_to_e[ni - 2]
    )

    north = -(vy[1 : ni - 1, 1 : nj - 2] * sn[1 : ni - 1, None]) / field.dyp_to_n[
        None, 1 : nj - 2
    ]
    mat.an[1 : ni - 1, 1 : nj - 2] = north
    mat.as_[1 : ni - 1, 2 : nj - 1] = north

    dy = abs(field.yc[1] - field.yc[0])
    mat.as_[1 : ni - 1, 1] = -(vy[1 : ni - 1, 1] * sn[1 : ni - 1]) / dy
    mat.an[1 : ni - 1, nj - 2] = (
        -(vy[1 : ni - 1, nj - 2] * sn[1 : ni - 1]) / field.dyp_to_n[nj - 2]
    )
    return mat


def _wall_exchange(field, t_wall, ex_cte, j, neighbour):
    mat = diffusive_term(field)
    ni, nj = field.ni, field.nj
    rows = slice(1, ni - 1)
    t_wall = np.asarray(t_wall, dtype=float)[rows]
    vy = _cells(field.visc_y, ni, nj)

    getattr(mat, neighbour)[rows, j] = 0.0
    coeff = ex_cte * field.sn[rows] * vy[rows, j]
    active = np.abs(t_wall) >= _WALL_THRESHOLD
    mat.ap[rows, j] = np.where(active, coeff, mat.ap[rows, j])
    mat.svalue[rows, j] = np.where(active, coeff * t_wall, mat.svalue[rows, j])
    return mat


def diffusive_term_south(field, t_wall, ex_cte):
    """Diffusion with heat exchange through the south wall."""
    return _wall_exchange(field, t_wall, ex_cte, 1, "as_")


def diffusive_term_north(field, t_wall, ex_cte):
    """Diffusion with heat exchange through the north wall."""
    return _wall_exchange(field, t_wall, ex_cte, field.nj - 2, "an")


def convective_term(field, mass_flux_east, mass_flux_north, m):
    """Central-interpolated convection coefficients scaled by mass flow ``m``."""
    ni, nj = field.ni, field.nj
    mat = StencilMatrix(ni, nj)
    mfe = _cells(mass_flux_east.value, ni, nj)
    mfn = _cells(mass_flux_north.value, ni, nj)
    fxe, fxp, fyn, fyp = field.fxe, field.fxp, field.fyn, field.fyp

    flux = mfe[1 : ni - 2, 1 : nj - 1]
    mat.ae[1 : ni - 2, 1 : nj - 1] = m * flux * fxe[1 : ni - 2, None]
    mat.aw[2 : ni - 1, 1 : nj - 1] = -m * flux * fxp[1 : ni - 2, None]

    mat.aw[1, 1:nj] = -m * mfe[1, 1:nj] * fxp[0]
    mat.ae[ni - 2, 1:nj] = m * mfe[ni - 2, 1:nj] * fxe[ni - 2]

    flux = mfn[1 : ni - 1, 1 : nj - 2]
    mat.an[1 : ni - 1, 1 : nj - 2] = m * flux * fyn[None, 1 : nj - 2]
    mat.as_[1 : ni - 1, 2 : nj - 1] = -m * flux * fyp[None, 1 : nj - 2]

    mat.as_[1:ni, 1] = -m * mfn[1:ni, 1] * fyp[0]
    mat.an[1:ni, nj - 2] = m * mfn[1:ni, nj - 2] * fyn[nj - 2]
    return mat


def _interior(array, ni, nj):
    return _cells(array, ni, nj)[1 : ni - 1, 1 : nj - 1]


def heat_production(field, z, q):
    """Heat release source ``q * Z * volume`` in the interior."""
    ni, nj = field.ni, field.nj
    mat = StencilMatrix(ni, nj)
    mat.svalue[1 : ni - 1, 1 : nj - 1] = (
        q * _interior(z.value, ni, nj) * _interior(field.volume, ni, nj)
    )
    return mat


def intermediate_reaction(field, other, temperature, beta, gamma):
    """Arrhenius-type reaction source between ``field`` and ``other``."""
    ni, nj = field.ni, field.nj
    mat = StencilMatrix(ni, nj)
    t = _interior(temperature.value, ni, nj)
    exp_portion = np.exp(beta * (t - 1.0) / (1.0 + gamma * (t - 1.0)))
    mat.svalue[1 : ni - 1, 1 : nj - 1] = (
        beta
        * beta
        * exp_portion
        * _interior(field.value, ni, nj)
        * _interior(other.value, ni, nj)
        * _interior(field.volume, ni, nj)
    )
    return mat


def z_consumption(field):
    """Linear consumption source ``volume * value`` in the interior."""
    ni, nj = field.ni, field.nj
    mat = StencilMatrix(ni, nj)
    mat.svalue[1 : ni - 1, 1 : nj - 1] = _interior(field.volume, ni, nj) * _interior(
        field.value, ni, nj
    )
    return mat