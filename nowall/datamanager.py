"""Collect flame positions from solution files and write them as tables."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import numpy as np

_FILTER_TOLERANCE = 10e-5
_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _to_float(text):
    """Parse the leading number of ``text``, ignoring whatever follows it."""
    match = _NUMBER.match(text)
    if match is None:
        raise ValueError(f"no number at the start of {text!r}")
    return float(match.group())


def find_parameter_value(fname, pre, post):
    """Return the text of ``fname`` between ``pre`` and the first ``post``.

    When ``post`` is missing or comes before the value, the rest of the name
    is returned.
    """
    begin = fname.find(pre)
    if begin < 0:
        raise ValueError(f"{pre!r} does not occur in {fname!r}")
    start = begin + len(pre)
    end = fname.find(post)
    if end < start:
        return fname[start:]
    return fname[start:end]


def is_solution_file(filename):
    """Whether ``filename`` names a final solution file."""
    return "Sol_NxM" in filename and "_-1.f" in filename


def grid_file_for(filename, dims):
    """Path of the grid file that belongs to the solution ``filename``."""
    directory = find_parameter_value(filename, "/", "Sol")
    return f"/{directory}Grid_{dims}.xyz"


def _closest_to_one(values, offset, ni):
    row = np.asarray(values[offset : offset + ni], dtype=float)
    if row.size != ni:
        raise ValueError("field too small for the requested row")
    return int(np.argmin(np.abs(1.0 - row)))


def index_of_t1(values, ni, nj):
    """Index of the first value reaching 1, scanning from the middle row.

    If no value reaches 1, the column of the last row closest to 1 is
    returned instead.
    """
    total = ni * nj
    result = ni * (nj // 2 - 1)
    while result < total and values[result] < 1:
        result += 1
    if result >= total:
        result = _closest_to_one(values, ni * (nj - 1), ni)
    return result


def max_z_index(values, ni, nj):
    """Column of the middle-lower row whose value is closest to 1."""
    return _closest_to_one(values, ni * (nj // 2 - 1), ni)


def interpolate_quadratic_maximum(x1, x2, x3, y1, y2, y3):
    """Abscissa of the vertex of the parabola through three points."""
    numerator = (
        x1**2 * y2 - x1**2 * y3 - x2**2 * y1 + x2**2 * y3 + x3**2 * y1 - x3**2 * y2
    )
    denominator = x1 * y2 - x1 * y3 - x2 * y1 + x2 * y3 + x3 * y1 - x3 * y2
    return 0.5 * numerator / denominator


@dataclass
class FlameRecord:
    """Parameters and flame position extracted from one solution file."""

    a: float = 0.0
    q: float = 0.0
    m: float = 0.0
    lef: float = 0.0
    t_before1: float = 0.0
    t_after1: float = 0.0
    t: float = 0.0
    z_max_prev: float = 0.0
    z_max: float = 0.0
    z_max_post: float = 0.0
    z: float = 0.0
    index: int = 0
    n_points: int = 0
    m_points: int = 0
    dims: str = ""


@dataclass
class DataManager:
    """A set of flame records together with the grids they were computed on."""

    path: str
    database: list = field(default_factory=list)
    xc: dict = field(default_factory=dict)
    yc: dict = field(default_factory=dict)

    def __len__(self):
        return len(self.database)

    def add_member(self):
        """Append an empty record and return it."""
        record = FlameRecord()
        self.database.append(record)
        return record

    def _active(self):
        if not self.database:
            raise LookupError("no record to fill; add a member first")
        return self.database[-1]

    def add_grid(self, dims, xc, yc):
        """Register cell-centre coordinates for grids of size ``dims``."""
        self.xc[dims] = np.asarray(xc, dtype=float)
        self.yc[dims] = np.asarray(yc, dtype=float)

    def get_dimensions(self, filename):
        """Store the grid size and the ``a`` parameter of ``filename``."""
        record = self._active()
        dims = find_parameter_value(filename, "NxM-", "_Lxa")
        if dims not in self.xc:
            raise LookupError(
                f"no grid registered for {dims!r}; expected {grid_file_for(filename, dims)}"
            )
        adims = find_parameter_value(filename, "_Lxa-", "_Ex")
        record.a = _to_float(adims[adims.find("x") + 1 :])
        record.dims = dims

    def get_parameters(self, filename):
        """Store ``q``, ``m`` and the fuel Lewis number of ``filename``."""
        record = self._active()
        record.q = _to_float(find_parameter_value(filename, "_q-", "_m-"))
        record.m = _to_float(find_parameter_value(filename, "_m-", "_beta-"))
        record.lef = _to_float(find_parameter_value(filename, "_LeFxZ-", "x0.3_-1."))

    def set_flame_position(self, filename, t_values, z_values):
        """Locate the flame from the temperature and Z fields of ``filename``."""
        record = self._active()
        dims = find_parameter_value(filename, "NxM-", "_Lxa")
        if dims not in self.xc:
            raise LookupError(f"no grid registered for {dims!r}")
        xc = self.xc[dims]
        n, m = len(xc), len(self.yc[dims])
        t_values = np.asarray(t_values, dtype=float).ravel()
        z_values = np.asarray(z_values, dtype=float).ravel()
        for name, values in (("temperature", t_values), ("Z", z_values)):
            if values.size != n * m:
                raise ValueError(f"{name} field needs {n * m} values, got {values.size}")
        record.n_points, record.m_points = n, m

        index = index_of_t1(t_values, n, m)
        k = index % n
        if k == 0:
            raise ValueError("temperature crosses 1 at the first column")
        record.index = index
        record.t_before1 = t_values[index - 1]
        record.t_after1 = t_values[index]
        position = (
            xc[k] - xc[k - 1] - record.t_before1 * xc[k] + record.t_after1 * xc[k - 1]
        ) / (record.t_after1 - record.t_before1)
        if position > xc[k]:
            position = xc[k]
        if position < xc[k - 1]:
            position = xc[k]
        record.t = float(position)

        index = max_z_index(z_values, n, m)
        k = index % n
        if k == 0 or k + 1 >= n or index + 1 >= z_values.size:
            raise ValueError("Z maximum lies on the edge of the grid")
        record.index = index
        record.z_max_prev = z_values[index - 1]
        record.z_max = z_values[index]
        record.z_max_post = z_values[index + 1]
        record.z = float(
            interpolate_quadratic_maximum(
                xc[k - 1],
                xc[k],
                xc[k + 1],
                record.z_max_prev,
                record.z_max,
                record.z_max_post,
            )
        )

    def _filter(self, attribute, target):
        return [
            i
            for i, record in enumerate(self.database)
            if abs(getattr(record, attribute) - target) < _FILTER_TOLERANCE
        ]

    def filter_by_a(self, a):
        """Indices of records whose ``a`` matches."""
        return self._filter("a", a)

    def filter_by_m(self, m):
        """Indices of records whose ``m`` matches."""
        return self._filter("m", m)

    def filter_by_lef(self, lef):
        """Indices of records whose fuel Lewis number matches."""
        return self._filter("lef", lef)

    def write_data(self, stream, indices):
        """Write the selected records to ``stream`` in order of flame position."""
        stream.write("q T Z a m LeF\n")
        unique = list(dict.fromkeys(indices))
        for i in sorted(unique, key=lambda k: self.database[k].t):
            r = self.database[i]
            stream.write(f"{r.q:g} {r.t:g} {r.z:g} {r.a:g} {r.m:g} {r.lef:g}\n")

    def remove_data(self, indices):
        """Delete the records at ``indices``."""
        for i in sorted(set(indices), reverse=True):
            if not 0 <= i < len(self.database):
                raise IndexError(f"record index {i} out of range")
            del self.database[i]