# nowall

Building blocks for two-dimensional finite-volume simulations of premixed
flames in a pair of counterflow channels separated by a heat-conducting
wall, and helpers that post-process the flame positions found in solution
files.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `nowall.parameters`

Constants of the reference case: mesh resolution (`NINPUT`, `MINPUT`,
`N`, `M`, `NI`, `NJ`, `DXX`, `DYY`), domain extent (`CHANNEL_XMIN`,
`CHANNEL_XMAX`, `WALL_XMIN`, `WALL_XMAX`, ...), reaction parameters
(`BETA_REACTION`, `GAMMA_REACTION`), Lewis numbers (`LE_F`, `LE_Z`), the
hot-spot settings and the wall exchange constant `EXCTE`.
`calc_wall_i_min()` and `calc_wall_i_max()` return the first cell index
whose west face lies at or past the start of the wall, and past its end;
their results are stored as `IWALLMIN` and `IWALLMAX`.

### `nowall.profiler`

A small tracing profiler that writes Chrome trace-event JSON.

```python
from nowall.profiler import InstrumentationTimer, get_instrumentor

profiler = get_instrumentor()
profiler.begin_session("trace.json")
with InstrumentationTimer("assemble"):
    ...
profiler.end_session()
```

Each timed block becomes one `ProfileResult` (name, start and end in
microseconds, thread id, process id). `InstrumentationTimer.stop()` may also
be called directly; it returns the result it wrote. Writing without an open
session, or opening a second session, raises `RuntimeError`.

### `nowall.stencil`

- `FieldData(ni, nj, ...)` – a cell-centred scalar stored i-fastest with
  its geometric factors (`xc`, `yc`, `fxe`, `fxp`, `fyn`, `fyp`,
  `dxp_to_e`, `dyp_to_n`, `se`, `sn`), diffusivities (`visc_x`, `visc_y`),
  `density` and `volume`. Arrays left out are zero-filled; arrays of the
  wrong size raise `ValueError`. `grid` is a view of `value` indexed `[i, j]`.
- `StencilMatrix(ni, nj)` – five-point coefficients `aw`, `ae`, `as_`, `an`,
  `ap` and source `svalue`, each an `(ni, nj)` array. Matrices of equal
  shape add and subtract with `+` and `-`.
- Terms: `diffusive_term`, `diffusive_term_south` and `diffusive_term_north`
  (diffusion with heat exchange through a wall), `convective_term`,
  `heat_production`, `intermediate_reaction` and `z_consumption`.
- Helpers: `interior_cells`, `east_face_cells`, `north_face_cells`,
  `plus_upwind`, `minus_upwind`.

### `nowall.channel`

- `find_fix_index(xc, yc, xfix, yfix)` – cell indices nearest to a point.
- `calculate_new_m(...)` – relaxed mass-flow estimate from the energy
  balance at the fix cell, clamped by a `MassFlowBounds`
  (`widen()` loosens the bounds by ten percent). It pins the fix-cell
  temperature to 0.7 in place.
- `is_outlet_temperature_converged(sol_values, n, m, q, left_to_right)` –
  whether the outlet column sums to `q * m / 2` within `10e-3`.
- `wall_viscosities(visc_x, visc_y, le_f, le_z)` – diffusivities of T, F
  and Z from the Lewis numbers.

### `nowall.datamanager`

Parses solution file names such as
`Sol_NxM-2432x20_Lxa-120x1_Ex-40_q-1.2_m-2_beta-10_LeFxZ-1x0.3_-1.f`
and collects one `FlameRecord` per file in a `DataManager`:

- `find_parameter_value`, `is_solution_file`, `grid_file_for` – name helpers.
- `DataManager.add_grid(dims, xc, yc)` registers the cell centres of a grid;
  `get_dimensions` requires that grid to be registered.
- `get_parameters` reads `q`, `m` and the fuel Lewis number.
- `set_flame_position(filename, t_values, z_values)` locates where the
  temperature reaches 1 and where Z peaks (by quadratic interpolation).
- `filter_by_a`, `filter_by_m`, `filter_by_lef` return matching indices;
  `write_data(stream, indices)` writes a table `q T Z a m LeF` sorted by
  flame position; `remove_data(indices)` deletes records.

```python
import io
from nowall.datamanager import DataManager, find_parameter_value

name = "Sol_NxM-2432x20_Lxa-120x1_Ex-40_q-1.2_m-2_beta-10_LeFxZ-1x0.3_-1.f"
print(find_parameter_value(name, "_q-", "_m-"))  # "1.2"

manager = DataManager("results")
manager.add_member()
manager.get_parameters(name)
out = io.StringIO()
manager.write_data(out, manager.filter_by_m(2.0))
```

## What the package does not do

- It has no solver: there is no equation assembly, linear solve, time
  stepping or parallel decomposition; the stencil terms are produced for a
  caller to use.
- It does not read or write solution or grid files. Grid coordinates and
  field values are passed in as arrays (`add_grid`, `set_flame_position`).
- It provides no command-line program.