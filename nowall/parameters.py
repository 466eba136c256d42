"""Numerical and physical parameters of the two-channel combustion problem."""

# Numerical
NPROCS = 8

NINPUT = 1200
MINPUT = 80

TOL = 10e-8

# Domain
CHANNEL_XMIN = 0.0
CHANNEL_XMAX = 120.0

WALL_XMIN = 40.0
WALL_XMAX = 80.0

Y_BOT_MIN = 0.5
Y_BOT_MAX = 1.0

Y_WALL_MIN = 1.0
Y_WALL_MAX = 1.0

Y_TOP_MIN = 1.0
Y_TOP_MAX = 1.5

A = 1.0
A2 = 1.0 / (A * A)

BK = 0.15

# Reaction
BETA_REACTION = 10.0
GAMMA_REACTION = 0.7

LE_F = 1.0
LE_Z = 0.3
X_HOT_SPOT = 46.0
Z0HS = 0.5
R0HS = 1.0

# Derived values
NPROCS_IN_ROW = NPROCS // 2
NPROCS_IN_COL = 1

NTOTAL = NINPUT + (-NINPUT) % NPROCS
MTOTAL = MINPUT

N = NTOTAL // (NPROCS // 2)
M = MINPUT // 2

NI = N + 2
NJ = M + 2

DXX = (CHANNEL_XMAX - CHANNEL_XMIN) / NTOTAL
DYY = (Y_TOP_MAX - Y_BOT_MIN) / MTOTAL


def _face_position(i):
    return max(CHANNEL_XMIN, CHANNEL_XMIN + DXX * i - DXX / 2)


def calc_wall_i_min():
    """Index of the first cell whose west face lies at or past the wall start."""
    return next(
        (i for i in range(NTOTAL + 2) if _face_position(i) >= WALL_XMIN), 0
    )


def calc_wall_i_max():
    """Index of the first cell whose west face lies past the wall end."""
    return next(
        (i for i in range(NTOTAL + 2) if _face_position(i) > WALL_XMAX), 0
    )


IWALLMIN = calc_wall_i_min()
IWALLMAX = calc_wall_i_max()

NTOTALWALL = IWALLMAX - IWALLMIN
NWALL = NTOTALWALL // NPROCS

HELP_EXCTE = BK * A * A / 2.0
EXCTE = HELP_EXCTE / (1.0 + DYY * HELP_EXCTE)