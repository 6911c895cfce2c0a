"""
Simulation Defaults
===================
Module-level constants shared by the parameter model, the input form,
the renderer and the command-line runner.
"""

# ── Physics ────────────────────────────────────────────────────────────────
GRAVITY = 9.81                     # m/s²

# ── Input form ─────────────────────────────────────────────────────────────
# delta_time = 10 ** -scale
DEFAULT_DELTA_TIME_SCALE = 3
DELTA_TIME_SCALE_RANGE = (0, 5)

# ── Runner ─────────────────────────────────────────────────────────────────
DEFAULT_MAX_STEPS = 1_000_000      # per trajectory

# ── Rendering ──────────────────────────────────────────────────────────────
AXIS_MARGIN = 1.1                  # headroom above the drag-free maxima
DEFAULT_IMAGE_SIZE = (800, 600)    # px (width, height)
DRAG_COLOR = 'magenta'
NO_DRAG_COLOR = 'blue'

# ── Reference launch (baseball-sized sphere) ───────────────────────────────
DEFAULT_LAUNCH = {
    'cross_area': 0.01,            # m²
    'fluid_density': 1.2,          # kg/m³
    'drag_coefficient': 0.47,      # sphere
    'mass': 0.145,                 # kg
    'delta_time': 0.001,           # s
    'x': 0.0,                      # m
    'y': 0.0,                      # m
    'speed': 40.0,                 # m/s
    'angle_deg': 45.0,             # degrees above horizontal
    'ending_time': 10.0,           # s
}
