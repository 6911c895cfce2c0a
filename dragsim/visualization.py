"""
Trajectory Charts
=================
Renders trajectories as x-y flight paths:
  1. Single trajectory (altitude vs downrange)
  2. Drag vs drag-free comparison, saved to disk
  3. Drag vs drag-free comparison as an RGBA pixel buffer (for forms)

Comparison axes start at the origin and extend to 1.1 x the largest
x and y reached by the drag-free run, which always travels farthest.
"""

import os
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Tuple

from .config import AXIS_MARGIN, DEFAULT_IMAGE_SIZE, DRAG_COLOR, NO_DRAG_COLOR
from .integrator import Trajectory


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': 'white',
    'text_color': 'black',
    'grid_color': '#cccccc',
    'legend_alpha': 0.8,
    'dpi': 100,
}


def _apply_style(fig, ax):
    fig.patch.set_facecolor(STYLE['bg_color'])
    ax.set_facecolor(STYLE['bg_color'])
    ax.tick_params(colors=STYLE['text_color'])
    ax.grid(True, color=STYLE['grid_color'], linewidth=0.5)
    for spine in ax.spines.values():
        spine.set_color(STYLE['text_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


def find_maxes(trajectory: Trajectory) -> Tuple[float, float]:
    """Largest x and y reached, never below zero."""
    max_x = max([0.0] + [s.position.x for s in trajectory])
    max_y = max([0.0] + [s.position.y for s in trajectory])
    return max_x, max_y


def axis_bounds(without_drag: Trajectory) -> Tuple[float, float]:
    """Upper x and y axis limits for a comparison chart."""
    max_x, max_y = find_maxes(without_drag)
    # A degenerate (single point) run would give an empty axis.
    return (max_x * AXIS_MARGIN or 1.0), (max_y * AXIS_MARGIN or 1.0)


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: Trajectory, save_path: str = None,
                    label: str = 'Trajectory') -> plt.Figure:
    """Altitude vs downrange for a single trajectory."""
    fig, ax = plt.subplots(figsize=(10, 5))
    _apply_style(fig, ax)

    ax.plot(result.x, result.y, color=DRAG_COLOR, linewidth=2, label=label)

    idx_max = int(np.argmax(result.y))
    ax.plot(result.x[idx_max], result.y[idx_max], '^', color='orange',
            markersize=8, label='Apex', zorder=5)
    ax.plot(result.x[-1], result.y[-1], 'x', color='red', markersize=10,
            markeredgewidth=2, label='End', zorder=5)

    ax.set_xlabel('Downrange (m)')
    ax.set_ylabel('Altitude (m)')
    ax.set_title(f'{label} (k={result.parameters.drag_proportion:.4g} kg/m, '
                 f'dt={result.parameters.delta_time:g} s)')
    ax.legend(loc='upper right')
    ax.set_xlim(left=0)
    ax.set_ylim(bottom=0)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=STYLE['bg_color'])
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Drag vs Drag-Free Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_comparison(with_drag: Trajectory, without_drag: Trajectory,
                    save_path: str = None,
                    size: Tuple[int, int] = DEFAULT_IMAGE_SIZE) -> plt.Figure:
    """
    Overlay the drag and drag-free flight paths on one chart.

    Parameters
    ----------
    with_drag, without_drag : Trajectory
        Outputs of `simulate_pair`
    save_path : str, optional
        Write the chart as an image of `size` pixels
    size : (width, height)
        Figure size in pixels
    """
    width, height = size
    dpi = STYLE['dpi']
    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    _apply_style(fig, ax)

    ax.plot(with_drag.x, with_drag.y, color=DRAG_COLOR, label='With drag')
    ax.plot(without_drag.x, without_drag.y, color=NO_DRAG_COLOR,
            label='Without drag')

    x_max, y_max = axis_bounds(without_drag)
    ax.set_xlim(0.0, x_max)
    ax.set_ylim(0.0, y_max)
    ax.legend(facecolor=STYLE['bg_color'], edgecolor=STYLE['text_color'],
              framealpha=STYLE['legend_alpha'])

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=dpi, facecolor=STYLE['bg_color'])
    return fig


def render_pixels(with_drag: Trajectory, without_drag: Trajectory,
                  size: Tuple[int, int] = DEFAULT_IMAGE_SIZE) -> np.ndarray:
    """Comparison chart as an RGBA uint8 array of shape (height, width, 4)."""
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {size}")

    fig = plot_comparison(with_drag, without_drag, size=size)
    try:
        fig.canvas.draw()
        pixels = np.asarray(fig.canvas.buffer_rgba()).copy()
    finally:
        plt.close(fig)

    # Inch-based figure sizes can round one pixel off the request.
    pixels = pixels[:height, :width]
    pad_h, pad_w = height - pixels.shape[0], width - pixels.shape[1]
    if pad_h or pad_w:
        pixels = np.pad(pixels, ((0, pad_h), (0, pad_w), (0, 0)), mode='edge')
    return pixels
