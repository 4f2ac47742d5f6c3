"""
Text rendering of a joint frame for terminal debugging.
"""

import numpy as np

from swipenav.core.types import JointFrame

JOINT_MARK = "•"
TITLE = "=== Hand Joints 2D View (Top-down) ==="


def render_hand_2d(frame: JointFrame, scale: float = 1.0, width: int = 40, height: int = 20) -> str:
    """Project the tracked joints onto the XZ plane (top-down) as ASCII art.

    The hand is centered and scaled to fit the smaller grid dimension;
    `scale` > 1 zooms out.
    """
    positions = frame.as_array()
    positions = positions[np.all(np.isfinite(positions), axis=1)]

    grid = [[" "] * width for _ in range(height)]

    if len(positions):
        xs, zs = positions[:, 0], positions[:, 2]
        center_x = (xs.min() + xs.max()) / 2
        center_z = (zs.min() + zs.max()) / 2
        max_range = max(xs.max() - xs.min(), zs.max() - zs.min())
        grid_scale = min(width, height) / (max_range * scale) if max_range > 0 else 0.0

        grid_x = np.round((xs - center_x) * grid_scale + width / 2).astype(int)
        grid_y = np.round((zs - center_z) * grid_scale + height / 2).astype(int)
        for gx, gy in zip(grid_x, grid_y):
            if 0 <= gx < width and 0 <= gy < height:
                grid[gy][gx] = JOINT_MARK

    border = "─" * (width + 2)
    lines = ["", TITLE, border]
    lines.extend("│" + "".join(row) + "│" for row in grid)
    lines.append(border)
    return "\n".join(lines) + "\n"
