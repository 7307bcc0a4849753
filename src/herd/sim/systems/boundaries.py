from __future__ import annotations

from ..core.agent import Cell


def bounce(cell: Cell, width: float, height: float) -> bool:
    """Invert a velocity axis when the cell pokes out of the arena on that axis.

    Only flips while the cell still moves outward, so a crossing flips the axis
    once even if the cell needs several ticks to get fully back inside.
    """
    velocity = cell.velocity
    x, y = cell.position.x, cell.position.y
    bounced = False
    if not cell.is_within_horizontal_limits(0, width):
        if (x < width / 2 and velocity.x < 0) or (x >= width / 2 and velocity.x > 0):
            cell.invert_horizontal_direction()
            bounced = True
    if not cell.is_within_vertical_limits(0, height):
        if (y < height / 2 and velocity.y < 0) or (y >= height / 2 and velocity.y > 0):
            cell.invert_vertical_direction()
            bounced = True
    return bounced
