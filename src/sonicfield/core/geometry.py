"""Distance and bearing helpers for source/listener geometry.

Points are in meters. In 3D, x runs across the room, y is height and z is
depth from the stage. Horizontal bearings are taken in the floor plane, where
a ``Point2D`` holds (x, z) as (x, y).
"""

from __future__ import annotations

import math
from typing import NamedTuple


class Point2D(NamedTuple):
    """Point in a plane (meters)."""

    x: float
    y: float


class Point3D(NamedTuple):
    """Point in the room (meters): x = width, y = height, z = depth."""

    x: float
    y: float
    z: float

    def floor(self) -> Point2D:
        """Projection onto the floor plane as (x, z)."""
        return Point2D(self.x, self.z)


def distance_2d(p1: Point2D, p2: Point2D) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def distance_3d(p1: Point3D, p2: Point3D) -> float:
    return math.sqrt(
        (p2.x - p1.x) ** 2 + (p2.y - p1.y) ** 2 + (p2.z - p1.z) ** 2
    )


def wrap_degrees(angle: float) -> float:
    """Wrap an angle into (-180, 180] degrees."""
    wrapped = math.fmod(angle + 180.0, 360.0)
    if wrapped <= 0.0:
        wrapped += 360.0
    return wrapped - 180.0


def horizontal_angle(source: Point2D, target: Point2D, aim: float = 0.0) -> float:
    """Off-axis angle in the floor plane.

    The bearing is measured from the depth axis toward +x, so a target
    straight down the room from the source has bearing 0.

    Args:
        source: Speaker position as (x, z)
        target: Listener position as (x, z)
        aim: Speaker horizontal aim in degrees (0 = straight down the room)

    Returns:
        Absolute off-axis angle in degrees, in [0, 180]
    """
    dx = target.x - source.x
    dz = target.y - source.y
    bearing = math.degrees(math.atan2(dx, dz))
    return abs(wrap_degrees(bearing - aim))


def vertical_angle(
    source_height: float,
    target_height: float,
    horizontal_distance: float,
    tilt: float = 0.0,
) -> float:
    """Off-axis angle in the vertical plane.

    Args:
        source_height: Speaker height in meters
        target_height: Listener height in meters
        horizontal_distance: Floor-plane distance between them in meters
        tilt: Speaker tilt in degrees (positive = down)

    Returns:
        Absolute off-axis angle in degrees
    """
    drop = source_height - target_height
    bearing = math.degrees(math.atan2(drop, horizontal_distance))
    return abs(bearing - tilt)
