"""Cross-section rings for limb joints.

Rings are (N, 3) float64 arrays in the joint node's local space. Point
order is the winding order the tube builder connects index-for-index, so
both policies are fully deterministic.
"""

import math

import numpy as np
from numpy.typing import NDArray

from shapeandpose.rig.config import JointConfig, Vertex


def explicit_ring(vertices: tuple[Vertex, ...], scale: float) -> NDArray[np.float64]:
    """Config vertices multiplied by *scale*, in config order."""
    ring = np.array([(v.x, v.y, v.z) for v in vertices], dtype=np.float64)
    return ring.reshape(-1, 3) * scale


def procedural_ring(radius: float, divisions: int) -> NDArray[np.float64]:
    """Circle of *divisions* points in the local XZ plane around the origin.

    Point i sits at angle ``i * 360 / divisions`` degrees, measured from
    +X toward +Z.
    """
    step = 2.0 * math.pi / divisions
    angles = np.arange(divisions, dtype=np.float64) * step
    ring = np.zeros((divisions, 3), dtype=np.float64)
    ring[:, 0] = np.cos(angles) * radius
    ring[:, 2] = np.sin(angles) * radius
    return ring


def generate_ring(joint: JointConfig) -> NDArray[np.float64]:
    """Explicit vertices when the config has any, otherwise the default circle."""
    if joint.is_explicit:
        return explicit_ring(joint.vertices, joint.scale)
    return procedural_ring(joint.radius, joint.divisions)
