"""Merge per-limb tubes into the single body mesh."""

from typing import Iterable

import numpy as np

from shapeandpose.core.mesh import BufferGeometry


def combine_geometries(geometries: Iterable[BufferGeometry]) -> BufferGeometry:
    """Concatenate vertex buffers in order, offsetting each limb's indices.

    All inputs are already in the shared mesh-local space, so no transform
    is applied. An empty input yields an empty geometry.
    """
    positions = []
    indices = []
    offset = 0
    for geom in geometries:
        positions.append(geom.positions.reshape(-1, 3))
        indices.append(geom.indices.astype(np.int64) + offset)
        offset += geom.vertex_count

    if not positions:
        return BufferGeometry.empty()

    return BufferGeometry.from_arrays(
        np.concatenate(positions),
        np.concatenate(indices),
    )
