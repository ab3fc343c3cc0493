"""Stitch a limb's rings into a closed tube.

Ring k occupies vertices [k*D, k*D + D). Each pair of consecutive rings
is joined by D quads, each split into two triangles; the modulo on the
next index closes the seam between the last and first ring point.
"""

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from shapeandpose.core.mesh import BufferGeometry
from shapeandpose.rig.errors import RingSizeMismatchError


def tube_indices(ring_count: int, divisions: int) -> NDArray[np.uint32]:
    """Triangle indices joining *ring_count* rings of *divisions* points."""
    i = np.arange(divisions, dtype=np.int64)
    j = (i + 1) % divisions
    tris = []
    for k in range(ring_count - 1):
        cur = k * divisions
        nxt = (k + 1) * divisions
        quad = np.empty((divisions, 6), dtype=np.int64)
        quad[:, 0] = cur + i
        quad[:, 1] = nxt + i
        quad[:, 2] = nxt + j
        quad[:, 3] = cur + i
        quad[:, 4] = nxt + j
        quad[:, 5] = cur + j
        tris.append(quad.ravel())
    if not tris:
        return np.zeros(0, dtype=np.uint32)
    return np.concatenate(tris).astype(np.uint32)


def build_limb_geometry(
    rings: Sequence[NDArray],
    limb_name: str = "",
) -> Optional[BufferGeometry]:
    """Tube geometry for rings already in mesh-local space.

    Returns None for fewer than two rings. Raises RingSizeMismatchError if
    any ring's point count differs from the first ring's.
    """
    if len(rings) < 2:
        return None

    divisions = len(rings[0])
    for k, ring in enumerate(rings):
        if len(ring) != divisions:
            raise RingSizeMismatchError(limb_name, k, divisions, len(ring))

    positions = np.concatenate([np.asarray(r, dtype=np.float64).reshape(-1, 3) for r in rings])
    indices = tube_indices(len(rings), divisions)
    return BufferGeometry.from_arrays(positions, indices)
