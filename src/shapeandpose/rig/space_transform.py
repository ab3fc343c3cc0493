"""Carry ring points from joint-local space into the body mesh's space."""

import numpy as np
from numpy.typing import NDArray

from shapeandpose.core.math_utils import Mat4, mat4_inverse, transform_points
from shapeandpose.rig.skeleton import SkeletonNodeRecord


class SpaceTransformer:
    """Joint-local -> world -> mesh-local, for one mesh owner.

    The owner's inverse world matrix is computed once and reused for
    every ring of the pass.
    """

    def __init__(self, mesh_owner_world: Mat4):
        self.mesh_owner_world = np.array(mesh_owner_world, dtype=np.float64)
        self._world_to_mesh = mat4_inverse(self.mesh_owner_world)

    def to_world(self, record: SkeletonNodeRecord, ring: NDArray) -> NDArray[np.float64]:
        return transform_points(record.world_matrix, ring)

    def to_mesh_local(self, record: SkeletonNodeRecord, ring: NDArray) -> NDArray[np.float64]:
        return transform_points(self._world_to_mesh, self.to_world(record, ring))
