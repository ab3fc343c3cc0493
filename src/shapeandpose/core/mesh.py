"""Mesh data structures for geometry storage (no GL dependencies)."""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from shapeandpose.core.material import Material


@dataclass
class BufferGeometry:
    """Flat vertex/index buffers for an indexed triangle mesh.

    positions: N*3 float32 (x,y,z per vertex)
    normals: N*3 float32, recomputed from the triangles
    indices: uint32, three per triangle
    """
    positions: NDArray[np.float32]
    normals: NDArray[np.float32]
    indices: NDArray[np.uint32]
    vertex_count: int = 0

    def __post_init__(self):
        if self.vertex_count == 0:
            self.vertex_count = len(self.positions) // 3

    @classmethod
    def empty(cls) -> "BufferGeometry":
        return cls(
            positions=np.zeros(0, dtype=np.float32),
            normals=np.zeros(0, dtype=np.float32),
            indices=np.zeros(0, dtype=np.uint32),
        )

    @classmethod
    def from_arrays(cls, positions: NDArray, indices: NDArray) -> "BufferGeometry":
        """Build geometry from (N, 3) positions and triangle indices, with normals."""
        geom = cls(
            positions=np.asarray(positions, dtype=np.float32).ravel(),
            normals=np.zeros(0, dtype=np.float32),
            indices=np.asarray(indices, dtype=np.uint32).ravel(),
        )
        geom.compute_normals()
        return geom

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def compute_normals(self) -> None:
        """Compute area-weighted per-vertex normals from the triangle set."""
        pos = self.positions.reshape(-1, 3).astype(np.float64)
        norms = np.zeros_like(pos)

        if len(self.indices):
            tri = self.indices.reshape(-1, 3).astype(np.int64)
            v0, v1, v2 = pos[tri[:, 0]], pos[tri[:, 1]], pos[tri[:, 2]]
            face_n = np.cross(v1 - v0, v2 - v0)
            for corner in range(3):
                np.add.at(norms, tri[:, corner], face_n)

        lengths = np.linalg.norm(norms, axis=1, keepdims=True)
        lengths = np.maximum(lengths, 1e-10)
        norms /= lengths
        self.normals = norms.ravel().astype(np.float32)


@dataclass
class MeshInstance:
    """A mesh with material, as handed to the host renderer."""
    name: str
    geometry: BufferGeometry
    material: Material = field(default_factory=Material)

    @property
    def positions(self) -> NDArray[np.float32]:
        return self.geometry.positions

    @property
    def normals(self) -> NDArray[np.float32]:
        return self.geometry.normals
